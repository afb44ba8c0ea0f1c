"""
The JSON grammar, assembled from the combinators, and the parse entry points.

    value  := null | bool | number | string | array | object   (tried in this order)
    array  := '[' ws (value (ws ',' ws value)*)? ws ']'
    object := '{' ws (pair (ws ',' ws pair)*)? ws '}'
    pair   := string ws ':' ws value

`parse` wraps the root value in optional whitespace and, by default, requires
the whole text to be consumed. When parsing fails it reports the failure that
got furthest into the input. Individual combinators still report the error of
the last alternative they tried (see `Parser.__or__`); the furthest failure is
what points at the actual mistake in the document.
"""
import logging
from functools import lru_cache
from typing import Any, List, Optional, Tuple

from .Char import char, end_of_input, string
from .Combinators import between, sep_by
from .Config import ParserConfig, default_config
from .Parser import Cursor, Error, ParseError, Parser, Result
from .Token import number_literal, string_literal, whitespace
from .Value import JsonArray, JsonBool, JsonNull, JsonNumber, JsonObject, JsonString, JsonValue

logger = logging.getLogger(__name__)


class NestingDepthError(Exception):
    """Raised by the grammar when arrays/objects nest deeper than allowed."""

    def __init__(self, position: int, max_depth: int):
        super().__init__(f"Maximum nesting depth of {max_depth} exceeded")
        self.position = position
        self.max_depth = max_depth

    def to_parse_error(self) -> ParseError:
        return ParseError(self.position, str(self))


class JsonParseError(ValueError):
    """Raised by `loads` when the text is not valid JSON."""

    def __init__(self, error: ParseError, text: str):
        self.error = error
        self.position = error.position
        self.message = error.message
        self.line, self.column = error.locate(text)
        super().__init__(f"{error.message} (line {self.line}, column {self.column}, offset {error.position})")


class JsonGrammar:
    """
    Builds the JSON parsers for one ParserConfig.

    Nesting depth is bounded without any mutable counter: there is one value
    parser per depth level, each array/object only ever calling the parser of
    the level below it. At the last level an opening bracket raises
    NestingDepthError.
    """
    def __init__(self, config: ParserConfig = default_config):
        self.config = config

        # --- Whitespace & punctuation ---
        self.ws = whitespace()
        self.comma = (self.ws >> char(',')) < self.ws
        self.colon = (self.ws >> char(':')) < self.ws

        # --- Scalars ---
        self.null = string("null").map(lambda _: JsonNull())
        self.bool = (string("true").map(lambda _: JsonBool(True))
                     | string("false").map(lambda _: JsonBool(False)))
        self.number = number_literal().map(JsonNumber)
        self.key = string_literal()
        self.string = self.key.map(JsonString)

        # --- Values, one parser per nesting level ---
        deepest = self._value(self._too_deep('['), self._too_deep('{'))
        levels: List[Parser[JsonValue]] = [deepest]
        for _ in range(config.max_depth):
            inner = levels[-1]
            levels.append(self._value(self._array(inner), self._object(inner)))
        levels.reverse()
        self.levels = levels  # levels[d] parses a value inside d containers
        self.value = levels[0]

        self.document = self._document()

    def _value(self, array: Parser[JsonValue], obj: Parser[JsonValue]) -> Parser[JsonValue]:
        # Order matters for which error surfaces when nothing matches
        return self.null | self.bool | self.number | self.string | array | obj

    def _array(self, element: Parser[JsonValue]) -> Parser[JsonValue]:
        items = sep_by(element, self.comma)
        return between(char('[') < self.ws, self.ws >> char(']'), items).map(JsonArray)

    def _object(self, element: Parser[JsonValue]) -> Parser[JsonValue]:
        pair = (self.key < self.colon).bind(lambda k: element.map(lambda v: (k, v)))
        pairs = sep_by(pair, self.comma)
        return between(char('{') < self.ws, self.ws >> char('}'), pairs).map(JsonObject)

    def _too_deep(self, opening: str) -> Parser[JsonValue]:
        expect = char(opening)

        def parse(cursor: Cursor) -> Result[JsonValue]:
            if cursor.peek(1) == opening:
                raise NestingDepthError(cursor.offset, self.config.max_depth)
            return expect(cursor)
        return Parser(parse)

    def _document(self) -> Parser[JsonValue]:
        doc = self.value
        if self.config.skip_outer_whitespace:
            doc = between(self.ws, self.ws, doc)
        if self.config.require_end_of_input:
            doc = doc < end_of_input()
        return doc


@lru_cache(maxsize=16)
def grammar(config: ParserConfig = default_config) -> JsonGrammar:
    """Shared grammar for a config. Grammars are immutable, so sharing is safe."""
    return JsonGrammar(config)


def parse(text: str, config: Optional[ParserConfig] = None) -> Tuple[Optional[JsonValue], Optional[ParseError]]:
    """
    Parse a JSON document.

    Returns (value, None) on success and (None, error) on failure.
    """
    if config is None:
        config = default_config
    try:
        res = grammar(config).document(Cursor(text, 0))
    except NestingDepthError as e:
        err = e.to_parse_error()
    except RecursionError:
        logger.warning("Ran out of stack parsing a %d character document (max_depth=%d)",
                       len(text), config.max_depth)
        err = ParseError(0, "Maximum recursion depth exceeded while parsing")
    else:
        if not isinstance(res, Error):
            return res.value, None
        err = res.furthest
    logger.debug("JSON parse failed at offset %d: %s", err.position, err.message)
    return None, err


def loads(text: str, config: Optional[ParserConfig] = None) -> Any:
    """Parse a JSON document into plain Python values, raising JsonParseError on failure."""
    value, err = parse(text, config)
    if err is not None:
        raise JsonParseError(err, text)
    return value.to_python()
