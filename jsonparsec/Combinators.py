import logging
from typing import Any, List

from .Parser import Cursor, Error, Ok, ParseError, Parser, Result, T
from .Prim import fail, many, pure

logger = logging.getLogger(__name__)


# 1. choice: Tries parsers in order until one succeeds
def choice(parsers: List[Parser[T]]) -> Parser[T]:
    """
    Applies a list of parsers in order until one succeeds.
    If all fail, the error is the one from the last parser.
    """
    if not parsers:
        return fail("no alternatives")
    result = parsers[0]
    for p in parsers[1:]:
        result = result | p
    return result


# 2. count: Parses n occurrences of a parser
def count(n: int, p: Parser[T]) -> Parser[List[T]]:
    if n <= 0:
        return pure([])

    def parse(cursor: Cursor) -> Result[List[T]]:
        values: List[T] = []
        hint = None
        for _ in range(n):
            res = p(cursor)
            if isinstance(res, Error):
                return Error(res.error, ParseError.merge(hint, res.hint))
            values.append(res.value)
            hint = ParseError.merge(hint, res.hint)
            cursor = res.cursor
        return Ok(values, cursor, hint)
    return Parser(parse)


# 3. between: Parses an opening parser, a main parser, and a closing parser
def between(open: Parser[Any], close: Parser[Any], p: Parser[T]) -> Parser[T]:
    """
    Parses 'open', then 'p', then 'close', returning the result of 'p'.
    """
    return open.bind(lambda _: p.bind(lambda x: close.map(lambda _: x)))


# 4. option: Tries a parser, returning a default value on failure
def option(x: T, p: Parser[T]) -> Parser[T]:
    """
    Tries parser p; returns its result if successful, else x.
    """
    return p | pure(x)


# 5. sepBy: Parses zero or more occurrences separated by a separator
def sep_by(p: Parser[T], sep: Parser[Any]) -> Parser[List[T]]:
    """
    Parses zero or more occurrences of p separated by sep, returning a list of p's results.
    Falls back to an empty list only when the first element fails.
    """
    return sep_by1(p, sep) | pure([])


# 6. sepBy1: Parses one or more occurrences separated by a separator
def sep_by1(p: Parser[T], sep: Parser[Any]) -> Parser[List[T]]:
    """
    Parses one or more occurrences of p separated by sep, returning a list of p's results.
    """
    return p.bind(lambda x: many(sep >> p).map(lambda xs: [x] + xs))


# 7. parserTrace: Debugging parser that logs the remaining input
def parser_trace(label_str: str) -> Parser[None]:
    def parse(cursor: Cursor) -> Result[None]:
        rest = cursor.peek(30)
        logger.debug("%s: %r%s at offset %d", label_str, rest,
                     "..." if len(cursor.source) - cursor.offset > 30 else "", cursor.offset)
        return Ok(None, cursor)
    return Parser(parse)


# 8. parserTraced: Debugging parser that traces execution and backtracking
def parser_traced(label_str: str, p: Parser[T]) -> Parser[T]:
    trace_enter = parser_trace(label_str)
    backtracked = parser_trace(f"{label_str} backtracked") >> fail(f"{label_str} failed")
    return trace_enter >> (p | backtracked)
