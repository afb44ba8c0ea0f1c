from typing import Callable

from .Parser import Cursor, Error, Ok, ParseError, Parser, Result
from .Prim import many

_DIGITS = frozenset('0123456789')
_HEX_DIGITS = frozenset('0123456789abcdefABCDEF')


def _found(cursor: Cursor) -> str:
    step = cursor.uncons()
    if step is None:
        return "reached end of input"
    return f"found '{step[0]}'"


# Core function: Succeeds if the character satisfies a predicate
def satisfy(description: str, f: Callable[[str], bool]) -> Parser[str]:
    """Succeeds for any character where f returns True. Returns the parsed character."""
    def parse(cursor: Cursor) -> Result[str]:
        step = cursor.uncons()
        if step is not None and f(step[0]):
            return Ok(step[0], step[1])
        return Error(ParseError(cursor.offset, f"Expected {description}, but {_found(cursor)}"))
    return Parser(parse)


# Helper function: Parses a single character
def char(c: str) -> Parser[str]:
    """Parses a single character c and returns it."""
    return satisfy(f"'{c}'", lambda x: x == c)


# Parses a specific string as a single unit
def string(s: str) -> Parser[str]:
    """Parses the exact string s and returns it.

    Fails with one error at the offset where s would start, naming the whole
    literal, rather than reporting the first mismatching character.
    """
    def parse(cursor: Cursor) -> Result[str]:
        current = cursor
        for expected in s:
            step = current.uncons()
            if step is None or step[0] != expected:
                if cursor.at_end:
                    found = "reached end of input"
                else:
                    found = f'found "{cursor.peek(len(s))}"'
                return Error(ParseError(cursor.offset, f'Expected "{s}", but {found}'))
            current = step[1]
        return Ok(s, current)
    return Parser(parse)


# Zero or more characters satisfying a predicate, as one string
def span(description: str, f: Callable[[str], bool]) -> Parser[str]:
    """Collects the longest run of characters satisfying f. Always succeeds."""
    return many(satisfy(description, f)).map(lambda cs: "".join(cs))


def digit() -> Parser[str]:
    """Parses an ASCII digit and returns it."""
    return satisfy("digit", lambda c: c in _DIGITS)


def hex_digit() -> Parser[str]:
    """Parses a hexadecimal digit (0-9, a-f, A-F) and returns it."""
    return satisfy("hexadecimal digit", lambda c: c in _HEX_DIGITS)


def spaces() -> Parser[str]:
    """Skips zero or more whitespace characters, returning what was skipped."""
    return span("whitespace character", str.isspace)


def end_of_input() -> Parser[None]:
    """Succeeds only if no input remains."""
    def parse(cursor: Cursor) -> Result[None]:
        if cursor.at_end:
            return Ok(None, cursor)
        return Error(ParseError(cursor.offset, f"Expected end of input, but {_found(cursor)}"))
    return Parser(parse)
