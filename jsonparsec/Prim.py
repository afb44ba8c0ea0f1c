from typing import Any, Callable, List, Optional, Tuple

from .Parser import Cursor, Error, Ok, ParseError, Parser, Result, T


def pure(value: T) -> Parser[T]:
    """Return a parser that succeeds with a value without consuming input."""
    def parse(cursor: Cursor) -> Result[T]:
        return Ok(value, cursor)
    return Parser(parse)


def fail(msg: str) -> Parser[Any]:
    """A parser that always fails with a message, at the current offset."""
    def parse(cursor: Cursor) -> Result[Any]:
        return Error(ParseError(cursor.offset, msg))
    return Parser(parse)


def lazy(thunk: Callable[[], Parser[T]]) -> Parser[T]:
    """Build the parser only when it runs. Lets recursive grammars refer to themselves."""
    def parse(cursor: Cursor) -> Result[T]:
        return thunk()(cursor)
    return Parser(parse)


def many(p: Parser[T]) -> Parser[List[T]]:
    """Parse zero or more occurrences of `p`. Always succeeds.

    The attempt that ends the repetition is discarded: the result cursor is the
    one after the last success. Runs as a loop, so long inputs do not grow the
    call stack.
    """
    def parse(cursor: Cursor) -> Result[List[T]]:
        values: List[T] = []
        hint: Optional[ParseError] = None
        while True:
            res = p(cursor)
            if isinstance(res, Error):
                return Ok(values, cursor, ParseError.merge(hint, res.furthest))
            if res.cursor.offset == cursor.offset:
                # p would match forever here
                raise ValueError("many: applied parser succeeded without consuming input")
            values.append(res.value)
            hint = ParseError.merge(hint, res.hint)
            cursor = res.cursor
    return Parser(parse)


def many1(p: Parser[T]) -> Parser[List[T]]:
    """Applies parser p one or more times, returning a list of results."""
    return p.bind(lambda x: many(p).map(lambda xs: [x] + xs))


def run_parser(parser: Parser[T], input_str: str) -> Tuple[Optional[T], Optional[ParseError]]:
    """Run `parser` from offset 0. Trailing input is left alone."""
    res = parser(Cursor(input_str, 0))
    if isinstance(res, Error):
        return None, res.error
    return res.value, None
