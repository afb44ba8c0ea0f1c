from dataclasses import dataclass
from typing import Any, Callable, Generic, Optional, Tuple, TypeVar, Union

T = TypeVar('T')  # Generic type for parser results
U = TypeVar('U')


@dataclass(frozen=True)
class Cursor:
    """Immutable view over the input: the whole source plus how much of it is consumed.

    `remaining` is always exactly `source[offset:]`. Keeping the source and an
    integer offset (instead of slicing) makes every step O(1).
    """
    source: str
    offset: int = 0

    @property
    def remaining(self) -> str:
        return self.source[self.offset:]

    @property
    def at_end(self) -> bool:
        return self.offset >= len(self.source)

    def uncons(self) -> Optional[Tuple[str, 'Cursor']]:
        """Split off the next character, or return None at end of input."""
        if self.offset >= len(self.source):
            return None
        return self.source[self.offset], Cursor(self.source, self.offset + 1)

    def peek(self, n: int) -> str:
        """Up to `n` characters of the remaining input, without consuming them."""
        return self.source[self.offset:self.offset + n]


@dataclass(frozen=True)
class ParseError:
    """A failed expectation at a specific offset of the input."""
    position: int
    message: str

    def __str__(self) -> str:
        return f"Parse error at offset {self.position}: {self.message}"

    def locate(self, text: str) -> Tuple[int, int]:
        """1-based (line, column) of this error within `text`."""
        before = text[:self.position]
        line = before.count('\n') + 1
        column = self.position - (before.rfind('\n') + 1) + 1
        return line, column

    @staticmethod
    def merge(first: Optional['ParseError'], second: Optional['ParseError']) -> Optional['ParseError']:
        """Keep the error that got further into the input; on a tie the later one wins."""
        if first is None:
            return second
        if second is None:
            return first
        if first.position > second.position:
            return first
        return second


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Successful reply: the value and the cursor after it.

    `hint` is the furthest failure swallowed while producing this value
    (a backtracked alternative, the attempt that ended a repetition).
    """
    value: T
    cursor: Cursor
    hint: Optional[ParseError] = None


@dataclass(frozen=True)
class Error:
    """Failed reply."""
    error: ParseError
    hint: Optional[ParseError] = None

    @property
    def furthest(self) -> ParseError:
        return ParseError.merge(self.hint, self.error)


Result = Union[Ok[T], Error]


def _with_hint(reply: Result, hint: Optional[ParseError]) -> Result:
    # Prepend an earlier hint to a reply; the reply's own hint is newer.
    if hint is None:
        return reply
    if isinstance(reply, Ok):
        return Ok(reply.value, reply.cursor, ParseError.merge(hint, reply.hint))
    return Error(reply.error, ParseError.merge(hint, reply.hint))


class Parser(Generic[T]):
    """A parser combinator: a function from a Cursor to an Ok or Error reply."""
    def __init__(self, parse_fn: Callable[[Cursor], Result[T]]):
        self.parse_fn = parse_fn

    def __call__(self, cursor: Cursor) -> Result[T]:
        return self.parse_fn(cursor)

    # Functor (<$>)
    def map(self, f: Callable[[T], U]) -> 'Parser[U]':
        def parse(cursor: Cursor) -> Result[U]:
            res = self(cursor)
            if isinstance(res, Error):
                return res
            return Ok(f(res.value), res.cursor, res.hint)
        return Parser(parse)

    # Monadic bind (>>=)
    def bind(self, f: Callable[[T], 'Parser[U]']) -> 'Parser[U]':
        def parse(cursor: Cursor) -> Result[U]:
            res = self(cursor)
            if isinstance(res, Error):
                # Short-circuit: f is never consulted
                return res
            next_parser: 'Parser[U]' = f(res.value)
            return _with_hint(next_parser(res.cursor), res.hint)
        return Parser(parse)

    # Applicative (<*>): self yields a function, other yields its argument
    def ap(self, other: 'Parser[Any]') -> 'Parser[Any]':
        def parse(cursor: Cursor) -> Result[Any]:
            res_f = self(cursor)
            if isinstance(res_f, Error):
                return res_f
            res_x = other(res_f.cursor)
            if isinstance(res_x, Error):
                return _with_hint(res_x, res_f.hint)
            return Ok(res_f.value(res_x.value), res_x.cursor, ParseError.merge(res_f.hint, res_x.hint))
        return Parser(parse)

    # Ordered choice (<|>)
    def __or__(self, other: 'Parser[T]') -> 'Parser[T]':
        def parse(cursor: Cursor) -> Result[T]:
            res = self(cursor)
            if isinstance(res, Ok):
                return res
            # Full backtracking: other starts from the original cursor and its
            # reply, success or failure, is the reply of the choice.
            return _with_hint(other(cursor), res.furthest)
        return Parser(parse)

    # Sequence (&)
    # self: Parser[T], other: Parser[U] -> result: Parser[Tuple[T, U]]
    def __and__(self, other: 'Parser[U]') -> 'Parser[Tuple[T, U]]':
        return self.bind(lambda a: other.map(lambda b: (a, b)))

    # Sequence (*>)
    def __rshift__(self, other: Union['Parser[U]', Callable[[T], 'Parser[U]']]) -> 'Parser[U]':
        if isinstance(other, Parser):
            return self.bind(lambda _: other)
        return self.bind(other)

    # Sequence (<*)
    # self: Parser[T], other: Parser[U] -> result: Parser[T]
    def __lt__(self, other: 'Parser[U]') -> 'Parser[T]':
        return self.bind(lambda a: other.map(lambda _: a))
