"""
Lexical parsers for JSON: number literals, string literals and whitespace.

These are the building blocks the grammar in Json.py is assembled from.
They never skip whitespace on their own.
"""
from dataclasses import dataclass
from typing import Dict

from .Char import char, digit, hex_digit, satisfy, spaces, string
from .Combinators import between, choice, count, option
from .Parser import Parser
from .Prim import many, many1

# --- Numbers ---


@dataclass(frozen=True)
class NumberParts:
    """The pieces of a number literal, kept as decimal text.

    `fraction` holds the digits after '.', empty when there was no fraction.
    `exponent` is a signed decimal string, "0" when there was no exponent.
    """
    sign: int
    integer: str
    fraction: str = ""
    exponent: str = "0"

    def to_float(self) -> float:
        # float() of the reassembled literal is correctly rounded; summing
        # the parts as floats would round twice.
        sign = "-" if self.sign < 0 else ""
        return float(f"{sign}{self.integer}.{self.fraction or '0'}e{self.exponent}")


def _sign() -> Parser[int]:
    # '+' -> 1, '-' -> -1, nothing -> 1
    return option(1, char('-').map(lambda _: -1) | char('+').map(lambda _: 1))


def _digits() -> Parser[str]:
    return many1(digit()).map(lambda ds: "".join(ds))


def _fraction() -> Parser[str]:
    return option("", char('.') >> _digits())


def _exponent() -> Parser[str]:
    signed = _sign().bind(lambda s: _digits().map(lambda ds: ds if s > 0 else "-" + ds))
    return option("0", (char('e') | char('E')) >> signed)


def number_parts() -> Parser[NumberParts]:
    """[sign] digits ['.' digits] [('e'|'E') [sign] digits]"""
    fraction = _fraction()
    exponent = _exponent()
    return _sign().bind(lambda sign:
           _digits().bind(lambda integer:
           fraction.bind(lambda frac:
           exponent.map(lambda exp: NumberParts(sign, integer, frac, exp)))))


def number_literal() -> Parser[float]:
    """Parses a number literal into the nearest double."""
    return number_parts().map(lambda parts: parts.to_float())


# --- Strings ---

# Character after the backslash -> decoded character
ESCAPES: Dict[str, str] = {
    '"': '"', '\\': '\\', '/': '/',
    'b': '\b', 'f': '\f', 'n': '\n', 'r': '\r', 't': '\t',
}


def _simple_escape(code: str, decoded: str) -> Parser[str]:
    return string('\\' + code).map(lambda _: decoded)


def _unicode_escape() -> Parser[str]:
    # \uXXXX, exactly four hex digits, one character per escape
    return string('\\u') >> count(4, hex_digit()).map(lambda ds: chr(int("".join(ds), 16)))


def escape_sequence() -> Parser[str]:
    """One backslash escape. Unknown escapes match nothing."""
    return choice([_simple_escape(code, decoded) for code, decoded in ESCAPES.items()]
                  + [_unicode_escape()])


def normal_char() -> Parser[str]:
    return satisfy("non-special character", lambda c: c != '"' and c != '\\')


def string_literal() -> Parser[str]:
    """A double-quoted string with escapes decoded."""
    body = many(normal_char() | escape_sequence()).map(lambda cs: "".join(cs))
    return between(char('"'), char('"'), body)


# --- Whitespace ---

def whitespace() -> Parser[str]:
    return spaces()
