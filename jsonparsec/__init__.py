# Core
from .Parser import Parser, Cursor, ParseError, Ok, Error, Result
from .Prim import run_parser, pure, fail, lazy, many, many1

# Characters
from .Char import char, string, satisfy, span, digit, hex_digit, spaces, end_of_input

# Combinators
from .Combinators import (
    choice, count, between, option, sep_by, sep_by1,
    parser_trace, parser_traced
)

# Lexical parsers
from .Token import NumberParts, number_literal, string_literal, escape_sequence, whitespace

# JSON values
from .Value import JsonValue, JsonNull, JsonBool, JsonNumber, JsonString, JsonArray, JsonObject

# Configuration
from .Config import ParserConfig, default_config, prefix_config, MAX_NESTING_DEPTH

# Grammar & entry points
from .Json import JsonGrammar, grammar, parse, loads, JsonParseError, NestingDepthError
