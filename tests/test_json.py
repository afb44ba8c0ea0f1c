import logging

import pytest

from jsonparsec.Config import MAX_NESTING_DEPTH, ParserConfig, default_config, prefix_config
from jsonparsec.Json import JsonGrammar, JsonParseError, grammar, loads, parse
from jsonparsec.Parser import Cursor, Error, Ok, ParseError
from jsonparsec.Value import JsonArray, JsonBool, JsonNull, JsonNumber, JsonObject, JsonString


# --- Scalars ---

def test_literals():
    assert parse("null") == (JsonNull(), None)
    assert parse("true") == (JsonBool(True), None)
    assert parse("false") == (JsonBool(False), None)


def test_numbers():
    assert parse("123") == (JsonNumber(123.0), None)
    assert parse("-0.5e2") == (JsonNumber(-50.0), None)
    assert parse("1E+1") == (JsonNumber(10.0), None)


def test_strings():
    assert parse('"a\\nb"') == (JsonString("a\nb"), None)
    assert parse('"\\u0041"') == (JsonString("A"), None)


# --- Containers ---

def test_arrays():
    assert parse("[1,2,3]") == (JsonArray([JsonNumber(1), JsonNumber(2), JsonNumber(3)]), None)
    assert parse("[]") == (JsonArray([]), None)
    assert parse("[ ]") == (JsonArray([]), None)


def test_objects():
    assert parse('{"k":1}') == (JsonObject([("k", JsonNumber(1))]), None)
    assert parse("{}") == (JsonObject([]), None)


def test_whitespace_around_delimiters():
    value, err = parse(' { "a" : [ 1 , true , null ] ,\n "b" : { } } ')
    assert err is None
    assert value == JsonObject([
        ("a", JsonArray([JsonNumber(1), JsonBool(True), JsonNull()])),
        ("b", JsonObject([])),
    ])


def test_object_keeps_order_and_duplicates():
    value, _ = parse('{"b":1,"a":2,"b":3}')
    assert value.keys() == ["b", "a", "b"]
    assert value.get("b") == JsonNumber(1)
    assert value.get("missing") is None
    assert value.to_python() == {"b": 3.0, "a": 2.0}


def test_nested_mixed():
    value, err = parse('[{"x":[[]]}, "s", -1.5, false]')
    assert err is None
    assert value.to_python() == [{"x": [[]]}, "s", -1.5, False]


# --- Errors ---

def test_missing_object_value_points_at_brace():
    text = '{"k":}'
    value, err = parse(text)
    assert value is None
    assert err.position == text.index("}")


def test_unterminated_string():
    value, err = parse('"abc')
    assert value is None
    assert err == ParseError(4, "Expected '\"', but reached end of input")


def test_unclosed_array():
    _, err = parse("[1, 2")
    assert err == ParseError(5, "Expected ']', but reached end of input")


def test_trailing_comma():
    _, err = parse("[1,]")
    assert err.position == 3


def test_unknown_escape():
    _, err = parse('["a\\x"]')
    assert err.position == 3


def test_nothing_matches_reports_last_alternative():
    # Every value kind fails at offset 0; object is tried last
    _, err = parse("xyz")
    assert err == ParseError(0, "Expected '{', but found 'x'")


def test_empty_document():
    _, err = parse("")
    assert err == ParseError(0, "Expected '{', but reached end of input")
    _, err = parse("   ")
    assert err.position == 3


def test_trailing_garbage_rejected():
    _, err = parse("[1] x")
    assert err == ParseError(4, "Expected end of input, but found 'x'")
    _, err = parse("truex")
    assert err == ParseError(4, "Expected end of input, but found 'x'")


def test_run_value_parser_directly_keeps_last_branch_error():
    # Without the entry point, the choice reports its last branch
    res = grammar().value(Cursor('{"k":}'))
    assert isinstance(res, Error)
    assert res.error == ParseError(1, "Expected '}', but found '\"'")
    assert res.furthest.position == 5


def test_parse_is_repeatable():
    text = '{"a": [1, 2, {"b": null}]}'
    assert parse(text) == parse(text)
    assert parse("[1,") == parse("[1,")


# --- Configuration ---

def test_prefix_config_ignores_trailing_text():
    value, err = parse("[1] x", prefix_config)
    assert err is None
    assert value == JsonArray([JsonNumber(1)])


def test_outer_whitespace_toggle():
    strict = ParserConfig(skip_outer_whitespace=False)
    assert parse(" 1 ")[0] == JsonNumber(1)
    _, err = parse(" 1", strict)
    assert err.position == 0


def test_config_validation():
    with pytest.raises(ValueError):
        ParserConfig(max_depth=0)


def test_grammar_is_cached_per_config():
    assert grammar(default_config) is grammar(ParserConfig())
    assert grammar(ParserConfig(max_depth=3)) is not grammar(default_config)


def test_grammar_levels():
    g = JsonGrammar(ParserConfig(max_depth=3))
    assert len(g.levels) == 4
    assert g.value is g.levels[0]


# --- Nesting depth ---

def nested_arrays(n):
    return "[" * n + "]" * n


def test_default_depth_limit_is_allowed():
    value, err = parse(nested_arrays(MAX_NESTING_DEPTH))
    assert err is None
    depth = 0
    while isinstance(value, JsonArray) and len(value):
        value = value.items[0]
        depth += 1
    assert depth == MAX_NESTING_DEPTH - 1


def test_depth_limit_exceeded():
    _, err = parse(nested_arrays(MAX_NESTING_DEPTH + 1))
    assert err == ParseError(MAX_NESTING_DEPTH, f"Maximum nesting depth of {MAX_NESTING_DEPTH} exceeded")


def test_custom_depth_limit_counts_objects_too():
    config = ParserConfig(max_depth=2)
    assert parse('{"a":[1]}', config)[1] is None
    _, err = parse('{"a":[{}]}', config)
    assert err == ParseError(6, "Maximum nesting depth of 2 exceeded")


def test_depth_error_is_not_backtracked():
    config = ParserConfig(max_depth=1)
    _, err = parse("[[", config)
    assert err.message == "Maximum nesting depth of 1 exceeded"


def test_wide_documents_are_fine():
    text = "[" + ",".join(["1"] * 5000) + "]"
    value, err = parse(text)
    assert err is None
    assert len(value) == 5000


# --- loads ---

def test_loads_returns_python_values():
    assert loads('{"a": [1, "two", null, true]}') == {"a": [1.0, "two", None, True]}


def test_loads_raises_with_location():
    with pytest.raises(JsonParseError) as info:
        loads('{\n  "k": }')
    exc = info.value
    assert isinstance(exc, ValueError)
    assert exc.position == 9
    assert (exc.line, exc.column) == (2, 8)
    assert "line 2, column 8" in str(exc)


# --- Logging ---

def test_failures_are_logged_at_debug(caplog):
    caplog.set_level(logging.DEBUG, logger="jsonparsec.Json")
    parse("[1,")
    assert "JSON parse failed at offset 3" in caplog.text


def test_success_is_not_logged(caplog):
    caplog.set_level(logging.DEBUG, logger="jsonparsec.Json")
    parse("[1]")
    assert caplog.text == ""


def test_result_types():
    res = grammar().document(Cursor("1"))
    assert isinstance(res, Ok)
    assert res.value == JsonNumber(1.0)
