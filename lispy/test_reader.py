"""
Tests for the grammar and the reader: text -> parse tree -> values.
"""

from __future__ import annotations

import pytest

from lispy.grammar import ParseFailure, build_parser, parse
from lispy.printer import format_val
from lispy.reader import read, read_number, read_string
from lispy.values import (
    INT_MAX,
    INT_MIN,
    Error,
    ErrorKind,
    Expression,
    Number,
    Symbol,
)


def E(*children):
    return Expression(tuple(children))


def test_number_literals():
    assert read_string("42") == E(Number(42))
    assert read_string("-7") == E(Number(-7))
    assert read_string("007") == E(Number(7))


def test_minus_with_space_is_a_symbol():
    assert read_string("(- 5)") == E(E(Symbol("-"), Number(5)))
    assert read_string("(-5)") == E(E(Number(-5)))


def test_all_operator_symbols():
    for op in "+-*/%":
        assert read_string(op) == E(Symbol(op))


def test_nested_expressions_keep_order():
    tree = read_string("(* 1 2 (+ 1 1))")
    assert tree == E(E(Symbol("*"), Number(1), Number(2),
                       E(Symbol("+"), Number(1), Number(1))))


def test_empty_input_and_empty_list():
    assert read_string("") == E()
    assert read_string("   ") == E()
    assert read_string("()") == E(E())


def test_top_level_sequence():
    assert read_string("+ 1 2") == E(Symbol("+"), Number(1), Number(2))


def test_native_range_boundaries():
    assert read_number(str(INT_MAX)) == Number(INT_MAX)
    assert read_number(str(INT_MIN)) == Number(INT_MIN)


def test_out_of_range_literal_is_invalid_number():
    too_big = str(INT_MAX + 1)
    too_small = str(INT_MIN - 1)
    for text in (too_big, too_small, "1" * 40):
        v = read_number(text)
        assert isinstance(v, Error)
        assert v.kind is ErrorKind.INVALID_NUMBER
        assert v.message == "invalid number"


def test_invalid_number_inside_expression():
    tree = read_string(f"(+ {INT_MAX + 1} 1)")
    assert tree == E(E(Symbol("+"), Error.invalid_number(), Number(1)))


def test_numeric_round_trip():
    for n in (0, 1, -1, 12345, -98765, INT_MAX, INT_MIN):
        assert read_string(format_val(Number(n))) == E(Number(n))


def test_structural_tokens_are_skipped():
    """A parser that keeps delimiter tokens must read the same tree."""
    keep_all = build_parser(keep_all_tokens=True)
    text = "(+ 1 (2))"
    assert read(keep_all.parse(text)) == read(parse(text))


def test_reader_does_not_evaluate():
    assert read_string("(/ 1 0)") == E(E(Symbol("/"), Number(1), Number(0)))


def test_unknown_character_is_a_parse_failure():
    with pytest.raises(ParseFailure) as info:
        parse("(+ 1 a)")
    assert info.value.description.startswith("<stdin>:1:6: error:")
    assert info.value.line == 1


def test_unclosed_list_is_a_parse_failure():
    with pytest.raises(ParseFailure) as info:
        parse("(+ 1 2")
    assert info.value.description.startswith("<stdin>:1:")
    assert "end of input" in info.value.description


def test_stray_close_paren_is_a_parse_failure():
    with pytest.raises(ParseFailure):
        parse("(+ 1 2))")


def test_parse_failure_as_value():
    with pytest.raises(ParseFailure) as info:
        parse(")")
    v = info.value.to_value()
    assert v.kind is ErrorKind.SYNTAX_ERROR
    assert v.message == info.value.description
