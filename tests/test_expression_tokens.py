"""Pruebas del tokenizador plano y de la resolución en dos niveles."""

import math

import pytest

from expression_tokens import (
    ADDITIVE,
    MULTIPLICATIVE,
    ParseError,
    Token,
    Tokenizer,
    reduce_tier,
    solve_tokens,
    tokenize,
)


def _shape(tokens):
    return [t.text if t.is_operator else t.value for t in tokens]


# --- Tokenizador ---

def test_leading_minus_is_signed_literal():
    tokens = tokenize("-5+3")
    assert _shape(tokens) == [-5.0, "+", 3.0]
    assert tokens[0].text == "-5"


def test_minus_after_operator_is_signed_literal():
    assert _shape(tokenize("5*-3")) == [5.0, "*", -3.0]


def test_minus_after_number_is_subtraction():
    assert _shape(tokenize("5-3")) == [5.0, "-", 3.0]


def test_double_minus():
    assert _shape(tokenize("5--3")) == [5.0, "-", -3.0]


def test_decimal_literal():
    tokens = tokenize("3.25/.5")
    assert _shape(tokens) == [3.25, "/", 0.5]
    assert tokens[2].text == ".5"


def test_whitespace_is_ignored_between_tokens():
    assert _shape(tokenize(" 2 +  3 ")) == [2.0, "+", 3.0]


def test_second_decimal_point_rejected():
    with pytest.raises(ParseError):
        tokenize("1.2.3")


def test_unknown_character_rejected():
    with pytest.raises(ParseError):
        tokenize("2^3")


def test_bare_sign_rejected():
    with pytest.raises(ParseError):
        tokenize("-")


def test_feed_number_takes_pending_sign():
    tokens = Tokenizer().feed_text("5*-").feed_number(3.0).finish()
    assert _shape(tokens) == [5.0, "*", -3.0]


def test_feed_number_after_literal_rejected():
    with pytest.raises(ParseError):
        Tokenizer().feed_text("2").feed_number(3.0)


def test_parse_error_is_value_error():
    assert issubclass(ParseError, ValueError)


# --- Resolución por niveles ---

def test_reduce_tier_only_touches_active_operators():
    reduced = reduce_tier(tokenize("2+3*4"), MULTIPLICATIVE)
    assert _shape(reduced) == [2.0, "+", 12.0]


def test_reduce_tier_chains_left_to_right():
    assert _shape(reduce_tier(tokenize("2*3*4"), MULTIPLICATIVE)) == [24.0]
    assert _shape(reduce_tier(tokenize("10-4-3"), ADDITIVE)) == [3.0]
    assert _shape(reduce_tier(tokenize("8/4/2"), MULTIPLICATIVE)) == [1.0]


def test_solve_precedence():
    assert solve_tokens(tokenize("10-2*3+4/2")) == pytest.approx(6.0)


def test_solve_empty_list_is_zero():
    assert solve_tokens([]) == 0.0


@pytest.mark.parametrize("text", ["5+", "*5", "5+*3"])
def test_solve_rejects_dangling_operators(text):
    with pytest.raises(ParseError):
        solve_tokens(tokenize(text))


def test_solve_rejects_adjacent_numbers():
    with pytest.raises(ParseError):
        solve_tokens([Token.number(1.0), Token.number(2.0)])


def test_division_by_zero_is_infinite():
    assert solve_tokens(tokenize("1/0")) == math.inf
    assert solve_tokens(tokenize("-1/0")) == -math.inf
    assert math.isnan(solve_tokens(tokenize("0/0")))
