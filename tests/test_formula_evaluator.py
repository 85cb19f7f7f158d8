"""Pruebas de FormulaEvaluator: glifos, grupos y casos de error."""

import math

import pytest

from expression_tokens import ParseError
from formula_evaluator import FormulaEvaluator, Group, evaluate


@pytest.fixture
def evaluator():
    return FormulaEvaluator()


# --- Entrada vacía ---

def test_empty_is_zero(evaluator):
    assert evaluator.evaluate("") == 0
    assert evaluator.evaluate("   ") == 0


# --- Precedencia y signos ---

def test_precedence(evaluator):
    assert evaluator.evaluate("2+3*4") == pytest.approx(14.0)


def test_negative_literals(evaluator):
    assert evaluator.evaluate("-5+3") == pytest.approx(-2.0)
    assert evaluator.evaluate("5*-3") == pytest.approx(-15.0)


def test_display_glyphs(evaluator):
    assert evaluator.evaluate("6×7") == pytest.approx(42.0)
    assert evaluator.evaluate("15÷4") == pytest.approx(3.75)
    assert evaluator.evaluate("9−4") == pytest.approx(5.0)


# --- Paréntesis ---

def test_group_then_multiply(evaluator):
    assert evaluator.evaluate("(2+3)*4") == pytest.approx(20.0)


def test_nested_groups(evaluator):
    assert evaluator.evaluate("((1+2)*3)") == pytest.approx(9.0)
    assert evaluator.evaluate("((2+3)*(4-1))") == pytest.approx(15.0)
    assert evaluator.evaluate("(((1+2)))") == pytest.approx(3.0)


def test_unmatched_open_closes_at_end(evaluator):
    assert evaluator.evaluate("(5+5") == pytest.approx(10.0)
    assert evaluator.evaluate("2*(3+(1") == pytest.approx(8.0)


def test_negative_group_result_subtracted(evaluator):
    assert evaluator.evaluate("5-(0-3)") == pytest.approx(8.0)


def test_sign_before_group(evaluator):
    assert evaluator.evaluate("5*-(2+1)") == pytest.approx(-15.0)
    assert evaluator.evaluate("-(4)") == pytest.approx(-4.0)


def test_empty_group_is_zero(evaluator):
    assert evaluator.evaluate("(") == 0
    assert evaluator.evaluate("5*()") == 0


def test_parse_builds_tree(evaluator):
    tree = evaluator.parse("1+(2*(3))")
    assert tree.parts[0] == "1+"
    inner = tree.parts[1]
    assert isinstance(inner, Group)
    assert inner.parts[0] == "2*"
    assert inner.parts[1] == Group(["3"])


# --- Entrada mal formada ---

@pytest.mark.parametrize("text", ["5)", "5)+3", "2++3", "2(3)", "(2)3", "1.2.3", "abc"])
def test_malformed_raises(evaluator, text):
    with pytest.raises(ParseError):
        evaluator.evaluate(text)


# --- La división por cero conserva valores IEEE ---

def test_division_by_zero(evaluator):
    assert evaluator.evaluate("1÷0") == math.inf
    assert evaluator.evaluate("(1-2)/0") == -math.inf
    assert math.isnan(evaluator.evaluate("0/(1-1)"))


def test_repeated_evaluation_is_stable():
    first = evaluate("(1.5+2)×3-4÷8")
    assert all(evaluate("(1.5+2)×3-4÷8") == first for _ in range(5))
    assert first == pytest.approx(10.0)


def test_deep_nesting_has_no_depth_limit(evaluator):
    depth = 5000
    assert evaluator.evaluate("(" * depth + "1+2" + ")" * depth) == pytest.approx(3.0)
    assert evaluator.evaluate("2×" + "(" * depth + "4") == pytest.approx(8.0)
