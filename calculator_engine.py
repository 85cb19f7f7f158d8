"""
Motor de entrada de la calculadora.

Este módulo provee la clase CalculatorEngine, que recibe cada pulsación
de botón como un identificador opaco, decide cómo modificar la
expresión pendiente y recalcula la vista previa. La interfaz gráfica
sólo llama a ``handle_button_press`` y lee dos cadenas.

Contrato de interfaz:
    - handle_button_press(identifier: str) -> None
    - expression: str  (solo lectura)
    - preview: str     (solo lectura)
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from decimal import Decimal

from formula_evaluator import FormulaEvaluator

log = logging.getLogger(__name__)

CLEAR = "AC"
BACKSPACE = "DE"
EQUALS = "="
PERCENT = "%"
PARENTHESIS = "( )"
DECIMAL_POINT = "."
DIGITS = tuple("0123456789")

OPERATOR_GLYPHS = ("+", "-", "×", "÷", "*", "/")
MULTIPLICATIVE_GLYPHS = ("×", "÷", "*", "/")
ERROR_TEXT = "Error"


@dataclass(frozen=True)
class DisplayState:
    expression: str
    preview: str


def format_number(value: float) -> str:
    """Texto posicional (sin notación científica) de hasta 15 cifras."""
    if math.isnan(value):
        return "NaN"
    if value == float("inf"):
        return "∞"
    if value == float("-inf"):
        return "-∞"
    if value == 0:
        return "0"
    text = format(Decimal(f"{value:.15g}"), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def is_operator(text: str) -> bool:
    return text in OPERATOR_GLYPHS


class LivePreview:
    """Recalcula el resultado provisional tras cada cambio."""

    def __init__(self, evaluator: FormulaEvaluator):
        self._evaluator = evaluator
        self.value: float | None = None

    def refresh(self, expression: str) -> str:
        self.value = None
        if not expression or is_operator(expression[-1]):
            return ""
        try:
            self.value = self._evaluator.evaluate(expression)
        except (ArithmeticError, ValueError) as exc:
            log.debug("Vista previa fallida para %r: %s", expression, exc)
            return ERROR_TEXT
        return format_number(self.value)


class CalculatorEngine:
    """Máquina de estados de edición de la expresión."""

    def __init__(self, evaluator: FormulaEvaluator | None = None):
        self._evaluator = evaluator if evaluator is not None else FormulaEvaluator()
        self._live_preview = LivePreview(self._evaluator)
        self._expression = ""
        self._preview = ""

    # ── Proyecciones de solo lectura ─────────────────────────────

    @property
    def expression(self) -> str:
        return self._expression

    @property
    def preview(self) -> str:
        return self._preview

    @property
    def display(self) -> DisplayState:
        return DisplayState(self._expression, self._preview)

    def evaluate(self, expression: str) -> float:
        return self._evaluator.evaluate(expression)

    # ── Punto de entrada único ───────────────────────────────────

    def handle_button_press(self, identifier: str):
        if identifier == CLEAR:
            self._expression = ""
            self._preview = ""
            self._live_preview.value = None
            return

        if identifier == EQUALS:
            self._commit_preview()
            return

        if identifier == BACKSPACE:
            self._expression = self._expression[:-1]
        elif identifier == PERCENT:
            self._apply_percentage()
        elif identifier == PARENTHESIS:
            self._apply_parenthesis()
        elif is_operator(identifier):
            self._apply_operator(identifier)
        elif identifier in DIGITS or identifier == DECIMAL_POINT:
            self._expression += identifier
        else:
            log.warning("Botón desconocido: %r", identifier)
            raise ValueError(f"Botón desconocido: {identifier!r}")

        self._preview = self._live_preview.refresh(self._expression)

    # ── Transiciones ─────────────────────────────────────────────

    def _commit_preview(self):
        value = self._live_preview.value
        if not self._preview or value is None or not math.isfinite(value):
            return
        self._expression = self._preview
        self._preview = ""
        self._live_preview.value = None

    def _apply_percentage(self):
        expr = self._expression
        if not expr or is_operator(expr[-1]):
            return

        start = len(expr)
        while start > 0 and (expr[start - 1].isdigit() or expr[start - 1] == "."):
            start -= 1
        try:
            number = float(expr[start:])
        except ValueError:
            return

        fraction = number / 100.0
        if start > 0 and expr[start - 1] in "+-" and not self._is_sign(expr, start - 1):
            # 50+10% -> 50+5: porcentaje del total acumulado
            try:
                base = self.evaluate(expr[: start - 1])
            except (ArithmeticError, ValueError):
                return
            new_value = base * fraction
        else:
            # 50×10% -> 50×0.1
            new_value = fraction

        if not math.isfinite(new_value):
            return
        self._expression = expr[:start] + format_number(new_value)

    @staticmethod
    def _is_sign(expr: str, index: int) -> bool:
        """``-`` al inicio, tras otro operador o tras ``(`` es un signo."""
        if expr[index] != "-":
            return False
        if index == 0:
            return True
        previous = expr[index - 1]
        return is_operator(previous) or previous == "("

    def _apply_parenthesis(self):
        expr = self._expression
        if not expr:
            self._expression = "("
            return

        last = expr[-1]
        open_count = expr.count("(") - expr.count(")")
        if is_operator(last) or last == "(":
            self._expression += "("
        elif open_count > 0 and (last.isdigit() or last == ")"):
            self._expression += ")"
        else:
            # Término completo sin grupo abierto: multiplicación implícita
            self._expression += "*("

    def _apply_operator(self, glyph: str):
        expr = self._expression
        if glyph == "-" and (not expr or expr[-1] in MULTIPLICATIVE_GLYPHS):
            # Inicio de un número negativo: "-5", "5×-3"
            self._expression += glyph
            return

        if expr and self._is_sign(expr, len(expr) - 1) and glyph != "-":
            # "5×-" seguido de "+" -> "5+"
            expr = expr[:-1]
        if expr and is_operator(expr[-1]):
            self._expression = expr[:-1] + glyph
        else:
            self._expression = expr + glyph
