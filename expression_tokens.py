"""Tokenizador y resolución por niveles de precedencia.

Trabaja sobre texto plano (sin paréntesis) con los operadores ya
normalizados a ``+ - * /``. Los grupos entre paréntesis los resuelve
``formula_evaluator`` y llegan aquí como operandos numéricos.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

ADD = "+"
SUBTRACT = "-"
MULTIPLY = "*"
DIVIDE = "/"

OPERATORS = (ADD, SUBTRACT, MULTIPLY, DIVIDE)
MULTIPLICATIVE = frozenset({MULTIPLY, DIVIDE})
ADDITIVE = frozenset({ADD, SUBTRACT})


class ParseError(ValueError):
    """Secuencia de tokens mal formada."""


@dataclass(frozen=True)
class Token:
    """Número (valor + literal original) u operador binario."""

    kind: str
    text: str
    value: float | None = None

    NUMBER = "number"
    OPERATOR = "operator"

    @classmethod
    def number(cls, value: float, text: str | None = None) -> "Token":
        return cls(cls.NUMBER, text if text is not None else repr(value), value)

    @classmethod
    def operator(cls, symbol: str) -> "Token":
        if symbol not in OPERATORS:
            raise ParseError(f"Operador desconocido: {symbol!r}")
        return cls(cls.OPERATOR, symbol)

    @property
    def is_number(self) -> bool:
        return self.kind == self.NUMBER

    @property
    def is_operator(self) -> bool:
        return self.kind == self.OPERATOR


# ── Tokenizador ─────────────────────────────────────────────────

class Tokenizer:
    """Acumula literales y operadores carácter a carácter.

    Un ``-`` abre un literal con signo si es lo primero que se lee o si
    el último token emitido es un operador; en otro caso es una resta.
    ``feed_number`` permite intercalar valores ya calculados (grupos
    entre paréntesis) respetando la misma regla de signo.
    """

    def __init__(self):
        self.tokens: list[Token] = []
        self._literal = ""

    def _sign_position(self) -> bool:
        if self._literal:
            return False
        return not self.tokens or self.tokens[-1].is_operator

    def _flush(self):
        if not self._literal:
            return
        text = self._literal
        self._literal = ""
        if text in ("-", ".", "-."):
            raise ParseError(f"Número incompleto: {text!r}")
        if self.tokens and self.tokens[-1].is_number:
            raise ParseError("Faltan operadores entre números")
        self.tokens.append(Token.number(float(text), text))

    def feed_text(self, text: str) -> "Tokenizer":
        for ch in text:
            if ch.isspace():
                self._flush()
            elif ch.isdigit():
                self._literal += ch
            elif ch == ".":
                if "." in self._literal:
                    raise ParseError("Número con más de un punto decimal")
                self._literal += ch
            elif ch == SUBTRACT and self._sign_position():
                self._literal = ch
            else:
                self._flush()
                self.tokens.append(Token.operator(ch))
        return self

    def feed_number(self, value: float) -> "Tokenizer":
        if self._literal == "-":
            self._literal = ""
            value = -value
        elif self._literal:
            raise ParseError("Falta un operador antes del paréntesis")
        if self.tokens and self.tokens[-1].is_number:
            raise ParseError("Falta un operador antes del paréntesis")
        self.tokens.append(Token.number(value))
        return self

    def finish(self) -> list[Token]:
        self._flush()
        return self.tokens


def tokenize(text: str) -> list[Token]:
    """Divide un texto plano en números y operadores."""
    return Tokenizer().feed_text(text).finish()


# ── Resolución por niveles ──────────────────────────────────────

def _apply(symbol: str, left: float, right: float) -> float:
    if symbol == ADD:
        return left + right
    if symbol == SUBTRACT:
        return left - right
    if symbol == MULTIPLY:
        return left * right
    if right == 0:
        # Semántica IEEE-754: x/0 -> ±inf, 0/0 -> nan
        if left == 0 or math.isnan(left):
            return math.nan
        return math.copysign(math.inf, left) * math.copysign(1.0, right)
    return left / right


def reduce_tier(tokens: list[Token], operators) -> list[Token]:
    """Reduce de izquierda a derecha los operadores de un nivel.

    Cada ventana ``número operador número`` se sustituye por su
    resultado y se vuelve a examinar la misma posición, de modo que
    ``2*3*4`` se resuelve estrictamente como ``(2*3)*4``.
    """
    reduced = list(tokens)
    i = 1
    while i < len(reduced) - 1:
        token = reduced[i]
        left, right = reduced[i - 1], reduced[i + 1]
        if (
            token.is_operator
            and token.text in operators
            and left.is_number
            and right.is_number
        ):
            result = _apply(token.text, left.value, right.value)
            reduced[i - 1 : i + 2] = [Token.number(result)]
            continue
        i += 1
    return reduced


def validate_tokens(tokens: list[Token]):
    if not tokens:
        return
    if tokens[0].is_operator or tokens[-1].is_operator:
        raise ParseError("La expresión empieza o termina en operador")
    for previous, current in zip(tokens, tokens[1:]):
        if previous.kind == current.kind:
            raise ParseError("Operadores o números consecutivos")


def solve_tokens(tokens: list[Token]) -> float:
    """Aplica ``* /`` y luego ``+ -``; una lista vacía vale 0."""
    validate_tokens(tokens)
    if not tokens:
        return 0.0
    reduced = reduce_tier(tokens, MULTIPLICATIVE)
    reduced = reduce_tier(reduced, ADDITIVE)
    if len(reduced) != 1 or not reduced[0].is_number:
        raise ParseError("No se pudo reducir la expresión")
    return reduced[0].value
