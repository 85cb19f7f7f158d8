"""Parseo y evaluación de expresiones de la calculadora."""

from __future__ import annotations

from dataclasses import dataclass, field

from expression_tokens import ParseError, Tokenizer, solve_tokens

GLYPHS = {
    "×": "*",
    "÷": "/",
    "−": "-",
}


@dataclass
class Group:
    """Nodo del árbol: texto plano intercalado con subgrupos."""

    parts: list = field(default_factory=list)

    def evaluate(self) -> float:
        # Recorrido en postorden con pila explícita: los subgrupos se
        # resuelven del más a la derecha al más a la izquierda, cada uno
        # desde su nivel más interno, sin límite de profundidad.
        values = {}
        stack = [(self, False)]
        while stack:
            group, expanded = stack.pop()
            if expanded:
                values[id(group)] = group._solve(values)
                continue
            stack.append((group, True))
            for part in group.parts:
                if isinstance(part, Group):
                    stack.append((part, False))
        return values[id(self)]

    def _solve(self, values: dict) -> float:
        tokenizer = Tokenizer()
        for part in self.parts:
            if isinstance(part, Group):
                tokenizer.feed_number(values[id(part)])
            else:
                tokenizer.feed_text(part)
        return solve_tokens(tokenizer.finish())


class FormulaEvaluator:
    """Transforma expresiones de UI y evalúa su valor numérico."""

    def evaluate(self, expression: str) -> float:
        """Evalúa la expresión y devuelve un ``float``.

        Una expresión vacía vale 0 y un ``(`` sin cerrar se cierra al
        final del texto.

        Raises:
            ParseError: expresión mal formada.
        """
        if not expression or not expression.strip():
            return 0.0
        return self.parse(expression).evaluate()

    def parse(self, expression: str) -> Group:
        """Construye el árbol de grupos; la pila guarda los ``(`` abiertos."""
        text = self.normalize(expression)
        root = Group()
        stack = [root]
        start = 0
        for pos, ch in enumerate(text):
            if ch not in "()":
                continue
            if pos > start:
                stack[-1].parts.append(text[start:pos])
            if ch == "(":
                child = Group()
                stack[-1].parts.append(child)
                stack.append(child)
            elif len(stack) == 1:
                raise ParseError("Paréntesis de cierre sin apertura")
            else:
                stack.pop()
            start = pos + 1
        if start < len(text):
            stack[-1].parts.append(text[start:])
        return root

    @staticmethod
    def normalize(expression: str) -> str:
        for glyph, symbol in GLYPHS.items():
            expression = expression.replace(glyph, symbol)
        return expression


_default_evaluator = FormulaEvaluator()


def evaluate(expression: str) -> float:
    return _default_evaluator.evaluate(expression)
