"""
Interfaz gráfica de la calculadora.

Usa tkinter. Cada botón envía su identificador al motor y la pantalla
sólo copia las dos cadenas que el motor expone (expresión y vista
previa); toda la lógica de edición vive en ``CalculatorEngine``.
"""

import logging
import tkinter as tk
from tkinter import font as tkfont
from tkinter import messagebox

from calculator_engine import CalculatorEngine

log = logging.getLogger(__name__)


class CalculatorApp:
    """Ventana principal de la calculadora."""

    # ── Paleta de colores ────────────────────────────────────────
    C = {
        "bg":         "#1E1E2E",
        "display_bg": "#181825",
        "num":        "#313244",
        "num_fg":     "#CDD6F4",
        "op":         "#F38BA8",
        "op_fg":      "#1E1E2E",
        "special":    "#585B70",
        "special_fg": "#CDD6F4",
        "equals":     "#89B4FA",
        "equals_fg":  "#1E1E2E",
        "expr_fg":    "#CDD6F4",
        "preview_fg": "#7F849C",
    }

    # ── Definiciones del teclado ─────────────────────────────────
    #  Cada fila es una lista de (texto, identificador, tipo_color)

    KEYPAD = [
        [("AC", "AC", "special"), ("( )", "( )", "special"),
         ("%", "%", "special"), ("÷", "÷", "op")],

        [("7", "7", "num"), ("8", "8", "num"),
         ("9", "9", "num"), ("×", "×", "op")],

        [("4", "4", "num"), ("5", "5", "num"),
         ("6", "6", "num"), ("-", "-", "op")],

        [("1", "1", "num"), ("2", "2", "num"),
         ("3", "3", "num"), ("+", "+", "op")],

        [("0", "0", "num"), (".", ".", "num"),
         ("⌫", "DE", "special"), ("=", "=", "equals")],
    ]

    # Teclas físicas -> identificador de botón
    KEY_BINDINGS = {
        "<Return>": "=",
        "<KP_Enter>": "=",
        "<BackSpace>": "DE",
        "<Escape>": "AC",
        "<Delete>": "AC",
        "<KeyPress-asterisk>": "×",
        "<KeyPress-slash>": "÷",
        "<KeyPress-parenleft>": "( )",
        "<KeyPress-parenright>": "( )",
    }

    def __init__(self, root: tk.Tk, engine=None, about_text: str = ""):
        self.root = root
        self.root.title("Calculadora")
        self.root.configure(bg=self.C["bg"])

        self.engine = engine if engine is not None else CalculatorEngine()
        self._about_text = about_text

        self._init_fonts()
        self._create_menu()
        self._create_display()
        self._create_keypad()
        self._bind_keyboard()

    # ── Fuentes ──────────────────────────────────────────────────

    def _init_fonts(self):
        self._f_expr    = tkfont.Font(family="Consolas", size=22)
        self._f_preview = tkfont.Font(family="Consolas", size=16)
        self._f_btn     = tkfont.Font(family="Segoe UI", size=15)

    # ── Menú ─────────────────────────────────────────────────────

    def _create_menu(self):
        menubar = tk.Menu(self.root)
        help_menu = tk.Menu(menubar, tearoff=0)
        help_menu.add_command(label="Acerca de", command=self._show_about)
        menubar.add_cascade(label="Ayuda", menu=help_menu)
        self.root.config(menu=menubar)

    def _show_about(self):
        messagebox.showinfo("Acerca de", self._about_text, parent=self.root)

    # ── Pantalla ─────────────────────────────────────────────────

    def _create_display(self):
        frame = tk.Frame(self.root, bg=self.C["display_bg"], padx=12, pady=8)
        frame.pack(fill="x", padx=6, pady=(6, 2))

        self.expr_var = tk.StringVar()
        tk.Label(
            frame, textvariable=self.expr_var, anchor="e",
            font=self._f_expr, bg=self.C["display_bg"],
            fg=self.C["expr_fg"],
        ).pack(fill="x", pady=(4, 0))

        self.preview_var = tk.StringVar()
        tk.Label(
            frame, textvariable=self.preview_var, anchor="e",
            font=self._f_preview, bg=self.C["display_bg"],
            fg=self.C["preview_fg"],
        ).pack(fill="x", pady=(2, 4))

    # ── Teclado numérico / operadores ────────────────────────────

    def _create_keypad(self):
        frame = tk.Frame(self.root, bg=self.C["bg"])
        frame.pack(fill="both", expand=True, padx=6, pady=(2, 6))

        max_cols = max(len(row) for row in self.KEYPAD)
        for c in range(max_cols):
            frame.columnconfigure(c, weight=1, uniform="key")

        for r, row_def in enumerate(self.KEYPAD):
            spans = self._compute_spans(len(row_def), max_cols)
            col_pos = 0
            for idx, (text, identifier, kind) in enumerate(row_def):
                btn = tk.Button(
                    frame, text=text, font=self._f_btn,
                    bg=self.C[kind], fg=self.C[f"{kind}_fg"],
                    activebackground=self.C["special"], relief="flat",
                    command=lambda i=identifier: self.press(i),
                )
                btn.grid(row=r, column=col_pos, columnspan=spans[idx],
                         sticky="nsew", padx=2, pady=2, ipady=8)
                col_pos += spans[idx]

        for r in range(len(self.KEYPAD)):
            frame.rowconfigure(r, weight=1)

    @staticmethod
    def _compute_spans(cols_in_row: int, max_cols: int) -> list[int]:
        """Reparte max_cols entre cols_in_row botones."""
        base, extra = divmod(max_cols, cols_in_row)
        spans = [base] * cols_in_row
        spans[-1] += extra
        return spans

    # ── Atajos de teclado ────────────────────────────────────────

    def _bind_keyboard(self):
        for sequence, identifier in self.KEY_BINDINGS.items():
            self.root.bind(sequence, lambda _e, i=identifier: self.press(i))
        for char in "0123456789.+-%":
            self.root.bind(char, lambda _e, i=char: self.press(i))

    # ── Acciones ─────────────────────────────────────────────────

    def press(self, identifier: str):
        self.engine.handle_button_press(identifier)
        log.debug("%r -> %r | %r", identifier,
                  self.engine.expression, self.engine.preview)
        self._refresh()

    def _refresh(self):
        self.expr_var.set(self.engine.expression)
        self.preview_var.set(self.engine.preview)
