"""Punto de entrada de la calculadora."""

import logging
import os
import tkinter as tk

from calculator_engine import CalculatorEngine
from calculator_ui import CalculatorApp


APP_NAME = "SCalc"
APP_VERSION = "1.0.0"
APP_AUTHOR = "Husam Monawar"
WINDOW_GEOMETRY = "360x520"
WINDOW_MIN_SIZE = (320, 460)
LOG_LEVEL = os.getenv("CALC_LOG_LEVEL", "WARNING").upper()


def about_text() -> str:
    return (
        f"{APP_NAME} versión {APP_VERSION}\n\n"
        f"Hecho por {APP_AUTHOR}\n"
        "© 2026 Todos los derechos reservados."
    )


def main():
    logging.basicConfig(
        level=LOG_LEVEL,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s"
    )
    root = tk.Tk()
    root.geometry(WINDOW_GEOMETRY)
    root.minsize(*WINDOW_MIN_SIZE)
    CalculatorApp(root, engine=CalculatorEngine(), about_text=about_text())
    root.mainloop()


if __name__ == "__main__":
    main()
