"""
Console output for the CLI.

Success and info lines go to stdout, warnings and errors to stderr.
"""

import sys
from typing import Optional, TextIO

from mixbump.ui.colors import BOLD, ERROR_FG, MUTED_FG, SUCCESS_FG, WARNING_FG, colorize, supports_color


class Console:
    def __init__(
        self,
        out: Optional[TextIO] = None,
        err: Optional[TextIO] = None,
        color: bool = True,
    ):
        self.out = out or sys.stdout
        self.err = err or sys.stderr
        self.color = color

    def _paint(self, text: str, color: str, stream: TextIO, style: str = "") -> str:
        if self.color and supports_color(stream):
            return colorize(text, color, style)
        return text

    def info(self, text: str = "") -> None:
        print(text, file=self.out)

    def muted(self, text: str) -> None:
        print(self._paint(text, MUTED_FG, self.out), file=self.out)

    def success(self, text: str) -> None:
        print(self._paint(f"✓ {text}", SUCCESS_FG, self.out), file=self.out)

    def warning(self, text: str) -> None:
        print(self._paint(text, WARNING_FG, self.err), file=self.err)

    def error(self, text: str) -> None:
        print(self._paint(text, ERROR_FG, self.err, BOLD), file=self.err)

    def prompt(self, text: str) -> str:
        print(text, end=" ", file=self.out, flush=True)
        return input()
