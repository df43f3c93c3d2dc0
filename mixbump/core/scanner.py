"""
Bracket scanner for list literals.

Matches a ``[`` with its closing ``]`` while treating everything inside
double-quoted string literals as opaque. This is a small explicit state
machine rather than a regular expression, since nesting depth cannot be
counted by a regex.
"""

from __future__ import annotations

from dataclasses import dataclass

from mixbump.core.errors import MixfileError, UnterminatedBracketError

OPEN_BRACKET = "["
CLOSE_BRACKET = "]"
QUOTE = '"'
BACKSLASH = "\\"


@dataclass(frozen=True)
class BracketRange:
    """Inclusive indices of a matched ``[`` ... ``]`` pair."""

    start: int
    end: int

    def slice(self, text: str) -> str:
        return text[self.start : self.end + 1]


@dataclass
class ScanState:
    depth: int = 1
    in_string: bool = False
    escaped: bool = False

    def feed(self, ch: str) -> None:
        """Advance the state by one character."""
        if self.escaped:
            self.escaped = False
        elif self.in_string:
            if ch == BACKSLASH:
                self.escaped = True
            elif ch == QUOTE:
                self.in_string = False
        elif ch == QUOTE:
            self.in_string = True
        elif ch == OPEN_BRACKET:
            self.depth += 1
        elif ch == CLOSE_BRACKET:
            self.depth -= 1

    @property
    def closed(self) -> bool:
        return self.depth == 0 and not self.in_string


def match_closing(text: str, open_index: int) -> BracketRange:
    """
    Return the range of the list literal opening at ``open_index``.

    Raises:
        MixfileError: if ``open_index`` does not point at ``[``.
        UnterminatedBracketError: if the text ends before the list closes.
    """
    if open_index < 0 or open_index >= len(text):
        raise MixfileError(f"Invalid bracket index {open_index}", offset=open_index)
    if text[open_index] != OPEN_BRACKET:
        raise MixfileError(f"Expected '[' at index {open_index}", offset=open_index)

    state = ScanState()
    for index in range(open_index + 1, len(text)):
        state.feed(text[index])
        if state.closed:
            return BracketRange(open_index, index)

    raise UnterminatedBracketError(open_index)
