"""
Locates named list literals inside ``mix.exs`` text.

Two surface forms are recognized:

  - inline:  ``aliases: [ ... ]``
  - block:   ``defp aliases do [ ... ] end``

Everything else is opaque text. The first occurrence wins.
"""

from __future__ import annotations

import logging
import re
from typing import Optional, Pattern

from mixbump.core.errors import UnexpectedCharacterError
from mixbump.core.scanner import OPEN_BRACKET, BracketRange, match_closing

logger = logging.getLogger(__name__)

_WHITESPACE = " \t\r\n"


def inline_pattern(key: str) -> Pattern[str]:
    return re.compile(rf"\b{re.escape(key)}:\s*\[")


def block_header_pattern(block_name: str, keyword: str = "do") -> Pattern[str]:
    return re.compile(
        rf"\bdefp?\s+{re.escape(block_name)}(?:\(\s*\))?\s+{re.escape(keyword)}\b"
    )


def find_next_open_bracket(text: str, index: int, key: str) -> int:
    """
    Skip whitespace (and ``#`` line comments) from ``index`` up to ``[``.

    Anything else means the construct is not a list literal we understand.
    """
    i = index
    size = len(text)
    while i < size:
        ch = text[i]
        if ch in _WHITESPACE:
            i += 1
        elif ch == "#":
            newline = text.find("\n", i)
            i = size if newline == -1 else newline + 1
        elif ch == OPEN_BRACKET:
            return i
        else:
            raise UnexpectedCharacterError(key, ch, i)
    raise UnexpectedCharacterError(key, None, size)


def locate_inline(text: str, key: str) -> Optional[BracketRange]:
    """Find the list written inline as ``key: [ ... ]``."""
    match = inline_pattern(key).search(text)
    if not match:
        return None

    open_index = find_next_open_bracket(text, match.start() + len(key) + 1, f"{key}:")
    found = match_closing(text, open_index)
    logger.debug(f"Inline list {key!r} at {found.start}-{found.end}")
    return found


def locate_block(text: str, block_name: str, keyword: str = "do") -> Optional[BracketRange]:
    """Find the list returned by a ``def[p] block_name do [ ... ] end`` block."""
    match = block_header_pattern(block_name, keyword).search(text)
    if not match:
        return None

    open_index = find_next_open_bracket(text, match.end(), f"{block_name} {keyword}")
    found = match_closing(text, open_index)
    logger.debug(f"Block list {block_name!r} at {found.start}-{found.end}")
    return found
