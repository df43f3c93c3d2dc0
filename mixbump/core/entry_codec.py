"""
Entry codec: renders keyword entries and edits them inside a list literal.

An entry is one ``name: [ "step", ... ]`` element of a keyword list such as
the ``aliases`` list of a ``mix.exs`` file. All functions here work on the
text of a single list literal, brackets included (``list_text[0] == "["``
and ``list_text[-1] == "]"``), and return new strings.

Entries are only recognized at the list's own nesting level, outside
string literals and ``#`` comments.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterator, Optional, Sequence, Tuple

from mixbump.core.errors import InvalidEntryError, InvalidIdentifierError, MixfileError
from mixbump.core.scanner import BACKSLASH, QUOTE
from mixbump.core.splice import insert_before, replace_range

IDENTIFIER_RE = re.compile(r"[a-zA-Z_][a-zA-Z0-9_]*")

_OPENERS = "[({"
_CLOSERS = "])}"
_BLANK = " \t\r\n"


def validate_identifier(name: str) -> str:
    if name == "":
        raise InvalidIdentifierError("Alias name cannot be empty")
    if not IDENTIFIER_RE.fullmatch(name):
        raise InvalidIdentifierError(
            f"Invalid alias name: {name!r} (expected an atom-like name, e.g. precommit)"
        )
    return name


@dataclass(frozen=True)
class ListEntry:
    """A named entry whose value is an ordered sequence of string steps."""

    name: str
    steps: Tuple[str, ...]

    def __post_init__(self) -> None:
        validate_identifier(self.name)
        object.__setattr__(self, "steps", tuple(self.steps))
        if not self.steps:
            raise InvalidEntryError(f"Alias {self.name!r} needs at least one step")

    def render(self) -> str:
        return render(self.name, self.steps)


@dataclass(frozen=True)
class EntrySpan:
    """
    Where an entry sits inside a list literal.

    ``key_start``..``value_end`` is the entry itself. ``prev_code`` is the
    last code character before the key (the opening ``[`` or a ``,``) and
    ``next_code`` the first one after the value (a ``,`` or the closing
    ``]``). ``after_comma`` is the first code character after that comma.
    """

    key_start: int
    value_start: int
    value_end: int
    prev_code: int
    next_code: int
    after_comma: Optional[int] = None


def quote(step: str) -> str:
    escaped = step.replace(BACKSLASH, BACKSLASH * 2).replace(QUOTE, BACKSLASH + QUOTE)
    escaped = escaped.replace("#{", "\\#{")
    return f"{QUOTE}{escaped}{QUOTE}"


def render(name: str, steps: Sequence[str]) -> str:
    """Canonical text of an entry: ``name: ["a", "b"]``."""
    return f"{name}: [{', '.join(quote(step) for step in steps)}]"


# ----------------------------------------------------------------------
# Walking list text
# ----------------------------------------------------------------------
def _walk(text: str, start: int) -> Iterator[Tuple[int, str, int, bool]]:
    """
    Yield ``(index, char, depth, quoted)`` for every code character.

    Blanks and ``#`` comments outside strings are skipped. Openers report
    the depth before they open, closers the depth after they close, so a
    closer of the surrounding list reports ``-1``.
    """
    depth = 0
    in_string = False
    escaped = False
    i = start
    size = len(text)
    while i < size:
        ch = text[i]
        if in_string:
            if escaped:
                escaped = False
            elif ch == BACKSLASH:
                escaped = True
            elif ch == QUOTE:
                in_string = False
            yield i, ch, depth, True
        elif ch == "#":
            newline = text.find("\n", i)
            if newline == -1:
                return
            i = newline
            continue
        elif ch in _BLANK:
            pass
        elif ch == QUOTE:
            in_string = True
            yield i, ch, depth, True
        elif ch in _OPENERS:
            yield i, ch, depth, False
            depth += 1
        elif ch in _CLOSERS:
            depth -= 1
            yield i, ch, depth, False
        else:
            yield i, ch, depth, False
        i += 1


def _next_code(text: str, start: int) -> Optional[int]:
    for index, _ch, _depth, _quoted in _walk(text, start):
        return index
    return None


def _value_bounds(text: str, start: int) -> Tuple[int, int]:
    """Return ``(value_end, next_code)`` for a value starting at ``start``."""
    last = start - 1
    for index, ch, depth, quoted in _walk(text, start):
        if depth < 0 or (depth == 0 and not quoted and ch == ","):
            return last, index
        last = index
    raise MixfileError(f"Entry value starting at {start} is not terminated", offset=start)


def _last_code_index(list_text: str) -> int:
    """Index of the last code character inside the list (0 if it is empty)."""
    last = 0
    for index, _ch, depth, _quoted in _walk(list_text, 1):
        if depth < 0:
            break
        last = index
    return last


def _key_pattern(name: str):
    return re.compile(rf"{re.escape(name)}\s*:(?!:)")


def find_entry(list_text: str, name: str) -> Optional[EntrySpan]:
    """Locate the top-level entry keyed ``name``, or ``None``."""
    pattern = _key_pattern(name)
    prev_code = 0
    for index, ch, depth, quoted in _walk(list_text, 1):
        if depth < 0:
            break
        if (
            depth == 0
            and not quoted
            and ch == name[0]
            and list_text[prev_code] in "[,"
        ):
            match = pattern.match(list_text, index)
            if match:
                value_end, next_code = _value_bounds(list_text, match.end())
                after_comma = None
                if list_text[next_code] == ",":
                    after_comma = _next_code(list_text, next_code + 1)
                return EntrySpan(
                    key_start=index,
                    value_start=match.end(),
                    value_end=value_end,
                    prev_code=prev_code,
                    next_code=next_code,
                    after_comma=after_comma,
                )
        prev_code = index
    return None


def find_entry_key(list_text: str, name: str) -> bool:
    return find_entry(list_text, name) is not None


def contains_equivalent(list_text: str, name: str, steps: Sequence[str]) -> bool:
    """
    True if the entry ``name`` mentions every step as a quoted string.

    This is substring containment on the entry's value text, not a
    structural comparison: extra steps, ordering and formatting are
    tolerated.
    """
    span = find_entry(list_text, name)
    if span is None:
        return False

    value = list_text[span.value_start : span.value_end + 1]
    return all(quote(step) in value for step in steps)


# ----------------------------------------------------------------------
# Editing
# ----------------------------------------------------------------------
def detect_newline(text: str) -> str:
    return "\r\n" if "\r\n" in text else "\n"


def detect_inner_indent(list_text: str) -> str:
    match = re.search(r"\n([\t ]+)[^\s\]]", list_text)
    if match:
        return match.group(1)

    closing_line = list_text[list_text.rfind("\n") + 1 : -1]
    closing_indent = closing_line if not closing_line.strip() else ""
    return closing_indent + "  "


def insert_entry(list_text: str, entry_text: str) -> str:
    """
    Append ``entry_text`` as the last element of the list.

    In a multi-line list the entry gets its own line, below any comment
    trailing the current last element.
    """
    last = _last_code_index(list_text)
    trailing_comma = last > 0 and list_text[last] == ","

    if "\n" not in list_text:
        if last == 0:
            insertion = entry_text
        elif trailing_comma:
            insertion = f" {entry_text},"
        else:
            insertion = f", {entry_text}"
        return insert_before(list_text, last + 1, insertion)

    newline = detect_newline(list_text)
    indent = detect_inner_indent(list_text)
    line_end = list_text.find("\n", last + 1)
    if line_end == -1:
        line_end = last + 1
    elif list_text[line_end - 1] == "\r":
        line_end -= 1

    suffix = "," if trailing_comma else ""
    updated = insert_before(list_text, line_end, f"{newline}{indent}{entry_text}{suffix}")
    if last > 0 and not trailing_comma:
        updated = insert_before(updated, last + 1, ",")
    return updated


def replace_entry(list_text: str, span: EntrySpan, entry_text: str) -> str:
    """Overwrite the entry in place, keeping its separators and layout."""
    return replace_range(list_text, span.key_start, span.value_end, entry_text)


def remove_entry(list_text: str, span: EntrySpan) -> str:
    """
    Delete the entry together with exactly one separator.

    The last entry takes the preceding comma with it (unless the list uses
    trailing commas); any other entry takes its following comma. An entry
    on its own line takes the whole line, including a comment trailing it.
    """
    close = len(list_text) - 1
    has_comma = list_text[span.next_code] == ","
    is_last = not has_comma or span.after_comma == close

    line_start = list_text.rfind("\n", 0, span.key_start) + 1
    own_line = line_start > span.prev_code and not list_text[line_start : span.key_start].strip()

    if is_last:
        end = span.next_code if has_comma else span.value_end
        drops_separator = list_text[span.prev_code] == "," and not has_comma
        if own_line:
            end = _trailing_comment_end(list_text, end)
            start = line_start - 2 if list_text[line_start - 2] == "\r" else line_start - 1
            edits = [(start, end)]
            if drops_separator:
                edits.append((span.prev_code, span.prev_code))
        else:
            start = span.prev_code if drops_separator else span.prev_code + 1
            edits = [(start, end)]
    else:
        j = span.next_code + 1
        while j < close and list_text[j] in " \t\r":
            j += 1
        if list_text[j] == "#":
            newline = list_text.find("\n", j)
            j = newline if newline != -1 else j
        if own_line and list_text[j] == "\n":
            edits = [(line_start, j)]
        else:
            edits = [(span.key_start, span.after_comma - 1)]

    updated = list_text
    for start, end in sorted(edits, reverse=True):
        updated = replace_range(updated, start, end, "")

    if "\n" in updated:
        updated = _collapse_trailing_blank_lines(list_text, updated)
    return updated


def _trailing_comment_end(text: str, index: int) -> int:
    """Last index of a ``#`` comment that follows ``index`` on the same line, else ``index``."""
    j = index + 1
    while j < len(text) and text[j] in " \t":
        j += 1
    if j == len(text) or text[j] != "#":
        return index
    end = text.find("\n", j) - 1
    if text[end] == "\r":
        end -= 1
    return end


def _trailing_blank_lines(lines) -> int:
    count = 0
    for line in reversed(lines[1:-1]):
        if line.strip():
            break
        count += 1
    return count


def _collapse_trailing_blank_lines(before: str, after: str) -> str:
    """Drop blank lines above the closing bracket that the edit created."""
    allowed = _trailing_blank_lines(before.split("\n"))
    lines = after.split("\n")
    while len(lines) > 2 and _trailing_blank_lines(lines) > allowed:
        del lines[-2]
    return "\n".join(lines)
