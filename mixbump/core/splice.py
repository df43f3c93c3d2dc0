"""Exact range edits on immutable text. Nothing outside the range changes."""

from mixbump.core.errors import MixfileError


def replace_range(text: str, start: int, end: int, replacement: str) -> str:
    """Replace the inclusive range ``[start, end]`` with ``replacement``."""
    if start < 0 or end < start - 1 or end >= len(text):
        raise MixfileError(f"Invalid splice range {start}-{end} (length {len(text)})", offset=start)
    return text[:start] + replacement + text[end + 1 :]


def insert_before(text: str, index: int, insertion: str) -> str:
    """Insert ``insertion`` so that it starts at ``index``."""
    if index < 0 or index > len(text):
        raise MixfileError(f"Invalid insertion index {index} (length {len(text)})", offset=index)
    return text[:index] + insertion + text[index:]
