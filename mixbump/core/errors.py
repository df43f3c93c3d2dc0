"""
Error taxonomy for mixbump.

Everything raised on purpose derives from ``MixbumpError`` so the CLI can
report it uniformly. Structural problems found while scanning ``mix.exs``
text derive from ``MixfileError`` and carry the offset of the construct
that could not be understood.
"""

from typing import Optional


class MixbumpError(Exception):
    """Base error for all mixbump failures."""


class MixfileError(MixbumpError):
    """The document does not have a shape the engine can edit safely."""

    def __init__(self, message: str, offset: Optional[int] = None):
        super().__init__(message)
        self.offset = offset


class UnterminatedBracketError(MixfileError):
    """An opening ``[`` has no matching ``]`` before the end of the text."""

    def __init__(self, offset: int):
        super().__init__(f"Unterminated '[' starting at {offset}", offset=offset)


class UnexpectedCharacterError(MixfileError):
    """A key or block header is followed by something other than a list."""

    def __init__(self, key: str, found: Optional[str], offset: int):
        if found is None:
            message = f"Expected '[' after {key}, reached end of text at {offset}"
        else:
            message = f"Expected '[' after {key}, found: {found!r} at {offset}"
        super().__init__(message, offset=offset)
        self.key = key
        self.found = found


class NoInsertionPointError(MixbumpError):
    """There is no safe place to synthesize the missing structure."""


class ConflictingEntryError(MixbumpError):
    """An entry with the same name but a different value already exists."""

    def __init__(self, name: str, message: str):
        super().__init__(message)
        self.name = name


class InvalidEntryError(MixbumpError, ValueError):
    """An entry cannot be rendered as written."""


class InvalidIdentifierError(InvalidEntryError):
    """An entry name is not an atom-like identifier."""


class VersionError(MixbumpError, ValueError):
    """Version strings are missing, malformed or conflicting."""


class GitError(MixbumpError):
    """A git command failed in a way the caller must handle."""


class HookError(MixbumpError):
    """A git hook could not be installed or removed safely."""


class ConfigError(MixbumpError):
    """The project configuration file is unreadable or invalid."""


class FileAccessError(MixbumpError):
    """A file could not be read or written."""
