"""
Semantic version extraction and bumping for ``mix.exs`` content.

Supports the two common declarations:

  - ``@version "1.2.3"``
  - ``version: "1.2.3"``

If both exist, ``version: "..."`` wins, and they must agree.
"""

from __future__ import annotations

import re
from enum import Enum
from typing import List, Optional, Tuple

from mixbump.core.errors import VersionError

_DIRECT_RE = re.compile(r'\bversion:\s+"([^"]+)"')
_ATTR_RE = re.compile(r'@version\s+"([^"]+)"')
_SEMVER_RE = re.compile(
    r"^(0|[1-9]\d*)\.(0|[1-9]\d*)\.(0|[1-9]\d*)"
    r"(?:-([0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*))?"
    r"(?:\+([0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*))?$"
)


class BumpType(Enum):
    MAJOR = "major"
    MINOR = "minor"
    PATCH = "patch"


def parse_bump_type(text: str) -> BumpType:
    value = text.strip().lower()
    try:
        return BumpType(value)
    except ValueError:
        raise VersionError(f"Invalid --bump value: {value!r} (expected major|minor|patch)") from None


def bump_type_from_options(
    bump: Optional[str] = None,
    major: bool = False,
    minor: bool = False,
    patch: bool = False,
) -> Optional[BumpType]:
    """
    Resolve ``--bump TYPE`` and the ``--major/--minor/--patch`` flags.

    Returns None when no bump type was given.
    """
    has_bump = bump is not None and bump.strip() != ""
    flags: List[BumpType] = [
        bump_type
        for bump_type, enabled in (
            (BumpType.MAJOR, major),
            (BumpType.MINOR, minor),
            (BumpType.PATCH, patch),
        )
        if enabled
    ]

    if has_bump and flags:
        raise VersionError(
            "Please specify only one bump type (use either --bump TYPE or --major/--minor/--patch)"
        )
    if len(flags) > 1:
        raise VersionError("Please specify only one of --major, --minor, --patch")
    if has_bump:
        return parse_bump_type(bump)
    return flags[0] if flags else None


def _first_capture(regex, content: str) -> Optional[str]:
    match = regex.search(content)
    return match.group(1) if match else None


def extract_versions(content: str) -> Tuple[Optional[str], Optional[str]]:
    """Return ``(direct, attr)`` from ``version: "..."`` and ``@version "..."``."""
    return _first_capture(_DIRECT_RE, content), _first_capture(_ATTR_RE, content)


def extract_version(content: str) -> Optional[str]:
    direct, attr = extract_versions(content)
    return direct or attr or None


def ensure_consistent_versions(content: str) -> None:
    direct, attr = extract_versions(content)
    if direct and attr and direct != attr:
        raise VersionError(
            f'Conflicting versions found in mix.exs: version: "{direct}" and @version "{attr}"'
        )


def bump_version(version: str, bump_type: BumpType) -> str:
    """Bump a semantic version. Pre-release and build metadata are dropped."""
    match = _SEMVER_RE.match(version)
    if not match:
        raise VersionError(
            f"Invalid version format: {version!r}. Expected a semantic version like 1.2.3"
        )

    major, minor, patch = (int(part) for part in match.group(1, 2, 3))
    if bump_type is BumpType.MAJOR:
        return f"{major + 1}.0.0"
    if bump_type is BumpType.MINOR:
        return f"{major}.{minor + 1}.0"
    return f"{major}.{minor}.{patch + 1}"


def update_mix_exs_content(content: str, new_version: str) -> str:
    """
    Replace the current version with ``new_version``.

    Only declarations carrying the detected current version are rewritten,
    so unrelated strings stay untouched.
    """
    ensure_consistent_versions(content)
    current = extract_version(content)
    if current is None:
        raise VersionError("Could not find version in mix.exs content")

    escaped = re.escape(current)
    content = re.sub(rf'@version\s+"{escaped}"', lambda _m: f'@version "{new_version}"', content)
    content = re.sub(rf'\bversion:\s+"{escaped}"', lambda _m: f'version: "{new_version}"', content)
    return content
