import pytest

from mixbump.core.errors import VersionError
from mixbump.core.versioning import (
    BumpType,
    bump_type_from_options,
    bump_version,
    ensure_consistent_versions,
    extract_version,
    extract_versions,
    update_mix_exs_content,
)


def test_bump_version():
    assert bump_version("1.2.3", BumpType.MAJOR) == "2.0.0"
    assert bump_version("1.2.3", BumpType.MINOR) == "1.3.0"
    assert bump_version("1.2.3", BumpType.PATCH) == "1.2.4"


def test_bump_drops_prerelease_and_build():
    assert bump_version("1.2.3-rc.1+build.5", BumpType.PATCH) == "1.2.4"


def test_bump_rejects_invalid_versions():
    for version in ["1.2", "01.2.3", "v1.2.3", "1.2.3-"]:
        with pytest.raises(VersionError):
            bump_version(version, BumpType.PATCH)


def test_extract_versions():
    content = '@version "0.1.0"\n\ndef project do\n  [version: @version]\nend\n'
    assert extract_versions(content) == (None, "0.1.0")
    assert extract_version(content) == "0.1.0"
    assert extract_version("defmodule Empty do\nend\n") is None


def test_direct_version_wins():
    content = '@version "0.1.0"\n[version: "0.1.0"]\n'
    assert extract_versions(content) == ("0.1.0", "0.1.0")
    ensure_consistent_versions(content)


def test_conflicting_versions():
    with pytest.raises(VersionError) as exc:
        ensure_consistent_versions('@version "0.1.0"\n[version: "0.2.0"]\n')
    assert "Conflicting versions" in str(exc.value)


def test_update_mix_exs_content_only_touches_version():
    content = (
        '@version "1.0.0"\n'
        '[version: "1.0.0", deps: [{:jason, "1.0.0"}]]\n'
    )
    updated = update_mix_exs_content(content, "1.1.0")
    assert updated == (
        '@version "1.1.0"\n'
        '[version: "1.1.0", deps: [{:jason, "1.0.0"}]]\n'
    )


def test_update_without_version():
    with pytest.raises(VersionError):
        update_mix_exs_content("defmodule Empty do\nend\n", "1.0.0")


def test_bump_type_from_options():
    assert bump_type_from_options() is None
    assert bump_type_from_options("Minor") is BumpType.MINOR
    assert bump_type_from_options(major=True) is BumpType.MAJOR


def test_bump_type_conflicts():
    with pytest.raises(VersionError):
        bump_type_from_options("patch", major=True)
    with pytest.raises(VersionError):
        bump_type_from_options(major=True, minor=True)
    with pytest.raises(VersionError) as exc:
        bump_type_from_options("huge")
    assert "Invalid --bump value" in str(exc.value)
