import stat

import pytest

from mixbump.core.errors import HookError
from mixbump.core.versioning import BumpType
from mixbump.services.hook_service import HOOK_MARKER, HookOptions, HookService


def test_check_args():
    options = HookOptions(auto_bump=True, yes=True, bump=BumpType.MINOR)
    assert options.check_args() == ["--auto-bump", "--bump", "minor", "--yes"]
    assert HookOptions().check_args() == []


def test_render():
    script = HookService.render(HookOptions(auto_bump=True))
    assert script == f"#!/bin/sh\n{HOOK_MARKER}\nset -e\nmixbump check --auto-bump\n"


def test_install_writes_executable_hook(tmp_path):
    hooks = HookService(tmp_path / "hooks")

    assert hooks.install(HookOptions(auto_bump=True, yes=True)) is True
    assert hooks.hook_path.read_text().endswith("mixbump check --auto-bump --yes\n")
    assert hooks.hook_path.stat().st_mode & stat.S_IXUSR
    assert hooks.is_ours()

    # Same options again: nothing to do
    assert hooks.install(HookOptions(auto_bump=True, yes=True)) is False
    # Different options rewrite our own hook
    assert hooks.install(HookOptions()) is True
    assert hooks.hook_path.read_text().endswith("mixbump check\n")


def test_foreign_hook_is_protected(tmp_path):
    hooks = HookService(tmp_path)
    hooks.hook_path.write_text("#!/bin/sh\nmake lint\n")

    with pytest.raises(HookError):
        hooks.install(HookOptions())
    with pytest.raises(HookError):
        hooks.uninstall()
    assert hooks.hook_path.read_text() == "#!/bin/sh\nmake lint\n"

    assert hooks.install(HookOptions(), force=True) is True
    assert hooks.is_ours()


def test_uninstall(tmp_path):
    hooks = HookService(tmp_path)
    assert hooks.uninstall() is False

    hooks.install(HookOptions())
    assert hooks.uninstall() is True
    assert not hooks.hook_path.exists()


def test_force_uninstall_foreign_hook(tmp_path):
    hooks = HookService(tmp_path)
    hooks.hook_path.write_text("#!/bin/sh\n")
    assert hooks.uninstall(force=True) is True
    assert not hooks.hook_path.exists()
