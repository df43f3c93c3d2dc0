import pytest

from mixbump.core.decisions import InstallOutcome, UninstallOutcome
from mixbump.core.errors import InvalidEntryError
from mixbump.core.install_planner import plan_install
from mixbump.core.precommit import precommit_entry
from mixbump.core.uninstall_planner import UninstallPlanner, plan_uninstall

from mixfiles import BARE_MIX_EXS, BLOCK_MIX_EXS, INLINE_MIX_EXS

ENTRY = precommit_entry("precommit", ["format", "test"])


def test_uninstall_reverses_inline_install():
    installed = plan_install(INLINE_MIX_EXS, ENTRY).content
    decision = plan_uninstall(installed, ENTRY)

    assert decision.outcome is UninstallOutcome.REMOVED
    assert decision.content == INLINE_MIX_EXS


def test_uninstall_reverses_crlf_install():
    for content in (INLINE_MIX_EXS, BARE_MIX_EXS):
        crlf = content.replace("\n", "\r\n")
        installed = plan_install(crlf, ENTRY).content
        removed = plan_uninstall(installed, ENTRY).content

        assert installed.count("\n") == installed.count("\r\n")
        assert removed.count("\n") == removed.count("\r\n")
        assert removed == plan_uninstall(plan_install(content, ENTRY).content, ENTRY).content.replace("\n", "\r\n")


def test_empty_steps_never_match_a_customized_alias():
    with pytest.raises(InvalidEntryError):
        plan_uninstall('aliases: [precommit: ["mine"]]', precommit_entry("precommit", []))


def test_uninstall_from_block_keeps_reference():
    installed = plan_install(BLOCK_MIX_EXS, ENTRY).content
    decision = plan_uninstall(installed, ENTRY)

    assert decision.outcome is UninstallOutcome.REMOVED
    assert "precommit" not in decision.content
    assert '    [\n      setup: ["deps.get"]\n    ]\n' in decision.content
    assert "aliases: aliases()" in decision.content


def test_uninstall_synthesized_block_leaves_empty_list():
    installed = plan_install(BARE_MIX_EXS, ENTRY)
    assert installed.outcome is InstallOutcome.SYNTHESIZED

    decision = plan_uninstall(installed.content, ENTRY)
    assert decision.outcome is UninstallOutcome.REMOVED
    assert "  defp aliases do\n    [\n    ]\n  end\n" in decision.content


def test_uninstall_is_idempotent():
    installed = plan_install(INLINE_MIX_EXS, ENTRY).content
    removed = plan_uninstall(installed, ENTRY).content
    again = plan_uninstall(removed, ENTRY)

    assert again.outcome is UninstallOutcome.ALREADY_ABSENT
    assert again.content is None


def test_customized_alias_is_left_alone():
    content = INLINE_MIX_EXS.replace('test: ["test"]', 'precommit: ["test"]')
    decision = plan_uninstall(content, ENTRY)

    assert decision.outcome is UninstallOutcome.REFUSED
    assert decision.content is None
    assert "does not match the expected command" in decision.reason


def test_force_removes_customized_alias():
    content = INLINE_MIX_EXS.replace('test: ["test"]', 'precommit: ["test"]')
    decision = UninstallPlanner(ENTRY, force=True).plan(content)

    assert decision.outcome is UninstallOutcome.REMOVED
    assert "precommit" not in decision.content
    assert "      aliases: [\n      ]\n" in decision.content


def test_absent_alias():
    decision = plan_uninstall(INLINE_MIX_EXS, precommit_entry("lint", ["credo"]))
    assert decision.outcome is UninstallOutcome.ALREADY_ABSENT
    assert decision.to_dict() == {"outcome": "already_absent", "changed": False}
