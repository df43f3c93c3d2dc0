"""
Install planner.

Decides how to add a named entry to the aliases of a ``mix.exs`` document
and computes the new text. The strategies run in a fixed order and the
first one that applies produces the decision:

    1. already installed          -> ALREADY_INSTALLED
    2. inline ``aliases: [...]``  -> INSERTED | REPLACED | REFUSED
    3. ``defp aliases do [...]``  -> INSERTED | REPLACED | REFUSED
    4. nothing found              -> SYNTHESIZED | REFUSED

The planner never touches the filesystem.
"""

from __future__ import annotations

import logging
import re
from typing import Callable, List, Optional

from mixbump.core.decisions import InstallDecision
from mixbump.core.entry_codec import (
    ListEntry,
    contains_equivalent,
    detect_newline,
    find_entry,
    find_entry_key,
    insert_entry,
    replace_entry,
)
from mixbump.core.errors import ConflictingEntryError, NoInsertionPointError, UnexpectedCharacterError
from mixbump.core.layout import MixfileLayout
from mixbump.core.locator import locate_block, locate_inline
from mixbump.core.precommit import manual_instructions
from mixbump.core.scanner import BracketRange
from mixbump.core.splice import insert_before, replace_range

logger = logging.getLogger(__name__)

_MODULE_END_RE = re.compile(r"\r?\nend\s*\Z")

Stage = Callable[[str], Optional[InstallDecision]]


class InstallPlanner:
    """Plans the installation of ``entry`` into a ``mix.exs`` document."""

    def __init__(
        self,
        entry: ListEntry,
        force: bool = False,
        layout: Optional[MixfileLayout] = None,
    ):
        self.entry = entry
        self.force = force
        self.layout = layout or MixfileLayout()

    def plan(self, content: str) -> InstallDecision:
        stages: List[Stage] = [
            self._check_installed,
            self._install_inline,
            self._install_block,
            self._synthesize,
        ]
        for stage in stages:
            decision = stage(content)
            if decision is not None:
                logger.debug(f"{stage.__name__} -> {decision.outcome.value}")
                return decision
        raise AssertionError("synthesis always produces a decision")

    # ------------------------------------------------------------------
    # Stages
    # ------------------------------------------------------------------
    def _check_installed(self, content: str) -> Optional[InstallDecision]:
        found = self._locate_aliases(content)
        if found and contains_equivalent(found.slice(content), self.entry.name, self.entry.steps):
            return InstallDecision.already_installed()
        return None

    def _install_inline(self, content: str) -> Optional[InstallDecision]:
        found = locate_inline(content, self.layout.list_key)
        if found is None:
            return None
        return self._upsert(content, found)

    def _install_block(self, content: str) -> Optional[InstallDecision]:
        found = locate_block(content, self.layout.block_name, self.layout.block_keyword)
        if found is None:
            return None

        decision = self._upsert(content, found)
        if not decision.changed:
            return decision

        try:
            ensured = self._ensure_reference(decision.content)
        except NoInsertionPointError as e:
            return InstallDecision.refused(e)
        return InstallDecision(decision.outcome, content=ensured)

    def _synthesize(self, content: str) -> InstallDecision:
        try:
            with_reference = self._ensure_reference(content)
            updated = self._append_block(with_reference)
        except NoInsertionPointError as e:
            return InstallDecision.refused(e)
        return InstallDecision.synthesized(updated)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _locate_aliases(self, content: str) -> Optional[BracketRange]:
        found = locate_inline(content, self.layout.list_key)
        if found is None:
            found = locate_block(content, self.layout.block_name, self.layout.block_keyword)
        return found

    def _upsert(self, content: str, found: BracketRange) -> InstallDecision:
        list_text = found.slice(content)
        span = find_entry(list_text, self.entry.name)
        rendered = self.entry.render()

        if span is None:
            new_list = insert_entry(list_text, rendered)
            return InstallDecision.inserted(replace_range(content, found.start, found.end, new_list))

        if contains_equivalent(list_text, self.entry.name, self.entry.steps):
            return InstallDecision.already_installed()
        if not self.force:
            return InstallDecision.refused(
                ConflictingEntryError(
                    self.entry.name,
                    f'Alias "{self.entry.name}" already exists in mix.exs.\n'
                    "Refusing to overwrite. Re-run with --force, or edit manually.\n"
                    + manual_instructions(self.entry),
                )
            )

        new_list = replace_entry(list_text, span, rendered)
        return InstallDecision.replaced(replace_range(content, found.start, found.end, new_list))

    def _ensure_reference(self, content: str) -> str:
        """Make ``def project`` point at the aliases block."""
        if self.layout.reference_pattern().search(content):
            return content

        try:
            project = locate_block(content, self.layout.declaration, self.layout.block_keyword)
        except UnexpectedCharacterError as e:
            raise NoInsertionPointError(
                f"Could not safely install aliases: expected a keyword list in def {self.layout.declaration}/0.\n"
                + manual_instructions(self.entry)
            ) from e

        if project is None:
            raise NoInsertionPointError(
                f"Could not find def {self.layout.declaration}/0 to install alias reference.\n"
                + manual_instructions(self.entry)
            )

        list_text = project.slice(content)
        if find_entry_key(list_text, self.layout.list_key):
            return content

        new_list = insert_entry(list_text, self.layout.reference_text())
        return replace_range(content, project.start, project.end, new_list)

    def _append_block(self, content: str) -> str:
        """Add ``defp aliases do [entry] end`` just before the module's final ``end``."""
        module_end = _MODULE_END_RE.search(content)
        if not module_end:
            raise NoInsertionPointError(
                f"Could not safely append defp {self.layout.block_name}/0.\n"
                + manual_instructions(self.entry)
            )

        nl = detect_newline(content)
        indent = self.layout.declaration_indent(content) or "  "
        block = (
            f"{nl}{nl}{indent}defp {self.layout.block_name} {self.layout.block_keyword}{nl}"
            f"{indent}  [{nl}"
            f"{indent}    {self.entry.render()}{nl}"
            f"{indent}  ]{nl}"
            f"{indent}end"
        )
        return insert_before(content, module_end.start(), block)


def plan_install(
    content: str,
    entry: ListEntry,
    force: bool = False,
    layout: Optional[MixfileLayout] = None,
) -> InstallDecision:
    return InstallPlanner(entry, force=force, layout=layout).plan(content)
