"""
Uninstall planner.

Mirror of the install planner. It removes an entry only when its value
still mentions every expected step, so a user-customized alias that merely
shares the name is left alone unless ``force`` is set.
"""

from __future__ import annotations

import logging
from typing import Iterator, Optional

from mixbump.core.decisions import UninstallDecision
from mixbump.core.entry_codec import ListEntry, contains_equivalent, find_entry, remove_entry
from mixbump.core.layout import MixfileLayout
from mixbump.core.locator import locate_block, locate_inline
from mixbump.core.scanner import BracketRange
from mixbump.core.splice import replace_range

logger = logging.getLogger(__name__)


class UninstallPlanner:
    """Plans the removal of ``entry`` from a ``mix.exs`` document."""

    def __init__(
        self,
        entry: ListEntry,
        force: bool = False,
        layout: Optional[MixfileLayout] = None,
    ):
        self.entry = entry
        self.force = force
        self.layout = layout or MixfileLayout()

    def plan(self, content: str) -> UninstallDecision:
        for found in self._alias_lists(content):
            list_text = found.slice(content)
            span = find_entry(list_text, self.entry.name)
            if span is None:
                continue

            if not self.force and not contains_equivalent(list_text, self.entry.name, self.entry.steps):
                logger.debug(f"Entry {self.entry.name!r} differs from the expected steps")
                return UninstallDecision.refused(
                    f'Alias "{self.entry.name}" exists, but does not match the expected command.\n'
                    "Refusing to remove. Re-run with --force, or edit manually."
                )

            new_list = remove_entry(list_text, span)
            return UninstallDecision.removed(replace_range(content, found.start, found.end, new_list))

        return UninstallDecision.already_absent()

    def _alias_lists(self, content: str) -> Iterator[BracketRange]:
        """Inline list first, then the aliases block."""
        inline = locate_inline(content, self.layout.list_key)
        if inline is not None:
            yield inline
        block = locate_block(content, self.layout.block_name, self.layout.block_keyword)
        if block is not None:
            yield block


def plan_uninstall(
    content: str,
    entry: ListEntry,
    force: bool = False,
    layout: Optional[MixfileLayout] = None,
) -> UninstallDecision:
    return UninstallPlanner(entry, force=force, layout=layout).plan(content)
