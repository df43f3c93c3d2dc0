"""Names of the ``mix.exs`` constructs the planners look for."""

import re
from dataclasses import dataclass
from typing import Optional, Pattern

from mixbump.core.locator import block_header_pattern


@dataclass(frozen=True)
class MixfileLayout:
    """
    ``aliases: [...]`` inside ``def project``, or ``defp aliases do [...] end``
    referenced from the project list as ``aliases: aliases()``.
    """

    list_key: str = "aliases"
    block_name: str = "aliases"
    block_keyword: str = "do"
    declaration: str = "project"

    def reference_text(self) -> str:
        return f"{self.list_key}: {self.block_name}()"

    def reference_pattern(self) -> Pattern[str]:
        return re.compile(rf"\b{re.escape(self.list_key)}:\s*{re.escape(self.block_name)}\(\s*\)")

    def declaration_indent(self, content: str) -> Optional[str]:
        """Indentation of the ``def project do`` line, if there is one."""
        match = block_header_pattern(self.declaration, self.block_keyword).search(content)
        if not match:
            return None
        line_start = content.rfind("\n", 0, match.start()) + 1
        prefix = content[line_start : match.start()]
        return prefix if not prefix.strip() else None
