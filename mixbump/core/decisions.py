"""
Decision values returned by the install/uninstall planners.

A decision never mutates anything: it carries the new document text (when
something changes) or the reason nothing was changed.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

from mixbump.core.errors import MixbumpError


class InstallOutcome(Enum):
    ALREADY_INSTALLED = "already_installed"
    INSERTED = "inserted"
    REPLACED = "replaced"
    SYNTHESIZED = "synthesized"
    REFUSED = "refused"


class UninstallOutcome(Enum):
    ALREADY_ABSENT = "already_absent"
    REMOVED = "removed"
    REFUSED = "refused"


@dataclass(frozen=True)
class InstallDecision:
    outcome: InstallOutcome
    content: Optional[str] = None
    reason: Optional[str] = None
    error: Optional[MixbumpError] = None

    @property
    def changed(self) -> bool:
        return self.content is not None

    @classmethod
    def already_installed(cls) -> "InstallDecision":
        return cls(InstallOutcome.ALREADY_INSTALLED)

    @classmethod
    def inserted(cls, content: str) -> "InstallDecision":
        return cls(InstallOutcome.INSERTED, content=content)

    @classmethod
    def replaced(cls, content: str) -> "InstallDecision":
        return cls(InstallOutcome.REPLACED, content=content)

    @classmethod
    def synthesized(cls, content: str) -> "InstallDecision":
        return cls(InstallOutcome.SYNTHESIZED, content=content)

    @classmethod
    def refused(cls, error: MixbumpError) -> "InstallDecision":
        return cls(InstallOutcome.REFUSED, reason=str(error), error=error)

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {"outcome": self.outcome.value, "changed": self.changed}
        if self.reason is not None:
            result["reason"] = self.reason
        return result


@dataclass(frozen=True)
class UninstallDecision:
    outcome: UninstallOutcome
    content: Optional[str] = None
    reason: Optional[str] = None

    @property
    def changed(self) -> bool:
        return self.content is not None

    @classmethod
    def already_absent(cls) -> "UninstallDecision":
        return cls(UninstallOutcome.ALREADY_ABSENT)

    @classmethod
    def removed(cls, content: str) -> "UninstallDecision":
        return cls(UninstallOutcome.REMOVED, content=content)

    @classmethod
    def refused(cls, reason: str) -> "UninstallDecision":
        return cls(UninstallOutcome.REFUSED, reason=reason)

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {"outcome": self.outcome.value, "changed": self.changed}
        if self.reason is not None:
            result["reason"] = self.reason
        return result
