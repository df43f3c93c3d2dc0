# Core modules
from .decisions import InstallDecision, InstallOutcome, UninstallDecision, UninstallOutcome
from .entry_codec import ListEntry, contains_equivalent, find_entry_key, render
from .install_planner import InstallPlanner, plan_install
from .layout import MixfileLayout
from .locator import locate_block, locate_inline
from .scanner import BracketRange, match_closing
from .uninstall_planner import UninstallPlanner, plan_uninstall

__all__ = [
    "BracketRange",
    "InstallDecision",
    "InstallOutcome",
    "InstallPlanner",
    "ListEntry",
    "MixfileLayout",
    "UninstallDecision",
    "UninstallOutcome",
    "UninstallPlanner",
    "contains_equivalent",
    "find_entry_key",
    "locate_block",
    "locate_inline",
    "match_closing",
    "plan_install",
    "plan_uninstall",
    "render",
]
