# mixbump/ui/colors.py
"""
mixbump - Console Color System
ANSI color codes for status messages
"""

import os
from typing import TextIO

# ═══════════════════════════════════════════════════════════════
# PALETTE
# ═══════════════════════════════════════════════════════════════

MID_GRAY = "\033[38;5;250m"        # Muted labels
GLITCH_RED = "\033[38;5;196m"      # Errors
GLITCH_GREEN = "\033[38;5;46m"     # Success
NEON_YELLOW = "\033[38;5;226m"     # Warnings

# ═══════════════════════════════════════════════════════════════
# TEXT STYLES
# ═══════════════════════════════════════════════════════════════

BOLD = "\033[1m"

RESET = "\033[0m"

# ═══════════════════════════════════════════════════════════════
# SEMANTIC COLOR ROLES
# ═══════════════════════════════════════════════════════════════

MUTED_FG = MID_GRAY
ERROR_FG = GLITCH_RED
SUCCESS_FG = GLITCH_GREEN
WARNING_FG = NEON_YELLOW

# ═══════════════════════════════════════════════════════════════
# COLOR UTILITIES
# ═══════════════════════════════════════════════════════════════

def colorize(text: str, color: str, style: str = "") -> str:
    """Apply color and optional style to text"""
    return f"{style}{color}{text}{RESET}"


def supports_color(stream: TextIO) -> bool:
    """Colors only for terminals, and never when NO_COLOR is set"""
    if os.environ.get("NO_COLOR"):
        return False
    isatty = getattr(stream, "isatty", None)
    return bool(isatty and isatty())
