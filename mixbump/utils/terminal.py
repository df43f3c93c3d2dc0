# mixbump/utils/terminal.py
import os
import sys
from typing import Mapping, Optional, TextIO


def tty_available(
    stdin: Optional[TextIO] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> bool:
    """
    Whether an interactive prompt can be answered.

    CI environments never count as interactive, even with a terminal attached.
    """
    env = os.environ if environ is None else environ
    if env.get("CI"):
        return False
    stream = stdin if stdin is not None else sys.stdin
    isatty = getattr(stream, "isatty", None)
    return bool(isatty and isatty())
