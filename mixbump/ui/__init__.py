# mixbump/ui/__init__.py
"""
mixbump UI Module
Console output helpers.
"""

from .console import Console
from . import colors

__all__ = ["Console", "colors"]
