"""
mixbump
Semantic version bumping and precommit alias management for Elixir Mix projects.
"""

__version__ = "1.0.0"
