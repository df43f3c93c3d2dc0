"""Default ``precommit`` Mix alias installed by mixbump."""

from typing import List, Optional, Sequence

from mixbump.core.entry_codec import ListEntry

DEFAULT_ALIAS = "precommit"


def default_steps() -> List[str]:
    return [
        "format",
        "compile --warnings-as-errors",
        "cmd mixbump check --auto-bump",
        "test",
    ]


def precommit_entry(name: str = DEFAULT_ALIAS, steps: Optional[Sequence[str]] = None) -> ListEntry:
    return ListEntry(name=name, steps=tuple(default_steps() if steps is None else steps))


def manual_instructions(entry: ListEntry) -> str:
    """The edit a user has to make by hand when we cannot do it safely."""
    return (
        "\nAdd this to your project's aliases in mix.exs:\n\n"
        f"    {entry.render()}\n"
    )
