"""A record of the operations performed during a session."""

from __future__ import annotations

from collections.abc import Iterator

__all__ = ["History"]


class History:
    """Operations, most recent first."""

    def __init__(self) -> None:
        self._entries: list[str] = []

    def add(self, operation: str) -> None:
        """Record ``operation`` as the most recent one."""
        self._entries.insert(0, operation)

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def render(self) -> str:
        """Return the history as printable text."""
        if not self._entries:
            return "No operations recorded.\n"
        return "Operation History:\n" + "".join(f"{entry}\n" for entry in self._entries)