"""Entities waiting to be placed into the hierarchy."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

from wilayahtree.history import History
from wilayahtree.tree import TreeNode

__all__ = ["PendingEntity", "EntityQueue"]


@dataclass
class PendingEntity:
    """A region waiting to be attached under a named parent."""

    name: str
    type: str
    parent_name: str


class EntityQueue:
    """Pending entities, newest first, with changes logged to a history."""

    def __init__(self, history: History | None = None) -> None:
        self.history = history if history is not None else History()
        self._entries: list[PendingEntity] = []

    def __iter__(self) -> Iterator[PendingEntity]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def add(self, name: str, type: str, parent_name: str) -> str:
        """Queue a new entity; return the description recorded for it."""
        self._entries.insert(0, PendingEntity(name, type, parent_name))
        operation = f"Added {name} ({type}) to Queue under {parent_name}"
        self.history.add(operation)
        return operation

    def find(self, name: str) -> PendingEntity | None:
        """Return the first queued entity named ``name``, or None."""
        return next((entry for entry in self._entries if entry.name == name), None)

    def edit(self, name: str, new_name: str, new_type: str, new_parent_name: str) -> PendingEntity:
        """Replace the fields of the entity named ``name``."""
        entry = self.find(name)
        if entry is None:
            raise KeyError(name)
        entry.name, entry.type, entry.parent_name = new_name, new_type, new_parent_name
        self.history.add(f"Edited {name} in Queue")
        return entry

    def remove(self, name: str) -> PendingEntity:
        """Take the entity named ``name`` out of the queue and return it."""
        entry = self.find(name)
        if entry is None:
            raise KeyError(name)
        self._entries.remove(entry)
        self.history.add(f"Deleted {name} from Queue")
        return entry

    def push_front(self, entry: PendingEntity) -> None:
        """Put an existing entity back at the front of the queue."""
        self._entries.insert(0, entry)

    def process(self, root: TreeNode | None) -> list[PendingEntity]:
        """Attach every entity whose parent exists; return those attached.

        Entities whose parent cannot be found stay in the queue.
        """
        processed: list[PendingEntity] = []
        remaining: list[PendingEntity] = []
        for entry in self._entries:
            parent = root.find(entry.parent_name) if root is not None else None
            if parent is None:
                remaining.append(entry)
                continue
            parent.add_child(TreeNode(entry.name, entry.type))
            self.history.add(
                f"Processed {entry.name} ({entry.type}) from Queue to Tree under {entry.parent_name}"
            )
            processed.append(entry)
        self._entries = remaining
        return processed

    def render(self) -> str:
        """Return the queue contents as printable text."""
        if not self._entries:
            return "Queue is empty.\n"
        rows = "".join(
            f"Name: {e.name}, Type: {e.type}, Parent: {e.parent_name}\n" for e in self._entries
        )
        return "Queue contents:\n" + rows