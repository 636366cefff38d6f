"""The administrative-region hierarchy and its JSON storage."""

from __future__ import annotations

from collections import deque
from collections.abc import Iterator
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from wilayahtree.jsontext import dumps, parse

__all__ = [
    "STAT_TYPES",
    "InvalidStructureError",
    "TreeNode",
    "from_json",
    "load_tree",
    "save_tree",
]

STAT_TYPES = ("provinsi", "kabupaten", "kota", "kecamatan", "kelurahan/desa", "rw", "rt")


class InvalidStructureError(ValueError):
    """Raised when data does not describe a valid hierarchy."""


@dataclass(eq=False)
class TreeNode:
    """A named region of a given type with ordered sub-regions."""

    name: str
    type: str
    children: list[TreeNode] = field(default_factory=list)

    def add_child(self, child: TreeNode) -> None:
        """Append ``child`` as the last sub-region."""
        self.children.append(child)

    def remove_child(self, child: TreeNode) -> None:
        """Detach ``child`` (matched by identity) from this node."""
        for index, candidate in enumerate(self.children):
            if candidate is child:
                del self.children[index]
                return
        raise ValueError(f"{child.name!r} is not a child of {self.name!r}")

    def find(self, name: str) -> TreeNode | None:
        """Return the first node named ``name`` in preorder, or None."""
        if self.name == name:
            return self
        for child in self.children:
            found = child.find(name)
            if found is not None:
                return found
        return None

    def find_parent(self, target: TreeNode) -> TreeNode | None:
        """Return the node holding ``target`` as a child, or None."""
        for child in self.children:
            if child is target:
                return self
            parent = child.find_parent(target)
            if parent is not None:
                return parent
        return None

    def preorder_lines(self) -> list[str]:
        """Return the subtree drawn as an indented preorder listing."""
        lines: list[str] = []

        def walk(node: TreeNode, last_flags: tuple[bool, ...]) -> None:
            label = f"{node.name} ({node.type})"
            if last_flags:
                prefix = "".join("   " if last else "|  " for last in last_flags[:-1])
                branch = "L" if last_flags[-1] else "|"
                lines.append(f"{prefix}{branch}_ {label}")
            else:
                lines.append(label)
            count = len(node.children)
            for index, child in enumerate(node.children):
                walk(child, last_flags + (index == count - 1,))

        walk(self, ())
        return lines

    def level_order(self) -> Iterator[TreeNode]:
        """Yield the nodes of the subtree breadth first."""
        pending: deque[TreeNode] = deque([self])
        while pending:
            node = pending.popleft()
            yield node
            pending.extend(node.children)

    def stats(self) -> dict[str, int]:
        """Count the nodes of each known region type in the subtree."""
        counts = dict.fromkeys(STAT_TYPES, 0)
        for node in self.level_order():
            if node.type in counts:
                counts[node.type] += 1
        return counts

    def to_json(self) -> dict[str, Any]:
        """Return the subtree as plain JSON-ready data."""
        return {
            "name": self.name,
            "type": self.type,
            "children": [child.to_json() for child in self.children],
        }


def from_json(data: Any) -> TreeNode:
    """Build a tree from parsed JSON data with name, type and children."""
    if not isinstance(data, dict) or "name" not in data or "type" not in data:
        raise InvalidStructureError("every node needs a 'name' and a 'type'")
    name, kind = data["name"], data["type"]
    if not isinstance(name, str) or not isinstance(kind, str):
        raise InvalidStructureError("'name' and 'type' must be strings")
    node = TreeNode(name, kind)
    children = data.get("children")
    if isinstance(children, list):
        node.children = [from_json(child) for child in children]
    return node


def load_tree(path: str | Path) -> TreeNode:
    """Read a hierarchy from the JSON file at ``path``."""
    text = Path(path).read_text(encoding="utf-8")
    if not text:
        raise InvalidStructureError(f"{path} is empty")
    return from_json(parse(text))


def save_tree(root: TreeNode, path: str | Path) -> None:
    """Write the hierarchy under ``root`` to ``path`` as JSON."""
    Path(path).write_text(dumps(root.to_json()), encoding="utf-8")