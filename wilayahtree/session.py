"""An editing session over the region hierarchy, with undo and redo."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from wilayahtree.history import History
from wilayahtree.jsontext import JsonParseError, parse
from wilayahtree.queue import EntityQueue, PendingEntity
from wilayahtree.tree import STAT_TYPES, InvalidStructureError, TreeNode, from_json, save_tree

__all__ = [
    "DEFAULT_SOURCE",
    "DEFAULT_TARGET",
    "OperationError",
    "UndoRecord",
    "Session",
]

DEFAULT_SOURCE = "jawabarat_hierarchy.json"
DEFAULT_TARGET = "jawabarat_updated.json"


class OperationError(Exception):
    """Raised when a requested operation cannot be carried out."""


@dataclass(eq=False)
class UndoRecord:
    """One undoable operation and whatever is needed to reverse it."""

    operation: str
    name: str = ""
    node: TreeNode | None = None
    parent: TreeNode | None = None
    entry: PendingEntity | None = None


class Session:
    """The hierarchy, the pending queue, the undo stacks and the history."""

    def __init__(
        self,
        source_path: str | Path = DEFAULT_SOURCE,
        target_path: str | Path = DEFAULT_TARGET,
    ) -> None:
        self.source_path = Path(source_path)
        self.target_path = Path(target_path)
        self.root: TreeNode | None = None
        self.history = History()
        self.queue = EntityQueue(self.history)
        self.add_stack: list[UndoRecord] = []
        self.redo_stack: list[UndoRecord] = []
        self.delete_stack: list[UndoRecord] = []

    def _find(self, name: str) -> TreeNode | None:
        return self.root.find(name) if self.root is not None else None

    def _require(self, name: str) -> TreeNode:
        node = self._find(name)
        if node is None:
            raise OperationError("Node tidak ditemukan!")
        return node

    def init_tree(self, path: str | Path | None = None) -> TreeNode:
        """Load the hierarchy from ``path`` (or the session's source file)."""
        if self.root is not None:
            raise OperationError("Pohon sudah diinisialisasi!")
        source = Path(path) if path is not None else self.source_path
        try:
            text = source.read_text(encoding="utf-8")
        except OSError as exc:
            raise OperationError("Gagal membuka file JSON!") from exc
        except UnicodeDecodeError as exc:
            raise OperationError("Gagal memparsing JSON.") from exc
        if not text:
            raise OperationError("File JSON kosong!")
        try:
            data = parse(text)
        except JsonParseError as exc:
            raise OperationError("Gagal memparsing JSON.") from exc
        try:
            root = from_json(data)
        except InvalidStructureError as exc:
            raise OperationError("Gagal memparsing pohon dari JSON.") from exc
        self.root = root
        self.history.add("Menginisialisasi pohon dari JSON")
        return root

    def queue_add(self, name: str, type: str, parent_name: str) -> str:
        """Queue a new entity and make the addition undoable."""
        operation = self.queue.add(name, type, parent_name)
        self.add_stack.append(UndoRecord(operation, name))
        return operation

    def process_queue(self) -> list[PendingEntity]:
        """Attach queued entities whose parent exists; return those attached."""
        return self.queue.process(self.root)

    def edit_queued(
        self, name: str, new_name: str, new_type: str, new_parent_name: str
    ) -> PendingEntity:
        """Change the fields of the queued entity named ``name``."""
        try:
            return self.queue.edit(name, new_name, new_type, new_parent_name)
        except KeyError:
            raise OperationError("Entity not found in Queue!") from None

    def delete_queued(self, name: str) -> PendingEntity:
        """Drop the queued entity named ``name``."""
        try:
            return self.queue.remove(name)
        except KeyError:
            raise OperationError("Entity not found in Queue!") from None

    def delete_node(self, name: str) -> TreeNode:
        """Detach the node named ``name`` from the hierarchy; undoable."""
        if self.root is None:
            raise OperationError("Pohon kosong!")
        if self.root.name == name:
            raise OperationError("Tidak dapat menghapus node akar!")
        target = self._require(name)
        parent = self.root.find_parent(target)
        if parent is None:
            raise OperationError("Parent tidak ditemukan!")
        operation = f"Menghapus {target.name} ({target.type}) dari Pohon"
        self.history.add(operation)
        self.delete_stack.append(UndoRecord(operation, target.name, node=target, parent=parent))
        parent.remove_child(target)
        return target

    def edit_node(self, name: str, new_name: str, new_type: str) -> TreeNode:
        """Rename and retype the node named ``name``."""
        target = self._require(name)
        self.history.add(f"Mengedit {name} menjadi {new_name} ({new_type})")
        target.name = new_name
        target.type = new_type
        return target

    def search(self, name: str) -> TreeNode:
        """Return the node named ``name``."""
        return self._require(name)

    def subtree_lines(self, name: str) -> list[str]:
        """Return the drawing of the subtree under the node named ``name``."""
        return self._require(name).preorder_lines()

    def stats(self) -> dict[str, int]:
        """Count the nodes of each known region type."""
        if self.root is None:
            return dict.fromkeys(STAT_TYPES, 0)
        return self.root.stats()

    def _take_from_queue(self, name: str) -> PendingEntity | None:
        # Undoing an addition is logged on its own, not as a queue deletion.
        if self.queue.find(name) is None:
            return None
        logged = self.queue.history
        self.queue.history = History()
        try:
            return self.queue.remove(name)
        finally:
            self.queue.history = logged

    def undo_add(self) -> str:
        """Reverse the latest addition; return "queue" or "tree" for where it was."""
        if not self.add_stack:
            raise OperationError("Tidak ada operasi tambah untuk dibatalkan!")
        record = self.add_stack.pop()
        self.history.add(f"Batalkan {record.operation}")
        self.redo_stack.append(record)

        entry = self._take_from_queue(record.name)
        if entry is not None:
            record.entry = entry
            return "queue"

        target = self._find(record.name)
        parent = self.root.find_parent(target) if self.root is not None and target else None
        if target is not None and parent is not None:
            parent.remove_child(target)
            record.node, record.parent = target, parent
            return "tree"
        raise OperationError("Node tidak ditemukan untuk pembatalan!")

    def redo_add(self) -> str:
        """Repeat the latest undone addition; return "queue" or "tree"."""
        if not self.redo_stack:
            raise OperationError("Tidak ada operasi untuk diulang!")
        record = self.redo_stack.pop()
        self.history.add(f"Ulang {record.operation}")
        self.add_stack.append(record)

        if record.entry is not None:
            self.queue.push_front(record.entry)
            record.entry = None
            return "queue"
        if record.node is not None and record.parent is not None:
            record.parent.add_child(record.node)
            record.node = record.parent = None
            return "tree"
        raise OperationError("Gagal mengulang tambah!")

    def undo_delete(self) -> TreeNode:
        """Put the most recently deleted node back under its parent."""
        if not self.delete_stack:
            raise OperationError("Tidak ada operasi hapus untuk dibatalkan!")
        record = self.delete_stack.pop()
        self.history.add(f"Batalkan {record.operation}")
        node, parent = record.node, record.parent
        if node is not None and parent is not None and self._find(parent.name) is not None:
            parent.add_child(node)
            return node
        raise OperationError("Gagal membatalkan hapus!")

    def save(self, path: str | Path | None = None) -> Path:
        """Write the hierarchy to ``path`` (or the session's target file)."""
        if self.root is None:
            raise OperationError("Pohon kosong!")
        target = Path(path) if path is not None else self.target_path
        try:
            save_tree(self.root, target)
        except OSError as exc:
            raise OperationError("Gagal membuka file output!") from exc
        self.history.add(f"Menyimpan pohon ke {target}")
        return target