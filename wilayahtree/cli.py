"""Interactive menu for managing the region hierarchy."""

from __future__ import annotations

import argparse
import re
import sys
from collections.abc import Callable, Iterable
from typing import TextIO

from wilayahtree.session import DEFAULT_SOURCE, DEFAULT_TARGET, OperationError, Session

__all__ = ["run", "main"]

_INTEGER = re.compile(r"[+-]?\d+")

_MAIN_MENU = "\n".join(
    (
        "",
        "Menu Utama",
        "1. Inisialisasi Pohon dari JSON",
        "2. Tambah Entitas Baru",
        "3. Kelola Antrean",
        "4. Hapus Entitas",
        "5. Edit Entitas",
        "6. Cari Data",
        "7. Tampilkan Hierarki (Preorder)",
        "8. Tampilkan Hierarki (Level-Order)",
        "9. Tampilkan Subtree",
        "10. Hitung Statistik",
        "11. Tampilkan Riwayat Operasi",
        "12. Batalkan Tambah",
        "13. Ulang Tambah",
        "14. Batalkan Hapus",
        "15. Simpan ke JSON",
        "16. Keluar",
        "",
    )
)

_QUEUE_MENU = "\n".join(
    (
        "",
        "Submenu Pengelolaan Antrean",
        "1. Proses Data ke Pohon/JSON",
        "2. Edit Data di Antrean",
        "3. Hapus Data dari Antrean",
        "4. Tampilkan Antrean",
        "5. Kembali ke Menu Utama",
        "",
    )
)

_STAT_LABELS = {
    "provinsi": "Provinsi",
    "kabupaten": "Kabupaten",
    "kota": "Kota",
    "kecamatan": "Kecamatan",
    "kelurahan/desa": "Kelurahan/Desa",
    "rw": "RW",
    "rt": "RT",
}


class _Input:
    """Reads integers and whole-line answers from a stream of lines."""

    def __init__(self, lines: Iterable[str]) -> None:
        self._lines = iter(lines)
        self._rest = ""

    def _advance(self) -> None:
        while not self._rest.strip():
            try:
                line = next(self._lines)
            except StopIteration:
                raise EOFError from None
            self._rest = line.rstrip("\r\n")
        self._rest = self._rest.lstrip()

    def text(self) -> str:
        self._advance()
        value, self._rest = self._rest, ""
        return value

    def integer(self) -> int | None:
        self._advance()
        match = _INTEGER.match(self._rest)
        if match is None:
            self._rest = ""
            return None
        self._rest = self._rest[match.end():]
        return int(match.group())


class _Console:
    def __init__(self, session: Session, reader: _Input, out: TextIO) -> None:
        self.session = session
        self.reader = reader
        self.out = out

    def say(self, text: str = "") -> None:
        self.out.write(f"{text}\n")

    def ask(self, prompt: str) -> str:
        self.out.write(prompt)
        return self.reader.text()

    def choose(self, menu: str) -> int | None:
        self.out.write(menu)
        self.out.write("Masukkan pilihan: ")
        return self.reader.integer()

    def dispatch(self, actions: dict[int, Callable[[], None]], choice: int | None) -> None:
        action = actions.get(choice) if choice is not None else None
        if action is None:
            self.say("Pilihan tidak valid!")
            return
        try:
            action()
        except OperationError as exc:
            self.say(str(exc))

    def main_loop(self) -> None:
        actions: dict[int, Callable[[], None]] = {
            1: self.init_tree,
            2: self.add_to_queue,
            3: self.queue_loop,
            4: self.delete_node,
            5: self.edit_node,
            6: self.search,
            7: self.show_preorder,
            8: self.show_level_order,
            9: self.show_subtree,
            10: self.show_stats,
            11: lambda: self.out.write(self.session.history.render()),
            12: self.undo_add,
            13: self.redo_add,
            14: self.undo_delete,
            15: self.save,
        }
        while True:
            choice = self.choose(_MAIN_MENU)
            if choice == 16:
                self.say("Keluar...")
                return
            self.dispatch(actions, choice)

    def queue_loop(self) -> None:
        actions: dict[int, Callable[[], None]] = {
            1: self.process_queue,
            2: self.edit_queued,
            3: self.delete_queued,
            4: lambda: self.out.write(self.session.queue.render()),
        }
        while True:
            choice = self.choose(_QUEUE_MENU)
            if choice == 5:
                return
            self.dispatch(actions, choice)

    def init_tree(self) -> None:
        self.session.init_tree()
        self.say("Pohon berhasil diinisialisasi!")

    def add_to_queue(self) -> None:
        name = self.ask("Masukkan nama entitas: ")
        kind = self.ask(
            "Masukkan tipe entitas (provinsi/kabupaten/kota/kecamatan/kelurahan/desa/rw/rt): "
        )
        parent_name = self.ask("Masukkan nama parent: ")
        self.session.queue_add(name, kind, parent_name)
        self.say("Entity added to Queue!")

    def process_queue(self) -> None:
        self.session.process_queue()
        for entry in self.session.queue:
            self.say(f"Parent {entry.parent_name} not found for {entry.name}!")
        self.say("Queue processed to Tree!")

    def edit_queued(self) -> None:
        name = self.ask("Masukkan nama entitas untuk diedit: ")
        if self.session.queue.find(name) is None:
            self.say("Entity not found in Queue!")
            return
        new_name = self.ask("Enter new name: ")
        new_type = self.ask("Enter new type: ")
        new_parent = self.ask("Enter new parent name: ")
        self.session.edit_queued(name, new_name, new_type, new_parent)
        self.say("Queue data edited!")

    def delete_queued(self) -> None:
        name = self.ask("Masukkan nama entitas untuk dihapus: ")
        self.session.delete_queued(name)
        self.say("Entity deleted from Queue!")

    def delete_node(self) -> None:
        name = self.ask("Masukkan nama node untuk dihapus: ")
        self.session.delete_node(name)
        self.say("Node dihapus!")

    def edit_node(self) -> None:
        name = self.ask("Masukkan nama node untuk diedit: ")
        new_name = self.ask("Masukkan nama baru: ")
        new_type = self.ask("Masukkan tipe baru: ")
        self.session.edit_node(name, new_name, new_type)
        self.say("Node diedit!")

    def search(self) -> None:
        name = self.ask("Masukkan nama node untuk dicari: ")
        node = self.session.search(name)
        self.say(f"Ditemukan: {node.name} ({node.type})")

    def show_preorder(self) -> None:
        if self.session.root is None:
            self.say("Pohon kosong!")
            return
        for line in self.session.root.preorder_lines():
            self.say(line)

    def show_level_order(self) -> None:
        if self.session.root is None:
            self.say("Pohon kosong!")
            return
        for node in self.session.root.level_order():
            self.say(f"{node.name} ({node.type})")

    def show_subtree(self) -> None:
        name = self.ask("Masukkan nama node untuk menampilkan subtree: ")
        lines = self.session.subtree_lines(name)
        self.say(f"Subtree dari {name}:")
        for line in lines:
            self.say(line)

    def show_stats(self) -> None:
        stats = self.session.stats()
        self.say("Statistik:")
        for kind, label in _STAT_LABELS.items():
            self.say(f"{label}: {stats[kind]}")

    def undo_add(self) -> None:
        place = self.session.undo_add()
        where = "queue" if place == "queue" else "pohon"
        self.say(f"Pembatalan tambah dari {where} berhasil!")

    def redo_add(self) -> None:
        place = self.session.redo_add()
        where = "queue" if place == "queue" else "pohon"
        self.say(f"Pengulangan tambah ke {where} berhasil!")

    def undo_delete(self) -> None:
        self.session.undo_delete()
        self.say("Pembatalan hapus berhasil!")

    def save(self) -> None:
        path = self.session.save()
        self.say(f"Pohon disimpan ke {path}!")


def run(session: Session, input_lines: Iterable[str], out: TextIO) -> None:
    """Drive the menu from ``input_lines`` until the user quits or input ends."""
    console = _Console(session, _Input(input_lines), out)
    try:
        console.main_loop()
    except EOFError:
        return


def main(argv: list[str] | None = None) -> int:
    """Start the interactive menu on standard input and output."""
    parser = argparse.ArgumentParser(
        prog="wilayahtree", description="Manage an administrative-region hierarchy."
    )
    parser.add_argument("--input", default=DEFAULT_SOURCE, help="hierarchy file to load")
    parser.add_argument("--output", default=DEFAULT_TARGET, help="file to save the hierarchy to")
    args = parser.parse_args(argv)
    run(Session(args.input, args.output), sys.stdin, sys.stdout)
    return 0


if __name__ == "__main__":
    sys.exit(main())