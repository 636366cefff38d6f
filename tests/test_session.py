import json

import pytest

from wilayahtree.session import OperationError, Session
from wilayahtree.tree import STAT_TYPES, TreeNode, load_tree

SAMPLE = {
    "name": "Jawa Barat",
    "type": "provinsi",
    "children": [
        {
            "name": "Bandung",
            "type": "kota",
            "children": [{"name": "Coblong", "type": "kecamatan", "children": []}],
        },
        {"name": "Bogor", "type": "kabupaten", "children": []},
    ],
}


@pytest.fixture
def source(tmp_path):
    path = tmp_path / "hierarchy.json"
    path.write_text(json.dumps(SAMPLE), encoding="utf-8")
    return path


@pytest.fixture
def session(source, tmp_path):
    s = Session(source, tmp_path / "updated.json")
    s.init_tree()
    return s


def test_init_tree_builds_root(session):
    assert session.root.name == SAMPLE["name"]
    assert [c.name for c in session.root.children] == [c["name"] for c in SAMPLE["children"]]
    assert list(session.history) == ["Menginisialisasi pohon dari JSON"]


def test_init_tree_twice_fails(session, source):
    with pytest.raises(OperationError) as info:
        session.init_tree(source)
    assert str(info.value) == "Pohon sudah diinisialisasi!"


@pytest.mark.parametrize(
    "content, message",
    [
        ("", "File JSON kosong!"),
        ("{bad", "Gagal memparsing JSON."),
        ('{"name": "X"}', "Gagal memparsing pohon dari JSON."),
    ],
)
def test_init_tree_rejects_bad_files(tmp_path, content, message):
    path = tmp_path / "in.json"
    path.write_text(content, encoding="utf-8")
    s = Session(path)
    with pytest.raises(OperationError) as info:
        s.init_tree()
    assert str(info.value) == message
    assert s.root is None
    assert len(s.history) == 0


def test_init_tree_missing_file(tmp_path):
    s = Session(tmp_path / "absent.json")
    with pytest.raises(OperationError) as info:
        s.init_tree()
    assert str(info.value) == "Gagal membuka file JSON!"


def test_queue_add_records_history_and_undo(session):
    op = session.queue_add("Cidadap", "kecamatan", "Bandung")
    assert list(session.history)[0] == op
    assert session.add_stack[-1].operation == op
    assert len(session.queue) == 1


def test_process_queue_attaches_under_parent(session):
    session.queue_add("Cidadap", "kecamatan", "Bandung")
    processed = session.process_queue()
    assert [e.name for e in processed] == ["Cidadap"]
    node = session.search("Cidadap")
    assert node.type == "kecamatan"
    assert session.root.find_parent(node) is session.root.find("Bandung")
    assert len(session.queue) == 0


def test_process_queue_keeps_orphans(session):
    session.queue_add("X", "rt", "Nowhere")
    assert session.process_queue() == []
    assert [e.name for e in session.queue] == ["X"]


def test_undo_and_redo_add_in_queue(session):
    op = session.queue_add("Cidadap", "kecamatan", "Bandung")
    assert session.undo_add() == "queue"
    assert len(session.queue) == 0
    assert list(session.history)[0] == "Batalkan " + op
    assert session.redo_add() == "queue"
    assert [e.name for e in session.queue] == ["Cidadap"]
    assert list(session.history)[0] == "Ulang " + op
    assert len(session.add_stack) == 1
    assert session.redo_stack == []


def test_undo_and_redo_add_in_tree(session):
    session.queue_add("Cidadap", "kecamatan", "Bandung")
    session.process_queue()
    assert session.undo_add() == "tree"
    with pytest.raises(OperationError):
        session.search("Cidadap")
    assert session.redo_add() == "tree"
    assert session.root.find("Bandung").children[-1] is session.search("Cidadap")


def test_undo_add_empty(session):
    with pytest.raises(OperationError) as info:
        session.undo_add()
    assert str(info.value) == "Tidak ada operasi tambah untuk dibatalkan!"


def test_redo_add_empty(session):
    with pytest.raises(OperationError) as info:
        session.redo_add()
    assert str(info.value) == "Tidak ada operasi untuk diulang!"


def test_undo_add_of_vanished_entity(session):
    session.queue_add("Ghost", "rt", "Bandung")
    session.delete_queued("Ghost")
    with pytest.raises(OperationError) as info:
        session.undo_add()
    assert str(info.value) == "Node tidak ditemukan untuk pembatalan!"
    assert len(session.redo_stack) == 1
    with pytest.raises(OperationError) as info:
        session.redo_add()
    assert str(info.value) == "Gagal mengulang tambah!"
    assert len(session.add_stack) == 1


def test_delete_root_refused(session):
    with pytest.raises(OperationError) as info:
        session.delete_node(SAMPLE["name"])
    assert str(info.value) == "Tidak dapat menghapus node akar!"


def test_delete_missing_node(session):
    with pytest.raises(OperationError) as info:
        session.delete_node("Nowhere")
    assert str(info.value) == "Node tidak ditemukan!"


def test_delete_without_tree():
    with pytest.raises(OperationError) as info:
        Session().delete_node("Bandung")
    assert str(info.value) == "Pohon kosong!"


def test_delete_and_undo_delete(session):
    removed = session.delete_node("Bandung")
    assert session.root.find("Bandung") is None
    assert session.root.find("Coblong") is None
    assert list(session.history)[0] == session.delete_stack[-1].operation
    restored = session.undo_delete()
    assert restored is removed
    assert session.root.children[-1] is removed
    assert session.delete_stack == []


def test_undo_delete_when_parent_gone(session):
    session.delete_node("Coblong")
    session.root = TreeNode("Other", "provinsi")
    with pytest.raises(OperationError) as info:
        session.undo_delete()
    assert str(info.value) == "Gagal membatalkan hapus!"
    assert session.delete_stack == []


def test_undo_delete_empty(session):
    with pytest.raises(OperationError) as info:
        session.undo_delete()
    assert str(info.value) == "Tidak ada operasi hapus untuk dibatalkan!"


def test_edit_node(session):
    edited = session.edit_node("Bogor", "Kabupaten Bogor", "kabupaten")
    assert session.search("Kabupaten Bogor") is edited
    with pytest.raises(OperationError) as info:
        session.search("Bogor")
    assert str(info.value) == "Node tidak ditemukan!"


def test_edit_missing_node(session):
    with pytest.raises(OperationError):
        session.edit_node("Nowhere", "A", "rt")
    assert len(session.history) == 1


def test_subtree_lines(session):
    assert session.subtree_lines("Bandung") == session.root.find("Bandung").preorder_lines()
    with pytest.raises(OperationError):
        session.subtree_lines("Nowhere")


def test_stats_counts_new_nodes(session):
    before = session.stats()
    session.queue_add("Cidadap", "kecamatan", "Bandung")
    session.process_queue()
    after = session.stats()
    assert after["kecamatan"] == before["kecamatan"] + 1
    assert after["kota"] == before["kota"]


def test_stats_without_tree():
    stats = Session().stats()
    assert set(stats) == set(STAT_TYPES)
    assert set(stats.values()) == {0}


def test_save_round_trip(session):
    path = session.save()
    assert load_tree(path).to_json() == session.root.to_json()
    assert list(session.history)[0].startswith("Menyimpan pohon ke")


def test_save_without_tree(tmp_path):
    with pytest.raises(OperationError) as info:
        Session().save(tmp_path / "out.json")
    assert str(info.value) == "Pohon kosong!"


def test_edit_and_delete_queued(session):
    session.queue_add("A", "rt", "Bandung")
    entry = session.edit_queued("A", "B", "rw", "Bogor")
    assert (entry.name, entry.type, entry.parent_name) == ("B", "rw", "Bogor")
    with pytest.raises(OperationError) as info:
        session.edit_queued("A", "C", "rw", "Bogor")
    assert str(info.value) == "Entity not found in Queue!"
    assert session.delete_queued("B") is entry
    with pytest.raises(OperationError):
        session.delete_queued("B")