# wilayahtree

A small interactive tool for maintaining a hierarchy of administrative
regions (provinsi, kabupaten, kota, kecamatan, kelurahan/desa, RW, RT)
kept as a JSON document. The menu and its messages are in Indonesian.

## Installing

    pip install .

## Running

    wilayahtree

By default the hierarchy is loaded from `jawabarat_hierarchy.json` and
saved to `jawabarat_updated.json`, both in the current directory. Other
files can be given:

    wilayahtree --input regions.json --output regions_out.json

The program reads its answers from standard input and shows a numbered
menu. From it you can:

- load the hierarchy from the input file (only once per run);
- queue new entities under a named parent, and from the queue submenu
  process the queue into the tree, edit, delete or list queued entries;
  entries whose parent is not found stay in the queue;
- delete nodes (not the root), edit a node's name and type, and search
  for a node by name;
- print the hierarchy in preorder (as an indented tree) or level order,
  or print the subtree under one node;
- count nodes of each type;
- show the history of operations, most recent first;
- undo and redo additions (from the queue or, once processed, from the
  tree), and undo deletions;
- save the tree to the output file.

The program ends on menu choice 16 or at the end of input.

## The JSON format

Every node is an object with a string `name`, a string `type`, and
optionally a `children` array of nodes of the same shape:

    {
      "name": "Jawa Barat",
      "type": "provinsi",
      "children": [
        {"name": "Bandung", "type": "kota", "children": []}
      ]
    }

Saved files are indented with two spaces and always carry a `children`
array.

## Using it from Python

    from wilayahtree.session import OperationError, Session

    session = Session()
    session.init_tree("jawabarat_hierarchy.json")
    session.queue_add("Sukajadi", "kecamatan", "Bandung")
    session.process_queue()
    print(session.stats())
    session.save("jawabarat_updated.json")

`Session` methods raise `OperationError` when an operation cannot be
carried out (for instance a node that is not found, or nothing to undo);
the exception message is the text the menu prints.

Lower-level pieces are available too:

- `wilayahtree.tree`: `TreeNode` (with `find`, `find_parent`,
  `add_child`, `remove_child`, `preorder_lines`, `level_order`, `stats`,
  `to_json`), `from_json`, `load_tree`, `save_tree` and
  `InvalidStructureError`;
- `wilayahtree.queue`: `EntityQueue` and `PendingEntity`;
- `wilayahtree.history`: `History`;
- `wilayahtree.jsontext`: `parse`, `dumps` and `JsonParseError`;
- `wilayahtree.cli`: `run(session, input_lines, out)` to drive the menu
  from any sequence of lines, and `main`.

## Limits

`wilayahtree.jsontext` is a lenient reader, not a full JSON
implementation: escape sequences in strings are kept as written rather
than decoded, every number is read as a float, and for repeated object
keys the first one wins. The writer does not escape strings and writes
numbers in `%g` form. Names containing quotes or backslashes therefore do
not round-trip through standard JSON tools.

## Tests

    pip install .[test]
    pytest