import io
import random

import pytest

from siaod.btree import (
    DEGREE,
    BTree,
    Node,
    count_depth,
    count_load_factor,
    load_dataset,
)


def _check_structure(tree):
    """Return in-order keys after asserting the B-tree invariants."""
    leaf_depths = set()
    ordered = []

    def visit(node: Node, depth: int, is_root: bool):
        assert len(node.keys) == len(node.values)
        assert len(node.keys) <= 2 * DEGREE - 1
        if not is_root:
            assert len(node.keys) >= DEGREE - 1
        assert node.keys == sorted(node.keys)
        if node.leaf:
            assert node.children == []
            leaf_depths.add(depth)
            ordered.extend(node.keys)
            return
        assert len(node.children) == len(node.keys) + 1
        for child, key in zip(node.children, node.keys):
            visit(child, depth + 1, False)
            ordered.append(key)
        visit(node.children[-1], depth + 1, False)

    visit(tree.root, 0, True)
    assert len(leaf_depths) <= 1
    return ordered


def _filled(count, seed=7):
    keys = [f"k{i:05d}" for i in range(count)]
    random.Random(seed).shuffle(keys)
    tree = BTree()
    for key in keys:
        tree.insert(key, "v" + key)
    return tree, keys


def test_insert_and_search_small():
    tree = BTree()
    tree.insert("10", "Data for key 10")
    tree.insert("20", "Data for key 20")
    tree.insert("5", "Data for key 5")
    assert tree.search("10") == "Data for key 10"
    assert tree.search("5") == "Data for key 5"
    assert tree.search("7") is None
    assert "20" in tree
    assert "30" not in tree


def test_pretty_print_single_node():
    tree = BTree()
    for key in ("10", "20", "5"):
        tree.insert(key, key)
    out = io.StringIO()
    tree.pretty_print(out)
    assert out.getvalue() == "Level 0: [10 20 5]\n"


def test_split_layout_and_printing():
    tree = BTree()
    for key in "abcdefgh":
        tree.insert(key, key.upper())
    plain = io.StringIO()
    tree.print(plain)
    assert plain.getvalue() == "Level 0: [d]\nLevel 1: [a b c]\nLevel 1: [e f g h]\n"
    pretty = io.StringIO()
    tree.pretty_print(pretty)
    assert pretty.getvalue() == "Level 0: [d]\n  Level 1: [a b c]\n  Level 1: [e f g h]\n"
    assert tree.search("d") == "D"


def test_depth_grows_after_full_root():
    tree = BTree()
    for key in "abcdefg":
        tree.insert(key, key)
    assert count_depth(tree) == 0
    tree.insert("h", "h")
    assert count_depth(tree) == 1


def test_load_factor_after_split():
    tree = BTree()
    for key in "abcdefgh":
        tree.insert(key, key)
    largest, mean, smallest = count_load_factor(tree)
    assert largest == 4
    assert smallest == 1
    assert mean == pytest.approx(8 / 3)


def test_load_factor_empty_tree():
    assert count_load_factor(BTree()) == (0, 0.0, 0)
    assert count_depth(BTree()) == 0


def test_many_inserts_keep_invariants():
    tree, keys = _filled(1000)
    assert _check_structure(tree) == sorted(keys)
    assert all(tree.search(key) == "v" + key for key in keys)
    largest, _, smallest = count_load_factor(tree)
    assert largest <= 2 * DEGREE - 1
    assert smallest >= 1


def test_delete_keeps_values_aligned():
    tree, keys = _filled(300)
    removed = set(keys[::3])
    for key in keys[::3]:
        tree.delete(key)
    remaining = sorted(set(keys) - removed)
    assert _check_structure(tree) == remaining
    for key in keys:
        expected = None if key in removed else "v" + key
        assert tree.search(key) == expected


def test_delete_everything():
    tree, keys = _filled(200, seed=3)
    order = list(keys)
    random.Random(11).shuffle(order)
    for position, key in enumerate(order, start=1):
        tree.delete(key)
        assert _check_structure(tree) == sorted(order[position:])
    assert tree.root.leaf
    assert tree.root.keys == []


def test_delete_missing_key_raises():
    tree, keys = _filled(50)
    with pytest.raises(KeyError):
        tree.delete("absent")
    assert _check_structure(tree) == sorted(keys)


def test_delete_from_empty_tree_raises():
    with pytest.raises(KeyError):
        BTree().delete("x")


@pytest.fixture
def dataset(tmp_path):
    path = tmp_path / "dataset.csv"
    rows = [f"id-{i:04d},value {i}\n" for i in range(200)]
    path.write_text("".join(rows), encoding="utf-8")
    return path


def test_load_dataset_inserts_rows(dataset):
    tree = BTree()
    keys = load_dataset(dataset, tree)
    assert keys == [f"id-{i:04d}" for i in range(200)]
    assert tree.search("id-0042") == "value 42"
    assert _check_structure(tree) == sorted(keys)


def test_load_dataset_then_delete(dataset):
    tree = BTree()
    keys = load_dataset(dataset, tree)
    for index in (1, 2, 3, 4, 150, 191):
        tree.delete(keys[index])
    for index in (1, 2, 3, 4, 150, 191):
        assert tree.search(keys[index]) is None
    assert tree.search(keys[0]) == "value 0"
    assert tree.search(keys[199]) == "value 199"


def test_load_dataset_then_search(dataset):
    tree = BTree()
    keys = load_dataset(dataset, tree)
    key = keys[random.Random(5).randrange(1, 200)]
    assert tree.search(key) == "value " + str(int(key[3:]))


def test_load_dataset_uneven_rows(tmp_path):
    path = tmp_path / "bad.csv"
    path.write_text("a,1\nb,2,extra\n", encoding="utf-8")
    with pytest.raises(ValueError):
        load_dataset(path, BTree())


def test_load_dataset_single_column(tmp_path):
    path = tmp_path / "single.csv"
    path.write_text("a\nb\n", encoding="utf-8")
    with pytest.raises(ValueError):
        load_dataset(path, BTree())


def test_load_dataset_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_dataset(tmp_path / "nope.csv", BTree())