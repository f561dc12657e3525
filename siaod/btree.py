"""A B-tree of minimum degree 4 mapping string keys to string values."""

from __future__ import annotations

import csv
import sys
from bisect import bisect_left, bisect_right
from dataclasses import dataclass, field
from pathlib import Path
from typing import TextIO

DEGREE = 4
_MAX_KEYS = 2 * DEGREE - 1


@dataclass
class Node:
    """A B-tree node: sorted keys, their values and, unless a leaf, children."""

    leaf: bool
    keys: list[str] = field(default_factory=list)
    values: list[str] = field(default_factory=list)
    children: list[Node] = field(default_factory=list)


class BTree:
    """A B-tree that splits full nodes on the way down while inserting."""

    def __init__(self) -> None:
        self.root = Node(leaf=True)

    def insert(self, key: str, value: str) -> None:
        """Add ``key`` with ``value``; equal keys are kept side by side."""
        if len(self.root.keys) == _MAX_KEYS:
            new_root = Node(leaf=False, children=[self.root])
            self._split_child(new_root, 0)
            self.root = new_root
        self._insert_non_full(self.root, key, value)

    def search(self, key: str) -> str | None:
        """Return the value stored under ``key``, or None if it is absent."""
        node = self.root
        while True:
            i = bisect_left(node.keys, key)
            if i < len(node.keys) and node.keys[i] == key:
                return node.values[i]
            if node.leaf:
                return None
            node = node.children[i]

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.search(key) is not None

    def delete(self, key: str) -> None:
        """Remove ``key``; raise KeyError if it is not in the tree."""
        found = self._delete(self.root, key)
        if not self.root.keys and not self.root.leaf:
            self.root = self.root.children[0]
        if not found:
            raise KeyError(key)

    def print(self, file: TextIO | None = None) -> None:
        """Write every node's keys with its level, depth first."""
        for level, node in self._walk():
            print(f"Level {level}: {_format_keys(node.keys)}", file=file or sys.stdout)

    def pretty_print(self, file: TextIO | None = None) -> None:
        """Like :meth:`print`, indenting each node by its level."""
        for level, node in self._walk():
            print(
                f"{'  ' * level}Level {level}: {_format_keys(node.keys)}",
                file=file or sys.stdout,
            )

    def _walk(self):
        stack = [(0, self.root)]
        while stack:
            level, node = stack.pop()
            yield level, node
            stack.extend((level + 1, child) for child in reversed(node.children))

    def _insert_non_full(self, node: Node, key: str, value: str) -> None:
        while not node.leaf:
            i = bisect_right(node.keys, key)
            if len(node.children[i].keys) == _MAX_KEYS:
                self._split_child(node, i)
                if key > node.keys[i]:
                    i += 1
            node = node.children[i]
        i = bisect_right(node.keys, key)
        node.keys.insert(i, key)
        node.values.insert(i, value)

    @staticmethod
    def _split_child(parent: Node, index: int) -> None:
        child = parent.children[index]
        sibling = Node(leaf=child.leaf)
        parent.keys.insert(index, child.keys[DEGREE - 1])
        parent.values.insert(index, child.values[DEGREE - 1])
        parent.children.insert(index + 1, sibling)

        sibling.keys = child.keys[DEGREE:]
        sibling.values = child.values[DEGREE:]
        child.keys = child.keys[: DEGREE - 1]
        child.values = child.values[: DEGREE - 1]
        if not child.leaf:
            sibling.children = child.children[DEGREE:]
            child.children = child.children[:DEGREE]

    def _delete(self, node: Node, key: str) -> bool:
        i = bisect_left(node.keys, key)
        if i < len(node.keys) and node.keys[i] == key:
            if node.leaf:
                del node.keys[i]
                del node.values[i]
            else:
                self._delete_from_internal(node, i)
            return True
        if node.leaf:
            return False
        at_end = i == len(node.keys)
        if len(node.children[i].keys) < DEGREE:
            self._fill(node, i)
        if at_end and i > len(node.keys):
            return self._delete(node.children[i - 1], key)
        return self._delete(node.children[i], key)

    def _delete_from_internal(self, node: Node, index: int) -> None:
        key = node.keys[index]
        left, right = node.children[index], node.children[index + 1]
        if len(left.keys) >= DEGREE:
            pred_key, pred_value = _rightmost(left)
            node.keys[index], node.values[index] = pred_key, pred_value
            self._delete(left, pred_key)
        elif len(right.keys) >= DEGREE:
            succ_key, succ_value = _leftmost(right)
            node.keys[index], node.values[index] = succ_key, succ_value
            self._delete(right, succ_key)
        else:
            self._merge(node, index)
            self._delete(node.children[index], key)

    def _fill(self, node: Node, index: int) -> None:
        if index != 0 and len(node.children[index - 1].keys) >= DEGREE:
            self._borrow_from_prev(node, index)
        elif index != len(node.keys) and len(node.children[index + 1].keys) >= DEGREE:
            self._borrow_from_next(node, index)
        elif index != len(node.keys):
            self._merge(node, index)
        else:
            self._merge(node, index - 1)

    @staticmethod
    def _borrow_from_prev(node: Node, index: int) -> None:
        child = node.children[index]
        sibling = node.children[index - 1]
        child.keys.insert(0, node.keys[index - 1])
        child.values.insert(0, node.values[index - 1])
        node.keys[index - 1] = sibling.keys.pop()
        node.values[index - 1] = sibling.values.pop()
        if not child.leaf:
            child.children.insert(0, sibling.children.pop())

    @staticmethod
    def _borrow_from_next(node: Node, index: int) -> None:
        child = node.children[index]
        sibling = node.children[index + 1]
        child.keys.append(node.keys[index])
        child.values.append(node.values[index])
        node.keys[index] = sibling.keys.pop(0)
        node.values[index] = sibling.values.pop(0)
        if not child.leaf:
            child.children.append(sibling.children.pop(0))

    @staticmethod
    def _merge(node: Node, index: int) -> None:
        child = node.children[index]
        sibling = node.children[index + 1]
        child.keys.append(node.keys.pop(index))
        child.values.append(node.values.pop(index))
        child.keys.extend(sibling.keys)
        child.values.extend(sibling.values)
        if not child.leaf:
            child.children.extend(sibling.children)
        del node.children[index + 1]


def _rightmost(node: Node) -> tuple[str, str]:
    while not node.leaf:
        node = node.children[len(node.keys)]
    return node.keys[-1], node.values[-1]


def _leftmost(node: Node) -> tuple[str, str]:
    while not node.leaf:
        node = node.children[0]
    return node.keys[0], node.values[0]


def _format_keys(keys: list[str]) -> str:
    return "[" + " ".join(keys) + "]"


def count_depth(tree: BTree) -> int:
    """Return the number of levels below the root."""

    def depth(node: Node) -> int:
        return max((1 + depth(child) for child in node.children), default=0)

    return depth(tree.root)


def count_load_factor(tree: BTree) -> tuple[int, float, int]:
    """Return the largest, mean and smallest number of keys per node."""
    loads = [len(node.keys) for _, node in tree._walk()]
    return max(loads), sum(loads) / len(loads), min(loads)


def load_dataset(filename: str | Path, tree: BTree) -> list[str]:
    """Insert each CSV row's first field as key and second as value.

    Returns the keys in file order. Every row must have as many fields as
    the first one, and at least two.
    """
    keys: list[str] = []
    expected: int | None = None
    with open(filename, newline="", encoding="utf-8") as handle:
        rows = [row for row in csv.reader(handle) if row]
    for number, record in enumerate(rows, start=1):
        if expected is None:
            expected = len(record)
        if len(record) != expected:
            raise ValueError(f"record {number}: wrong number of fields")
        if len(record) < 2:
            raise ValueError(f"record {number}: expected a key and a value")
        keys.append(record[0])
    for record in rows:
        tree.insert(record[0], record[1])
    return keys