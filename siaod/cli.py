"""Command-line demonstrations of the package's data structures."""

from __future__ import annotations

import argparse
import math
import sys
from collections.abc import Sequence
from pathlib import Path

from .btree import BTree, count_depth, count_load_factor, load_dataset
from .extendible_hashing import ExtendableHash
from .kdtree import KDTree, Point, load_csv, nearest_n_neighbors_linear
from .min_hash import MinHash

_SET_A = ("apple", "orange", "watermelon")
_SET_B = ("apple", "orange", "pineapple")
_EXAMPLE_POINTS = [(2, 3), (5, 4), (9, 6), (4, 7), (8, 1), (7, 2)]
_EXAMPLE_TARGET = (6, 3)


def _format_number(value: float) -> str:
    if math.isfinite(value) and value == int(value) and abs(value) < 1e21:
        return str(int(value))
    return repr(value)


def _format_point(point: Sequence[float] | None) -> str:
    if point is None:
        return "[]"
    return "[" + " ".join(_format_number(value) for value in point) + "]"


def _format_list(values: Sequence[float]) -> str:
    return "[" + " ".join(_format_number(value) for value in values) + "]"


def minhash_demo(runs: int = 10000) -> float:
    """Average MinHash similarity of two fruit sets over fresh hash families."""
    if runs <= 0:
        raise ValueError("runs must be positive")
    total = 0.0
    for _ in range(runs):
        min_hash = MinHash(0.1)
        total += min_hash.similarity(min_hash.signature(_SET_A), min_hash.signature(_SET_B))
    average = total / runs
    print(f"Similarity: {average:.2f}")
    return average


def extendible_hash_demo(directory: str | Path = "buckets") -> ExtendableHash:
    """Insert five keys into a small file-backed extendible hash table."""
    table = ExtendableHash(2, 5, True, directory)
    for key in ("1", "2", "3", "4", "5"):
        table.insert(key, "1")
    return table


def btree_demo(dataset: str | Path | None = None) -> BTree:
    """Show insertion, search and layout of a B-tree, then load ``dataset``."""
    tree = BTree()
    tree.insert("10", "Data for key 10")
    tree.insert("20", "Data for key 20")
    tree.insert("5", "Data for key 5")

    value = tree.search("10")
    print(f"Found: {value}" if value is not None else "Not found")
    tree.pretty_print()

    if dataset is None:
        return tree
    tree = BTree()
    load_dataset(dataset, tree)
    print("DEPTH = ", count_depth(tree))
    largest, mean, smallest = count_load_factor(tree)
    print(f"MAX LF = {largest}\nMEAN LF = {_format_number(mean)}\nMIN LF = {smallest}")
    return tree


def kdtree_demo(dataset: str | Path | None = None) -> tuple[Point | None, float]:
    """Find a nearest neighbour in a small example, then in ``dataset``.

    Returns the neighbour and distance found in the small example.
    """
    tree = KDTree(_EXAMPLE_POINTS, 0)
    nearest, dist = tree.nearest_neighbor(_EXAMPLE_TARGET)
    print(f"Nearest neighbour: {_format_point(nearest)}, distance: {dist:.6f}")
    result = (nearest, dist)

    if dataset is None:
        return result
    points = load_csv(dataset)
    if not points:
        raise ValueError(f"{dataset}: no points")
    big_tree = KDTree(points, 0)
    target = points[0]
    found, found_dist = big_tree.nearest_neighbor(target)
    print(f"Nearest neighbour: {_format_point(found)}, distance: {found_dist:.6f}")
    kd_points, kd_dists = big_tree.nearest_n_neighbors(target, 10)
    lin_points, lin_dists = nearest_n_neighbors_linear(points, target, 10)
    print("KD ", "[" + " ".join(_format_point(p) for p in kd_points) + "]")
    print("LIN ", "[" + " ".join(_format_point(p) for p in lin_points) + "]")
    print("KD ", _format_list(kd_dists))
    print("LIN ", _format_list(lin_dists))
    return result


def main(argv: Sequence[str] | None = None) -> int:
    """Run one demonstration; MinHash is the default."""
    parser = argparse.ArgumentParser(
        prog="siaod", description="Demonstrate hashing and search structures."
    )
    commands = parser.add_subparsers(dest="command")
    minhash = commands.add_parser("minhash", help="estimate set similarity")
    minhash.add_argument("--runs", type=int, default=10000)
    hashing = commands.add_parser("eh", help="fill a file-backed extendible hash")
    hashing.add_argument("--directory", default="buckets")
    btree = commands.add_parser("btree", help="build and inspect a B-tree")
    btree.add_argument("--dataset")
    kdtree = commands.add_parser("kdtree", help="nearest-neighbour search")
    kdtree.add_argument("--dataset")
    args = parser.parse_args(argv)

    try:
        if args.command == "eh":
            table = extendible_hash_demo(args.directory)
            print(f"depth: {table.depth}, directories: {table.num_dirs}")
        elif args.command == "btree":
            btree_demo(args.dataset)
        elif args.command == "kdtree":
            kdtree_demo(args.dataset)
        else:
            minhash_demo(getattr(args, "runs", 10000))
    except (OSError, ValueError) as error:
        print(error, file=sys.stderr)
        return 1
    return 0