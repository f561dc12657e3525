# siaod

A small collection of classic data structures in plain Python, with no
dependencies outside the standard library.

## What is inside

- `siaod.extendible_hashing`: `ExtendableHash`, an extendible hash table.
  Buckets are kept in memory, or, with `file_system=True`, each in its own
  `bucket_<n>.dat` file of `key:value` lines under `directory` (default
  `buckets`). A full bucket is split, and the directory doubles when needed.
  `hash_key` is the 32-bit FNV-1a hash it uses.
- `siaod.perfect_hash`: `PerfectHash`, a collision-free table for a fixed
  set of keys. The table starts at twice the number of keys and doubles until
  every key has its own slot. `hash_index` gives a key's slot for a size.
- `siaod.min_hash`: `MinHash` and `HashFunction`, for estimating how alike
  two sets of strings are from their signatures.
- `siaod.btree`: `BTree` and `Node`, a B-tree of minimum degree 4 mapping
  string keys to string values, with `count_depth`, `count_load_factor` and
  `load_dataset` for trees built from CSV files.
- `siaod.kdtree`: `KDTree` and `KDNode`, a k-d tree with nearest-neighbour
  and n-nearest-neighbour search, plus `nearest_n_neighbors_linear` as a
  brute-force reference, `euclidean_distance`, and `load_csv` for numeric
  CSV files with a header row.
- `siaod.find_files`: `find_matching_files`, which splits the files of a
  CSV directory into those that have a matching `<name>.bleve` directory in
  another directory and those that do not.
- `siaod.cli`: the `siaod` command.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Using the library

Extendible hashing:

```python
from siaod.extendible_hashing import ExtendableHash

table = ExtendableHash(1, 2)          # global depth 1, two entries per bucket
for key in ("apple", "banana", "grape", "orange"):
    table.insert(key, key.upper())
table.get("grape")                    # "GRAPE"; KeyError if absent
"kiwi" in table                       # False
table.depth, table.num_dirs, sorted(table.keys())
```

File-backed tables accept only strings without `:` or line breaks, and
raise `ValueError` otherwise.

A perfect hash over a fixed set of keys:

```python
from siaod.perfect_hash import PerfectHash

table = PerfectHash(["0", "4", "10"], [1, "2", 3.0])
table.lookup("4")        # True
table.get_value("10")    # 3.0; KeyError if absent
table.keys(), table.values(), table.items(), table.indexes(), table.size
bigger = table.with_item("20", True)   # a new table with one more key
```

Keys must be unique, and two keys with the same 32-bit hash are refused with
`ValueError`.

Estimating how alike two sets are:

```python
import random
from siaod.min_hash import MinHash

mh = MinHash(0.1, random.Random(7))   # 1 / 0.1**2 = 100 hash functions
sig_a = mh.signature(["apple", "orange", "watermelon"])
sig_b = mh.signature(["apple", "orange", "pineapple"])
mh.similarity(sig_a, sig_b)           # fraction of equal positions
```

A B-tree of strings:

```python
from siaod.btree import BTree, count_depth, count_load_factor

tree = BTree()
tree.insert("10", "Data for key 10")
tree.insert("20", "Data for key 20")
tree.insert("5", "Data for key 5")
tree.search("10")        # "Data for key 10"; None if absent
tree.delete("20")        # KeyError if absent
tree.pretty_print()
count_depth(tree), count_load_factor(tree)   # depth; (max, mean, min) keys per node
```

Nearest neighbours in a k-d tree:

```python
from siaod.kdtree import KDTree, nearest_n_neighbors_linear

points = [[2, 3], [5, 4], [9, 6], [4, 7], [8, 1], [7, 2]]
tree = KDTree(points, 0)
point, distance = tree.nearest_neighbor([6, 3])
closest, distances = tree.nearest_n_neighbors([6, 3], 3)
nearest_n_neighbors_linear(points, [6, 3], 3)   # same answer by brute force
```

## Command line

The `siaod` command runs short demonstrations:

```
siaod                                  # same as "siaod minhash"
siaod minhash --runs 10000             # average similarity of two fruit sets
siaod eh --directory buckets           # fill a file-backed extendible hash
siaod btree --dataset data.csv         # small B-tree demo, then load a CSV
siaod kdtree --dataset points.csv      # small k-d tree demo, then a CSV
```

`btree --dataset` reads rows of `key,value` and prints the tree's depth and
its largest, mean and smallest number of keys per node. `kdtree --dataset`
reads a numeric CSV with a header row and compares the tree's ten nearest
neighbours of the first point with a brute-force search. Without
`--dataset` only the small built-in example runs. Errors reading files are
printed and give exit status 1.

## What it does not do

The package has no full-text search: it does not build, store or query
search indexes, and it runs no server. `find_matching_files` only compares
file and directory names; it never looks inside them.