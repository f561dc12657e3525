"""Classic data structures: extendible and perfect hashing, MinHash, B-tree and k-d tree."""

__version__ = "0.1.0"