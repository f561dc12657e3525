"""Extendible hashing with in-memory or file-backed buckets."""

from __future__ import annotations

from pathlib import Path
from typing import Any

_FNV_OFFSET = 0x811C9DC5
_FNV_PRIME = 0x01000193
_MASK32 = 0xFFFFFFFF
_MAX_DEPTH = 32


def hash_key(key: str) -> int:
    """Return the 32-bit FNV-1a hash of the UTF-8 bytes of ``key``."""
    value = _FNV_OFFSET
    for byte in key.encode("utf-8"):
        value ^= byte
        value = (value * _FNV_PRIME) & _MASK32
    return value


class _MemoryBucket:
    """A bucket whose entries live in a dictionary."""

    def __init__(self, local_depth: int) -> None:
        self.local_depth = local_depth
        self._items: dict[str, Any] = {}

    def load(self) -> dict[str, Any]:
        return dict(self._items)

    def put(self, key: str, value: Any) -> None:
        self._items[key] = value

    def replace(self, items: dict[str, Any]) -> None:
        self._items = dict(items)


class _FileBucket:
    """A bucket stored as ``key:value`` lines in a file."""

    def __init__(self, local_depth: int, path: Path) -> None:
        self.local_depth = local_depth
        self.path = path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("", encoding="utf-8")

    def load(self) -> dict[str, str]:
        items: dict[str, str] = {}
        with self.path.open(encoding="utf-8") as handle:
            for line in handle:
                parts = line.rstrip("\r\n").split(":")
                if len(parts) == 2:
                    items[parts[0]] = parts[1]
        return items

    def put(self, key: str, value: str) -> None:
        with self.path.open("a", encoding="utf-8") as handle:
            handle.write(f"{key}:{value}\n")

    def replace(self, items: dict[str, str]) -> None:
        with self.path.open("w", encoding="utf-8") as handle:
            handle.writelines(f"{key}:{value}\n" for key, value in items.items())


class ExtendableHash:
    """A directory of buckets addressed by the low bits of a key's hash.

    When a bucket overflows it is split in two, and the directory doubles
    whenever the split bucket is already as deep as the directory.
    With ``file_system`` set, every bucket is kept in its own file under
    ``directory``.
    """

    def __init__(
        self,
        global_depth: int,
        bucket_size: int,
        file_system: bool = False,
        directory: str | Path = "buckets",
    ) -> None:
        if global_depth <= 0:
            raise ValueError("global_depth must be greater than zero")
        if bucket_size <= 0:
            raise ValueError("bucket_size must be greater than zero")
        self._global_depth = global_depth
        self._bucket_size = bucket_size
        self._directory = Path(directory) if file_system else None
        self._created = 0
        self._buckets: list[_MemoryBucket | _FileBucket] = [
            self._new_bucket(global_depth) for _ in range(1 << global_depth)
        ]

    @property
    def depth(self) -> int:
        """The global depth of the directory."""
        return self._global_depth

    @property
    def num_dirs(self) -> int:
        """The number of directory entries, ``2 ** depth``."""
        return len(self._buckets)

    def insert(self, key: str, value: Any) -> None:
        """Store ``value`` under ``key``, splitting buckets as needed."""
        if self._directory is not None:
            for text in (key, value):
                if not isinstance(text, str) or ":" in text or "\n" in text or "\r" in text:
                    raise ValueError(
                        "file-backed tables take strings without ':' or line breaks"
                    )
        while True:
            index = self._index(key)
            bucket = self._buckets[index]
            items = bucket.load()
            if key in items or len(items) < self._bucket_size:
                bucket.put(key, value)
                return
            self._split(index)

    def get(self, key: str) -> Any:
        """Return the value stored under ``key``; raise KeyError if absent."""
        items = self._buckets[self._index(key)].load()
        if key not in items:
            raise KeyError(key)
        return items[key]

    def keys(self) -> list[str]:
        """Return every stored key."""
        return [key for bucket in dict.fromkeys(self._buckets) for key in bucket.load()]

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and key in self._buckets[self._index(key)].load()

    def __len__(self) -> int:
        return len(self.keys())

    def _index(self, key: str) -> int:
        return hash_key(key) & ((1 << self._global_depth) - 1)

    def _new_bucket(self, depth: int) -> _MemoryBucket | _FileBucket:
        number = self._created
        self._created += 1
        if self._directory is None:
            return _MemoryBucket(depth)
        return _FileBucket(depth, self._directory / f"bucket_{number}.dat")

    def _split(self, index: int) -> None:
        bucket = self._buckets[index]
        if bucket.local_depth >= _MAX_DEPTH:
            raise RuntimeError("cannot split bucket: its keys share every hash bit")
        bucket.local_depth += 1
        if bucket.local_depth > self._global_depth:
            self._buckets = self._buckets + self._buckets
            self._global_depth += 1

        sibling = self._new_bucket(bucket.local_depth)
        bit = 1 << (bucket.local_depth - 1)
        kept: dict[str, Any] = {}
        moved: dict[str, Any] = {}
        for key, value in bucket.load().items():
            (moved if hash_key(key) & bit else kept)[key] = value
        bucket.replace(kept)
        sibling.replace(moved)

        for position, entry in enumerate(self._buckets):
            if entry is bucket and position & bit:
                self._buckets[position] = sibling