"""A collision-free hash table for a fixed set of keys."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from .extendible_hashing import hash_key
from .keyvalue import KeyValue


def hash_index(key: str, size: int) -> int:
    """Return the slot of ``key`` in a table of ``size`` slots."""
    return hash_key(key) % size


def _layout(keys: list[str], size: int) -> list[int] | None:
    positions = [hash_index(key, size) for key in keys]
    return positions if len(set(positions)) == len(positions) else None


class PerfectHash:
    """A table whose size is doubled until every key has its own slot."""

    def __init__(self, keys: Iterable[str], values: Iterable[Any]) -> None:
        keys = list(keys)
        values = list(values)
        if len(keys) != len(values):
            raise ValueError("keys and values must have the same length")
        if len(set(keys)) != len(keys):
            raise ValueError("keys must be unique")
        if len({hash_key(key) for key in keys}) != len(keys):
            raise ValueError("keys with equal hashes cannot be separated")

        size = 2 * len(keys)
        positions = _layout(keys, size) if keys else []
        while positions is None:
            size *= 2
            positions = _layout(keys, size)

        self._size = size
        self._slots: list[KeyValue | None] = [None] * size
        for position, key, value in zip(positions, keys, values):
            self._slots[position] = KeyValue(key, value)

    @property
    def size(self) -> int:
        """The number of slots in the table."""
        return self._size

    def _find(self, key: str) -> KeyValue | None:
        if not self._size:
            return None
        slot = self._slots[hash_index(key, self._size)]
        return slot if slot is not None and slot.key == key else None

    def lookup(self, key: str) -> bool:
        """Tell whether ``key`` is in the table."""
        return self._find(key) is not None

    def get_value(self, key: str) -> Any:
        """Return the value of ``key``; raise KeyError if it is absent."""
        slot = self._find(key)
        if slot is None:
            raise KeyError(f'don\'t have a key "{key}" in hashTable')
        return slot.value

    def keys(self) -> list[str]:
        """Return the keys in slot order."""
        return [slot.key for slot in self._occupied()]

    def values(self) -> list[Any]:
        """Return the values in slot order."""
        return [slot.value for slot in self._occupied()]

    def items(self) -> list[KeyValue]:
        """Return the key/value pairs in slot order."""
        return list(self._occupied())

    def indexes(self) -> list[int]:
        """Return the indexes of occupied slots."""
        return [index for index, slot in enumerate(self._slots) if slot is not None]

    def with_item(self, key: str, value: Any) -> PerfectHash:
        """Return a new table holding these items plus ``key`` and ``value``."""
        return PerfectHash([*self.keys(), key], [*self.values(), value])

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.lookup(key)

    def __len__(self) -> int:
        return sum(1 for _ in self._occupied())

    def _occupied(self):
        return (slot for slot in self._slots if slot is not None)