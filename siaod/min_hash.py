"""MinHash signatures for estimating set similarity."""

from __future__ import annotations

import random
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

_MASK32 = 0xFFFFFFFF


@dataclass(frozen=True)
class HashFunction:
    """A polynomial string hash with a given seed."""

    seed: int

    def hash(self, text: str) -> int:
        """Return the 32-bit polynomial hash of the characters of ``text``."""
        result = 1
        multiplier = self.seed & _MASK32
        for char in text:
            result = (multiplier * result + ord(char)) & _MASK32
        return result


class MinHash:
    """A family of hash functions sized for a given maximum error."""

    def __init__(self, max_error: float, rng: random.Random | None = None) -> None:
        if max_error <= 0:
            raise ValueError("max_error must be positive")
        count = int(1 / (max_error * max_error))
        if count < 1:
            raise ValueError("max_error is too large to give any hash function")
        if rng is None:
            rng = random.Random()
        self._functions = tuple(HashFunction(rng.randrange(count) + 32) for _ in range(count))

    @property
    def function_count(self) -> int:
        """The number of hash functions, and so the signature length."""
        return len(self._functions)

    @property
    def functions(self) -> tuple[HashFunction, ...]:
        """The hash functions in signature order."""
        return self._functions

    def find_min(self, items: Iterable[str], hash_function: HashFunction) -> int:
        """Return the smallest hash of ``items``, or 0xFFFFFFFF if empty."""
        return min((hash_function.hash(item) for item in items), default=_MASK32)

    def signature(self, items: Iterable[str]) -> list[int]:
        """Return the MinHash signature of ``items``."""
        elements = list(items)
        return [self.find_min(elements, function) for function in self._functions]

    def similarity(self, sig_a: Sequence[int], sig_b: Sequence[int]) -> float:
        """Return the fraction of positions where the two signatures agree."""
        count = self.function_count
        if len(sig_a) < count or len(sig_b) < count:
            raise ValueError(f"signatures must have at least {count} entries")
        equal = sum(a == b for a, b in zip(sig_a[:count], sig_b[:count]))
        return equal / count