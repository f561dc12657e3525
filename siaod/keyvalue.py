"""A simple key/value pair record."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass
class KeyValue:
    """A key together with the value stored under it."""

    key: str
    value: Any