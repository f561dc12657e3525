"""Split CSV files into those that have a search index and those that do not."""

from __future__ import annotations

import os
from pathlib import Path

_INDEX_SUFFIX = ".bleve"


def _sorted_entries(directory: str | Path) -> list[os.DirEntry]:
    with os.scandir(directory) as entries:
        return sorted(entries, key=lambda entry: entry.name)


def find_matching_files(
    csv_dir: str | Path, bleve_dir: str | Path
) -> tuple[list[str], list[str]]:
    """Return the names of indexed and not yet indexed CSV files.

    A CSV file counts as indexed when ``bleve_dir`` holds a directory named
    after it with a ``.bleve`` suffix. Names come back in sorted order.
    """
    csv_entries = _sorted_entries(csv_dir)
    indexed_names = {
        entry.name[: -len(_INDEX_SUFFIX)]
        for entry in _sorted_entries(bleve_dir)
        if entry.is_dir() and entry.name.endswith(_INDEX_SUFFIX)
    }
    indexed: list[str] = []
    not_indexed: list[str] = []
    for entry in csv_entries:
        if entry.is_dir():
            continue
        (indexed if entry.name in indexed_names else not_indexed).append(entry.name)
    return indexed, not_indexed