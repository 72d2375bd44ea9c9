"""Command catalog discovery and query filtering.

The catalog is every regular file found directly inside the search-path
directories, sorted case-insensitively with adjacent duplicates dropped.
Filtering is a pure case-insensitive substring test that keeps catalog order.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable, Sequence

logger = logging.getLogger(__name__)


def _iter_directory_files(directory: str) -> Iterable[str]:
    """Yield base names of regular files directly inside ``directory``.

    Unreadable or missing directories yield nothing.
    """
    try:
        with os.scandir(directory) as entries:
            for entry in entries:
                try:
                    if entry.is_file():
                        yield entry.name
                except OSError:
                    continue
    except OSError as exc:
        logger.debug("skipping search-path entry %r: %s", directory, exc)


def dedupe_adjacent(names: Iterable[str]) -> list[str]:
    """Drop entries whose lowercase form equals their immediate predecessor's."""
    out: list[str] = []
    previous_key: str | None = None
    for name in names:
        key = name.lower()
        if key == previous_key:
            continue
        out.append(name)
        previous_key = key
    return out


def build_catalog(search_path: str | None = None, pathsep: str = os.pathsep) -> tuple[str, ...]:
    """Collect command names from ``search_path`` (defaults to ``$PATH``).

    Names are sorted by their lowercase form; the sort is stable, so equal
    keys keep discovery order. Deduplication only removes repeats that end up
    adjacent after sorting, comparing case-insensitively; the first one wins.
    """
    if search_path is None:
        search_path = os.environ.get("PATH")
    if not search_path:
        logger.debug("search path is empty; catalog is empty")
        return ()

    names: list[str] = []
    for directory in search_path.split(pathsep):
        if not directory:
            continue
        names.extend(_iter_directory_files(directory))

    names.sort(key=str.lower)
    catalog = tuple(dedupe_adjacent(names))
    logger.debug("catalog built with %d commands", len(catalog))
    return catalog


def filter_catalog(catalog: Sequence[str], query: str) -> list[int]:
    """Return catalog indices whose names contain ``query`` case-insensitively."""
    if not query:
        return list(range(len(catalog)))
    folded_query = query.casefold()
    return [idx for idx, name in enumerate(catalog) if folded_query in name.casefold()]
