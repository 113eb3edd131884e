"""Incremental regeneration gate for derived assets."""

import os
from pathlib import Path


def is_stale(source: Path, dest: Path) -> bool:
    """Return True when ``dest`` must be regenerated from ``source``.

    A missing destination is stale; an existing one is stale only when
    its modification time is strictly older than the source's.
    """
    try:
        dest_mtime = dest.stat().st_mtime_ns
    except FileNotFoundError:
        return True
    return dest_mtime < source.stat().st_mtime_ns


def mark_stale(source: Path, dest: Path) -> None:
    """Date ``dest`` just before ``source`` so ``is_stale`` holds for it.

    Development builds copy minifiable assets verbatim; the next production
    build must still minify them even though the source is unchanged.
    """
    source_mtime = source.stat().st_mtime_ns
    os.utime(dest, ns=(dest.stat().st_atime_ns, source_mtime - 1))
