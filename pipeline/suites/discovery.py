"""pipeline.suites.discovery

Find runnable suites below a directory.

A suite is any directory containing a project descriptor (``elm.json``). Once
a suite is found we do not descend into it: nested ``elm.json`` files belong
to that suite's own sources. Build caches (``elm-stuff``), ``node_modules``
and hidden directories are never searched.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import List, Union

from elm_torture.io.layout import BUILD_CACHE_DIR, is_compilable_suite

_SKIP_DIRS = frozenset({BUILD_CACHE_DIR, "node_modules"})


def _skip(name: str) -> bool:
    return name in _SKIP_DIRS or name.startswith(".")


def find_suites(root: Union[str, Path]) -> List[Path]:
    """Return every suite at or below ``root``, sorted by path."""
    root = Path(root)
    if not root.exists():
        raise FileNotFoundError(f"Suites directory not found: {root}")
    if not root.is_dir():
        raise NotADirectoryError(f"Suites path is not a directory: {root}")

    found: List[Path] = []
    for dirpath, dirnames, _filenames in os.walk(root):
        here = Path(dirpath)
        if is_compilable_suite(here):
            found.append(here)
            dirnames[:] = []
            continue
        dirnames[:] = sorted(d for d in dirnames if not _skip(d))

    return sorted(found)
