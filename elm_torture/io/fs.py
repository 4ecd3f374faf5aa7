"""elm_torture.io.fs

Atomic filesystem writers.

The generated harness is the only file the runner writes itself. Writing it
through a temp file and ``os.replace()`` means an interrupted run never leaves
a half-written ``harness.js`` next to the compiled artifact, which would make a
persisted output directory misleading to inspect.
"""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from typing import Any, Optional


def _atomic_write_text(
    path: Path,
    write_fn,
    *,
    encoding: str = "utf-8",
    newline: Optional[str] = None,
) -> None:
    """Write a file atomically by writing to a temp file and os.replace()."""

    p = Path(path)

    fd, tmp_name = tempfile.mkstemp(prefix=f"{p.name}.", suffix=".tmp", dir=str(p.parent))
    tmp_path = Path(tmp_name)

    try:
        with os.fdopen(fd, "w", encoding=encoding, newline=newline) as f:
            write_fn(f)
            f.flush()
            os.fsync(f.fileno())

        os.replace(tmp_path, p)
    finally:
        # Only still present if os.replace did not happen.
        if tmp_path.exists():
            tmp_path.unlink()


def write_text_atomic(path: Path, text: str, *, encoding: str = "utf-8") -> None:
    """Write text atomically. The parent directory must already exist."""

    def _write(f) -> None:
        f.write(text)

    _atomic_write_text(Path(path), _write, encoding=encoding)


def dumps_json_pretty(data: Any) -> str:
    """Stable, human-friendly JSON used for ``--showConfig`` and reports."""
    return json.dumps(data, indent=2, sort_keys=False, ensure_ascii=False)
