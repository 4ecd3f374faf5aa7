"""elm_torture.io.outdir

Ownership record for the directory that receives build artifacts.

An :class:`OutputDirectory` is in exactly one of three states:

* ``PROVIDED``   - the caller supplied the path and owns it; we never delete it.
* ``TEMPORARY``  - we created a fresh, uniquely named directory and delete it
  when released.
* ``PERSISTENT`` - a temporary that was promoted (typically after a run
  failure) so its artifacts survive for post-mortem inspection. Deleting it is
  now the user's business.

Transitions: ``TEMPORARY -> PERSISTENT`` via :meth:`OutputDirectory.promote`,
at most once and never back. ``PROVIDED`` and ``TEMPORARY`` never turn into
each other.
"""

from __future__ import annotations

import logging
import shutil
import tempfile
from enum import Enum
from pathlib import Path
from typing import Optional, Union

logger = logging.getLogger(__name__)

TEMP_PREFIX = "elm-torture"


class OutDirKind(Enum):
    PROVIDED = "provided"
    TEMPORARY = "temporary"
    PERSISTENT = "persistent"


class OutputDirectory:
    """Tagged output-directory handle.

    Use :meth:`OutputDirectory.acquire` rather than the constructor. Instances
    are context managers: leaving the ``with`` block releases (deletes) a
    directory that is still temporary.
    """

    def __init__(self, kind: OutDirKind, path: Path) -> None:
        self._kind = kind
        self._path = Path(path)
        self._released = False

    @classmethod
    def acquire(cls, provided: Optional[Union[str, Path]] = None) -> "OutputDirectory":
        """Wrap a caller path, or create a fresh temporary directory.

        Raises ``OSError`` if a temporary directory cannot be created.
        """
        if provided is not None:
            return cls(OutDirKind.PROVIDED, Path(provided))

        path = Path(tempfile.mkdtemp(prefix=TEMP_PREFIX))
        logger.debug("Created temporary output directory %s", path)
        return cls(OutDirKind.TEMPORARY, path)

    @property
    def kind(self) -> OutDirKind:
        return self._kind

    @property
    def path(self) -> Path:
        return self._path

    def promote(self) -> Path:
        """Keep a temporary directory on disk; no-op for the other states."""
        if self._kind is OutDirKind.TEMPORARY:
            self._kind = OutDirKind.PERSISTENT
            logger.debug("Persisting output directory %s", self._path)
        return self._path

    def release(self) -> None:
        """Delete the directory if (and only if) we still own it as temporary."""
        if self._kind is not OutDirKind.TEMPORARY or self._released:
            return
        self._released = True
        logger.debug("Removing temporary output directory %s", self._path)
        shutil.rmtree(self._path, ignore_errors=True)

    def __enter__(self) -> "OutputDirectory":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.release()

    def __repr__(self) -> str:
        return f"OutputDirectory({self._kind.value}, {str(self._path)!r})"
