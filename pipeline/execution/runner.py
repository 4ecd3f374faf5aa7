"""pipeline.execution.runner

Command-execution helpers shared by the compile and run steps.

This module deliberately avoids toolchain-specific knowledge. It provides:

* :func:`which` - resolve executables reliably across environments.
* :func:`run_cmd` - run subprocesses (no ``shell=True``) and capture output.

Rule
----
Only this module should touch ``subprocess``.
"""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
import time
from pathlib import Path
from typing import Dict, List, Optional, Sequence

from elm_torture.domain.process import CmdResult

logger = logging.getLogger(__name__)

# Raised by run_cmd when a positive timeout elapses.
TimeoutExpired = subprocess.TimeoutExpired


def which(bin_name: str) -> str:
    """Locate an executable and return its absolute path.

    ``bin_name`` may be a bare command name (looked up on ``PATH``) or a path
    to an executable file.
    """
    found = shutil.which(bin_name)
    if found:
        return str(Path(found).resolve())

    raise FileNotFoundError(
        f"Executable '{bin_name}' not found on PATH.\n"
        f"Install it and ensure it's available to this Python process."
    )


def run_cmd(
    cmd: Sequence[str],
    *,
    cwd: Optional[Path] = None,
    env: Optional[Dict[str, str]] = None,
    timeout_seconds: int = 0,
) -> CmdResult:
    """Run a subprocess and capture stdout/stderr as bytes (no ``shell=True``).

    Never raises on non-zero exit codes. Raises ``OSError`` when the process
    cannot be started and ``subprocess.TimeoutExpired`` when a positive
    ``timeout_seconds`` elapses. With the default of 0 the call blocks until
    the child exits.
    """
    argv: List[str] = [str(c) for c in cmd]
    command_str = " ".join(argv)

    # If env is provided, merge it onto the current process environment.
    env2 = None
    if env is not None:
        env2 = os.environ.copy()
        env2.update(env)

    logger.debug("Running: %s (cwd=%s)", command_str, cwd)
    t0 = time.time()
    proc = subprocess.run(
        argv,
        cwd=str(cwd) if cwd else None,
        capture_output=True,
        timeout=timeout_seconds if timeout_seconds and timeout_seconds > 0 else None,
        env=env2,
    )
    elapsed = time.time() - t0
    logger.debug("Exited with %s after %.2fs: %s", proc.returncode, elapsed, command_str)

    return CmdResult(
        exit_code=proc.returncode,
        elapsed_seconds=elapsed,
        command_str=command_str,
        stdout=proc.stdout or b"",
        stderr=proc.stderr or b"",
    )
