"""pipeline.execution.run_step

Run step: execute a compiled suite through the generated harness.

The harness (see :mod:`pipeline.execution.harness`) reports pass/fail through
the runtime's exit status and stderr only. So after the runtime exits:

* launch failure                      -> ``RUNTIME_PROCESS_FAILED``
* non-zero exit                       -> ``RUNTIME_REPORTED_FAILURE``
* anything on stdout                  -> ``UNEXPECTED_OUTPUT_PRODUCED``
* stderr other than a benign notice   -> ``UNEXPECTED_OUTPUT_PRODUCED``

The benign notices are the exact lines the Elm runtime prints for
non-optimized builds. Matching them literally is brittle (any rewording in a
compiler release breaks it) but it is the compatible behaviour.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import FrozenSet, List, Optional

from elm_torture.domain.errors import RunError, RunErrorKind
from elm_torture.io.fs import write_text_atomic
from elm_torture.io.layout import HARNESS_FILE, get_suite_paths
from pipeline.config import TortureConfig

from .harness import render_harness
from .runner import TimeoutExpired, run_cmd, which

logger = logging.getLogger(__name__)

RUNTIME_FLAGS = ("--unhandled-rejections=strict",)


def optimize_notice(mode: str) -> bytes:
    return (
        f"Compiled in {mode} mode. Follow the advice at "
        "https://elm-lang.org/0.19.1/optimize for better performance and smaller assets.\n"
    ).encode("utf-8")


BENIGN_STDERR: FrozenSet[bytes] = frozenset({optimize_notice("DEV"), optimize_notice("DEBUG")})


def read_expected_output(suite: Path) -> tuple[Optional[str], Optional[RunError]]:
    path = get_suite_paths(suite).expected_output
    if not path.exists():
        return None, RunError(
            RunErrorKind.CANNOT_FIND_EXPECTED_OUTPUT,
            detail=f"{path} does not exist",
        )
    try:
        data = path.read_bytes()
    except OSError as e:
        return None, RunError(
            RunErrorKind.READING_EXPECTED_OUTPUT_FAILED,
            detail=f"could not read {path}: {e}",
        )
    try:
        return data.decode("utf-8"), None
    except UnicodeDecodeError as e:
        return None, RunError(
            RunErrorKind.EXPECTED_OUTPUT_NOT_UTF8,
            detail=f"{path} is not valid UTF-8: {e}",
        )


def build_run_command(runtime: str, harness_path: Path) -> List[str]:
    return [runtime, *RUNTIME_FLAGS, str(harness_path)]


def run_suite(suite: Path, out_dir: Path, config: TortureConfig) -> Optional[RunError]:
    """Run the compiled suite found in ``out_dir``. Returns ``None`` on success."""
    suite = Path(suite)
    out_dir = Path(out_dir)

    if not get_suite_paths(suite).descriptor.exists():
        return RunError(
            RunErrorKind.SUITE_DOES_NOT_EXIST,
            detail=f"{suite} is not an elm application or package",
        )

    expected_output, err = read_expected_output(suite)
    if err is not None:
        return err

    try:
        runtime = which(config.node)
    except FileNotFoundError as e:
        return RunError(RunErrorKind.RUNTIME_NOT_FOUND, detail=str(e))

    harness_path = out_dir / HARNESS_FILE
    try:
        write_text_atomic(harness_path, render_harness(expected_output or ""))
    except OSError as e:
        return RunError(
            RunErrorKind.WRITING_HARNESS_FAILED,
            detail=f"could not write {harness_path}: {e}",
        )

    cmd = build_run_command(runtime, harness_path)
    logger.debug("Invoking runtime: %s", " ".join(cmd))

    try:
        res = run_cmd(cmd, timeout_seconds=config.timeout_seconds)
    except TimeoutExpired as e:
        return RunError(
            RunErrorKind.RUNTIME_PROCESS_FAILED,
            detail=f"runtime timed out after {e.timeout}s",
        )
    except OSError as e:
        return RunError(
            RunErrorKind.RUNTIME_PROCESS_FAILED,
            detail=f"failed to execute runtime: {e}",
        )

    if not res.success:
        return RunError(
            RunErrorKind.RUNTIME_REPORTED_FAILURE,
            detail="the harness reported a failure",
            output=res,
        )

    if res.stdout:
        return RunError(
            RunErrorKind.UNEXPECTED_OUTPUT_PRODUCED,
            detail="the program wrote to stdout",
            output=res,
        )

    if res.stderr and res.stderr not in BENIGN_STDERR:
        return RunError(
            RunErrorKind.UNEXPECTED_OUTPUT_PRODUCED,
            detail="the program wrote to stderr",
            output=res,
        )

    return None
