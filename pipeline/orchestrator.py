"""pipeline.orchestrator

Suite orchestration: validate, (clear cache), acquire, compile, run, classify.

Goal
----
Turn one suite directory into exactly one
:class:`~elm_torture.domain.outcome.SuiteOutcome`. The stages are strictly
sequential::

    Validating -> (ClearingCache) -> Acquiring -> Compiling -> Running -> Classifying

Design principles
-----------------
- Every suite defect becomes data (an outcome), never an exception.
- Environment defects (cannot clear ``elm-stuff``, cannot create a temporary
  directory) raise :class:`~elm_torture.domain.errors.TortureEnvironmentError`
  and abort the whole run.
- ``allowed`` is computed once, before any invocation, and attached to every
  failure of the suite.
- A run failure promotes a temporary output directory so its artifacts stay on
  disk; in every other case a temporary directory is removed on the way out.
"""

from __future__ import annotations

import logging
import os
import shutil
from pathlib import Path
from typing import Iterable, Optional, Union

from elm_torture.domain.errors import TortureEnvironmentError
from elm_torture.domain.outcome import OutcomeKind, SuiteOutcome
from elm_torture.io.layout import get_suite_paths
from elm_torture.io.outdir import OutputDirectory
from pipeline.execution.compile_step import compile_suite
from pipeline.execution.run_step import run_suite
from pipeline.models import Instructions

logger = logging.getLogger(__name__)


def validate_suite(suite: Path) -> Optional[OutcomeKind]:
    """Return the terminal validation outcome kind, or None if the suite is usable."""
    if not suite.exists():
        return OutcomeKind.SUITE_NOT_EXIST
    if not suite.is_dir():
        return OutcomeKind.SUITE_NOT_DIR
    if not get_suite_paths(suite).descriptor.exists():
        return OutcomeKind.SUITE_NOT_ELM
    return None


def is_failure_allowed(suite: Path, allowed_failures: Iterable[Path]) -> bool:
    """True if ``suite`` is the same file as an existing allowed-failure path."""
    for p in allowed_failures:
        if p.exists() and os.path.samefile(suite, p):
            return True
    return False


def clear_build_cache(suite: Path) -> None:
    """Delete ``<suite>/elm-stuff``. A missing cache is fine; anything else is fatal."""
    cache = get_suite_paths(suite).build_cache
    try:
        shutil.rmtree(cache)
    except FileNotFoundError:
        return
    except OSError as e:
        raise TortureEnvironmentError(f"Could not delete elm-stuff directory {cache}: {e}") from e
    logger.debug("Removed build cache %s", cache)


def acquire_out_dir(provided: Optional[Union[str, Path]]) -> OutputDirectory:
    try:
        return OutputDirectory.acquire(provided)
    except OSError as e:
        raise TortureEnvironmentError(f"Could not create a temporary output directory: {e}") from e


def compile_and_run(
    suite: Union[str, Path],
    provided_out_dir: Optional[Union[str, Path]],
    instructions: Instructions,
) -> SuiteOutcome:
    """Compile and run one suite and classify the result."""
    suite = Path(suite)

    invalid = validate_suite(suite)
    if invalid is not None:
        logger.debug("Suite %s rejected: %s", suite, invalid.value)
        return SuiteOutcome.invalid_suite(invalid)

    config = instructions.config
    allowed = is_failure_allowed(suite, config.allowed_failures)

    if instructions.clear_elm_stuff:
        clear_build_cache(suite)

    out_dir = acquire_out_dir(provided_out_dir)
    with out_dir:
        logger.debug("Compiling %s into %s", suite, out_dir.path)
        compile_err = compile_suite(suite, out_dir.path, config)
        if compile_err is not None:
            return SuiteOutcome.compile_failure(allowed=allowed, reason=compile_err)

        logger.debug("Running %s from %s", suite, out_dir.path)
        run_err = run_suite(suite, out_dir.path, config)
        if run_err is not None:
            out_dir.promote()
            return SuiteOutcome.run_failure(allowed=allowed, out_dir=out_dir, reason=run_err)

    if allowed:
        return SuiteOutcome.expected_failure()
    return SuiteOutcome.passed()
