"""pipeline.pipeline

This module defines a *single, high-level* object that represents this repo's
primary capabilities.

Why this exists
---------------
The behavior is implemented across several modules:

- :mod:`pipeline.orchestrator` runs one suite end to end.
- :mod:`pipeline.execution.batch` runs many suites with fail-fast.
- :mod:`pipeline.suites.discovery` finds suites on disk.

Callers (CLI, scripts, CI) should not have to wire those together themselves.
The :class:`TorturePipeline` facade gives them one front door:

- ``find_suites(...)``: discover suites below a directory
- ``run_suite(...)``: compile and run one suite
- ``run_suites(...)``: lazily compile and run many suites

The underlying functions are injectable so tests can swap in stubs.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator
from pathlib import Path
from typing import List, Optional, Tuple, Union

from elm_torture.domain.outcome import SuiteOutcome
from pipeline.execution.batch import iter_suite_outcomes
from pipeline.models import Instructions
from pipeline.orchestrator import compile_and_run
from pipeline.suites.discovery import find_suites


class TorturePipeline:
    """High-level facade over the pipeline.

    Callers should prefer using this object (built via :func:`pipeline.wiring.build_pipeline`)
    rather than importing low-level modules directly.
    """

    def __init__(
        self,
        *,
        run_fn: Callable[[Union[str, Path], Optional[Path], Instructions], SuiteOutcome] = compile_and_run,
        find_fn: Callable[[Path], List[Path]] = find_suites,
    ) -> None:
        self._run_fn = run_fn
        self._find_fn = find_fn

    def find_suites(self, root: Path) -> List[Path]:
        return list(self._find_fn(Path(root)))

    def run_suite(self, suite: Path, out_dir: Optional[Path], instructions: Instructions) -> SuiteOutcome:
        """Compile and run a single suite, optionally into a caller-owned directory."""
        return self._run_fn(suite, out_dir, instructions)

    def run_suites(
        self,
        suites: Iterable[Path],
        instructions: Instructions,
    ) -> Iterator[Tuple[Path, SuiteOutcome]]:
        """Lazily run suites in order; honours ``instructions.fail_fast``."""
        return iter_suite_outcomes(suites, instructions, run_fn=self._run_fn)
