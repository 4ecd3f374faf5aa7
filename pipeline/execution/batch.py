"""pipeline.execution.batch

Batch runner: apply the suite orchestrator to many suites, lazily.

:func:`iter_suite_outcomes` is a generator. Each ``(suite, outcome)`` pair is
yielded before the next suite starts, so a consumer can report progress as it
goes. With ``fail_fast`` the generator stops right after yielding the first
outcome that is ``failed``; cancellation therefore only happens at suite
boundaries, never inside a compile or run.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Iterable, Iterator, Optional, Tuple, TypeVar, Union

from elm_torture.domain.outcome import EXIT_OK, SuiteOutcome
from pipeline.models import Instructions
from pipeline.orchestrator import compile_and_run

logger = logging.getLogger(__name__)

S = TypeVar("S", str, Path)

RunOneFn = Callable[[Union[str, Path], Optional[Path], Instructions], SuiteOutcome]


def iter_suite_outcomes(
    suites: Iterable[S],
    instructions: Instructions,
    *,
    run_fn: RunOneFn = compile_and_run,
) -> Iterator[Tuple[S, SuiteOutcome]]:
    """Yield one ``(suite, outcome)`` per input suite, in input order.

    Suites always get a fresh temporary output directory (no provided dir).
    """
    for suite in suites:
        outcome = run_fn(suite, None, instructions)
        yield suite, outcome

        if outcome.failed and instructions.fail_fast:
            logger.debug("Fail-fast: stopping after %s (%s)", suite, outcome.kind.value)
            return


def first_failure_exit_code(results: Iterable[Tuple[S, SuiteOutcome]]) -> int:
    """Exit code of the first failed outcome (consumes ``results``)."""
    code = EXIT_OK
    for _suite, outcome in results:
        if code == EXIT_OK and outcome.failed:
            code = outcome.exit_code
    return code
