from __future__ import annotations

from pathlib import Path
from typing import List, Tuple

from cli.formatting import format_outcome, format_summary, summarize
from elm_torture.domain.outcome import SuiteOutcome
from pipeline.execution.batch import first_failure_exit_code
from pipeline.models import Instructions
from pipeline.pipeline import TorturePipeline

from .common import WELCOME_MESSAGE, display_path


def run_all_suites(pipeline: TorturePipeline, instructions: Instructions) -> int:
    suites_dir = Path(instructions.task.suites_dir)
    try:
        suites = pipeline.find_suites(suites_dir)
    except OSError as e:
        raise SystemExit(f"Error scanning for suites: {e}")

    print(WELCOME_MESSAGE)
    print()
    n = len(suites)
    print(f"Running the following {n} SSCCE{'' if n == 1 else 's'}:")
    for suite in suites:
        print(f"  {display_path(suite)}")
    print()

    results: List[Tuple[Path, SuiteOutcome]] = []
    for suite, outcome in pipeline.run_suites(suites, instructions):
        print(format_outcome(suite, outcome))
        results.append((suite, outcome))

    skipped = n - len(results)
    if skipped:
        print(f"\nFail-fast: {skipped} suite{'' if skipped == 1 else 's'} not run.")

    print()
    print(format_summary(summarize(results)))
    return first_failure_exit_code(results)
