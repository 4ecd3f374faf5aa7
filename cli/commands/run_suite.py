from __future__ import annotations

from pathlib import Path

from cli.formatting import format_outcome
from pipeline.models import Instructions
from pipeline.pipeline import TorturePipeline

from .common import WELCOME_MESSAGE, display_path


def run_single_suite(pipeline: TorturePipeline, instructions: Instructions) -> int:
    task = instructions.task
    suite = Path(task.suite)

    print(WELCOME_MESSAGE)
    print()
    print(f"Running SSCCE {display_path(suite)}:")
    print()

    outcome = pipeline.run_suite(suite, task.out_dir, instructions)
    print(format_outcome(suite, outcome, provided_out_dir=task.out_dir))
    return int(outcome.exit_code)
