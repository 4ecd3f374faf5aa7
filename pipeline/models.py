"""pipeline.models

Lightweight data structures used across the pipeline.

Why this exists
---------------
The CLI, the orchestrator and the batch runner all need the same few facts
about a run (which config, which task, whether to clear caches or stop at the
first failure). Passing them as loose arguments tends to grow into
"spaghetti" as flags are added.

These dataclasses provide a small, explicit vocabulary for:
- what the user asked for (CliTask)
- how every suite in the run is treated (Instructions)

Instructions are read-only once built and shared by reference across every
suite run.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Optional

from pipeline.config import TortureConfig


class TaskKind(Enum):
    DUMP_CONFIG = "dump_config"
    RUN_SUITE = "run_suite"
    RUN_SUITES = "run_suites"


@dataclass(frozen=True)
class CliTask:
    """What to do. Only the fields of the selected ``kind`` are set."""

    kind: TaskKind
    suite: Optional[Path] = None
    out_dir: Optional[Path] = None
    suites_dir: Optional[Path] = None

    @staticmethod
    def dump_config() -> "CliTask":
        return CliTask(kind=TaskKind.DUMP_CONFIG)

    @staticmethod
    def run_suite(suite: Path, out_dir: Optional[Path] = None) -> "CliTask":
        return CliTask(kind=TaskKind.RUN_SUITE, suite=Path(suite), out_dir=out_dir)

    @staticmethod
    def run_suites(suites_dir: Path) -> "CliTask":
        return CliTask(kind=TaskKind.RUN_SUITES, suites_dir=Path(suites_dir))


@dataclass(frozen=True)
class Instructions:
    """Run-wide settings shared by every suite."""

    config: TortureConfig = field(default_factory=TortureConfig)
    task: CliTask = field(default_factory=CliTask.dump_config)

    # Delete <suite>/elm-stuff before compiling.
    clear_elm_stuff: bool = False

    # Stop a batch after the first failure that is not allowed.
    fail_fast: bool = False
