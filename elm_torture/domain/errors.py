"""elm_torture.domain.errors

Stage-level failure vocabulary.

Two closed sets describe *why* a stage failed:

* :class:`CompileErrorKind` - the compiler could not be invoked, or its result
  was unacceptable.
* :class:`RunErrorKind` - the generated harness could not be run, or the
  program's observable behaviour was unacceptable.

The kinds are wrapped (not flattened) into :class:`CompileError` /
:class:`RunError` records so the orchestrator can attach them to a suite
outcome while callers still match on the specific reason.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .process import CmdResult


class TortureEnvironmentError(RuntimeError):
    """The environment is unusable (not a suite defect); abort the whole run."""


class CompileErrorKind(Enum):
    OUT_DIR_NOT_A_DIRECTORY = "out_dir_not_a_directory"
    SUITE_DOES_NOT_EXIST = "suite_does_not_exist"
    READING_TARGETS_FAILED = "reading_targets_failed"
    COMPILER_NOT_FOUND = "compiler_not_found"
    PROCESS_LAUNCH_FAILED = "process_launch_failed"
    COMPILER_REPORTED_FAILURE = "compiler_reported_failure"
    UNEXPECTED_DIAGNOSTIC_OUTPUT = "unexpected_diagnostic_output"


class RunErrorKind(Enum):
    SUITE_DOES_NOT_EXIST = "suite_does_not_exist"
    CANNOT_FIND_EXPECTED_OUTPUT = "cannot_find_expected_output"
    READING_EXPECTED_OUTPUT_FAILED = "reading_expected_output_failed"
    EXPECTED_OUTPUT_NOT_UTF8 = "expected_output_not_utf8"
    RUNTIME_NOT_FOUND = "runtime_not_found"
    WRITING_HARNESS_FAILED = "writing_harness_failed"
    RUNTIME_PROCESS_FAILED = "runtime_process_failed"
    RUNTIME_REPORTED_FAILURE = "runtime_reported_failure"
    UNEXPECTED_OUTPUT_PRODUCED = "unexpected_output_produced"


@dataclass(frozen=True)
class CompileError:
    kind: CompileErrorKind
    detail: str = ""
    output: Optional[CmdResult] = None


@dataclass(frozen=True)
class RunError:
    kind: RunErrorKind
    detail: str = ""
    output: Optional[CmdResult] = None
