"""elm_torture.domain.outcome

Terminal classification of one suite's pipeline run.

A :class:`SuiteOutcome` is a tagged record: ``kind`` says which variant it is
and only the fields belonging to that variant are populated.

=================== ========= ============= ========= =======
kind                allowed   compile_error run_error out_dir
=================== ========= ============= ========= =======
PASSED              False     -             -         -
SUITE_NOT_EXIST     False     -             -         -
SUITE_NOT_DIR       False     -             -         -
SUITE_NOT_ELM       False     -             -         -
COMPILE_FAILURE     yes       yes           -         -
RUN_FAILURE         yes       -             yes       yes
EXPECTED_FAILURE    True      -             -         -
=================== ========= ============= ========= =======

Only ``RUN_FAILURE`` carries the output directory, so callers can locate the
artifacts that were kept on disk for inspection.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ..io.outdir import OutputDirectory
from .errors import CompileError, RunError


EXIT_OK = 0
EXIT_COMPILE_ERROR = 1
EXIT_RUN_ERROR = 2


class OutcomeKind(Enum):
    PASSED = "passed"
    SUITE_NOT_EXIST = "suite_not_exist"
    SUITE_NOT_DIR = "suite_not_dir"
    SUITE_NOT_ELM = "suite_not_elm"
    COMPILE_FAILURE = "compile_failure"
    RUN_FAILURE = "run_failure"
    EXPECTED_FAILURE = "expected_failure"


VALIDATION_KINDS = frozenset(
    {OutcomeKind.SUITE_NOT_EXIST, OutcomeKind.SUITE_NOT_DIR, OutcomeKind.SUITE_NOT_ELM}
)


@dataclass(frozen=True)
class SuiteOutcome:
    kind: OutcomeKind
    allowed: bool = False
    compile_error: Optional[CompileError] = None
    run_error: Optional[RunError] = None
    out_dir: Optional[OutputDirectory] = None

    # ----------------------------
    # Constructors
    # ----------------------------

    @staticmethod
    def passed() -> "SuiteOutcome":
        return SuiteOutcome(kind=OutcomeKind.PASSED)

    @staticmethod
    def invalid_suite(kind: OutcomeKind) -> "SuiteOutcome":
        if kind not in VALIDATION_KINDS:
            raise ValueError(f"Not a validation outcome: {kind}")
        return SuiteOutcome(kind=kind)

    @staticmethod
    def compile_failure(*, allowed: bool, reason: CompileError) -> "SuiteOutcome":
        return SuiteOutcome(kind=OutcomeKind.COMPILE_FAILURE, allowed=allowed, compile_error=reason)

    @staticmethod
    def run_failure(*, allowed: bool, out_dir: OutputDirectory, reason: RunError) -> "SuiteOutcome":
        return SuiteOutcome(
            kind=OutcomeKind.RUN_FAILURE,
            allowed=allowed,
            run_error=reason,
            out_dir=out_dir,
        )

    @staticmethod
    def expected_failure() -> "SuiteOutcome":
        return SuiteOutcome(kind=OutcomeKind.EXPECTED_FAILURE, allowed=True)

    # ----------------------------
    # Derived facts
    # ----------------------------

    @property
    def stage(self) -> Optional[str]:
        """Which stage produced the outcome: validate | compile | run (None if it passed)."""
        if self.kind in VALIDATION_KINDS:
            return "validate"
        if self.kind is OutcomeKind.COMPILE_FAILURE:
            return "compile"
        if self.kind is OutcomeKind.RUN_FAILURE:
            return "run"
        return None

    @property
    def failed(self) -> bool:
        """True when this outcome should mark a batch as failed.

        Allowed failures and an allowed suite that unexpectedly passed do not.
        The three validation outcomes (missing suite, not a directory, no
        elm.json) also count as failed, so they stop a fail-fast batch and exit
        with the compile-stage code, even though they never reach a stage.
        """
        if self.kind in (OutcomeKind.PASSED, OutcomeKind.EXPECTED_FAILURE):
            return False
        if self.kind in (OutcomeKind.COMPILE_FAILURE, OutcomeKind.RUN_FAILURE):
            return not self.allowed
        return True

    @property
    def exit_code(self) -> int:
        if not self.failed:
            return EXIT_OK
        if self.kind is OutcomeKind.RUN_FAILURE:
            return EXIT_RUN_ERROR
        return EXIT_COMPILE_ERROR
