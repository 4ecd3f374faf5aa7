"""elm_torture.domain

Domain objects that form the *contract* between pipeline stages.

Key idea
--------
The compile and run steps turn raw process results into typed failures. The
orchestrator wraps those into one suite-level outcome, so callers (batch
runner, CLI, tests) can match on the stage without losing the specific reason.
"""

from __future__ import annotations

from .errors import (
    CompileError,
    CompileErrorKind,
    RunError,
    RunErrorKind,
    TortureEnvironmentError,
)
from .outcome import (
    EXIT_COMPILE_ERROR,
    EXIT_OK,
    EXIT_RUN_ERROR,
    OutcomeKind,
    SuiteOutcome,
)

__all__ = [
    "CompileError",
    "CompileErrorKind",
    "EXIT_COMPILE_ERROR",
    "EXIT_OK",
    "EXIT_RUN_ERROR",
    "OutcomeKind",
    "RunError",
    "RunErrorKind",
    "SuiteOutcome",
    "TortureEnvironmentError",
]
