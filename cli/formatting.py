from __future__ import annotations

"""cli.formatting

Human-readable rendering of suite outcomes.

Every failure message names the suite, the stage, whether the failure was
allowed, and includes the raw captured process output (command, status,
stdout, stderr) so a failing suite can be diagnosed from the report alone.
"""

from pathlib import Path
from typing import Dict, Iterable, Optional, Tuple

from elm_torture.domain.errors import CompileError, CompileErrorKind, RunError, RunErrorKind
from elm_torture.domain.outcome import OutcomeKind, SuiteOutcome


PASS_MARK = "✅"
FAIL_MARK = "❌"
WARN_MARK = "⚠️"


_COMPILE_HEADLINES: Dict[CompileErrorKind, str] = {
    CompileErrorKind.OUT_DIR_NOT_A_DIRECTORY: "Output directory is not usable!",
    CompileErrorKind.SUITE_DOES_NOT_EXIST: "Suite is not an elm application or package!",
    CompileErrorKind.READING_TARGETS_FAILED: "targets.txt found but could not be read!",
    CompileErrorKind.COMPILER_NOT_FOUND: "Could not find elm compiler executable!",
    CompileErrorKind.PROCESS_LAUNCH_FAILED: "Failed to execute compiler!",
    CompileErrorKind.COMPILER_REPORTED_FAILURE: "Compilation failed!",
    CompileErrorKind.UNEXPECTED_DIAGNOSTIC_OUTPUT: "Compilation sent output to stderr!",
}

_RUN_HEADLINES: Dict[RunErrorKind, str] = {
    RunErrorKind.SUITE_DOES_NOT_EXIST: "Suite is not an elm application or package!",
    RunErrorKind.CANNOT_FIND_EXPECTED_OUTPUT: "Could not find output.json!",
    RunErrorKind.READING_EXPECTED_OUTPUT_FAILED: "Could not read output.json!",
    RunErrorKind.EXPECTED_OUTPUT_NOT_UTF8: "output.json is not valid UTF-8!",
    RunErrorKind.RUNTIME_NOT_FOUND: "Could not find node executable!",
    RunErrorKind.WRITING_HARNESS_FAILED: "Could not write the test harness!",
    RunErrorKind.RUNTIME_PROCESS_FAILED: "Failed to execute node!",
    RunErrorKind.RUNTIME_REPORTED_FAILURE: "The suite failed at runtime!",
    RunErrorKind.UNEXPECTED_OUTPUT_PRODUCED: "The suite produced unexpected output!",
}

_VALIDATION_MESSAGES: Dict[OutcomeKind, str] = {
    OutcomeKind.SUITE_NOT_EXIST: "{suite} does not exist!",
    OutcomeKind.SUITE_NOT_DIR: "{suite} is not a directory!",
    OutcomeKind.SUITE_NOT_ELM: "{suite} is not an elm application or package (no elm.json)!",
}


def _details(detail: str, output) -> str:
    parts = []
    if detail:
        parts.append(detail)
    if output is not None:
        parts.append(output.describe())
    if not parts:
        return ""
    return "\nDetails:\n" + "\n".join(parts)


def format_compile_error(err: CompileError, *, provided_out_dir: Optional[Path] = None) -> str:
    headline = _COMPILE_HEADLINES[err.kind]
    if err.kind is CompileErrorKind.OUT_DIR_NOT_A_DIRECTORY and provided_out_dir is not None:
        headline = (
            f"{provided_out_dir} must either be a directory or a path where elm-torture can create one!"
        )
    return headline + _details(err.detail, err.output)


def format_run_error(err: RunError) -> str:
    return _RUN_HEADLINES[err.kind] + _details(err.detail, err.output)


def _allowed_note(outcome: SuiteOutcome) -> str:
    return " (allowed failure)" if outcome.allowed else ""


def format_outcome(
    suite: Path,
    outcome: SuiteOutcome,
    *,
    provided_out_dir: Optional[Path] = None,
) -> str:
    """Render one outcome as a multi-line report entry."""
    kind = outcome.kind

    if kind is OutcomeKind.PASSED:
        return f"{PASS_MARK} {suite}"

    if kind is OutcomeKind.EXPECTED_FAILURE:
        return (
            f"{WARN_MARK} {suite}: passed, but it is listed as an allowed failure. "
            "Remove it from allowed_failures."
        )

    if outcome.stage == "validate":
        return f"{FAIL_MARK} " + _VALIDATION_MESSAGES[kind].format(suite=suite)

    mark = WARN_MARK if outcome.allowed else FAIL_MARK

    if kind is OutcomeKind.COMPILE_FAILURE and outcome.compile_error is not None:
        body = format_compile_error(outcome.compile_error, provided_out_dir=provided_out_dir)
        return f"{mark} {suite}: compile stage failed{_allowed_note(outcome)}\n{body}"

    if kind is OutcomeKind.RUN_FAILURE and outcome.run_error is not None:
        body = format_run_error(outcome.run_error)
        kept = ""
        if outcome.out_dir is not None:
            kept = f"\nBuild artifacts kept in: {outcome.out_dir.path}"
        return f"{mark} {suite}: run stage failed{_allowed_note(outcome)}\n{body}{kept}"

    return f"{mark} {suite}: {kind.value}{_allowed_note(outcome)}"


def summarize(results: Iterable[Tuple[Path, SuiteOutcome]]) -> Dict[str, int]:
    counts = {"total": 0, "passed": 0, "failed": 0, "allowed_failures": 0, "expected_failures": 0}
    for _suite, outcome in results:
        counts["total"] += 1
        if outcome.kind is OutcomeKind.PASSED:
            counts["passed"] += 1
        elif outcome.kind is OutcomeKind.EXPECTED_FAILURE:
            counts["expected_failures"] += 1
        elif outcome.failed:
            counts["failed"] += 1
        else:
            counts["allowed_failures"] += 1
    return counts


def format_summary(counts: Dict[str, int]) -> str:
    line = (
        f"{counts['total']} suite{'' if counts['total'] == 1 else 's'}: "
        f"{counts['passed']} passed, {counts['failed']} failed, "
        f"{counts['allowed_failures']} allowed failure{'' if counts['allowed_failures'] == 1 else 's'}, "
        f"{counts['expected_failures']} unexpectedly passed"
    )
    mark = PASS_MARK if counts["failed"] == 0 else FAIL_MARK
    return f"{mark} {line}"
