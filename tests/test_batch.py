import unittest
from pathlib import Path
from typing import Dict, List

from elm_torture.domain.errors import CompileError, CompileErrorKind, RunError, RunErrorKind
from elm_torture.domain.outcome import OutcomeKind, SuiteOutcome
from pipeline.execution.batch import first_failure_exit_code, iter_suite_outcomes
from pipeline.models import Instructions


def _compile_fail(*, allowed: bool = False) -> SuiteOutcome:
    return SuiteOutcome.compile_failure(
        allowed=allowed, reason=CompileError(CompileErrorKind.COMPILER_REPORTED_FAILURE)
    )


def _run_fail(*, allowed: bool = False) -> SuiteOutcome:
    return SuiteOutcome.run_failure(
        allowed=allowed, out_dir=None, reason=RunError(RunErrorKind.RUNTIME_REPORTED_FAILURE)
    )


class _Scripted:
    """Stand-in for compile_and_run that returns canned outcomes and records calls."""

    def __init__(self, outcomes: Dict[str, SuiteOutcome]) -> None:
        self.outcomes = outcomes
        self.calls: List[str] = []

    def __call__(self, suite, out_dir, instructions):
        assert out_dir is None
        self.calls.append(str(suite))
        return self.outcomes[str(suite)]


class TestBatchRunner(unittest.TestCase):
    def test_fail_fast_stops_after_first_failure(self) -> None:
        run = _Scripted({"A": _compile_fail(), "B": SuiteOutcome.passed(), "C": SuiteOutcome.passed()})

        results = list(iter_suite_outcomes(["A", "B", "C"], Instructions(fail_fast=True), run_fn=run))

        self.assertEqual(["A"], [s for s, _ in results])
        self.assertEqual(["A"], run.calls)

    def test_without_fail_fast_every_suite_runs_in_order(self) -> None:
        run = _Scripted({"A": _compile_fail(), "B": SuiteOutcome.passed(), "C": _run_fail()})

        results = list(iter_suite_outcomes(["A", "B", "C"], Instructions(), run_fn=run))

        self.assertEqual(["A", "B", "C"], [s for s, _ in results])
        self.assertEqual(
            [OutcomeKind.COMPILE_FAILURE, OutcomeKind.PASSED, OutcomeKind.RUN_FAILURE],
            [o.kind for _, o in results],
        )

    def test_non_failures_do_not_trigger_fail_fast(self) -> None:
        run = _Scripted(
            {
                "allowed": _run_fail(allowed=True),
                "expected": SuiteOutcome.expected_failure(),
                "bad": SuiteOutcome.invalid_suite(OutcomeKind.SUITE_NOT_ELM),
                "never": SuiteOutcome.passed(),
            }
        )

        results = list(
            iter_suite_outcomes(
                ["allowed", "expected", "bad", "never"], Instructions(fail_fast=True), run_fn=run
            )
        )

        self.assertEqual(["allowed", "expected", "bad"], [s for s, _ in results])

    def test_outcomes_are_produced_lazily(self) -> None:
        run = _Scripted({"A": SuiteOutcome.passed(), "B": SuiteOutcome.passed()})

        gen = iter_suite_outcomes([Path("A"), Path("B")], Instructions(), run_fn=run)
        self.assertEqual([], run.calls)

        suite, outcome = next(gen)
        self.assertEqual(Path("A"), suite)
        self.assertIs(OutcomeKind.PASSED, outcome.kind)
        self.assertEqual(["A"], run.calls)

    def test_first_failure_exit_code(self) -> None:
        cases = [
            ([], 0),
            ([("a", SuiteOutcome.passed()), ("b", SuiteOutcome.expected_failure())], 0),
            ([("a", _compile_fail(allowed=True)), ("b", _run_fail())], 2),
            ([("a", _compile_fail()), ("b", _run_fail())], 1),
            ([("a", _run_fail()), ("b", _compile_fail())], 2),
            ([("a", SuiteOutcome.invalid_suite(OutcomeKind.SUITE_NOT_EXIST))], 1),
        ]
        for results, expected in cases:
            with self.subTest(results=[o.kind for _, o in results]):
                self.assertEqual(expected, first_failure_exit_code(results))


if __name__ == "__main__":
    unittest.main()
