import unittest

from elm_torture.domain.errors import CompileError, CompileErrorKind, RunError, RunErrorKind
from elm_torture.domain.outcome import (
    EXIT_COMPILE_ERROR,
    EXIT_OK,
    EXIT_RUN_ERROR,
    OutcomeKind,
    SuiteOutcome,
)


class TestSuiteOutcome(unittest.TestCase):
    def test_failed_stage_and_exit_code(self) -> None:
        cerr = CompileError(CompileErrorKind.COMPILER_REPORTED_FAILURE)
        rerr = RunError(RunErrorKind.UNEXPECTED_OUTPUT_PRODUCED)
        cases = [
            (SuiteOutcome.passed(), False, None, EXIT_OK),
            (SuiteOutcome.expected_failure(), False, None, EXIT_OK),
            (SuiteOutcome.invalid_suite(OutcomeKind.SUITE_NOT_EXIST), True, "validate", EXIT_COMPILE_ERROR),
            (SuiteOutcome.invalid_suite(OutcomeKind.SUITE_NOT_DIR), True, "validate", EXIT_COMPILE_ERROR),
            (SuiteOutcome.invalid_suite(OutcomeKind.SUITE_NOT_ELM), True, "validate", EXIT_COMPILE_ERROR),
            (SuiteOutcome.compile_failure(allowed=False, reason=cerr), True, "compile", EXIT_COMPILE_ERROR),
            (SuiteOutcome.compile_failure(allowed=True, reason=cerr), False, "compile", EXIT_OK),
            (SuiteOutcome.run_failure(allowed=False, out_dir=None, reason=rerr), True, "run", EXIT_RUN_ERROR),
            (SuiteOutcome.run_failure(allowed=True, out_dir=None, reason=rerr), False, "run", EXIT_OK),
        ]
        for outcome, failed, stage, code in cases:
            with self.subTest(kind=outcome.kind, allowed=outcome.allowed):
                self.assertEqual(failed, outcome.failed)
                self.assertEqual(stage, outcome.stage)
                self.assertEqual(code, outcome.exit_code)

    def test_expected_failure_is_marked_allowed(self) -> None:
        self.assertTrue(SuiteOutcome.expected_failure().allowed)

    def test_invalid_suite_rejects_stage_kinds(self) -> None:
        with self.assertRaises(ValueError):
            SuiteOutcome.invalid_suite(OutcomeKind.COMPILE_FAILURE)

    def test_exit_codes_are_distinct(self) -> None:
        self.assertEqual(0, EXIT_OK)
        self.assertEqual(1, EXIT_COMPILE_ERROR)
        self.assertEqual(2, EXIT_RUN_ERROR)


if __name__ == "__main__":
    unittest.main()
