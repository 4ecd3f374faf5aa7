import os
import subprocess
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from elm_torture.domain.errors import CompileErrorKind
from pipeline.config import TortureConfig
from pipeline.execution.compile_step import compile_suite

from fake_toolchain import (
    COMPILER_FAILS,
    COMPILER_OK,
    COMPILER_WARNS,
    make_suite,
    read_lines,
    write_script,
)


class TestCompileStep(unittest.TestCase):
    def setUp(self) -> None:
        self._td = tempfile.TemporaryDirectory()
        self.root = Path(self._td.name)
        self.bin_dir = self.root / "bin"

    def tearDown(self) -> None:
        self._td.cleanup()

    def _config(self, body: str = COMPILER_OK, **kwargs) -> TortureConfig:
        elm = write_script(self.bin_dir / "elm", body)
        return TortureConfig(elm_compiler=str(elm), **kwargs)

    def test_missing_descriptor_never_invokes_compiler(self) -> None:
        suite = make_suite(self.root, with_descriptor=False)
        with patch("pipeline.execution.compile_step.run_cmd") as run_cmd:
            err = compile_suite(suite, self.root / "out", self._config())

        self.assertIsNotNone(err)
        self.assertIs(err.kind, CompileErrorKind.SUITE_DOES_NOT_EXIST)
        run_cmd.assert_not_called()

    def test_out_dir_that_is_a_file_is_rejected_first(self) -> None:
        suite = make_suite(self.root, with_descriptor=False)
        out_file = self.root / "out"
        out_file.write_text("not a directory", encoding="utf-8")

        err = compile_suite(suite, out_file, self._config())

        self.assertIs(err.kind, CompileErrorKind.OUT_DIR_NOT_A_DIRECTORY)

    def test_missing_out_dir_is_created(self) -> None:
        suite = make_suite(self.root)
        out_dir = self.root / "nested" / "out"

        err = compile_suite(suite, out_dir, self._config())

        self.assertIsNone(err)
        self.assertTrue((out_dir / "elm.js").exists())

    def test_unreadable_targets_manifest(self) -> None:
        suite = make_suite(self.root)
        (suite / "targets.txt").mkdir()

        err = compile_suite(suite, self.root / "out", self._config())

        self.assertIs(err.kind, CompileErrorKind.READING_TARGETS_FAILED)

    def test_compiler_not_found(self) -> None:
        suite = make_suite(self.root)
        config = TortureConfig(elm_compiler=str(self.root / "no-such-elm"))

        err = compile_suite(suite, self.root / "out", config)

        self.assertIs(err.kind, CompileErrorKind.COMPILER_NOT_FOUND)

    def test_invocation_uses_default_target_and_absolute_output(self) -> None:
        suite = make_suite(self.root)
        out_dir = self.root / "out"

        err = compile_suite(suite, out_dir, self._config(args=["--debug"]))

        self.assertIsNone(err)
        args = read_lines(self.bin_dir / "compiler.args")
        expected_output = str(out_dir.resolve() / "elm.js")
        self.assertEqual(["make", "Main.elm", "--debug", "--output", expected_output], args)
        self.assertEqual(
            str(suite.resolve()),
            (self.bin_dir / "compiler.cwd").read_text(encoding="utf-8").strip(),
        )

    def test_targets_manifest_lists_entry_points(self) -> None:
        suite = make_suite(self.root, targets=["src/Main.elm", "src/Other.elm"])

        err = compile_suite(suite, self.root / "out", self._config())

        self.assertIsNone(err)
        args = read_lines(self.bin_dir / "compiler.args")
        self.assertEqual(["make", "src/Main.elm", "src/Other.elm", "--output"], args[:4])

    def test_elm_home_is_forwarded(self) -> None:
        suite = make_suite(self.root)
        with patch.dict(os.environ, {"ELM_HOME": "/opt/elm-home"}):
            err = compile_suite(suite, self.root / "out", self._config())

        self.assertIsNone(err)
        self.assertEqual(
            "/opt/elm-home",
            (self.bin_dir / "compiler.elm_home").read_text(encoding="utf-8").strip(),
        )

    def test_compiler_failure_keeps_captured_output(self) -> None:
        suite = make_suite(self.root)

        err = compile_suite(suite, self.root / "out", self._config(COMPILER_FAILS))

        self.assertIs(err.kind, CompileErrorKind.COMPILER_REPORTED_FAILURE)
        self.assertIsNotNone(err.output)
        self.assertEqual(1, err.output.exit_code)
        self.assertIn(b"SYNTAX PROBLEM", err.output.stderr)

    def test_successful_compiler_must_be_silent_on_stderr(self) -> None:
        suite = make_suite(self.root)

        err = compile_suite(suite, self.root / "out", self._config(COMPILER_WARNS))

        self.assertIs(err.kind, CompileErrorKind.UNEXPECTED_DIAGNOSTIC_OUTPUT)
        self.assertEqual(0, err.output.exit_code)

    def test_launch_failure(self) -> None:
        suite = make_suite(self.root)
        with patch(
            "pipeline.execution.compile_step.run_cmd",
            side_effect=PermissionError("exec format error"),
        ):
            err = compile_suite(suite, self.root / "out", self._config())

        self.assertIs(err.kind, CompileErrorKind.PROCESS_LAUNCH_FAILED)
        self.assertIn("exec format error", err.detail)

    def test_timeout_is_a_launch_failure(self) -> None:
        suite = make_suite(self.root)
        with patch(
            "pipeline.execution.compile_step.run_cmd",
            side_effect=subprocess.TimeoutExpired(["elm", "make"], 5),
        ):
            err = compile_suite(suite, self.root / "out", self._config(timeout_seconds=5))

        self.assertIs(err.kind, CompileErrorKind.PROCESS_LAUNCH_FAILED)
        self.assertIn("timed out after 5", err.detail)


if __name__ == "__main__":
    unittest.main()
