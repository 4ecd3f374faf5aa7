"""pipeline.execution.compile_step

Compile step: build one suite with the external Elm compiler.

Preconditions are checked in a fixed order and each maps to its own
:class:`~elm_torture.domain.errors.CompileErrorKind`:

1. the output directory exists (created if missing) and is a directory
2. the suite has a project descriptor (``elm.json``)
3. the entry points can be resolved (``targets.txt`` or ``Main.elm``)
4. the compiler executable resolves

The compiler is then run inside the suite directory with an absolute
``--output`` path. A compiler that succeeds must be silent on stderr; any
diagnostic output is treated as a failure.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Dict, List, Optional

from elm_torture.domain.errors import CompileError, CompileErrorKind
from elm_torture.io.layout import COMPILED_ARTIFACT, DEFAULT_TARGET, get_suite_paths, parse_targets
from pipeline.config import ELM_HOME_VAR, TortureConfig

from .runner import TimeoutExpired, run_cmd, which

logger = logging.getLogger(__name__)


def _prepare_out_dir(out_dir: Path) -> Optional[CompileError]:
    if not out_dir.exists():
        try:
            out_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            return CompileError(
                CompileErrorKind.OUT_DIR_NOT_A_DIRECTORY,
                detail=f"could not create {out_dir}: {e}",
            )
    if not out_dir.is_dir():
        return CompileError(
            CompileErrorKind.OUT_DIR_NOT_A_DIRECTORY,
            detail=f"{out_dir} exists but is not a directory",
        )
    return None


def resolve_targets(suite: Path) -> List[str]:
    """Entry points from ``targets.txt`` when present, else ``Main.elm``.

    Raises ``OSError`` / ``UnicodeDecodeError`` if an existing manifest
    cannot be read.
    """
    targets_path = get_suite_paths(suite).targets
    if not targets_path.exists():
        return [DEFAULT_TARGET]
    return parse_targets(targets_path.read_text(encoding="utf-8"))


def build_compile_command(
    compiler: str,
    targets: List[str],
    out_dir: Path,
    config: TortureConfig,
) -> List[str]:
    output_path = out_dir.resolve() / COMPILED_ARTIFACT
    return [compiler, "make", *targets, *config.args, "--output", str(output_path)]


def compiler_env() -> Dict[str, str]:
    elm_home = os.environ.get(ELM_HOME_VAR)
    return {ELM_HOME_VAR: elm_home} if elm_home is not None else {}


def compile_suite(suite: Path, out_dir: Path, config: TortureConfig) -> Optional[CompileError]:
    """Compile ``suite`` into ``out_dir``. Returns ``None`` on success."""
    suite = Path(suite)
    out_dir = Path(out_dir)

    err = _prepare_out_dir(out_dir)
    if err is not None:
        return err

    if not get_suite_paths(suite).descriptor.exists():
        return CompileError(
            CompileErrorKind.SUITE_DOES_NOT_EXIST,
            detail=f"{suite} is not an elm application or package",
        )

    try:
        targets = resolve_targets(suite)
    except (OSError, UnicodeDecodeError) as e:
        return CompileError(
            CompileErrorKind.READING_TARGETS_FAILED,
            detail=f"targets.txt found in suite {suite} but could not be read: {e}",
        )

    try:
        compiler = which(config.elm_compiler)
    except FileNotFoundError as e:
        return CompileError(CompileErrorKind.COMPILER_NOT_FOUND, detail=str(e))

    cmd = build_compile_command(compiler, targets, out_dir, config)
    logger.debug("Invoking compiler: %s", " ".join(cmd))

    try:
        res = run_cmd(
            cmd,
            cwd=suite,
            env=compiler_env(),
            timeout_seconds=config.timeout_seconds,
        )
    except TimeoutExpired as e:
        return CompileError(
            CompileErrorKind.PROCESS_LAUNCH_FAILED,
            detail=f"compiler timed out after {e.timeout}s",
        )
    except OSError as e:
        return CompileError(
            CompileErrorKind.PROCESS_LAUNCH_FAILED,
            detail=f"failed to execute compiler: {e}",
        )

    if not res.success:
        return CompileError(
            CompileErrorKind.COMPILER_REPORTED_FAILURE,
            detail="compilation failed",
            output=res,
        )

    if res.stderr:
        return CompileError(
            CompileErrorKind.UNEXPECTED_DIAGNOSTIC_OUTPUT,
            detail="compilation sent output to stderr",
            output=res,
        )

    return None
