"""elm_torture.io.layout

Canonical filesystem layout of a suite and of its output directory.

This module centralizes:

* the suite contract (``elm.json``, ``targets.txt``, ``output.json``,
  ``elm-stuff/``)
* the artifact names written into the output directory (``elm.js``,
  ``harness.js``)

The compile step, run step, orchestrator and discovery code read these names
from here instead of re-implementing their own.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Union


PROJECT_DESCRIPTOR = "elm.json"
TARGETS_MANIFEST = "targets.txt"
EXPECTED_OUTPUT = "output.json"
BUILD_CACHE_DIR = "elm-stuff"

DEFAULT_TARGET = "Main.elm"

COMPILED_ARTIFACT = "elm.js"
HARNESS_FILE = "harness.js"


@dataclass(frozen=True)
class SuitePaths:
    """Computed paths for one suite directory."""

    suite_dir: Path
    descriptor: Path
    targets: Path
    expected_output: Path
    build_cache: Path


def get_suite_paths(suite_dir: Union[str, Path]) -> SuitePaths:
    d = Path(suite_dir)
    return SuitePaths(
        suite_dir=d,
        descriptor=d / PROJECT_DESCRIPTOR,
        targets=d / TARGETS_MANIFEST,
        expected_output=d / EXPECTED_OUTPUT,
        build_cache=d / BUILD_CACHE_DIR,
    )


def is_compilable_suite(suite_dir: Union[str, Path]) -> bool:
    """A suite is compilable when its project descriptor exists."""
    return get_suite_paths(suite_dir).descriptor.exists()


def parse_targets(text: str) -> list[str]:
    """Parse ``targets.txt``: one entry point per line, blank lines ignored."""
    return [line.strip() for line in text.splitlines() if line.strip()]
