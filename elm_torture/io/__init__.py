"""elm_torture.io

Filesystem contracts and IO helpers.

Design principle
----------------
The suite layout (``elm.json``, ``targets.txt``, ``output.json``) is a public
contract shared with whoever writes suites. Keeping the names, the atomic
writer and the output-directory ownership rules here lets them evolve in one
place.
"""

from __future__ import annotations

from .fs import dumps_json_pretty, write_text_atomic
from .layout import (
    BUILD_CACHE_DIR,
    COMPILED_ARTIFACT,
    DEFAULT_TARGET,
    EXPECTED_OUTPUT,
    HARNESS_FILE,
    PROJECT_DESCRIPTOR,
    TARGETS_MANIFEST,
    SuitePaths,
    get_suite_paths,
    is_compilable_suite,
    parse_targets,
)
from .outdir import OutDirKind, OutputDirectory

__all__ = [
    "BUILD_CACHE_DIR",
    "COMPILED_ARTIFACT",
    "DEFAULT_TARGET",
    "EXPECTED_OUTPUT",
    "HARNESS_FILE",
    "PROJECT_DESCRIPTOR",
    "TARGETS_MANIFEST",
    "OutDirKind",
    "OutputDirectory",
    "SuitePaths",
    "dumps_json_pretty",
    "get_suite_paths",
    "is_compilable_suite",
    "parse_targets",
    "write_text_atomic",
]
