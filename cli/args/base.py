from __future__ import annotations

import argparse


def add_base_args(parser: argparse.ArgumentParser) -> None:
    """Register the CLI flags.

    This includes:
    - config file selection
    - task selection (one suite, a directory of suites, or dump the config)
    - execution knobs (output dir, cache clearing, fail-fast, verbosity)
    """

    parser.add_argument(
        "-c",
        "--config",
        metavar="FILE",
        help="Set config file (YAML or JSON). Relative allowed_failures are resolved against its directory.",
    )

    task = parser.add_mutually_exclusive_group(required=True)
    task.add_argument("--suite", metavar="DIRECTORY", help="The suite to test")
    task.add_argument(
        "--suites",
        metavar="DIRECTORY",
        help="A directory containing suites to test",
    )
    task.add_argument(
        "--showConfig",
        dest="show_config",
        action="store_true",
        help="Dump the configuration",
    )

    parser.add_argument(
        "--out-dir",
        dest="out_dir",
        metavar="DIRECTORY",
        help=(
            "(--suite only) The directory to place built files in. "
            "Must not exist or be an empty directory."
        ),
    )
    parser.add_argument(
        "--clear-elm-stuff",
        dest="clear_elm_stuff",
        action="store_true",
        help="Delete the elm-stuff directory before running suite",
    )
    parser.add_argument(
        "--fail-fast",
        dest="fail_fast",
        action="store_true",
        help="(--suites only) Stop after the first suite that fails and is not an allowed failure",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log every compiler/runtime invocation (debug logging)",
    )
