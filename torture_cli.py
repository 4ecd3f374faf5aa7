#!/usr/bin/env python3
"""
Test suite runner for an Elm compiler.

Modes:
  1) --suite       - compile and run one suite
  2) --suites      - compile and run every suite found below a directory
  3) --showConfig  - print the effective configuration

Usage:
  python torture_cli.py --suite suites/records
  python torture_cli.py --suite suites/records --out-dir build/records
  python torture_cli.py --suites suites --fail-fast -c config.json
  python torture_cli.py --showConfig -c config.yaml

Exit status: 0 on success, 1 for a compile-stage error, 2 for a run-stage error.
"""

from __future__ import annotations

import argparse
from typing import List, Optional

from cli.args.base import add_base_args
from cli.dispatch import build_instructions, dispatch
from elm_torture.domain.errors import TortureEnvironmentError
from pipeline.wiring import build_pipeline, configure_logging


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Elm Torture: test suite for an elm compiler.")
    add_base_args(parser)
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    configure_logging(verbose=bool(args.verbose))

    pipeline = build_pipeline()
    instructions = build_instructions(args)

    try:
        return int(dispatch(instructions, pipeline))
    except TortureEnvironmentError as e:
        raise SystemExit(f"Fatal: {e}")


if __name__ == "__main__":
    raise SystemExit(main())
