from __future__ import annotations

import argparse
from pathlib import Path

from cli.commands.run_suite import run_single_suite
from cli.commands.run_suites import run_all_suites
from cli.commands.show_config import show_config
from pipeline.config import default_config, load_config
from pipeline.models import CliTask, Instructions, TaskKind
from pipeline.pipeline import TorturePipeline


def build_instructions(args: argparse.Namespace) -> Instructions:
    """Turn parsed CLI args into run instructions (loads the config file)."""
    if args.config:
        try:
            config = load_config(args.config)
        except (OSError, ValueError) as e:
            raise SystemExit(f"Error while reading configuration file {args.config}: {e}")
    else:
        config = default_config()

    if args.show_config:
        task = CliTask.dump_config()
    elif args.suites:
        if args.out_dir:
            raise SystemExit("--out-dir cannot be used with --suites")
        task = CliTask.run_suites(Path(args.suites))
    else:
        out_dir = Path(args.out_dir) if args.out_dir else None
        task = CliTask.run_suite(Path(args.suite), out_dir)

    return Instructions(
        config=config,
        task=task,
        clear_elm_stuff=bool(args.clear_elm_stuff),
        fail_fast=bool(args.fail_fast),
    )


def dispatch(instructions: Instructions, pipeline: TorturePipeline) -> int:
    kind = instructions.task.kind
    if kind is TaskKind.DUMP_CONFIG:
        return show_config(instructions)
    if kind is TaskKind.RUN_SUITE:
        return run_single_suite(pipeline, instructions)
    return run_all_suites(pipeline, instructions)
