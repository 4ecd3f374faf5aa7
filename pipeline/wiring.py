"""pipeline.wiring

This module is the **composition root** for the Python runtime.

"Composition root" means: the single place where we *assemble* the running
application from its building blocks:

- load environment variables (``.env``, typically ``ELM_HOME``)
- configure logging
- build the high-level pipeline facade object

Keeping this wiring in one place prevents configuration and dependency setup
from being duplicated across entrypoints (CLI, scripts, CI).
"""

from __future__ import annotations

import logging

from dotenv import find_dotenv, load_dotenv

from pipeline.pipeline import TorturePipeline


LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


def load_env() -> None:
    """Load ``.env`` from the working directory (or a parent) without overriding."""
    dotenv_path = find_dotenv(usecwd=True)
    if dotenv_path:
        load_dotenv(dotenv_path, override=False)


def configure_logging(*, verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format=LOG_FORMAT,
    )


def build_pipeline(*, load_dotenv_file: bool = True) -> TorturePipeline:
    """Build the high-level pipeline facade."""

    if load_dotenv_file:
        load_env()

    return TorturePipeline()
