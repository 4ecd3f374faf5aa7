from __future__ import annotations

"""cli.commands.common

Small shared helpers for CLI command modules.
"""

from pathlib import Path

WELCOME_MESSAGE = "Elm Torture - stress tests for an elm compiler"


def display_path(p: Path) -> Path:
    """Absolute path when it can be resolved, else the path as given."""
    try:
        return Path(p).resolve(strict=True)
    except OSError:
        return Path(p)
