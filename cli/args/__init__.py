"""CLI argument builder modules.

The top-level :mod:`torture_cli` is intentionally kept thin. Flags are
registered via small "arg builder" functions housed here:

- :func:`cli.args.base.add_base_args`

This keeps :func:`torture_cli.parse_args` from turning into a god function as
flags are added.
"""

from __future__ import annotations

__all__ = [
    "base",
]
