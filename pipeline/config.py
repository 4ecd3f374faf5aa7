"""pipeline.config

Toolchain configuration for a torture run.

Why this exists
---------------
Every suite in a run shares the same toolchain settings: which compiler and
runtime to shell out to, extra compiler flags, and which suites are known to
fail. This module owns:

- the :class:`TortureConfig` dataclass (with defaults)
- loading from a config file (YAML or JSON; JSON is valid YAML)
- dumping for ``--showConfig``

Design goals
------------
- Missing keys fall back to defaults, so a config file only lists overrides.
- Unknown keys are rejected: a typo should not silently run the wrong compiler.
- Relative ``allowed_failures`` entries are anchored at the config file's
  directory, so a checked-in config works from any working directory.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from elm_torture.io.fs import dumps_json_pretty

logger = logging.getLogger(__name__)

# Forwarded unchanged to the compiler when set in the environment.
ELM_HOME_VAR = "ELM_HOME"

_KNOWN_KEYS = ("elm_compiler", "node", "args", "allowed_failures", "timeout_seconds")


@dataclass(frozen=True)
class TortureConfig:
    """Shared, read-only toolchain settings for one run."""

    elm_compiler: str = "elm"
    node: str = "node"
    args: List[str] = field(default_factory=list)
    allowed_failures: List[Path] = field(default_factory=list)

    # 0 = no timeout (the compile/run step blocks until the child exits).
    timeout_seconds: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "elm_compiler": self.elm_compiler,
            "node": self.node,
            "args": list(self.args),
            "allowed_failures": [str(p) for p in self.allowed_failures],
            "timeout_seconds": int(self.timeout_seconds),
        }

    @staticmethod
    def from_dict(raw: Dict[str, Any], *, base_dir: Optional[Path] = None) -> "TortureConfig":
        raw = raw or {}

        unknown = sorted(k for k in raw if k not in _KNOWN_KEYS)
        if unknown:
            raise ValueError(f"Unknown config keys: {', '.join(unknown)}")

        defaults = TortureConfig()

        args = raw.get("args") or []
        if isinstance(args, str):
            args = args.split()
        if not isinstance(args, list):
            raise ValueError("Config key 'args' must be a list of strings")

        allowed_raw = raw.get("allowed_failures") or []
        if not isinstance(allowed_raw, list):
            raise ValueError("Config key 'allowed_failures' must be a list of paths")
        allowed: List[Path] = []
        for entry in allowed_raw:
            p = Path(str(entry)).expanduser()
            if base_dir is not None and not p.is_absolute():
                p = base_dir / p
            allowed.append(p)

        timeout = raw.get("timeout_seconds", defaults.timeout_seconds)
        if isinstance(timeout, bool) or not isinstance(timeout, int) or timeout < 0:
            raise ValueError("Config key 'timeout_seconds' must be a non-negative integer")

        return TortureConfig(
            elm_compiler=str(raw.get("elm_compiler") or defaults.elm_compiler),
            node=str(raw.get("node") or defaults.node),
            args=[str(a) for a in args],
            allowed_failures=allowed,
            timeout_seconds=timeout,
        )


def default_config() -> TortureConfig:
    return TortureConfig()


def load_config(path: str | Path) -> TortureConfig:
    """Load a config file (YAML or JSON)."""
    p = Path(path).expanduser().resolve()
    if not p.exists():
        raise FileNotFoundError(f"Config file not found: {p}")
    raw = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    if not isinstance(raw, dict):
        raise ValueError(f"Config must be a mapping/object at top level: {p}")
    config = TortureConfig.from_dict(raw, base_dir=p.parent)
    logger.debug("Loaded config from %s: %s", p, config)
    return config


def dump_config(config: TortureConfig) -> str:
    """Pretty JSON rendering used by ``--showConfig``."""
    return dumps_json_pretty(config.to_dict())
