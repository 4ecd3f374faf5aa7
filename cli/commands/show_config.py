from __future__ import annotations

from pipeline.config import dump_config
from pipeline.models import Instructions


def show_config(instructions: Instructions) -> int:
    print(dump_config(instructions.config))
    return 0
