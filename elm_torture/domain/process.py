"""elm_torture.domain.process

Captured result of one external process invocation.

The compile and run steps attach this record to their failures so a human can
diagnose a suite from the report alone, without rerunning it.
"""

from __future__ import annotations

from dataclasses import dataclass


def _decode(data: bytes) -> str:
    return data.decode("utf-8", errors="replace")


@dataclass(frozen=True)
class CmdResult:
    exit_code: int
    elapsed_seconds: float
    command_str: str
    stdout: bytes
    stderr: bytes

    @property
    def success(self) -> bool:
        return self.exit_code == 0

    def stdout_text(self) -> str:
        return _decode(self.stdout)

    def stderr_text(self) -> str:
        return _decode(self.stderr)

    def describe(self) -> str:
        """Render status, stdout and stderr for humans."""
        lines = [
            f"command: {self.command_str}",
            f"status:  {self.exit_code}",
            "stdout:",
            self.stdout_text().rstrip("\n") or "  <empty>",
            "stderr:",
            self.stderr_text().rstrip("\n") or "  <empty>",
        ]
        return "\n".join(lines)
