"""
Process result — what a child-process invocation produced.

The process runner NEVER raises for a failed command: a non-zero exit,
a missing executable and a timeout all come back as a result with
``ok == False``. The bootstrapper decides which of those are fatal.
"""

from __future__ import annotations

from pydantic import BaseModel


class ProcessResult(BaseModel):
    """Outcome of one child-process invocation."""

    command: list[str]
    cwd: str | None = None
    exit_code: int = 0
    stdout: str = ""
    stderr: str = ""
    error: str | None = None        # set when the process could not run at all
    duration_ms: int = 0

    @property
    def ok(self) -> bool:
        return self.exit_code == 0 and self.error is None

    @property
    def display(self) -> str:
        return " ".join(self.command)

    @classmethod
    def success(cls, command: list[str], stdout: str = "", **kwargs) -> ProcessResult:
        return cls(command=command, exit_code=0, stdout=stdout, **kwargs)

    @classmethod
    def failure(
        cls,
        command: list[str],
        exit_code: int = 1,
        stderr: str = "",
        **kwargs,
    ) -> ProcessResult:
        return cls(command=command, exit_code=exit_code, stderr=stderr, **kwargs)
