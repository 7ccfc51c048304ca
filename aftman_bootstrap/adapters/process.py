"""
Process adapter — the SINGLE PLACE where ``subprocess.run`` is called.

Every manager and tool subcommand goes through ``SubprocessRunner``.
Logging, timeouts, search-path resolution and error capture are
centralised here; callers only ever see a ``ProcessResult``.
"""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
import time
from pathlib import Path

from aftman_bootstrap.adapters.base import ExecutableLocator, ProcessRunner
from aftman_bootstrap.core.constants import DEFAULT_PROCESS_TIMEOUT
from aftman_bootstrap.core.models.environment import ExecutionEnvironment
from aftman_bootstrap.core.models.process import ProcessResult

logger = logging.getLogger(__name__)

# Output kept on a result, from the tail end
_OUTPUT_LIMIT = 2000


class ShutilLocator(ExecutableLocator):
    """Resolve executables with ``shutil.which`` against an explicit PATH."""

    def which(self, name: str, env: ExecutionEnvironment) -> str | None:
        return shutil.which(name, path=env.path)


class SubprocessRunner(ProcessRunner):
    """Run commands without a shell and capture their output.

    The executable is resolved against the *execution environment's*
    PATH rather than the host's, so a freshly installed manager is
    found even though ``os.environ`` was never changed.

    Args:
        timeout: Seconds before a command is abandoned.
        locator: How to resolve ``command[0]`` (default: ``ShutilLocator``).
    """

    def __init__(
        self,
        timeout: float = DEFAULT_PROCESS_TIMEOUT,
        locator: ExecutableLocator | None = None,
    ):
        self.timeout = timeout
        self.locator = locator or ShutilLocator()

    def run(
        self,
        command: list[str],
        *,
        env: ExecutionEnvironment,
        cwd: Path | None = None,
    ) -> ProcessResult:
        shown_cwd = os.fspath(cwd) if cwd is not None else None
        argv = list(command)
        if not os.path.isabs(argv[0]):
            resolved = self.locator.which(argv[0], env)
            if resolved:
                argv[0] = resolved

        logger.debug("Executing: %s (cwd=%s)", " ".join(command), shown_cwd)
        start = time.monotonic()

        try:
            result = subprocess.run(
                argv,
                cwd=shown_cwd,
                env=env.as_dict(),
                capture_output=True,
                text=True,
                timeout=self.timeout,
            )
        except subprocess.TimeoutExpired:
            logger.warning("Command timed out after %ss: %s", self.timeout, command)
            return ProcessResult.failure(
                command,
                exit_code=-1,
                cwd=shown_cwd,
                error=f"Command timed out after {self.timeout}s",
            )
        except OSError as e:
            # Missing executable, permission denied, bad cwd
            logger.debug("Could not start %s: %s", command, e)
            return ProcessResult.failure(
                command,
                exit_code=-1,
                cwd=shown_cwd,
                error=f"Could not start command: {e}",
            )

        elapsed_ms = int((time.monotonic() - start) * 1000)
        stdout = result.stdout[-_OUTPUT_LIMIT:].strip() if result.stdout else ""
        stderr = result.stderr[-_OUTPUT_LIMIT:].strip() if result.stderr else ""

        if result.returncode != 0:
            logger.debug("Command exited %d: %s", result.returncode, command)

        return ProcessResult(
            command=command,
            cwd=shown_cwd,
            exit_code=result.returncode,
            stdout=stdout,
            stderr=stderr,
            duration_ms=elapsed_ms,
        )
