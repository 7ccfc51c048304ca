"""
Mock adapters — test doubles for every external capability.

Used to drive the provisioning state machine without a network, an
archive decoder or real binaries. Each fake records what it was asked
to do and, by default, succeeds. Individual calls can be configured to
fail.
"""

from __future__ import annotations

import io
import json
from pathlib import Path
from typing import IO, Any, BinaryIO

from aftman_bootstrap.adapters.base import (
    ArchiveExtractor,
    ExecutableLocator,
    HttpClient,
    HttpResponse,
    ProcessRunner,
)
from aftman_bootstrap.core.models.environment import ExecutionEnvironment
from aftman_bootstrap.core.models.process import ProcessResult


class FakeHttpClient(HttpClient):
    """Serve canned responses by URL.

    Unknown URLs answer ``404 Not Found``.
    """

    def __init__(self) -> None:
        self._routes: dict[str, tuple[int, str, bytes] | OSError] = {}
        self._call_log: list[str] = []

    @property
    def call_log(self) -> list[str]:
        """Every URL requested, in order."""
        return self._call_log

    @property
    def call_count(self) -> int:
        return len(self._call_log)

    def add(self, url: str, body: bytes = b"", status: int = 200, reason: str = "OK") -> None:
        self._routes[url] = (status, reason, body)

    def add_json(self, url: str, payload: Any, status: int = 200, reason: str = "OK") -> None:
        self.add(url, json.dumps(payload).encode("utf-8"), status=status, reason=reason)

    def add_error(self, url: str, error: OSError) -> None:
        """Make requests to ``url`` fail at the transport level."""
        self._routes[url] = error

    def get(self, url: str) -> HttpResponse:
        self._call_log.append(url)
        route = self._routes.get(url)
        if route is None:
            return HttpResponse(404, "Not Found", io.BytesIO(b""))
        if isinstance(route, OSError):
            raise route
        status, reason, body = route
        return HttpResponse(status, reason, io.BytesIO(body))


class FakeExtractor(ArchiveExtractor):
    """Write a fixed payload instead of decoding an archive.

    Args:
        payload: Bytes written to the target (``b""`` simulates an empty entry).
        error: If set, raised as ``ValueError`` instead of writing.
    """

    def __init__(self, payload: bytes = b"\x7fELF fake binary", error: str | None = None):
        self.payload = payload
        self.error = error
        self.calls = 0

    def extract_single(self, source: IO[bytes], target: BinaryIO) -> int:
        self.calls += 1
        source.read()
        if self.error:
            raise ValueError(self.error)
        target.write(self.payload)
        return len(self.payload)


class FakeLocator(ExecutableLocator):
    """Pretend a fixed set of executables is installed."""

    def __init__(self, installed: set[str] | None = None):
        self.installed = set(installed or ())
        self.lookups: list[str] = []

    def which(self, name: str, env: ExecutionEnvironment) -> str | None:
        self.lookups.append(name)
        if name in self.installed:
            return f"/fake/bin/{name}"
        return None


class FakeProcessRunner(ProcessRunner):
    """Record commands and answer them from a response table.

    Responses are keyed by the space-joined command line. Anything not
    configured succeeds with empty output.
    """

    def __init__(self) -> None:
        self._responses: dict[str, ProcessResult] = {}
        self._call_log: list[tuple[list[str], Path | None, ExecutionEnvironment]] = []

    @property
    def commands(self) -> list[str]:
        """Command lines run so far, space-joined, in order."""
        return [" ".join(command) for command, _, _ in self._call_log]

    @property
    def call_log(self) -> list[tuple[list[str], Path | None, ExecutionEnvironment]]:
        """``(command, cwd, env)`` for every call, in order."""
        return self._call_log

    def set_response(self, command_line: str, result: ProcessResult) -> None:
        self._responses[command_line] = result

    def set_failure(self, command_line: str, exit_code: int = 1, stderr: str = "mock failure") -> None:
        self._responses[command_line] = ProcessResult.failure(
            command_line.split(), exit_code=exit_code, stderr=stderr
        )

    def run(
        self,
        command: list[str],
        *,
        env: ExecutionEnvironment,
        cwd: Path | None = None,
    ) -> ProcessResult:
        self._call_log.append((list(command), cwd, env))
        line = " ".join(command)
        if line in self._responses:
            return self._responses[line].model_copy(
                update={"command": list(command), "cwd": str(cwd) if cwd else None}
            )
        return ProcessResult.success(list(command), cwd=str(cwd) if cwd else None)

    def reset(self) -> None:
        """Clear call log and configured responses."""
        self._call_log.clear()
        self._responses.clear()
