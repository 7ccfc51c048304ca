"""
Adapter base — the contract between the pipeline and the outside world.

The provisioning services never talk to the network, the archive
decoder, the process table or the search path directly. They go through
the four interfaces below, so the whole state machine can run against
fakes (see ``adapters.mock``) without touching a real network,
filesystem or binary.

To add a new implementation:
    1. Subclass the relevant interface
    2. Implement its abstract methods
    3. Pass it to ``Bootstrapper`` (or ``build_bootstrapper``)
"""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from pathlib import Path
from typing import IO, Any, BinaryIO

from aftman_bootstrap.core.models.environment import ExecutionEnvironment
from aftman_bootstrap.core.models.process import ProcessResult


class HttpResponse:
    """A response whose body has not been read yet.

    Usable as a context manager; the body stream is closed on exit.
    """

    def __init__(self, status: int, reason: str, body: IO[bytes] | None):
        self.status = status
        self.reason = reason
        self._body = body

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300

    @property
    def body(self) -> IO[bytes] | None:
        """The raw body stream (``None`` when the server sent none)."""
        return self._body

    def read(self, size: int = -1) -> bytes:
        if self._body is None:
            return b""
        return self._body.read(size)

    def json(self) -> Any:
        """Decode the whole body as JSON. Empty bodies decode to ``None``."""
        raw = self.read()
        if not raw.strip():
            return None
        return json.loads(raw)

    def close(self) -> None:
        if self._body is not None:
            self._body.close()

    def __enter__(self) -> HttpResponse:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"<HttpResponse status={self.status} reason={self.reason!r}>"


class HttpClient(ABC):
    """Issues HTTP GET requests.

    Non-2xx statuses come back as responses, not exceptions. Transport
    problems (DNS, refused connection, TLS) raise ``OSError``.
    """

    @abstractmethod
    def get(self, url: str) -> HttpResponse:
        """Open ``url`` and return the response without reading its body."""


class ArchiveExtractor(ABC):
    """Decodes a single-entry archive stream."""

    @abstractmethod
    def extract_single(self, source: IO[bytes], target: BinaryIO) -> int:
        """Write the archive's one file into ``target``.

        Returns:
            The number of bytes written (0 for an empty entry).

        Raises:
            ValueError: If the stream is not a readable archive or holds no file.
        """


class ProcessRunner(ABC):
    """Runs child processes.

    MUST never raise for a failing command. Non-zero exits, missing
    executables and timeouts are captured in the ``ProcessResult``.
    """

    @abstractmethod
    def run(
        self,
        command: list[str],
        *,
        env: ExecutionEnvironment,
        cwd: Path | None = None,
    ) -> ProcessResult:
        """Run ``command`` to completion with ``env`` as its environment."""


class ExecutableLocator(ABC):
    """Resolves command names against a search path."""

    @abstractmethod
    def which(self, name: str, env: ExecutionEnvironment) -> str | None:
        """Full path of ``name`` on ``env``'s PATH, or ``None``."""
