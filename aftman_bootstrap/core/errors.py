"""
Provisioning failures — one exception type per way the pipeline can stop.

Every error carries a ``context`` dict with the values a caller needs to
show an actionable message (platform/arch, HTTP status, exit code).
None of these are retried: each depends on external state that a local
retry cannot fix.
"""

from __future__ import annotations

from typing import Any


class BootstrapError(Exception):
    """Base class for every provisioning failure."""

    kind = "bootstrap_error"

    def __init__(self, message: str, **context: Any):
        super().__init__(message)
        self.message = message
        self.context = context

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind, "message": self.message, **self.context}


class UnknownPlatform(BootstrapError):
    """The host OS or CPU architecture has no release counterpart."""

    kind = "unknown_platform"

    def __init__(self, system: str, machine: str):
        super().__init__(
            "Your current platform is unknown. "
            f"Platform: {system}, Architecture: {machine}",
            system=system,
            machine=machine,
        )


class ReleaseFetchFailed(BootstrapError):
    """Latest-release metadata could not be retrieved or was empty."""

    kind = "release_fetch_failed"

    def __init__(self, message: str, status: int | None = None, reason: str = ""):
        super().__init__(message, status=status, reason=reason)


class NoCompatibleAsset(BootstrapError):
    """The latest release publishes nothing for this platform/arch pair."""

    kind = "no_compatible_asset"

    def __init__(self, platform: str, arch: str, release: str = ""):
        super().__init__(
            "We couldn't find a compatible Aftman release for your "
            f"platform/architecture: {arch} {platform}",
            platform=platform,
            arch=arch,
            release=release,
        )


class AssetDownloadFailed(BootstrapError):
    """The release asset download returned a non-success response."""

    kind = "asset_download_failed"

    def __init__(self, url: str, status: int | None = None, reason: str = ""):
        detail = f"{status} {reason}".strip() if status is not None else reason
        super().__init__(
            f"Response from GitHub binary download not ok: {detail}",
            url=url,
            status=status,
            reason=reason,
        )


class EmptyExtraction(BootstrapError):
    """The archive yielded no bytes — malformed or empty, not a transport problem."""

    kind = "empty_extraction"

    def __init__(self, path: str, reason: str = ""):
        message = "Could not extract the aftman executable from the zip release!"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message, path=path, reason=reason)


class ChildProcessFailed(BootstrapError):
    """A manager or tool subcommand exited non-zero (or could not start)."""

    kind = "child_process_failed"

    def __init__(
        self,
        command: list[str],
        exit_code: int,
        stderr: str = "",
        cwd: str | None = None,
    ):
        shown = " ".join(command)
        message = f"Command '{shown}' failed (exit {exit_code})"
        if stderr:
            message = f"{message}: {stderr}"
        super().__init__(
            message,
            command=list(command),
            exit_code=exit_code,
            stderr=stderr,
            cwd=cwd,
        )
