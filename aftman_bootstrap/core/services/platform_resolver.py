"""
Platform resolver — map the host to the release naming vocabulary.

Release assets are named ``<tool>-<version>-<platform>-<arch>.zip``
with platform in {macos, linux, windows} and arch in {aarch64, x86_64}.
Runs before any network activity, so an unsupported host fails fast.
"""

from __future__ import annotations

import logging
import platform as _platform
from dataclasses import dataclass

from aftman_bootstrap.core.errors import UnknownPlatform

logger = logging.getLogger(__name__)

PLATFORMS: dict[str, str] = {
    "darwin": "macos",
    "linux": "linux",
    "windows": "windows",
    "win32": "windows",
}

ARCHES: dict[str, str] = {
    "arm64": "aarch64",
    "aarch64": "aarch64",
    "x86_64": "x86_64",
    "amd64": "x86_64",
    "x64": "x86_64",
}


@dataclass(frozen=True)
class PlatformKey:
    """The ``(platform, arch)`` pair a release asset is matched against."""

    platform: str
    arch: str

    @property
    def is_windows(self) -> bool:
        return self.platform == "windows"

    @property
    def asset_suffix(self) -> str:
        return f"-{self.platform}-{self.arch}.zip"

    def to_dict(self) -> dict[str, str]:
        return {"platform": self.platform, "arch": self.arch}


def resolve_platform(system: str | None = None, machine: str | None = None) -> PlatformKey:
    """Resolve the host (or the given identifiers) to a ``PlatformKey``.

    Args:
        system: Raw OS identifier (default: ``platform.system()``).
        machine: Raw CPU architecture (default: ``platform.machine()``).

    Raises:
        UnknownPlatform: If either identifier is not in the mapping.
    """
    system = _platform.system() if system is None else system
    machine = _platform.machine() if machine is None else machine

    platform_token = PLATFORMS.get(system.lower())
    arch_token = ARCHES.get(machine.lower())

    if not platform_token or not arch_token:
        raise UnknownPlatform(system, machine)

    key = PlatformKey(platform_token, arch_token)
    logger.debug("Resolved platform %s/%s -> %s-%s", system, machine, key.platform, key.arch)
    return key
