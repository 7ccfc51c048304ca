"""
Inspect use cases — show what the pipeline would resolve, without installing.
"""

from __future__ import annotations

from dataclasses import dataclass

from aftman_bootstrap.adapters.base import HttpClient
from aftman_bootstrap.adapters.http import UrllibHttpClient
from aftman_bootstrap.core.config.loader import BootstrapConfig
from aftman_bootstrap.core.errors import BootstrapError, NoCompatibleAsset
from aftman_bootstrap.core.models.release import Asset, ReleaseMetadata
from aftman_bootstrap.core.services.platform_resolver import PlatformKey, resolve_platform
from aftman_bootstrap.core.services.release_locator import (
    fetch_latest_release,
    find_compatible_asset,
)


@dataclass
class ReleaseReport:
    """The host's platform key, the latest release and the chosen asset."""

    key: PlatformKey | None = None
    release: ReleaseMetadata | None = None
    asset: Asset | None = None
    error: BootstrapError | None = None

    def to_dict(self) -> dict:
        result: dict = {}
        if self.key:
            result["platform"] = self.key.to_dict()
        if self.release:
            result["release"] = {
                "name": self.release.name,
                "tag_name": self.release.tag_name,
                "assets": [a.name for a in self.release.assets],
            }
        if self.asset:
            result["asset"] = {
                "name": self.asset.name,
                "url": self.asset.browser_download_url,
                "size": self.asset.size,
            }
        if self.error:
            result["error"] = self.error.to_dict()
        return result


def inspect_platform(system: str | None = None, machine: str | None = None) -> ReleaseReport:
    """Resolve the platform key only. No network activity."""
    try:
        return ReleaseReport(key=resolve_platform(system, machine))
    except BootstrapError as e:
        return ReleaseReport(error=e)


def inspect_release(
    config: BootstrapConfig | None = None,
    http: HttpClient | None = None,
    system: str | None = None,
    machine: str | None = None,
) -> ReleaseReport:
    """Resolve the platform, fetch the latest release and pick the asset."""
    config = config or BootstrapConfig()
    http = http or UrllibHttpClient(timeout=config.http_timeout, user_agent=config.user_agent)

    report = inspect_platform(system, machine)
    if report.error:
        return report
    assert report.key is not None

    try:
        report.release = fetch_latest_release(http)
    except BootstrapError as e:
        report.error = e
        return report

    report.asset = find_compatible_asset(report.release.assets, report.key)
    if report.asset is None:
        report.error = NoCompatibleAsset(
            report.key.platform, report.key.arch, release=report.release.label
        )
    return report
