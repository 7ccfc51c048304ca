"""
Release asset locator — fetch the latest release and pick our asset.

Two separate outcomes are kept apart on purpose: failing to get the
release at all raises ``ReleaseFetchFailed``, while a release with no
asset for this platform returns ``None`` and leaves escalation to the
caller.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from http.client import HTTPException

from pydantic import ValidationError

from aftman_bootstrap.adapters.base import HttpClient
from aftman_bootstrap.core.constants import RELEASE_FEED_URL
from aftman_bootstrap.core.errors import ReleaseFetchFailed
from aftman_bootstrap.core.models.release import Asset, ReleaseMetadata
from aftman_bootstrap.core.services.platform_resolver import PlatformKey

logger = logging.getLogger(__name__)

_ASSET_NAME = re.compile(r"-(?P<platform>\w+)-(?P<arch>\w+)\.zip$")


def fetch_latest_release(http: HttpClient, url: str = RELEASE_FEED_URL) -> ReleaseMetadata:
    """GET the latest-release document and parse it.

    Raises:
        ReleaseFetchFailed: On transport errors, non-2xx statuses, and
            empty, ``null`` or malformed bodies.
    """
    logger.info("Fetching latest release metadata from %s", url)
    try:
        with http.get(url) as resp:
            if not resp.ok:
                raise ReleaseFetchFailed(
                    "Could not fetch latest release from GitHub "
                    f"({resp.status} {resp.reason})",
                    status=resp.status,
                    reason=resp.reason,
                )
            payload = resp.json()
    except ValueError as e:
        raise ReleaseFetchFailed(f"Latest release response was not valid JSON: {e}") from e
    except (OSError, HTTPException) as e:
        raise ReleaseFetchFailed(
            f"Could not fetch latest release from GitHub: {e}", reason=str(e)
        ) from e

    if not payload:
        raise ReleaseFetchFailed("Latest release of Aftman was not found")

    try:
        release = ReleaseMetadata.model_validate(payload)
    except ValidationError as e:
        raise ReleaseFetchFailed(f"Latest release metadata is malformed: {e}") from e

    logger.info("Latest release: %s (%d assets)", release.label, len(release.assets))
    return release


def find_compatible_asset(assets: Iterable[Asset], key: PlatformKey) -> Asset | None:
    """Return the first asset built for ``key``, in listed order.

    Names that don't follow the ``-<platform>-<arch>.zip`` convention
    (source tarballs, checksums) are skipped.
    """
    for asset in assets:
        match = _ASSET_NAME.search(asset.name)
        if not match:
            logger.debug("Skipping asset %s (no platform suffix)", asset.name)
            continue
        if match["platform"] == key.platform and match["arch"] == key.arch:
            logger.info("Selected release asset %s", asset.name)
            return asset

    logger.warning("No release asset for %s-%s", key.platform, key.arch)
    return None
