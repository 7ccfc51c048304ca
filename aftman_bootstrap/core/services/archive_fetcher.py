"""
Archive fetcher — download a release zip and extract its executable.

The response body is streamed through the archive extractor straight
into a fixed temp path (``<tmp>/aftman`` or ``<tmp>/aftman.exe``).
The file handle is scoped: it is closed on every exit path before the
written byte count is inspected.

The temp path is not randomized, so two concurrent runs on one host
would race on it. Callers serialize.
"""

from __future__ import annotations

import logging
import os
import tempfile
from http.client import HTTPException
from pathlib import Path

from aftman_bootstrap.adapters.base import ArchiveExtractor, HttpClient
from aftman_bootstrap.core.constants import MANAGER_NAME
from aftman_bootstrap.core.errors import AssetDownloadFailed, EmptyExtraction

logger = logging.getLogger(__name__)


def temp_binary_path(windows: bool, temp_dir: Path | None = None) -> Path:
    """Where the downloaded manager binary is written before self-install."""
    base = temp_dir if temp_dir is not None else Path(tempfile.gettempdir())
    return base / (MANAGER_NAME + (".exe" if windows else ""))


def fetch_executable(
    http: HttpClient,
    extractor: ArchiveExtractor,
    url: str,
    *,
    windows: bool,
    temp_dir: Path | None = None,
) -> Path:
    """Download the archive at ``url`` and extract its single file.

    Args:
        http: Client used for the GET.
        extractor: Single-entry archive decoder.
        url: The asset's ``browser_download_url``.
        windows: Whether the host is Windows (``.exe`` suffix, no chmod).
        temp_dir: Override for the system temp directory.

    Returns:
        Path of the extracted, executable binary.

    Raises:
        AssetDownloadFailed: Transport error or non-2xx response.
        EmptyExtraction: The archive was unreadable or yielded zero bytes.
    """
    target = temp_binary_path(windows, temp_dir)
    logger.info("Downloading %s", url)

    try:
        resp = http.get(url)
    except (OSError, HTTPException) as e:
        raise AssetDownloadFailed(url, reason=str(e)) from e

    with resp:
        if not resp.ok or resp.body is None:
            raise AssetDownloadFailed(url, status=resp.status, reason=resp.reason)

        logger.debug("Extracting archive into %s", target)
        try:
            with open(target, "wb") as handle:
                written = extractor.extract_single(resp.body, handle)
        except ValueError as e:
            raise EmptyExtraction(str(target), reason=str(e)) from e
        except (OSError, HTTPException) as e:
            # A dropped connection mid-stream is still a download failure
            raise AssetDownloadFailed(url, status=resp.status, reason=str(e)) from e

    if written == 0:
        logger.error("Extraction of %s produced no bytes", url)
        raise EmptyExtraction(str(target))

    if not windows:
        os.chmod(target, 0o755)

    logger.info("Extracted %d bytes to %s", written, target)
    return target
