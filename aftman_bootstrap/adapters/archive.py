"""
Archive adapter — pull the one executable out of a release zip.

Release zips hold exactly one file. The zip central directory sits at
the end of the archive, so the incoming stream is spooled (in memory up
to ``spool_limit`` bytes, on disk beyond that) before the entry is
decoded straight into the caller's file handle.
"""

from __future__ import annotations

import logging
import shutil
import tempfile
import zipfile
import zlib
from typing import IO, BinaryIO

from aftman_bootstrap.adapters.base import ArchiveExtractor
from aftman_bootstrap.core.constants import DOWNLOAD_CHUNK_SIZE

logger = logging.getLogger(__name__)

_SPOOL_LIMIT = 32 * 1024 * 1024  # 32 MiB


class ZipSingleEntryExtractor(ArchiveExtractor):
    """Extract the first file entry of a zip stream."""

    def __init__(self, spool_limit: int = _SPOOL_LIMIT):
        self.spool_limit = spool_limit

    def extract_single(self, source: IO[bytes], target: BinaryIO) -> int:
        with tempfile.SpooledTemporaryFile(max_size=self.spool_limit) as spool:
            shutil.copyfileobj(source, spool, DOWNLOAD_CHUNK_SIZE)
            spool.seek(0)
            try:
                with zipfile.ZipFile(spool) as archive:
                    member = _first_file(archive)
                    if member is None:
                        raise ValueError("archive contains no file entry")
                    logger.debug(
                        "Extracting %s (%d bytes compressed)",
                        member.filename,
                        member.compress_size,
                    )
                    with archive.open(member) as entry:
                        return _copy_counting(entry, target)
            except (zipfile.BadZipFile, zlib.error, EOFError) as e:
                raise ValueError(f"not a valid zip archive: {e}") from e
            except RuntimeError as e:
                # Encrypted entries; NotImplementedError for unknown compression
                raise ValueError(f"unreadable zip entry: {e}") from e


def _first_file(archive: zipfile.ZipFile) -> zipfile.ZipInfo | None:
    for member in archive.infolist():
        if not member.is_dir():
            return member
    return None


def _copy_counting(source: IO[bytes], target: BinaryIO) -> int:
    written = 0
    while True:
        chunk = source.read(DOWNLOAD_CHUNK_SIZE)
        if not chunk:
            break
        target.write(chunk)
        written += len(chunk)
    return written
