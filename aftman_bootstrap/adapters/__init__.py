"""Adapters — bindings for the network, archives, processes and the search path.

Public re-exports for convenient access.
"""

from aftman_bootstrap.adapters.archive import ZipSingleEntryExtractor
from aftman_bootstrap.adapters.base import (
    ArchiveExtractor,
    ExecutableLocator,
    HttpClient,
    HttpResponse,
    ProcessRunner,
)
from aftman_bootstrap.adapters.http import UrllibHttpClient
from aftman_bootstrap.adapters.process import ShutilLocator, SubprocessRunner

__all__ = [
    "ArchiveExtractor",
    "ExecutableLocator",
    "HttpClient",
    "HttpResponse",
    "ProcessRunner",
    "ShutilLocator",
    "SubprocessRunner",
    "UrllibHttpClient",
    "ZipSingleEntryExtractor",
]
