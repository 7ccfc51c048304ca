"""
Logging configuration — one setup call per process.

Called once by the CLI entrypoint. Every module that does
``logger = logging.getLogger(__name__)`` inherits this config.

Console level, in precedence order:
    --debug / --verbose / --quiet  >  AFTBOOT_LOG_LEVEL  >  WARNING

AFTBOOT_LOG_FILE adds a file handler, at AFTBOOT_LOG_FILE_LEVEL if set.
"""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Mapping

LOG_LEVEL_ENV = "AFTBOOT_LOG_LEVEL"
LOG_FILE_ENV = "AFTBOOT_LOG_FILE"
LOG_FILE_LEVEL_ENV = "AFTBOOT_LOG_FILE_LEVEL"

# Console format per level: step messages stay bare unless asked for detail
_CONSOLE_FORMATS: dict[int, tuple[str, str | None]] = {
    logging.DEBUG: ("%(asctime)s %(levelname)-5s %(name)s:%(lineno)d %(message)s", "%H:%M:%S"),
    logging.INFO: ("%(asctime)s %(message)s", "%H:%M:%S"),
}
_FILE_FORMAT = ("%(asctime)s %(levelname)-5s %(name)s %(message)s", "%Y-%m-%d %H:%M:%S")


def resolve_level(
    *,
    debug: bool = False,
    verbose: bool = False,
    quiet: bool = False,
    environ: Mapping[str, str] | None = None,
) -> str:
    """Pick the console level from CLI flags, then the environment."""
    if debug:
        return "DEBUG"
    if verbose:
        return "INFO"
    if quiet:
        return "ERROR"
    env = os.environ if environ is None else environ
    return env.get(LOG_LEVEL_ENV, "WARNING")


def setup_logging(level: str = "WARNING", environ: Mapping[str, str] | None = None) -> None:
    """Install a stderr handler, plus a file handler when AFTBOOT_LOG_FILE is set.

    The root logger sits at the lower of the two handler levels so a
    DEBUG log file still fills up behind a quiet console.
    """
    env = os.environ if environ is None else environ
    console_level = _parse_level(level)

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(_console_handler(console_level))
    root_level = console_level

    log_file = env.get(LOG_FILE_ENV)
    if log_file:
        file_level = _parse_level(env.get(LOG_FILE_LEVEL_ENV) or level)
        root.addHandler(_file_handler(log_file, file_level))
        root_level = min(root_level, file_level)

    root.setLevel(root_level)


def _console_handler(level: int) -> logging.Handler:
    key = logging.DEBUG if level <= logging.DEBUG else level
    fmt, datefmt = _CONSOLE_FORMATS.get(key, ("%(message)s", None))
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt, datefmt=datefmt))
    return handler


def _file_handler(path: str, level: int) -> logging.Handler:
    fmt, datefmt = _FILE_FORMAT
    handler = logging.FileHandler(path, encoding="utf-8")
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt, datefmt=datefmt))
    return handler


def _parse_level(level: str | None) -> int:
    """Level name to its numeric constant; unknown names mean WARNING."""
    numeric = getattr(logging, (level or "").upper(), None)
    return numeric if isinstance(numeric, int) else logging.WARNING
