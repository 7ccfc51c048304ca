"""
Configuration loader — reads aftman-bootstrap.yml into a typed config.

The file is optional: with none present, every setting takes its
default. When present, it is parsed with PyYAML and validated against
the pydantic schema below.

The manager itself and its release feed are not configurable.
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from aftman_bootstrap import __version__
from aftman_bootstrap.core.constants import (
    DEFAULT_HTTP_TIMEOUT,
    DEFAULT_PROCESS_TIMEOUT,
    DEFAULT_TOOL_NAME,
    DEFAULT_TOOL_REPO,
)

logger = logging.getLogger(__name__)

# Default config filename
CONFIG_FILE = "aftman-bootstrap.yml"


class ConfigError(Exception):
    """Raised when the configuration file is invalid or unreadable."""


class ToolConfig(BaseModel):
    """The tool Aftman is asked to provide."""

    model_config = ConfigDict(extra="forbid")

    name: str = DEFAULT_TOOL_NAME
    repo: str = Field(default=DEFAULT_TOOL_REPO, pattern=r"^[\w.-]+/[\w.-]+$")


class BootstrapConfig(BaseModel):
    """Root configuration — loaded from aftman-bootstrap.yml."""

    model_config = ConfigDict(extra="forbid")

    tool: ToolConfig = Field(default_factory=ToolConfig)
    http_timeout: float = Field(default=DEFAULT_HTTP_TIMEOUT, gt=0)
    process_timeout: float = Field(default=DEFAULT_PROCESS_TIMEOUT, gt=0)
    user_agent: str = f"aftman-bootstrap/{__version__}"


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Search for aftman-bootstrap.yml starting from the given directory, walking up.

    Args:
        start_dir: Directory to start searching from (default: cwd).

    Returns:
        Path to the config file, or None if not found.
    """
    current = (start_dir or Path.cwd()).resolve()

    for _ in range(20):  # safety limit
        candidate = current / CONFIG_FILE
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break  # filesystem root
        current = parent

    return None


def load_config(
    path: Path | None = None,
    *,
    search: bool = True,
    start_dir: Path | None = None,
) -> BootstrapConfig:
    """Load and validate the bootstrap configuration.

    Args:
        path: Explicit config path. If None and ``search`` is set,
            searches upward from ``start_dir``.
        search: Whether to look for a config file when ``path`` is None.
        start_dir: Where the upward search begins (default: cwd).

    Returns:
        Validated ``BootstrapConfig`` (all defaults when no file exists).

    Raises:
        ConfigError: If an explicit file is missing, or any file is invalid.
    """
    if path is None:
        path = find_config_file(start_dir) if search else None
        if path is None:
            logger.debug("No %s found; using defaults", CONFIG_FILE)
            return BootstrapConfig()

    if not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    logger.debug("Loading config from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        return BootstrapConfig()

    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    try:
        config = BootstrapConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration in {path}: {e}") from e

    logger.info("Loaded config from %s (tool %s)", path, config.tool.repo)
    return config
