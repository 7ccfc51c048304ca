"""
Provision use case — build real adapters from config and run the pipeline.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path

from aftman_bootstrap.adapters.archive import ZipSingleEntryExtractor
from aftman_bootstrap.adapters.http import UrllibHttpClient
from aftman_bootstrap.adapters.process import ShutilLocator, SubprocessRunner
from aftman_bootstrap.core.config.loader import BootstrapConfig
from aftman_bootstrap.core.models.environment import ExecutionEnvironment
from aftman_bootstrap.core.services.bootstrapper import Bootstrapper, ProvisionResult

logger = logging.getLogger(__name__)


def build_bootstrapper(
    config: BootstrapConfig | None = None,
    notify: Callable[[str], None] | None = None,
) -> Bootstrapper:
    """Wire a ``Bootstrapper`` to the real network, archive and process adapters."""
    config = config or BootstrapConfig()
    locator = ShutilLocator()
    return Bootstrapper(
        http=UrllibHttpClient(timeout=config.http_timeout, user_agent=config.user_agent),
        extractor=ZipSingleEntryExtractor(),
        runner=SubprocessRunner(timeout=config.process_timeout, locator=locator),
        locator=locator,
        tool_name=config.tool.name,
        tool_repo=config.tool.repo,
        notify=notify,
    )


def run_provision(
    folder: Path,
    config: BootstrapConfig | None = None,
    notify: Callable[[str], None] | None = None,
    env: ExecutionEnvironment | None = None,
) -> ProvisionResult:
    """Make the configured tool available in ``folder``.

    Args:
        folder: Target project directory (must exist).
        config: Loaded configuration (default: all defaults).
        notify: Receives the one-off confirmation after a fresh install.
        env: Starting execution environment (default: snapshot of ``os.environ``).

    Returns:
        ProvisionResult — check ``.ok``; failures carry a ``BootstrapError``.
    """
    bootstrapper = build_bootstrapper(config, notify=notify)
    return bootstrapper.provision(folder.resolve(), env=env)
