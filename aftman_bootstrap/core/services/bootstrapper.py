"""
Bootstrapper — drive Aftman from "maybe absent" to "tool available".

States:
    MANAGER_ABSENT     → aftman is not on the search path
    MANAGER_INSTALLING → release binary downloaded, not yet self-installed
    MANAGER_INSTALLED  → aftman resolvable (already present or just installed)
    TOOL_TRUSTED       → ``aftman trust <repo>`` succeeded in the folder
    CONFIG_READY       → aftman.toml exists and declared tools are synced
    TOOL_ENSURED       → the managed tool is declared and resolvable (success)

Transitions:
    *                  → MANAGER_ABSENT | MANAGER_INSTALLED   (presence check)
    MANAGER_ABSENT     → MANAGER_INSTALLING   resolve platform, locate asset, download
    MANAGER_INSTALLING → MANAGER_INSTALLED    self-install, extend PATH
    MANAGER_INSTALLED  → TOOL_TRUSTED         trust (always re-run)
    TOOL_TRUSTED       → CONFIG_READY         install --skip-untrusted | init
    CONFIG_READY       → TOOL_ENSURED         version probe / add

Each transition takes a ``Progress`` and returns a ``StepOutcome``: the
next progress, or the same progress tagged with a ``BootstrapError``.
Nothing is retried and nothing after a failure runs.
"""

from __future__ import annotations

import functools
import logging
from collections.abc import Callable
from dataclasses import dataclass, field, replace
from enum import StrEnum
from pathlib import Path
from typing import Any

from aftman_bootstrap.adapters.base import (
    ArchiveExtractor,
    ExecutableLocator,
    HttpClient,
    ProcessRunner,
)
from aftman_bootstrap.core.constants import (
    DEFAULT_TOOL_NAME,
    DEFAULT_TOOL_REPO,
    MANAGER_CONFIG_FILE,
    MANAGER_NAME,
    RELEASE_FEED_URL,
    manager_bin_dir,
)
from aftman_bootstrap.core.errors import (
    BootstrapError,
    ChildProcessFailed,
    NoCompatibleAsset,
)
from aftman_bootstrap.core.models.environment import ExecutionEnvironment
from aftman_bootstrap.core.models.process import ProcessResult
from aftman_bootstrap.core.services.archive_fetcher import fetch_executable
from aftman_bootstrap.core.services.platform_resolver import resolve_platform
from aftman_bootstrap.core.services.release_locator import (
    fetch_latest_release,
    find_compatible_asset,
)

logger = logging.getLogger(__name__)

INSTALLED_MESSAGE = (
    "Successfully installed Aftman on your system. "
    "It has been added to your system PATH, and is usable from the command line if needed."
)


class BootstrapState(StrEnum):
    """Where the pipeline is."""

    MANAGER_ABSENT = "manager_absent"
    MANAGER_INSTALLING = "manager_installing"
    MANAGER_INSTALLED = "manager_installed"
    TOOL_TRUSTED = "tool_trusted"
    CONFIG_READY = "config_ready"
    TOOL_ENSURED = "tool_ensured"


@dataclass(frozen=True)
class Progress:
    """Everything one provisioning run has established so far."""

    folder: Path
    state: BootstrapState
    env: ExecutionEnvironment
    fresh_install: bool = False
    binary: Path | None = None
    config_existed: bool | None = None
    commands: tuple[ProcessResult, ...] = ()


@dataclass(frozen=True)
class StepOutcome:
    """Result of one transition: advanced progress, or a tagged failure."""

    progress: Progress
    error: BootstrapError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def advance(cls, progress: Progress, state: BootstrapState, **changes: Any) -> StepOutcome:
        logger.info("%s -> %s", progress.state, state)
        return cls(progress=replace(progress, state=state, **changes))

    @classmethod
    def fail(cls, progress: Progress, error: BootstrapError) -> StepOutcome:
        logger.error("Provisioning failed in %s: %s", progress.state, error)
        return cls(progress=progress, error=error)


@dataclass
class ProvisionResult:
    """Final report of a provisioning run."""

    folder: Path
    state: BootstrapState
    env: ExecutionEnvironment
    fresh_install: bool = False
    commands: list[ProcessResult] = field(default_factory=list)
    error: BootstrapError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.state == BootstrapState.TOOL_ENSURED

    @classmethod
    def from_outcome(cls, outcome: StepOutcome) -> ProvisionResult:
        progress = outcome.progress
        return cls(
            folder=progress.folder,
            state=progress.state,
            env=progress.env,
            fresh_install=progress.fresh_install,
            commands=list(progress.commands),
            error=outcome.error,
        )

    def raise_for_error(self) -> None:
        """Re-raise the failure, for callers that prefer exceptions."""
        if self.error is not None:
            raise self.error

    def to_dict(self) -> dict:
        """Convert to a JSON-serializable dictionary."""
        result: dict = {
            "ok": self.ok,
            "folder": str(self.folder),
            "state": str(self.state),
            "fresh_install": self.fresh_install,
            "commands": [
                {"command": c.display, "cwd": c.cwd, "exit_code": c.exit_code}
                for c in self.commands
            ],
        }
        if self.error is not None:
            result["error"] = self.error.to_dict()
        return result


_Transition = Callable[["Bootstrapper", Progress], StepOutcome]


def _transition(expected: BootstrapState) -> Callable[[_Transition], _Transition]:
    """Guard a transition's source state and turn raised errors into outcomes."""

    def decorator(func: _Transition) -> _Transition:
        @functools.wraps(func)
        def wrapper(self: Bootstrapper, progress: Progress) -> StepOutcome:
            if progress.state != expected:
                raise ValueError(
                    f"{func.__name__} expects state {expected}, got {progress.state}"
                )
            try:
                return func(self, progress)
            except BootstrapError as e:
                return StepOutcome.fail(progress, e)

        return wrapper

    return decorator


def _notify_via_log(message: str) -> None:
    logger.info(message)


class Bootstrapper:
    """Provision Aftman and a managed tool in a project folder.

    All side effects go through the injected collaborators, so the
    state machine runs unchanged against the fakes in ``adapters.mock``.

    Args:
        http: Client for the release feed and asset download.
        extractor: Single-entry archive decoder.
        runner: Child-process runner.
        locator: Search-path lookup for the presence check.
        tool_name: Executable name of the managed tool (version probe).
        tool_repo: ``owner/repo`` passed to ``aftman trust`` and ``aftman add``.
        notify: Called once with a confirmation after a fresh install.
        home: Home directory used for the manager's bin dir.
        temp_dir: Where the downloaded binary is written.
        system: OS identifier override for platform resolution.
        machine: CPU architecture override for platform resolution.
        feed_url: Latest-release document URL.
    """

    def __init__(
        self,
        *,
        http: HttpClient,
        extractor: ArchiveExtractor,
        runner: ProcessRunner,
        locator: ExecutableLocator,
        tool_name: str = DEFAULT_TOOL_NAME,
        tool_repo: str = DEFAULT_TOOL_REPO,
        notify: Callable[[str], None] | None = None,
        home: Path | None = None,
        temp_dir: Path | None = None,
        system: str | None = None,
        machine: str | None = None,
        feed_url: str = RELEASE_FEED_URL,
    ):
        self.http = http
        self.extractor = extractor
        self.runner = runner
        self.locator = locator
        self.tool_name = tool_name
        self.tool_repo = tool_repo
        self.notify = notify or _notify_via_log
        self.home = home if home is not None else Path.home()
        self.temp_dir = temp_dir
        self.system = system
        self.machine = machine
        self.feed_url = feed_url

        self._transitions: dict[BootstrapState, _Transition] = {
            BootstrapState.MANAGER_ABSENT: Bootstrapper.fetch_manager,
            BootstrapState.MANAGER_INSTALLING: Bootstrapper.self_install,
            BootstrapState.MANAGER_INSTALLED: Bootstrapper.trust_tool,
            BootstrapState.TOOL_TRUSTED: Bootstrapper.prepare_config,
            BootstrapState.CONFIG_READY: Bootstrapper.ensure_tool,
        }

    # ── Entry ───────────────────────────────────────────────────

    def provision(
        self,
        folder: Path | str,
        env: ExecutionEnvironment | None = None,
    ) -> ProvisionResult:
        """Run every step until the tool is ensured or a step fails."""
        folder = Path(folder)
        env = env if env is not None else ExecutionEnvironment.from_os()
        logger.info("Provisioning %s in %s", self.tool_name, folder)

        outcome = self.check_presence(folder, env)
        while outcome.ok and outcome.progress.state != BootstrapState.TOOL_ENSURED:
            outcome = self.transition(outcome.progress)

        result = ProvisionResult.from_outcome(outcome)
        if result.ok:
            logger.info("%s is available in %s", self.tool_name, folder)
        return result

    def transition(self, progress: Progress) -> StepOutcome:
        """Apply the single transition leaving ``progress.state``."""
        step = self._transitions.get(progress.state)
        if step is None:
            raise ValueError(f"No transition out of terminal state {progress.state}")
        return step(self, progress)

    # ── Transitions ─────────────────────────────────────────────

    def check_presence(self, folder: Path, env: ExecutionEnvironment) -> StepOutcome:
        """Start a run: is the manager already on the search path?"""
        found = self.locator.which(MANAGER_NAME, env)
        if found:
            logger.info("%s already installed at %s", MANAGER_NAME, found)
            state = BootstrapState.MANAGER_INSTALLED
        else:
            logger.info("%s not installed", MANAGER_NAME)
            state = BootstrapState.MANAGER_ABSENT
        return StepOutcome(progress=Progress(folder=folder, state=state, env=env))

    @_transition(BootstrapState.MANAGER_ABSENT)
    def fetch_manager(self, progress: Progress) -> StepOutcome:
        key = resolve_platform(self.system, self.machine)
        release = fetch_latest_release(self.http, self.feed_url)
        asset = find_compatible_asset(release.assets, key)
        if asset is None:
            raise NoCompatibleAsset(key.platform, key.arch, release=release.label)

        binary = fetch_executable(
            self.http,
            self.extractor,
            asset.browser_download_url,
            windows=key.is_windows,
            temp_dir=self.temp_dir,
        )
        return StepOutcome.advance(progress, BootstrapState.MANAGER_INSTALLING, binary=binary)

    @_transition(BootstrapState.MANAGER_INSTALLING)
    def self_install(self, progress: Progress) -> StepOutcome:
        assert progress.binary is not None  # set by fetch_manager
        progress, result = self._invoke(progress, [str(progress.binary), "self-install"])
        if not result.ok:
            return StepOutcome.fail(progress, _process_error(result))

        # Only this run's children see the new PATH entry
        env = progress.env.with_path_entry(manager_bin_dir(self.home))
        self.notify(INSTALLED_MESSAGE)
        return StepOutcome.advance(
            progress, BootstrapState.MANAGER_INSTALLED, env=env, fresh_install=True
        )

    @_transition(BootstrapState.MANAGER_INSTALLED)
    def trust_tool(self, progress: Progress) -> StepOutcome:
        progress, result = self._invoke(
            progress, [MANAGER_NAME, "trust", self.tool_repo], cwd=progress.folder
        )
        if not result.ok:
            return StepOutcome.fail(progress, _process_error(result))
        return StepOutcome.advance(progress, BootstrapState.TOOL_TRUSTED)

    @_transition(BootstrapState.TOOL_TRUSTED)
    def prepare_config(self, progress: Progress) -> StepOutcome:
        config_existed = (progress.folder / MANAGER_CONFIG_FILE).exists()
        if config_existed:
            logger.info("Found %s; syncing declared tools", MANAGER_CONFIG_FILE)
            command = [MANAGER_NAME, "install", "--skip-untrusted"]
        else:
            logger.info("No %s; creating one", MANAGER_CONFIG_FILE)
            command = [MANAGER_NAME, "init"]

        progress, result = self._invoke(progress, command, cwd=progress.folder)
        if not result.ok:
            return StepOutcome.fail(progress, _process_error(result))
        return StepOutcome.advance(
            progress, BootstrapState.CONFIG_READY, config_existed=config_existed
        )

    @_transition(BootstrapState.CONFIG_READY)
    def ensure_tool(self, progress: Progress) -> StepOutcome:
        if progress.config_existed:
            progress, probe = self._invoke(
                progress, [self.tool_name, "--version"], cwd=progress.folder
            )
            if probe.ok:
                logger.info("%s resolvable: %s", self.tool_name, probe.stdout or "ok")
                return StepOutcome.advance(progress, BootstrapState.TOOL_ENSURED)
            # Config exists but doesn't make the tool resolvable: declare it
            logger.warning(
                "%s not resolvable despite %s; adding it", self.tool_name, MANAGER_CONFIG_FILE
            )

        progress, result = self._invoke(
            progress, [MANAGER_NAME, "add", self.tool_repo], cwd=progress.folder
        )
        if not result.ok:
            return StepOutcome.fail(progress, _process_error(result))
        return StepOutcome.advance(progress, BootstrapState.TOOL_ENSURED)

    # ── Helpers ─────────────────────────────────────────────────

    def _invoke(
        self,
        progress: Progress,
        command: list[str],
        cwd: Path | None = None,
    ) -> tuple[Progress, ProcessResult]:
        result = self.runner.run(command, env=progress.env, cwd=cwd)
        if result.ok:
            logger.debug("ok: %s", result.display)
        return replace(progress, commands=progress.commands + (result,)), result


def _process_error(result: ProcessResult) -> ChildProcessFailed:
    return ChildProcessFailed(
        result.command,
        result.exit_code,
        stderr=result.stderr or result.error or "",
        cwd=result.cwd,
    )
