"""
Shared test fixtures and configuration.
"""

from pathlib import Path

import pytest

from aftman_bootstrap.adapters.mock import (
    FakeExtractor,
    FakeHttpClient,
    FakeLocator,
    FakeProcessRunner,
)
from aftman_bootstrap.core.constants import RELEASE_FEED_URL
from aftman_bootstrap.core.models.environment import ExecutionEnvironment
from aftman_bootstrap.core.services.bootstrapper import Bootstrapper

from helpers import LINUX_ASSET_URL, make_zip, release_payload


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    """An empty project directory to provision into."""
    folder = tmp_path / "project"
    folder.mkdir()
    return folder


@pytest.fixture
def env() -> ExecutionEnvironment:
    return ExecutionEnvironment.from_mapping({"PATH": "/usr/bin", "HOME": "/home/dev"}, separator=":")


@pytest.fixture
def http() -> FakeHttpClient:
    """Release feed with a full platform matrix and a downloadable linux asset."""
    client = FakeHttpClient()
    client.add_json(
        RELEASE_FEED_URL,
        release_payload(
            "aftman-v0.2.7-windows-x86_64.zip",
            "aftman-v0.2.7-linux-x86_64.zip",
            "aftman-v0.2.7-macos-aarch64.zip",
        ),
    )
    client.add(LINUX_ASSET_URL, make_zip({"aftman": b"\x7fELF binary"}))
    return client


@pytest.fixture
def runner() -> FakeProcessRunner:
    return FakeProcessRunner()


@pytest.fixture
def make_bootstrapper(http, runner, tmp_path: Path):
    """Factory for a Bootstrapper wired to fakes; aftman absent unless told otherwise."""

    def _make(installed: set[str] | None = None, **kwargs) -> Bootstrapper:
        options = {
            "http": http,
            "extractor": FakeExtractor(),
            "runner": runner,
            "locator": FakeLocator(installed),
            "home": tmp_path / "home",
            "temp_dir": tmp_path,
            "system": "Linux",
            "machine": "x86_64",
        }
        options.update(kwargs)
        return Bootstrapper(**options)

    return _make
