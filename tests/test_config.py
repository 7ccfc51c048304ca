"""
Tests for configuration loading — aftman-bootstrap.yml parsing and validation.
"""

import textwrap
from pathlib import Path

import pytest

from aftman_bootstrap.core.config.loader import (
    CONFIG_FILE,
    BootstrapConfig,
    ConfigError,
    find_config_file,
    load_config,
)


@pytest.fixture
def valid_config(tmp_path: Path) -> Path:
    content = textwrap.dedent("""\
        tool:
          name: selene
          repo: Kampfkarren/selene
        http_timeout: 15
        process_timeout: 120
    """)
    path = tmp_path / CONFIG_FILE
    path.write_text(content)
    return path


class TestDefaults:
    def test_defaults(self):
        config = BootstrapConfig()
        assert config.tool.name == "rojo"
        assert config.tool.repo == "rojo-rbx/rojo"
        assert config.http_timeout == 60
        assert config.process_timeout == 300
        assert config.user_agent.startswith("aftman-bootstrap/")


class TestLoadConfig:
    def test_load_valid(self, valid_config: Path):
        config = load_config(valid_config)
        assert config.tool.name == "selene"
        assert config.tool.repo == "Kampfkarren/selene"
        assert config.http_timeout == 15

    def test_empty_file_is_defaults(self, tmp_path: Path):
        path = tmp_path / CONFIG_FILE
        path.write_text("")
        assert load_config(path) == BootstrapConfig()

    def test_missing_explicit_file(self, tmp_path: Path):
        with pytest.raises(ConfigError, match="not found"):
            load_config(tmp_path / "nope.yml")

    def test_invalid_yaml(self, tmp_path: Path):
        path = tmp_path / CONFIG_FILE
        path.write_text("tool: [unclosed")
        with pytest.raises(ConfigError, match="Invalid YAML"):
            load_config(path)

    def test_not_a_mapping(self, tmp_path: Path):
        path = tmp_path / CONFIG_FILE
        path.write_text("- just\n- a list\n")
        with pytest.raises(ConfigError, match="Expected a YAML mapping"):
            load_config(path)

    def test_unknown_key_rejected(self, tmp_path: Path):
        path = tmp_path / CONFIG_FILE
        path.write_text("release_feed: https://example.invalid/other\n")
        with pytest.raises(ConfigError, match="Invalid configuration"):
            load_config(path)

    def test_bad_repo_rejected(self, tmp_path: Path):
        path = tmp_path / CONFIG_FILE
        path.write_text("tool:\n  repo: not-a-repo\n")
        with pytest.raises(ConfigError):
            load_config(path)

    def test_non_positive_timeout_rejected(self, tmp_path: Path):
        path = tmp_path / CONFIG_FILE
        path.write_text("http_timeout: 0\n")
        with pytest.raises(ConfigError):
            load_config(path)


class TestFindConfigFile:
    def test_finds_in_parent(self, valid_config: Path):
        nested = valid_config.parent / "a" / "b"
        nested.mkdir(parents=True)
        assert find_config_file(nested) == valid_config.resolve()

    def test_auto_search_returns_defaults(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
        isolated = tmp_path / "isolated"
        isolated.mkdir()
        monkeypatch.chdir(isolated)
        if find_config_file() is None:
            assert load_config() == BootstrapConfig()

    def test_search_disabled(self, valid_config: Path, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.chdir(valid_config.parent)
        assert load_config(search=False) == BootstrapConfig()
        assert load_config().tool.name == "selene"

    def test_search_starts_from_given_dir(
        self, valid_config: Path, tmp_path_factory: pytest.TempPathFactory, monkeypatch: pytest.MonkeyPatch
    ):
        monkeypatch.chdir(tmp_path_factory.mktemp("elsewhere"))
        project = valid_config.parent / "project"
        project.mkdir()
        assert load_config(start_dir=project).tool.name == "selene"
