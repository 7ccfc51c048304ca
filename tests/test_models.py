"""
Tests for domain models — release parsing, execution environment, process results.
"""

import os

from aftman_bootstrap.core.errors import ChildProcessFailed, NoCompatibleAsset, UnknownPlatform
from aftman_bootstrap.core.models import Asset, ExecutionEnvironment, ProcessResult, ReleaseMetadata

from helpers import release_payload


class TestReleaseMetadata:
    def test_parses_feed_document(self):
        release = ReleaseMetadata.model_validate(
            release_payload("aftman-v0.2.7-linux-x86_64.zip", "aftman-v0.2.7-macos-aarch64.zip")
        )
        assert release.label == "v0.2.7"
        assert isinstance(release.assets, tuple)
        assert release.assets[0].content_type == "application/zip"
        assert release.assets[0].size == 1024

    def test_label_fallbacks(self):
        assert ReleaseMetadata(tag_name="v1").label == "v1"
        assert ReleaseMetadata().label == "<unnamed release>"

    def test_asset_minimal(self):
        asset = Asset(name="a.zip", browser_download_url="https://example.invalid/a.zip")
        assert asset.size == 0
        assert asset.label is None


class TestExecutionEnvironment:
    def test_with_path_entry_is_a_copy(self):
        env = ExecutionEnvironment.from_mapping({"PATH": "/a:/b"}, separator=":")
        extended = env.with_path_entry("/home/dev/.aftman/bin")
        assert extended.path == "/a:/b:/home/dev/.aftman/bin"
        assert env.path == "/a:/b"

    def test_windows_path_spelling_preserved(self):
        env = ExecutionEnvironment.from_mapping({"Path": r"C:\Windows"}, separator=";")
        extended = env.with_path_entry(r"C:\Users\dev\.aftman\bin")
        assert extended.variables == {"Path": r"C:\Windows;C:\Users\dev\.aftman\bin"}

    def test_missing_path(self):
        env = ExecutionEnvironment.from_mapping({}, separator=":")
        assert env.path_entries == []
        assert env.with_path_entry("/x").variables == {"PATH": "/x"}

    def test_from_os_snapshot(self, monkeypatch):
        monkeypatch.setenv("AFTBOOT_SNAPSHOT", "1")
        env = ExecutionEnvironment.from_os()
        monkeypatch.setenv("AFTBOOT_SNAPSHOT", "2")
        assert env.variables["AFTBOOT_SNAPSHOT"] == "1"

    def test_extension_does_not_touch_os_environ(self, monkeypatch):
        monkeypatch.setenv("PATH", "/usr/bin")
        ExecutionEnvironment.from_os().with_path_entry("/opt/aftman/bin")
        assert "/opt/aftman/bin" not in os.environ["PATH"]


class TestProcessResult:
    def test_ok(self):
        assert ProcessResult.success(["rojo", "--version"]).ok
        assert not ProcessResult.failure(["rojo", "--version"]).ok
        assert not ProcessResult(command=["x"], error="could not start").ok

    def test_display(self):
        assert ProcessResult(command=["aftman", "add", "rojo-rbx/rojo"]).display == "aftman add rojo-rbx/rojo"


class TestErrors:
    def test_unknown_platform_message(self):
        err = UnknownPlatform("SunOS", "sparc")
        assert str(err) == "Your current platform is unknown. Platform: SunOS, Architecture: sparc"

    def test_no_compatible_asset_dict(self):
        data = NoCompatibleAsset("windows", "aarch64", release="v0.2.7").to_dict()
        assert data["kind"] == "no_compatible_asset"
        assert data["platform"] == "windows"
        assert data["release"] == "v0.2.7"

    def test_child_process_message(self):
        err = ChildProcessFailed(["aftman", "init"], 2, stderr="exists")
        assert str(err) == "Command 'aftman init' failed (exit 2): exists"
