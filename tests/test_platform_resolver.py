"""
Tests for platform resolution — host identifiers to release vocabulary.
"""

import pytest

from aftman_bootstrap.core.errors import UnknownPlatform
from aftman_bootstrap.core.services.platform_resolver import PlatformKey, resolve_platform


class TestResolvePlatform:
    @pytest.mark.parametrize(
        ("system", "machine", "expected"),
        [
            ("Darwin", "arm64", PlatformKey("macos", "aarch64")),
            ("Darwin", "x86_64", PlatformKey("macos", "x86_64")),
            ("Linux", "x86_64", PlatformKey("linux", "x86_64")),
            ("Linux", "aarch64", PlatformKey("linux", "aarch64")),
            ("Windows", "AMD64", PlatformKey("windows", "x86_64")),
            ("Windows", "ARM64", PlatformKey("windows", "aarch64")),
        ],
    )
    def test_supported_pairs(self, system, machine, expected):
        assert resolve_platform(system, machine) == expected

    def test_unknown_os(self):
        with pytest.raises(UnknownPlatform) as exc:
            resolve_platform("FreeBSD", "x86_64")
        assert exc.value.context == {"system": "FreeBSD", "machine": "x86_64"}
        assert "FreeBSD" in str(exc.value)

    def test_unknown_arch(self):
        with pytest.raises(UnknownPlatform) as exc:
            resolve_platform("Linux", "riscv64")
        assert "riscv64" in str(exc.value)

    def test_empty_identifiers(self):
        with pytest.raises(UnknownPlatform):
            resolve_platform("", "")

    def test_defaults_to_host(self, monkeypatch):
        monkeypatch.setattr("platform.system", lambda: "Linux")
        monkeypatch.setattr("platform.machine", lambda: "x86_64")
        assert resolve_platform() == PlatformKey("linux", "x86_64")


class TestPlatformKey:
    def test_windows_flag(self):
        assert PlatformKey("windows", "x86_64").is_windows
        assert not PlatformKey("linux", "x86_64").is_windows

    def test_asset_suffix(self):
        assert PlatformKey("macos", "aarch64").asset_suffix == "-macos-aarch64.zip"

    def test_to_dict(self):
        assert PlatformKey("linux", "x86_64").to_dict() == {"platform": "linux", "arch": "x86_64"}
