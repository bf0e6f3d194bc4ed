"""Tests for tools/release.py - release asset naming."""

from __future__ import annotations

import pytest

from anemos_ext.core.config import ReleaseConfig
from anemos_ext.platform.detection import Arch, Platform, PlatformTarget
from anemos_ext.tools.release import ReleaseSource


class TestReleaseSource:
    """Tests for ReleaseSource."""

    def test_defaults(self) -> None:
        source = ReleaseSource()
        assert source.host == "github.com"
        assert source.org == "ohayocorp"
        assert source.project == "anemos"
        assert source.version == "latest"

    @pytest.mark.parametrize(
        ("platform", "arch", "asset"),
        [
            (Platform.LINUX, Arch.X64, "anemos-linux-amd64"),
            (Platform.LINUX, Arch.ARM64, "anemos-linux-arm64"),
            (Platform.MACOS, Arch.ARM64, "anemos-darwin-arm64"),
            (Platform.WINDOWS, Arch.X64, "anemos-windows-amd64"),
            (Platform.UNKNOWN, Arch.UNKNOWN, "anemos-linux-amd64"),
        ],
    )
    def test_asset_name(self, platform: Platform, arch: Arch, asset: str) -> None:
        assert ReleaseSource().asset_name(PlatformTarget(platform, arch)) == asset

    def test_default_download_url(self) -> None:
        target = PlatformTarget(Platform.LINUX, Arch.X64)
        assert ReleaseSource().download_url(target) == (
            "https://github.com/ohayocorp/anemos/releases/latest/download/anemos-linux-amd64"
        )

    def test_configured_download_url(self) -> None:
        """Configured values go into the URL as given."""
        source = ReleaseSource.from_config(
            ReleaseConfig(host="git.example.com", org="acme", project="anemos", version="v1.4.2")
        )
        target = PlatformTarget(Platform.MACOS, Arch.ARM64)

        assert source.download_url(target) == (
            "https://git.example.com/acme/anemos/releases/v1.4.2/download/anemos-darwin-arm64"
        )

    def test_binary_name(self) -> None:
        source = ReleaseSource()
        assert source.binary_name(PlatformTarget(Platform.LINUX, Arch.X64)) == "anemos"
        assert source.binary_name(PlatformTarget(Platform.WINDOWS, Arch.X64)) == "anemos.exe"

    def test_windows_asset_has_no_exe_suffix(self) -> None:
        url = ReleaseSource().download_url(PlatformTarget(Platform.WINDOWS, Arch.ARM64))
        assert url.endswith("/anemos-windows-arm64")
