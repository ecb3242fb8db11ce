"""
Unit tests for the platform detection module.

Tests cover:
- PlatformInfo naming helpers
- OS and architecture mapping
- Unsupported platform errors
- Cache behavior
"""

import pytest
from unittest.mock import patch

from versionkit.core.exceptions import UnsupportedPlatformError
from versionkit.core.platform import (
    PlatformInfo,
    clear_platform_cache,
    detect_platform,
    resolve_platform,
)


class TestPlatformInfo:
    """Tests for PlatformInfo dataclass."""

    def test_artifact_suffix(self):
        assert PlatformInfo("darwin", "arm64").artifact_suffix() == "darwin_arm64"

    def test_str_is_artifact_suffix(self):
        assert str(PlatformInfo("linux", "amd64")) == "linux_amd64"

    def test_executable_name_windows(self):
        """Windows binaries carry the .exe extension."""
        assert PlatformInfo("windows", "amd64").executable_name("terraform") == (
            "terraform.exe"
        )

    @pytest.mark.parametrize("os_name", ["linux", "darwin"])
    def test_executable_name_unix(self, os_name):
        assert PlatformInfo(os_name, "amd64").executable_name("terragrunt") == (
            "terragrunt"
        )


class TestResolvePlatform:
    """Tests for mapping raw identifiers."""

    @pytest.mark.parametrize(
        "system,expected",
        [("Linux", "linux"), ("Darwin", "darwin"), ("Windows", "windows")],
    )
    def test_os_mapping(self, system, expected):
        assert resolve_platform(system, "x86_64").os == expected

    @pytest.mark.parametrize(
        "machine,expected",
        [
            ("x86_64", "amd64"),
            ("AMD64", "amd64"),
            ("arm64", "arm64"),
            ("aarch64", "arm64"),
        ],
    )
    def test_arch_mapping(self, machine, expected):
        assert resolve_platform("Linux", machine).arch == expected

    def test_unsupported_os(self):
        with pytest.raises(UnsupportedPlatformError, match="Unsupported platform: FreeBSD"):
            resolve_platform("FreeBSD", "x86_64")

    def test_unsupported_arch(self):
        with pytest.raises(UnsupportedPlatformError) as exc_info:
            resolve_platform("Linux", "i686")

        message = str(exc_info.value)
        assert "Unsupported architecture: i686" in message
        assert "Supported: amd64, arm64." in message


class TestDetectPlatform:
    """Tests for detect_platform caching."""

    def test_detects_from_platform_module(self):
        with patch("platform.system", return_value="Darwin"), patch(
            "platform.machine", return_value="arm64"
        ):
            info = detect_platform()

        assert info == PlatformInfo("darwin", "arm64")

    def test_result_is_cached(self):
        with patch("platform.system", return_value="Linux") as mock_system, patch(
            "platform.machine", return_value="x86_64"
        ):
            first = detect_platform()
            second = detect_platform()

        assert first is second
        assert mock_system.call_count == 1

    def test_clear_cache_redetects(self):
        with patch("platform.system", return_value="Linux"), patch(
            "platform.machine", return_value="x86_64"
        ):
            detect_platform()

        clear_platform_cache()

        with patch("platform.system", return_value="Windows"), patch(
            "platform.machine", return_value="AMD64"
        ):
            assert detect_platform() == PlatformInfo("windows", "amd64")

    def test_unsupported_host_raises(self):
        with patch("platform.system", return_value="SunOS"), patch(
            "platform.machine", return_value="sparc"
        ):
            with pytest.raises(UnsupportedPlatformError):
                detect_platform()
