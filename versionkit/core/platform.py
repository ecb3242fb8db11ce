"""
Platform detection for versionkit.

This module maps the running operating system and CPU architecture to the
vocabulary used by HashiCorp and Gruntwork release artifacts and by the
tool cache layout.

Supported combinations:
- Operating systems: linux, darwin, windows
- Architectures: amd64, arm64

Usage:
    from versionkit.core.platform import detect_platform

    info = detect_platform()
    print(f"{info.os}_{info.arch}")  # e.g. linux_amd64
"""

import functools
import platform
from dataclasses import dataclass

from versionkit.core.exceptions import UnsupportedPlatformError

# platform.system() value -> release artifact OS name
_OS_MAP = {
    "linux": "linux",
    "darwin": "darwin",
    "windows": "windows",
}

# platform.machine() value -> release artifact architecture name.
# Linux and macOS report x86_64, Windows reports AMD64.
_ARCH_MAP = {
    "x86_64": "amd64",
    "amd64": "amd64",
    "arm64": "arm64",
    "aarch64": "arm64",
}

SUPPORTED_OS = ("linux", "darwin", "windows")
SUPPORTED_ARCH = ("amd64", "arm64")


@dataclass(frozen=True)
class PlatformInfo:
    """
    Operating system and architecture of the running host.

    Attributes:
        os: 'linux', 'darwin' or 'windows'
        arch: 'amd64' or 'arm64'
    """

    os: str
    arch: str

    def artifact_suffix(self) -> str:
        """
        Get the ``<os>_<arch>`` suffix used in release artifact names.

        Example:
            >>> PlatformInfo("darwin", "arm64").artifact_suffix()
            'darwin_arm64'
        """
        return f"{self.os}_{self.arch}"

    def executable_name(self, base_name: str) -> str:
        """Append ``.exe`` to a binary name on Windows."""
        if self.os == "windows":
            return f"{base_name}.exe"
        return base_name

    def __str__(self) -> str:
        return self.artifact_suffix()


def resolve_platform(system: str, machine: str) -> PlatformInfo:
    """
    Map raw OS and machine identifiers to a PlatformInfo.

    Args:
        system: Value as reported by ``platform.system()`` (e.g. 'Linux')
        machine: Value as reported by ``platform.machine()`` (e.g. 'x86_64')

    Returns:
        PlatformInfo for the identifiers

    Raises:
        UnsupportedPlatformError: If either identifier is not supported
    """
    os_name = _OS_MAP.get(system.lower())
    if os_name is None:
        raise UnsupportedPlatformError(
            f"Unsupported platform: {system}. Supported: {', '.join(SUPPORTED_OS)}."
        )

    arch = _ARCH_MAP.get(machine.lower())
    if arch is None:
        raise UnsupportedPlatformError(
            f"Unsupported architecture: {machine}. "
            f"Supported: {', '.join(SUPPORTED_ARCH)}."
        )

    return PlatformInfo(os=os_name, arch=arch)


@functools.lru_cache(maxsize=1)
def detect_platform() -> PlatformInfo:
    """
    Detect the current platform.

    This function is cached - it only runs detection once per process.

    Raises:
        UnsupportedPlatformError: If the host OS or architecture is not supported
    """
    return resolve_platform(platform.system(), platform.machine())


def clear_platform_cache():
    """
    Clear the platform detection cache.

    Forces the next call to detect_platform() to re-detect. Used by tests
    that patch the ``platform`` module.
    """
    detect_platform.cache_clear()


__all__ = [
    "PlatformInfo",
    "SUPPORTED_OS",
    "SUPPORTED_ARCH",
    "resolve_platform",
    "detect_platform",
    "clear_platform_cache",
]
