"""
Centralized exception hierarchy for versionkit.

Every error raised by the resolution, installation and detection pipeline
derives from VersionKitError so callers can catch the whole family at once.
"""

from typing import Optional


# ============================================================================
# Base Exceptions
# ============================================================================


class VersionKitError(Exception):
    """Base exception for all versionkit errors."""

    pass


class ConfigurationError(VersionKitError):
    """Invalid configuration file or environment value."""

    pass


class UnsupportedPlatformError(VersionKitError):
    """Raised when the running OS or CPU architecture is not supported."""

    pass


# ============================================================================
# Resolution Exceptions
# ============================================================================


class InvalidVersionSpecError(VersionKitError):
    """Malformed version request or version-pin file content."""

    def __init__(self, value: str, message: str):
        self.value = value
        super().__init__(message)


class UpstreamFetchError(VersionKitError):
    """Raised when a release index or release API returns a non-success status."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message)


class RateLimitError(UpstreamFetchError):
    """Raised when the release API refuses the request because of rate limiting."""

    pass


class NoQualifyingVersionError(VersionKitError):
    """Raised when a version index holds no stable x.y.z release."""

    pass


# ============================================================================
# Installation Exceptions
# ============================================================================


class InstallError(VersionKitError):
    """Base exception for installation failures."""

    def __init__(self, tool: str, version: str, message: str):
        self.tool = tool
        self.version = version
        super().__init__(message)


class DownloadError(InstallError):
    """Raised when a release artifact cannot be downloaded."""

    def __init__(
        self, tool: str, version: str, message: str, status_code: Optional[int] = None
    ):
        self.status_code = status_code
        super().__init__(tool, version, message)


class ExtractionError(InstallError):
    """Raised when a downloaded archive cannot be extracted."""

    pass


class InstallFilesystemError(InstallError):
    """Raised when writing to the tool cache fails."""

    pass


class InstallLockTimeout(InstallError):
    """Raised when the per-version install lock cannot be acquired in time."""

    pass


# ============================================================================
# Detection / Agent Exceptions
# ============================================================================


class DetectionError(VersionKitError):
    """Raised when a tool's --version probe fails or cannot be parsed."""

    pass


class AgentExecError(VersionKitError):
    """Raised by the local agent when a command exits non-zero."""

    def __init__(self, command: str, exit_code: int, stderr: str):
        self.command = command
        self.exit_code = exit_code
        self.stderr = stderr
        super().__init__(f"{command} failed with exit code {exit_code}: {stderr}")
