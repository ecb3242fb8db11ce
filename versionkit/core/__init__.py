"""
Core functionality for versionkit.

This package contains the foundational modules the version management
pipeline depends on: platform detection, cache layout, HTTP transport,
install locking, the agent interface and the exception hierarchy.
"""

from .agent import ExecResult, LocalAgent, ToolAgent

from .directory import get_cache_root, get_lock_dir, get_tool_cache_dir

from .locking import LockManager

from .platform import (
    PlatformInfo,
    clear_platform_cache,
    detect_platform,
    resolve_platform,
)

from .exceptions import (
    VersionKitError,
    ConfigurationError,
    UnsupportedPlatformError,
    InvalidVersionSpecError,
    UpstreamFetchError,
    RateLimitError,
    NoQualifyingVersionError,
    InstallError,
    DownloadError,
    ExtractionError,
    InstallFilesystemError,
    InstallLockTimeout,
    DetectionError,
    AgentExecError,
)

__all__ = [
    "ExecResult",
    "LocalAgent",
    "ToolAgent",
    "get_cache_root",
    "get_lock_dir",
    "get_tool_cache_dir",
    "LockManager",
    "PlatformInfo",
    "clear_platform_cache",
    "detect_platform",
    "resolve_platform",
    "VersionKitError",
    "ConfigurationError",
    "UnsupportedPlatformError",
    "InvalidVersionSpecError",
    "UpstreamFetchError",
    "RateLimitError",
    "NoQualifyingVersionError",
    "InstallError",
    "DownloadError",
    "ExtractionError",
    "InstallFilesystemError",
    "InstallLockTimeout",
    "DetectionError",
    "AgentExecError",
]
