"""
Tool cache directory layout for versionkit.

Directory Structure:
    <cache-root>/
        <tool>/<version>/<arch>/<binary>  : Installed tool binaries
        .locks/                           : Per-version install lock files

The cache root is, in order of preference:
    1. $RUNNER_TOOL_CACHE (GitHub Actions hosted tool cache)
    2. $HOME/.tool-versions
    3. /tmp/.tool-versions
"""

import logging
import os
from pathlib import Path
from typing import Mapping, Optional

logger = logging.getLogger(__name__)

CACHE_DIR_NAME = ".tool-versions"
LOCK_DIR_NAME = ".locks"


def get_cache_root(environ: Optional[Mapping[str, str]] = None) -> Path:
    """
    Get the root directory for tool installations.

    Args:
        environ: Environment mapping to read from (default: os.environ)

    Returns:
        Path: The cache root directory (not created).

    Example:
        >>> get_cache_root({"RUNNER_TOOL_CACHE": "/opt/hostedtoolcache"})
        PosixPath('/opt/hostedtoolcache')
    """
    if environ is None:
        environ = os.environ

    runner_cache = environ.get("RUNNER_TOOL_CACHE")
    if runner_cache:
        return Path(runner_cache)

    home = environ.get("HOME")
    if home:
        return Path(home) / CACHE_DIR_NAME

    return Path("/tmp") / CACHE_DIR_NAME


def get_tool_cache_dir(tool: str, version: str, arch: str, cache_root: Path) -> Path:
    """
    Get the cache directory for one ``(tool, version, arch)`` installation.

    Example:
        >>> get_tool_cache_dir("terraform", "1.9.8", "amd64", Path("/cache"))
        PosixPath('/cache/terraform/1.9.8/amd64')
    """
    return Path(cache_root) / tool / version / arch


def get_lock_dir(cache_root: Path) -> Path:
    """Get the directory holding install lock files."""
    return Path(cache_root) / LOCK_DIR_NAME


__all__ = [
    "CACHE_DIR_NAME",
    "get_cache_root",
    "get_tool_cache_dir",
    "get_lock_dir",
]
