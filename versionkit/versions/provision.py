"""
End-to-end provisioning of one tool: resolve, install, put on PATH.

When the request resolves to 'skip', nothing is installed and whatever
binary is already on PATH is used.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from versionkit.config.settings import Settings
from versionkit.core.agent import ToolAgent
from versionkit.versions.detector import VersionDetector
from versionkit.versions.file_reader import VersionFileReader
from versionkit.versions.installer import VersionInstaller
from versionkit.versions.resolver import VersionResolver
from versionkit.versions.semver import SemVer, VersionSpec
from versionkit.versions.tools import ToolDefinition

logger = logging.getLogger(__name__)


@dataclass
class ProvisionResult:
    """
    Outcome of provisioning one tool.

    Attributes:
        tool: Tool name
        spec: Resolved version, or None when installation was skipped
        cache_dir: Directory added to PATH, or None when skipped
        detected: Version reported by the binary, when detection was requested
    """

    tool: str
    spec: Optional[VersionSpec] = None
    cache_dir: Optional[Path] = None
    detected: Optional[SemVer] = None

    @property
    def skipped(self) -> bool:
        return self.spec is None


def build_resolver(
    tool: ToolDefinition,
    settings: Settings,
    file_reader: Optional[VersionFileReader] = None,
) -> VersionResolver:
    """Create the resolver for a tool using configured credentials and timeouts."""
    fetcher = tool.latest_fetcher(
        github_token=settings.github_token, timeout=settings.request_timeout
    )
    return VersionResolver(tool.name, fetcher, file_reader=file_reader)


def build_installer(tool: ToolDefinition, settings: Settings) -> VersionInstaller:
    """Create the installer for a tool rooted at the configured cache."""
    return VersionInstaller(
        tool,
        cache_root=settings.tool_cache_root,
        timeout=settings.request_timeout,
        lock_timeout=settings.lock_timeout,
    )


def provision_tool(
    agent: ToolAgent,
    tool: ToolDefinition,
    version: str,
    version_file: str,
    working_directory: Union[str, Path],
    resolver: VersionResolver,
    installer: VersionInstaller,
    detector: Optional[VersionDetector] = None,
) -> ProvisionResult:
    """
    Resolve and install a tool version, then add it to PATH.

    Args:
        agent: Agent used for PATH changes, extraction and messages
        tool: Tool to provision
        version: Version request ('1.9.8', 'latest', 'skip' or empty)
        version_file: Version file name searched when version is empty
        working_directory: Starting directory for the version file search
        resolver: Resolver for the tool
        installer: Installer for the tool
        detector: When given, confirm the installed version afterwards

    Returns:
        ProvisionResult describing what was done
    """
    spec = resolver.resolve(version, version_file, working_directory)

    if spec is None:
        agent.info(f"{tool.name} version: skip (using existing PATH binary)")
        return ProvisionResult(tool=tool.name)

    agent.info(f"{tool.name} version: {spec.resolved} (source: {spec.source.value})")

    cache_dir = installer.install(spec.resolved, agent)
    agent.add_path(cache_dir)

    result = ProvisionResult(tool=tool.name, spec=spec, cache_dir=cache_dir)
    if detector is not None:
        result.detected = detector.detect(tool, agent)
        if result.detected.raw != spec.resolved:
            agent.warning(
                f"{tool.display_name} reports version {result.detected.raw}, "
                f"expected {spec.resolved}"
            )
    return result


__all__ = ["ProvisionResult", "build_resolver", "build_installer", "provision_tool"]
