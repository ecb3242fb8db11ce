"""
Version management for provisioned tools.

Resolution (request -> exact version), installation into the tool cache,
and detection of the installed version.
"""

from .semver import (
    SemVer,
    VersionSource,
    VersionSpec,
    is_at_least_major_version,
    is_exact_version,
    is_v1_or_later,
)
from .file_reader import VersionFileReader, parse_version_file
from .latest import GitHubLatestReleaseFetcher, HashiCorpIndexFetcher
from .resolver import VersionResolver
from .installer import ArchiveArtifact, BinaryArtifact, VersionInstaller
from .tools import TERRAFORM, TERRAGRUNT, ToolDefinition, available_tools, get_tool
from .detector import VersionDetector, parse_version_output
from .provision import ProvisionResult, build_installer, build_resolver, provision_tool

__all__ = [
    "SemVer",
    "VersionSource",
    "VersionSpec",
    "is_at_least_major_version",
    "is_exact_version",
    "is_v1_or_later",
    "VersionFileReader",
    "parse_version_file",
    "GitHubLatestReleaseFetcher",
    "HashiCorpIndexFetcher",
    "VersionResolver",
    "ArchiveArtifact",
    "BinaryArtifact",
    "VersionInstaller",
    "TERRAFORM",
    "TERRAGRUNT",
    "ToolDefinition",
    "available_tools",
    "get_tool",
    "VersionDetector",
    "parse_version_output",
    "ProvisionResult",
    "build_installer",
    "build_resolver",
    "provision_tool",
]
