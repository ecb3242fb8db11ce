"""
Definitions of the tools versionkit can provision.

A tool is a value: its name, pin-file name, release artifact shape,
``--version`` output pattern and upstream release channel. Adding a tool
means adding a ToolDefinition, not a class.
"""

import re
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Pattern

from versionkit.core.download import DEFAULT_TIMEOUT
from versionkit.versions.installer import ArchiveArtifact, Artifact, BinaryArtifact
from versionkit.versions.latest import (
    HASHICORP_RELEASES_URL,
    GitHubLatestReleaseFetcher,
    HashiCorpIndexFetcher,
)


@dataclass(frozen=True)
class ToolDefinition:
    """
    Everything versionkit needs to know about one tool.

    Attributes:
        name: Binary and cache name (e.g., 'terraform')
        display_name: Human-readable name for messages
        version_file: Pin file looked up when no version is requested
        artifact: Release artifact shape and location
        version_pattern: Regex with three numeric groups matching ``--version`` output
        release_index: HashiCorp releases product name, for index-based latest lookup
        github_repository: ``owner/name``, for GitHub latest-release lookup
    """

    name: str
    display_name: str
    version_file: str
    artifact: Artifact
    version_pattern: Pattern
    release_index: Optional[str] = None
    github_repository: Optional[str] = None

    def latest_fetcher(
        self, github_token: Optional[str] = None, timeout: int = DEFAULT_TIMEOUT
    ) -> Callable[[], str]:
        """
        Build the latest-version strategy for this tool.

        Raises:
            ValueError: If the tool declares no release channel
        """
        if self.github_repository:
            return GitHubLatestReleaseFetcher(
                self.github_repository,
                display_name=self.display_name,
                token=github_token,
                timeout=timeout,
            )
        if self.release_index:
            return HashiCorpIndexFetcher(
                self.release_index, display_name=self.display_name, timeout=timeout
            )
        raise ValueError(f"Tool {self.name} has no release channel configured")


TERRAFORM = ToolDefinition(
    name="terraform",
    display_name="Terraform",
    version_file=".terraform-version",
    artifact=ArchiveArtifact(base_url=f"{HASHICORP_RELEASES_URL}/terraform"),
    # "Terraform v1.9.8 on linux_amd64"
    version_pattern=re.compile(r"Terraform\s+v(\d+)\.(\d+)\.(\d+)"),
    release_index="terraform",
)

TERRAGRUNT = ToolDefinition(
    name="terragrunt",
    display_name="Terragrunt",
    version_file=".terragrunt-version",
    artifact=BinaryArtifact(
        base_url="https://github.com/gruntwork-io/terragrunt/releases/download"
    ),
    # "terragrunt version v0.75.10"
    version_pattern=re.compile(
        r"terragrunt\s+version\s+v(\d+)\.(\d+)\.(\d+)", re.IGNORECASE
    ),
    github_repository="gruntwork-io/terragrunt",
)

_TOOLS: Dict[str, ToolDefinition] = {
    TERRAFORM.name: TERRAFORM,
    TERRAGRUNT.name: TERRAGRUNT,
}


def get_tool(name: str) -> ToolDefinition:
    """
    Look up a tool definition by name.

    Raises:
        KeyError: If the tool is unknown
    """
    try:
        return _TOOLS[name.lower()]
    except KeyError:
        raise KeyError(
            f"Unknown tool '{name}'. Available: {', '.join(available_tools())}"
        ) from None


def available_tools() -> List[str]:
    """Names of all known tools."""
    return sorted(_TOOLS)


__all__ = [
    "ToolDefinition",
    "TERRAFORM",
    "TERRAGRUNT",
    "get_tool",
    "available_tools",
]
