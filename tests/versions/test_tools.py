"""
Unit tests for tool definitions.
"""

import pytest

from versionkit.versions.installer import ArchiveArtifact, BinaryArtifact
from versionkit.versions.latest import GitHubLatestReleaseFetcher, HashiCorpIndexFetcher
from versionkit.versions.tools import (
    TERRAFORM,
    TERRAGRUNT,
    ToolDefinition,
    available_tools,
    get_tool,
)


def test_available_tools():
    assert available_tools() == ["terraform", "terragrunt"]


@pytest.mark.parametrize("name", ["terraform", "Terraform", "TERRAFORM"])
def test_get_tool_case_insensitive(name):
    assert get_tool(name) is TERRAFORM


def test_get_unknown_tool():
    with pytest.raises(KeyError, match="Unknown tool 'packer'"):
        get_tool("packer")


class TestTerraform:
    def test_definition(self):
        assert TERRAFORM.version_file == ".terraform-version"
        assert isinstance(TERRAFORM.artifact, ArchiveArtifact)

    def test_latest_fetcher(self):
        fetcher = TERRAFORM.latest_fetcher(timeout=10)

        assert isinstance(fetcher, HashiCorpIndexFetcher)
        assert fetcher.index_url == "https://releases.hashicorp.com/terraform/index.json"
        assert fetcher.timeout == 10


class TestTerragrunt:
    def test_definition(self):
        assert TERRAGRUNT.version_file == ".terragrunt-version"
        assert isinstance(TERRAGRUNT.artifact, BinaryArtifact)

    def test_latest_fetcher_passes_token(self):
        fetcher = TERRAGRUNT.latest_fetcher(github_token="abc")

        assert isinstance(fetcher, GitHubLatestReleaseFetcher)
        assert fetcher.request_headers()["Authorization"] == "Bearer abc"


def test_tool_without_release_channel():
    tool = ToolDefinition(
        name="custom",
        display_name="Custom",
        version_file=".custom-version",
        artifact=BinaryArtifact("https://example.com"),
        version_pattern=TERRAFORM.version_pattern,
    )

    with pytest.raises(ValueError, match="no release channel"):
        tool.latest_fetcher()
