"""
Integration tests against the real release endpoints.

These tests require network access and are skipped unless pytest is run
with --integration.
"""

import pytest

from versionkit.core.agent import LocalAgent
from versionkit.core.platform import detect_platform
from versionkit.versions.installer import VersionInstaller
from versionkit.versions.semver import is_exact_version
from versionkit.versions.tools import TERRAFORM, TERRAGRUNT


@pytest.mark.integration
def test_terraform_latest_from_index():
    assert is_exact_version(TERRAFORM.latest_fetcher()())


@pytest.mark.integration
def test_terragrunt_latest_from_github():
    assert is_exact_version(TERRAGRUNT.latest_fetcher()())


@pytest.mark.integration
@pytest.mark.slow
def test_install_terragrunt(tmp_path):
    installer = VersionInstaller(TERRAGRUNT, cache_root=tmp_path, platform=detect_platform())

    cache_dir = installer.install("0.75.10", LocalAgent())

    assert (cache_dir / installer.binary_name).is_file()
