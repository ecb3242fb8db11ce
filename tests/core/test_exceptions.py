"""
Unit tests for the exception hierarchy.
"""

import pytest

from versionkit.core.exceptions import (
    AgentExecError,
    ConfigurationError,
    DetectionError,
    DownloadError,
    ExtractionError,
    InstallError,
    InstallFilesystemError,
    InstallLockTimeout,
    InvalidVersionSpecError,
    NoQualifyingVersionError,
    RateLimitError,
    UnsupportedPlatformError,
    UpstreamFetchError,
    VersionKitError,
)


@pytest.mark.parametrize(
    "error",
    [
        ConfigurationError("bad"),
        UnsupportedPlatformError("bad"),
        InvalidVersionSpecError("v1", "bad"),
        UpstreamFetchError("bad"),
        RateLimitError("bad", status_code=403),
        NoQualifyingVersionError("bad"),
        DownloadError("terraform", "1.9.8", "bad"),
        ExtractionError("terraform", "1.9.8", "bad"),
        InstallFilesystemError("terraform", "1.9.8", "bad"),
        InstallLockTimeout("terraform", "1.9.8", "bad"),
        DetectionError("bad"),
        AgentExecError("unzip", 1, "bad"),
    ],
)
def test_all_errors_share_base(error):
    assert isinstance(error, VersionKitError)


def test_rate_limit_is_upstream_fetch_error():
    error = RateLimitError("limited", status_code=403)
    assert isinstance(error, UpstreamFetchError)
    assert error.status_code == 403


def test_install_errors_carry_tool_and_version():
    error = DownloadError("terragrunt", "0.75.10", "404", status_code=404)
    assert isinstance(error, InstallError)
    assert (error.tool, error.version, error.status_code) == ("terragrunt", "0.75.10", 404)


def test_invalid_version_spec_keeps_value():
    error = InvalidVersionSpecError("v1.9.8", "Invalid terraform version spec")
    assert error.value == "v1.9.8"
    assert str(error) == "Invalid terraform version spec"


def test_agent_exec_error_message():
    error = AgentExecError("unzip", 9, "cannot find zipfile")
    assert str(error) == "unzip failed with exit code 9: cannot find zipfile"
