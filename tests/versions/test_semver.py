"""
Unit tests for the version data model.
"""

import pytest

from versionkit.versions.semver import (
    SemVer,
    VersionSource,
    VersionSpec,
    is_at_least_major_version,
    is_exact_version,
    is_v1_or_later,
    version_sort_key,
)


class TestIsExactVersion:
    @pytest.mark.parametrize("value", ["1.9.8", "0.75.10", "10.0.0", "0.0.0"])
    def test_exact(self, value):
        assert is_exact_version(value)

    @pytest.mark.parametrize(
        "value",
        [
            "v1.9.8",
            "1.9",
            "1.9.8.1",
            "1.10.0-alpha1",
            "1.9.8+build",
            "latest",
            "",
            " 1.9.8",
            "1.9.8\n",
            "1.9.x",
        ],
    )
    def test_not_exact(self, value):
        assert not is_exact_version(value)


class TestSemVer:
    def test_parse(self):
        version = SemVer.parse("1.10.2")
        assert (version.major, version.minor, version.patch) == (1, 10, 2)
        assert str(version) == "1.10.2"

    def test_parse_rejects_prefix(self):
        with pytest.raises(ValueError):
            SemVer.parse("v1.10.2")

    def test_numeric_ordering(self):
        assert SemVer.parse("1.10.0") > SemVer.parse("1.9.8")
        assert SemVer.parse("0.75.10") > SemVer.parse("0.75.9")

    def test_raw_ignored_in_equality(self):
        assert SemVer(1, 2, 3, "1.2.3") == SemVer(1, 2, 3)

    def test_str_without_raw(self):
        assert str(SemVer(0, 1, 2)) == "0.1.2"


class TestVersionSpec:
    def test_resolved_must_be_exact(self):
        with pytest.raises(ValueError):
            VersionSpec("latest", "1.10.0-beta1", VersionSource.LATEST)

    def test_fields(self):
        spec = VersionSpec("latest", "1.9.8", VersionSource.LATEST)
        assert spec.input == "latest"
        assert spec.resolved == "1.9.8"
        assert spec.source.value == "latest"


def test_version_sort_key_is_numeric():
    versions = ["1.9.8", "1.10.0", "1.2.0"]
    assert sorted(versions, key=version_sort_key) == ["1.2.0", "1.9.8", "1.10.0"]


class TestMajorVersionBoundary:
    def test_below_v1(self):
        assert not is_v1_or_later(SemVer.parse("0.99.0"))

    def test_v1(self):
        assert is_v1_or_later(SemVer.parse("1.0.0"))

    def test_custom_major(self):
        assert is_at_least_major_version(SemVer.parse("2.3.4"), 2)
        assert not is_at_least_major_version(SemVer.parse("1.99.99"), 2)
