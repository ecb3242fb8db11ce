"""
Version data model shared by resolvers, installers and detectors.

Only exact ``major.minor.patch`` versions are ever resolved or installed;
prerelease and build suffixes are rejected everywhere.
"""

import re
from dataclasses import dataclass, field
from enum import Enum

# Exact semver version without prerelease or build suffix
SEMVER_PATTERN = re.compile(r"^\d+\.\d+\.\d+$", re.ASCII)


class VersionSource(str, Enum):
    """Where a resolved version came from."""

    INPUT = "input"
    FILE = "file"
    LATEST = "latest"


@dataclass(frozen=True, order=True)
class SemVer:
    """
    Parsed semantic version triple.

    Ordering and equality use the numeric fields only, so ``raw`` never
    affects comparisons.

    Example:
        >>> SemVer(1, 10, 0, "1.10.0") > SemVer(1, 9, 8, "1.9.8")
        True
    """

    major: int
    minor: int
    patch: int
    raw: str = field(default="", compare=False)

    @classmethod
    def parse(cls, version: str) -> "SemVer":
        """
        Parse an exact ``x.y.z`` string.

        Raises:
            ValueError: If the string is not an exact semver version
        """
        if not is_exact_version(version):
            raise ValueError(f"Not an exact x.y.z version: '{version}'")
        major, minor, patch = (int(part) for part in version.split("."))
        return cls(major, minor, patch, version)

    def __str__(self) -> str:
        return self.raw or f"{self.major}.{self.minor}.{self.patch}"


@dataclass(frozen=True)
class VersionSpec:
    """
    Result of version resolution.

    Attributes:
        input: Original request ('latest', '1.9.8', or the pin-file value)
        resolved: Exact version to install (always x.y.z)
        source: Provenance of the resolved version
    """

    input: str
    resolved: str
    source: VersionSource

    def __post_init__(self):
        if not is_exact_version(self.resolved):
            raise ValueError(f"Resolved version must be x.y.z, got '{self.resolved}'")


def is_exact_version(value: str) -> bool:
    """Check whether a string is an exact ``x.y.z`` version."""
    return bool(SEMVER_PATTERN.fullmatch(value))


def version_sort_key(version: str):
    """Numeric sort key for an exact ``x.y.z`` string."""
    return tuple(int(part) for part in version.split("."))


def is_at_least_major_version(version: SemVer, major: int) -> bool:
    """
    Check whether a detected version is at or past a major version boundary.

    Example:
        >>> is_at_least_major_version(SemVer(0, 75, 10, "0.75.10"), 1)
        False
    """
    return version.major >= major


def is_v1_or_later(version: SemVer) -> bool:
    """Check for the 1.x CLI redesign boundary (Terragrunt)."""
    return is_at_least_major_version(version, 1)


__all__ = [
    "SEMVER_PATTERN",
    "VersionSource",
    "SemVer",
    "VersionSpec",
    "is_exact_version",
    "version_sort_key",
    "is_at_least_major_version",
    "is_v1_or_later",
]
