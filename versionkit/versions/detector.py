"""
Detection of the installed version of a tool.

Runs ``<tool> --version`` through the agent and parses the output. Results
are memoized per tool for the lifetime of the detector, so a workflow that
checks the version repeatedly only spawns the binary once.

Usage:
    from versionkit.versions.detector import VersionDetector
    from versionkit.versions.tools import TERRAGRUNT

    detector = VersionDetector()
    version = detector.detect(TERRAGRUNT, agent)
    if is_v1_or_later(version):
        ...
"""

import logging
from typing import Dict, Pattern

from versionkit.core.agent import ToolAgent
from versionkit.core.exceptions import DetectionError
from versionkit.versions.semver import SemVer
from versionkit.versions.tools import ToolDefinition

logger = logging.getLogger(__name__)

# Characters of unmatched output included in parse errors
OUTPUT_EXCERPT_LENGTH = 200


def parse_version_output(output: str, pattern: Pattern, display_name: str) -> SemVer:
    """
    Parse a version from CLI output using a three-group pattern.

    Raises:
        DetectionError: If the output doesn't match
    """
    match = pattern.search(output)
    if not match:
        raise DetectionError(
            f"Failed to parse {display_name} version from output: "
            f"{output[:OUTPUT_EXCERPT_LENGTH]}"
        )
    major, minor, patch = match.group(1), match.group(2), match.group(3)
    return SemVer(int(major), int(minor), int(patch), f"{major}.{minor}.{patch}")


class VersionDetector:
    """Detects installed tool versions, caching one result per tool name."""

    def __init__(self):
        self._cache: Dict[str, SemVer] = {}

    def detect(self, tool: ToolDefinition, agent: ToolAgent) -> SemVer:
        """
        Detect the version of the tool found on the agent's PATH.

        Raises:
            DetectionError: If ``--version`` exits non-zero or prints no version
        """
        cached = self._cache.get(tool.name)
        if cached is not None:
            return cached

        result = agent.exec(
            tool.name, ["--version"], silent=True, ignore_return_code=True
        )
        if result.exit_code != 0:
            raise DetectionError(
                f"{tool.name} --version failed (exit {result.exit_code}): "
                f"{result.stderr}"
            )

        version = parse_version_output(
            result.stdout, tool.version_pattern, tool.display_name
        )
        logger.debug(f"Detected {tool.display_name} {version}")
        self._cache[tool.name] = version
        return version

    def clear_cache(self) -> None:
        """Forget every memoized version."""
        self._cache.clear()


__all__ = ["VersionDetector", "parse_version_output"]
