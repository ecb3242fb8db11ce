"""
Detect command implementation.

Reports the version printed by the tool found on PATH.
"""

import logging

from versionkit.cli.utils import lookup_tool
from versionkit.core.agent import LocalAgent
from versionkit.versions.detector import VersionDetector

logger = logging.getLogger(__name__)


def run(args) -> int:
    """
    Run the detect command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success)
    """
    tool = lookup_tool(args.tool)
    version = VersionDetector().detect(tool, LocalAgent())

    print(f"{tool.name}: {version.raw}")
    return 0
