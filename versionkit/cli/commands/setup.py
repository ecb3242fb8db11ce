"""
Setup command implementation.

Resolves a version request, installs the version, adds it to PATH and
confirms the installed binary's own version.
"""

import logging

from versionkit.cli.utils import load_cli_settings, lookup_tool, version_request
from versionkit.core.agent import LocalAgent
from versionkit.versions.detector import VersionDetector
from versionkit.versions.provision import build_installer, build_resolver, provision_tool

logger = logging.getLogger(__name__)


def run(args) -> int:
    """
    Run the setup command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success)
    """
    settings = load_cli_settings(args)
    tool = lookup_tool(args.tool)
    version, version_file = version_request(args, settings, tool)

    result = provision_tool(
        LocalAgent(),
        tool,
        version,
        version_file,
        args.working_directory,
        resolver=build_resolver(tool, settings),
        installer=build_installer(tool, settings),
        detector=None if args.no_detect else VersionDetector(),
    )

    if result.skipped:
        print(f"{tool.name}: skip")
        return 0

    print(f"{tool.name}: {result.spec.resolved} -> {result.cache_dir}")
    if result.detected is not None:
        print(f"{tool.name} reports {result.detected.raw}")
    return 0
