"""
Install command implementation.

Installs an exact version into the tool cache and prints its directory.
"""

import logging

from versionkit.cli.utils import load_cli_settings, lookup_tool
from versionkit.core.agent import LocalAgent
from versionkit.versions.provision import build_installer

logger = logging.getLogger(__name__)


def run(args) -> int:
    """
    Run the install command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success)
    """
    settings = load_cli_settings(args)
    tool = lookup_tool(args.tool)

    installer = build_installer(tool, settings)
    cache_dir = installer.install(args.exact_version, LocalAgent())

    print(cache_dir)
    return 0
