"""
Resolve command implementation.

Prints the exact version a request resolves to, without installing it.
"""

import logging

from versionkit.cli.utils import load_cli_settings, lookup_tool, version_request
from versionkit.versions.provision import build_resolver

logger = logging.getLogger(__name__)


def run(args) -> int:
    """
    Run the resolve command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success)
    """
    settings = load_cli_settings(args)
    tool = lookup_tool(args.tool)
    version, version_file = version_request(args, settings, tool)

    resolver = build_resolver(tool, settings)
    spec = resolver.resolve(version, version_file, args.working_directory)

    if spec is None:
        print(f"{tool.name}: skip")
        return 0

    print(f"{tool.name}: {spec.resolved} (source: {spec.source.value})")
    return 0
