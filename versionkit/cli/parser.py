"""
versionkit CLI argument parser.

This module implements the command-line interface for versionkit using argparse.
"""

import argparse
import importlib
import logging
import sys
from pathlib import Path
from typing import List, Optional

from versionkit import __version__
from versionkit.core.exceptions import VersionKitError

logger = logging.getLogger(__name__)

COMMAND_MODULES = {
    "resolve": "versionkit.cli.commands.resolve",
    "install": "versionkit.cli.commands.install",
    "detect": "versionkit.cli.commands.detect",
    "setup": "versionkit.cli.commands.setup",
    "list": "versionkit.cli.commands.tools",
}


class CLI:
    """versionkit command-line interface."""

    def __init__(self):
        self.parser = self._create_parser()

    def _create_parser(self) -> argparse.ArgumentParser:
        parser = argparse.ArgumentParser(
            prog="versionkit",
            description="versionkit - resolve, cache and install CLI tool versions",
            epilog='Use "versionkit COMMAND --help" for command-specific help',
        )

        parser.add_argument(
            "--version", action="version", version=f"versionkit {__version__}"
        )
        parser.add_argument(
            "--verbose", "-v", action="store_true", help="Enable verbose output"
        )
        parser.add_argument(
            "--quiet",
            "-q",
            action="store_true",
            help="Enable minimal output (errors only)",
        )
        parser.add_argument(
            "--config",
            type=Path,
            metavar="PATH",
            help="Path to configuration file (default: ./versionkit.yaml)",
        )

        subparsers = parser.add_subparsers(
            dest="command", help="Available commands", metavar="COMMAND"
        )

        self._add_resolve_command(subparsers)
        self._add_install_command(subparsers)
        self._add_detect_command(subparsers)
        self._add_setup_command(subparsers)
        subparsers.add_parser(
            "list",
            help="List supported tools",
            description="List supported tools and their version file names",
        )

        return parser

    @staticmethod
    def _add_version_request_arguments(parser: argparse.ArgumentParser):
        parser.add_argument("tool", metavar="TOOL", help="Tool name (e.g., terraform)")
        parser.add_argument(
            "--tool-version",
            dest="tool_version",
            metavar="VERSION",
            default=None,
            help="Version request: x.y.z, latest, or skip "
            "(default: from config, then the version file)",
        )
        parser.add_argument(
            "--version-file",
            metavar="NAME",
            help="Version file name (default: the tool's own, e.g. .terraform-version)",
        )
        parser.add_argument(
            "--working-directory",
            "-C",
            type=Path,
            metavar="PATH",
            default=Path.cwd(),
            help="Directory where the version file search starts "
            "(default: current directory)",
        )

    def _add_resolve_command(self, subparsers):
        parser = subparsers.add_parser(
            "resolve",
            help="Resolve a version request to an exact version",
            description="Resolve a version request without installing anything",
        )
        self._add_version_request_arguments(parser)

    def _add_install_command(self, subparsers):
        parser = subparsers.add_parser(
            "install",
            help="Install an exact version into the tool cache",
            description="Download and cache an exact tool version",
        )
        parser.add_argument("tool", metavar="TOOL", help="Tool name (e.g., terraform)")
        parser.add_argument("exact_version", metavar="VERSION", help="Exact x.y.z version")

    def _add_detect_command(self, subparsers):
        parser = subparsers.add_parser(
            "detect",
            help="Report the version of the tool found on PATH",
            description="Run TOOL --version and report the parsed version",
        )
        parser.add_argument("tool", metavar="TOOL", help="Tool name (e.g., terraform)")

    def _add_setup_command(self, subparsers):
        parser = subparsers.add_parser(
            "setup",
            help="Resolve, install and add a tool to PATH",
            description="Resolve a version request, install it and add it to PATH",
        )
        self._add_version_request_arguments(parser)
        parser.add_argument(
            "--no-detect",
            action="store_true",
            help="Skip running the installed binary's --version",
        )

    def run(self, argv: Optional[List[str]] = None) -> int:
        """
        Parse arguments and run the selected command.

        Returns:
            Exit code (0 for success)
        """
        args = self.parser.parse_args(argv)
        self._setup_logging(args)

        if not args.command:
            self.parser.print_help()
            return 1

        return self._dispatch_command(args)

    def _setup_logging(self, args):
        if args.verbose:
            level = logging.DEBUG
            format_str = "%(levelname)s [%(name)s] %(message)s"
        elif args.quiet:
            level = logging.ERROR
            format_str = "%(levelname)s: %(message)s"
        else:
            level = logging.INFO
            format_str = "%(message)s"

        logging.basicConfig(level=level, format=format_str, force=True)

    def _dispatch_command(self, args) -> int:
        module_name = COMMAND_MODULES.get(args.command)
        if not module_name:
            logger.error(f"Unknown command: {args.command}")
            return 1

        module = importlib.import_module(module_name)

        try:
            return module.run(args)
        except VersionKitError as e:
            logger.error(f"Error: {e}")
            if args.verbose:
                logger.debug("Traceback:", exc_info=True)
            return 1


def main(argv: Optional[List[str]] = None):
    """Main entry point for CLI."""
    cli = CLI()
    sys.exit(cli.run(argv))


if __name__ == "__main__":
    main()
