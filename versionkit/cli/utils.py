"""
Shared utilities for CLI commands.
"""

import logging
from typing import Tuple

from versionkit.config.settings import Settings, load_settings
from versionkit.core.exceptions import ConfigurationError
from versionkit.versions.tools import ToolDefinition, get_tool

logger = logging.getLogger(__name__)


def load_cli_settings(args) -> Settings:
    """Load settings honouring the global --config option."""
    return load_settings(config_file=getattr(args, "config", None))


def lookup_tool(name: str) -> ToolDefinition:
    """
    Get a tool definition by name.

    Raises:
        ConfigurationError: If the tool is unknown
    """
    try:
        return get_tool(name)
    except KeyError as e:
        raise ConfigurationError(e.args[0]) from None


def version_request(args, settings: Settings, tool: ToolDefinition) -> Tuple[str, str]:
    """
    Work out the version request and version file name for a command.

    Command-line values win over the configuration file; the tool's own
    version file name is the last fallback.

    Returns:
        Tuple of (version request, version file name)
    """
    configured = settings.tool_request(tool.name)

    version = args.tool_version
    if version is None:
        version = configured.version

    version_file = args.version_file or configured.version_file or tool.version_file
    logger.debug(
        f"{tool.name}: version request '{version}', version file {version_file}"
    )
    return version, version_file
