"""Settings for versionkit.

Settings come from the environment, optionally layered over a
``versionkit.yaml`` file:

    cache_dir: /opt/tool-cache
    http_timeout: 30
    lock_timeout: 300
    tools:
      terraform:
        version: "1.9.8"
        version_file: .terraform-version
      terragrunt:
        version: latest

Environment variables win over the file:
    RUNNER_TOOL_CACHE, HOME     cache root (see versionkit.core.directory)
    GITHUB_TOKEN                GitHub API token for latest-release lookups
    VERSIONKIT_HTTP_TIMEOUT     HTTP timeout in seconds
    VERSIONKIT_LOCK_TIMEOUT     install lock timeout in seconds
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

from versionkit.core.directory import get_cache_root
from versionkit.core.download import DEFAULT_TIMEOUT
from versionkit.core.exceptions import ConfigurationError
from versionkit.core.locking import DEFAULT_LOCK_TIMEOUT

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = "versionkit.yaml"


@dataclass
class ToolRequest:
    """Requested version of one tool."""

    version: str = ""
    version_file: Optional[str] = None


@dataclass
class Settings:
    """Resolved versionkit settings."""

    tool_cache_root: Path
    github_token: Optional[str] = None
    request_timeout: int = DEFAULT_TIMEOUT
    lock_timeout: int = DEFAULT_LOCK_TIMEOUT
    tools: Dict[str, ToolRequest] = field(default_factory=dict)

    def tool_request(self, name: str) -> ToolRequest:
        return self.tools.get(name, ToolRequest())


def load_yaml_config(config_file: Path, required: bool = False) -> Dict[str, Any]:
    """
    Load and parse a YAML configuration file.

    Args:
        config_file: Path to YAML configuration file
        required: If True, raise error if file doesn't exist

    Returns:
        Configuration dictionary (empty dict if file doesn't exist and not required)

    Raises:
        ConfigurationError: If the file is missing (when required), unreadable
            or not a YAML mapping
    """
    config_file = Path(config_file)
    if not config_file.exists():
        if required:
            raise ConfigurationError(f"Configuration file not found: {config_file}")
        logger.debug(f"Config file not found (optional): {config_file}")
        return {}

    logger.debug(f"Loading configuration from {config_file}")

    try:
        with open(config_file, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {config_file}: {e}") from e
    except OSError as e:
        raise ConfigurationError(f"Cannot read {config_file}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"{config_file} must contain a mapping at top level")
    return data


def _parse_int(value: Any, name: str) -> int:
    try:
        parsed = int(value)
    except (TypeError, ValueError):
        raise ConfigurationError(f"{name} must be an integer, got {value!r}") from None
    if parsed <= 0:
        raise ConfigurationError(f"{name} must be positive, got {parsed}")
    return parsed


def _parse_tools(data: Any) -> Dict[str, ToolRequest]:
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError("'tools' must be a mapping of tool name to settings")

    tools = {}
    for name, entry in data.items():
        if entry is None:
            entry = {}
        elif isinstance(entry, (str, int, float)):
            # Shorthand: "terraform: 1.9.8"
            entry = {"version": entry}
        elif not isinstance(entry, dict):
            raise ConfigurationError(f"Invalid settings for tool '{name}'")

        version = entry.get("version", "")
        tools[str(name).lower()] = ToolRequest(
            version="" if version is None else str(version),
            version_file=entry.get("version_file"),
        )
    return tools


def load_settings(
    environ: Optional[Mapping[str, str]] = None,
    config_file: Optional[Path] = None,
) -> Settings:
    """
    Build Settings from the environment and an optional YAML file.

    Args:
        environ: Environment mapping (default: os.environ)
        config_file: YAML file to read; a missing file is an error only when
            passed explicitly

    Raises:
        ConfigurationError: If the file or any value is invalid
    """
    if environ is None:
        environ = os.environ

    if config_file is not None:
        data = load_yaml_config(Path(config_file), required=True)
    else:
        data = load_yaml_config(Path(DEFAULT_CONFIG_FILE))

    if environ.get("RUNNER_TOOL_CACHE") or not data.get("cache_dir"):
        cache_root = get_cache_root(environ)
    else:
        cache_root = Path(os.path.expanduser(str(data["cache_dir"])))

    request_timeout = _parse_int(
        environ.get("VERSIONKIT_HTTP_TIMEOUT") or data.get("http_timeout", DEFAULT_TIMEOUT),
        "http_timeout",
    )
    lock_timeout = _parse_int(
        environ.get("VERSIONKIT_LOCK_TIMEOUT")
        or data.get("lock_timeout", DEFAULT_LOCK_TIMEOUT),
        "lock_timeout",
    )

    return Settings(
        tool_cache_root=cache_root,
        github_token=environ.get("GITHUB_TOKEN") or None,
        request_timeout=request_timeout,
        lock_timeout=lock_timeout,
        tools=_parse_tools(data.get("tools")),
    )


__all__ = [
    "DEFAULT_CONFIG_FILE",
    "ToolRequest",
    "Settings",
    "load_yaml_config",
    "load_settings",
]
