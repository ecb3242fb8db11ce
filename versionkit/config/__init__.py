"""Configuration loading for versionkit."""

from .settings import (
    DEFAULT_CONFIG_FILE,
    Settings,
    ToolRequest,
    load_settings,
    load_yaml_config,
)

__all__ = [
    "DEFAULT_CONFIG_FILE",
    "Settings",
    "ToolRequest",
    "load_settings",
    "load_yaml_config",
]
