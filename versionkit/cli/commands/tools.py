"""
List command implementation.
"""

from versionkit.versions.tools import available_tools, get_tool


def run(args) -> int:
    """Print each supported tool with its version file name."""
    for name in available_tools():
        tool = get_tool(name)
        print(f"{tool.name:<12} {tool.version_file}")
    return 0
