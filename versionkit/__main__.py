"""
Entry point for running the versionkit CLI as a module.

Usage: python -m versionkit [command] [options]
"""

from versionkit.cli.parser import main

if __name__ == "__main__":
    main()
