"""
Entry point for running the versionkit CLI as a module.

Usage: python -m versionkit.cli [command] [options]
"""

from .parser import main

if __name__ == "__main__":
    main()
