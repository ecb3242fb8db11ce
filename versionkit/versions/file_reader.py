"""
Version-pin file lookup (``.terraform-version``, ``.terragrunt-version``).

Follows the tfenv/tgenv conventions: the file closest to the working
directory wins, the walk stops at $HOME or the filesystem root, and the
home directory is always checked last.
"""

import logging
import os
from pathlib import Path
from typing import Optional, Union

logger = logging.getLogger(__name__)


def parse_version_file(content: str) -> Optional[str]:
    """
    Extract the version token from version file content.

    Returns the first line that is non-empty after trimming and does not
    start with ``#``, or None if there is no such line.

    Example:
        >>> parse_version_file("# pinned\\n\\n1.5.7\\n")
        '1.5.7'
    """
    for line in content.split("\n"):
        stripped = line.strip()
        if stripped and not stripped.startswith("#"):
            return stripped
    return None


class VersionFileReader:
    """
    Reads version files by walking up the directory tree.

    Args:
        home: Home directory used as the walk boundary (default: the user's home)
    """

    def __init__(self, home: Optional[Union[str, Path]] = None):
        self._home = Path(home) if home is not None else None

    @property
    def home(self) -> Path:
        if self._home is not None:
            return Path(os.path.abspath(self._home))
        return Path(os.path.abspath(Path.home()))

    def read(self, start_dir: Union[str, Path], file_name: str) -> Optional[str]:
        """
        Walk from start_dir upward looking for the version file.

        A file that exists but holds only blank lines and comments does not
        stop the walk.

        Args:
            start_dir: Directory to start searching from
            file_name: Version file name (e.g., '.terraform-version')

        Returns:
            The version string from the nearest file, or None if not found
        """
        home = self.home
        start = Path(os.path.abspath(start_dir))
        current = start

        while True:
            version = self._read_at(current / file_name)
            if version:
                return version

            parent = current.parent
            if current == home or parent == current:
                break
            current = parent

        if start != home:
            version = self._read_at(home / file_name)
            if version:
                return version

        logger.debug(f"No {file_name} found from {start}")
        return None

    def _read_at(self, path: Path) -> Optional[str]:
        if not path.is_file():
            return None
        try:
            content = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.debug(f"Skipping unreadable version file {path}: {e}")
            return None

        version = parse_version_file(content)
        if version:
            logger.debug(f"Found version '{version}' in {path}")
        return version


__all__ = ["VersionFileReader", "parse_version_file"]
