"""
Cross-process locking for tool installations.

Two processes installing the same ``(tool, version, arch)`` into a shared
cache root would otherwise race between the existence check and the write.
Each cache key gets its own lock file so unrelated installs never wait on
each other.

Usage:
    from versionkit.core.locking import LockManager

    locks = LockManager(lock_dir)
    with locks.install_lock("terraform", "1.9.8", "amd64", timeout=300):
        # check the cache again, then download
        ...
"""

import logging
from contextlib import contextmanager
from pathlib import Path

from filelock import FileLock, Timeout as LockTimeout

from versionkit.core.exceptions import InstallFilesystemError, InstallLockTimeout

logger = logging.getLogger(__name__)

DEFAULT_LOCK_TIMEOUT = 300


class LockManager:
    """
    Manages install lock files under a single directory.

    Uses the ``filelock`` library, so locks are released automatically if
    the holding process dies.

    Attributes:
        lock_dir: Directory where lock files are stored
    """

    def __init__(self, lock_dir: Path):
        self.lock_dir = Path(lock_dir)

    def lock_path(self, tool: str, version: str, arch: str) -> Path:
        """Get the lock file path for one cache key."""
        safe_id = f"{tool}-{version}-{arch}".replace("/", "-").replace("\\", "-")
        return self.lock_dir / f"install-{safe_id}.lock"

    @contextmanager
    def install_lock(
        self, tool: str, version: str, arch: str, timeout: int = DEFAULT_LOCK_TIMEOUT
    ):
        """
        Hold the install lock for ``(tool, version, arch)``.

        Args:
            tool: Tool name (e.g., 'terraform')
            version: Exact version being installed
            arch: Cache architecture ('amd64' or 'arm64')
            timeout: Maximum wait time in seconds

        Raises:
            InstallLockTimeout: If the lock can't be acquired within timeout
            InstallFilesystemError: If the lock directory or file can't be created
        """
        lock_path = self.lock_path(tool, version, arch)
        lock = FileLock(lock_path, timeout=timeout)

        try:
            self.lock_dir.mkdir(parents=True, exist_ok=True)
            lock.acquire()
        except LockTimeout as e:
            raise InstallLockTimeout(
                tool,
                version,
                f"Could not acquire install lock for {tool} {version} ({arch}) "
                f"after {timeout}s. Another process may be installing it.",
            ) from e
        except OSError as e:
            raise InstallFilesystemError(
                tool,
                version,
                f"Failed to create install lock {lock_path} for "
                f"{tool} {version}: {e}",
            ) from e

        logger.debug(f"Acquired install lock: {lock_path}")
        try:
            yield
        finally:
            lock.release()
            logger.debug(f"Released install lock: {lock_path}")


__all__ = ["LockManager", "DEFAULT_LOCK_TIMEOUT"]
