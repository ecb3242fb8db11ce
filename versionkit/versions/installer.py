"""
Download-and-cache installation of tool binaries.

Release artifacts come in two shapes, each modelled as an artifact variant
that knows its download URL and how to turn the downloaded body into an
executable inside a staging directory:

- ArchiveArtifact: a per-platform zip (HashiCorp releases), extracted with
  ``unzip`` through the agent
- BinaryArtifact: a bare per-platform executable (GitHub releases), written
  straight to the staging directory

Installed binaries live at ``<cache-root>/<tool>/<version>/<arch>/<binary>``
and are never re-downloaded once present. The binary only appears under its
final name after the download, extraction and chmod all succeeded, so an
interrupted install never leaves something that looks installed.
"""

import logging
import os
import shutil
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Optional, Union

import requests

from versionkit.core.agent import ToolAgent
from versionkit.core.directory import get_cache_root, get_lock_dir, get_tool_cache_dir
from versionkit.core.download import DEFAULT_TIMEOUT, http_get, write_response
from versionkit.core.exceptions import (
    DownloadError,
    ExtractionError,
    InstallFilesystemError,
    InvalidVersionSpecError,
)
from versionkit.core.locking import DEFAULT_LOCK_TIMEOUT, LockManager
from versionkit.core.platform import PlatformInfo, detect_platform
from versionkit.versions.semver import is_exact_version

if TYPE_CHECKING:
    from versionkit.versions.tools import ToolDefinition

logger = logging.getLogger(__name__)

EXECUTABLE_MODE = 0o755

# Prefix of per-install scratch directories inside a version's cache dir
STAGING_PREFIX = ".staging-"


@dataclass(frozen=True)
class ArchiveArtifact:
    """
    Zip archive named ``<tool>_<version>_<os>_<arch>.zip``.

    Attributes:
        base_url: Release root; the archive is served from ``<base_url>/<version>/``
    """

    base_url: str

    def artifact_name(self, tool: str, version: str, platform: PlatformInfo) -> str:
        return f"{tool}_{version}_{platform.os}_{platform.arch}.zip"

    def download_url(self, tool: str, version: str, platform: PlatformInfo) -> str:
        name = self.artifact_name(tool, version, platform)
        return f"{self.base_url.rstrip('/')}/{version}/{name}"

    def unpack(
        self,
        installer: "VersionInstaller",
        response: requests.Response,
        version: str,
        agent: ToolAgent,
        staging_dir: Path,
    ) -> Path:
        """Write the zip into staging_dir, extract it there, delete the zip."""
        zip_path = staging_dir / self.artifact_name(
            installer.tool.name, version, installer.platform
        )

        try:
            installer.write_body(response, zip_path, version, agent)

            result = agent.exec(
                "unzip",
                ["-o", str(zip_path), "-d", str(staging_dir)],
                silent=True,
                ignore_return_code=True,
            )
            if result.exit_code != 0:
                detail = result.stderr or result.stdout
                raise ExtractionError(
                    installer.tool.name,
                    version,
                    f"Failed to extract {installer.tool.display_name} {version} "
                    f"(exit {result.exit_code}): {detail}",
                )
        finally:
            try:
                zip_path.unlink(missing_ok=True)
            except OSError as e:
                logger.debug(f"Could not remove archive {zip_path}: {e}")

        staged = staging_dir / installer.binary_name
        if not staged.is_file():
            raise ExtractionError(
                installer.tool.name,
                version,
                f"Archive for {installer.tool.display_name} {version} did not "
                f"contain {installer.binary_name}",
            )
        return staged


@dataclass(frozen=True)
class BinaryArtifact:
    """
    Bare executable named ``<tool>_<os>_<arch>``.

    Attributes:
        base_url: Release download root; the binary is served from
            ``<base_url>/v<version>/``
    """

    base_url: str

    def artifact_name(self, tool: str, version: str, platform: PlatformInfo) -> str:
        return f"{tool}_{platform.os}_{platform.arch}"

    def download_url(self, tool: str, version: str, platform: PlatformInfo) -> str:
        name = self.artifact_name(tool, version, platform)
        return f"{self.base_url.rstrip('/')}/v{version}/{name}"

    def unpack(
        self,
        installer: "VersionInstaller",
        response: requests.Response,
        version: str,
        agent: ToolAgent,
        staging_dir: Path,
    ) -> Path:
        """Write the body to the binary name inside staging_dir."""
        staged = staging_dir / installer.binary_name
        installer.write_body(response, staged, version, agent)
        return staged


Artifact = Union[ArchiveArtifact, BinaryArtifact]


class VersionInstaller:
    """
    Installs versions of one tool into the tool cache.

    Args:
        tool: Tool definition (name, artifact shape, ...)
        cache_root: Cache root directory (default: get_cache_root())
        platform: Target platform (default: detected; raises
            UnsupportedPlatformError immediately on unsupported hosts)
        lock_manager: Install lock manager (default: under the cache root)
        timeout: HTTP timeout in seconds
        lock_timeout: Maximum wait for another process's install, in seconds
    """

    def __init__(
        self,
        tool: "ToolDefinition",
        cache_root: Optional[Path] = None,
        platform: Optional[PlatformInfo] = None,
        lock_manager: Optional[LockManager] = None,
        timeout: int = DEFAULT_TIMEOUT,
        lock_timeout: int = DEFAULT_LOCK_TIMEOUT,
    ):
        self.tool = tool
        self.platform = platform or detect_platform()
        self.cache_root = Path(cache_root) if cache_root else get_cache_root()
        self.lock_manager = lock_manager or LockManager(get_lock_dir(self.cache_root))
        self.timeout = timeout
        self.lock_timeout = lock_timeout

    @property
    def binary_name(self) -> str:
        return self.platform.executable_name(self.tool.name)

    def cache_dir(self, version: str) -> Path:
        return get_tool_cache_dir(
            self.tool.name, version, self.platform.arch, self.cache_root
        )

    def binary_path(self, version: str) -> Path:
        return self.cache_dir(version) / self.binary_name

    def download_url(self, version: str) -> str:
        return self.tool.artifact.download_url(self.tool.name, version, self.platform)

    def is_installed(self, version: str) -> bool:
        """Check if a version is already installed in the cache."""
        return self.binary_path(version).is_file()

    def install(self, version: str, agent: ToolAgent) -> Path:
        """
        Install a specific version unless it is already cached.

        Args:
            version: Exact x.y.z version
            agent: Agent used for extraction and progress messages

        Returns:
            Path to the cache directory holding the binary

        Raises:
            InvalidVersionSpecError: If version is not an exact x.y.z version
            DownloadError: If the artifact cannot be downloaded
            ExtractionError: If the archive cannot be extracted
            InstallFilesystemError: If the cache cannot be written
            InstallLockTimeout: If another process holds the install lock too long
        """
        if not is_exact_version(version):
            raise InvalidVersionSpecError(
                version,
                f"Cannot install {self.tool.name} '{version}': "
                "an exact x.y.z version is required",
            )

        cache_dir = self.cache_dir(version)
        name = self.tool.display_name

        if self.is_installed(version):
            agent.info(f"{name} {version} already cached at {cache_dir}")
            return cache_dir

        with self.lock_manager.install_lock(
            self.tool.name, version, self.platform.arch, timeout=self.lock_timeout
        ):
            # Another process may have finished the install while we waited
            if self.is_installed(version):
                agent.info(f"{name} {version} already cached at {cache_dir}")
                return cache_dir

            url = self.download_url(version)
            agent.info(f"Downloading {name} {version} from {url}")
            response = self._open_download(url, version)

            try:
                staging_dir = self._create_staging_dir(version)
                try:
                    staged = self.tool.artifact.unpack(
                        self, response, version, agent, staging_dir
                    )
                    self._finalize(staged, version)
                finally:
                    shutil.rmtree(staging_dir, ignore_errors=True)
            finally:
                response.close()

        agent.info(f"{name} {version} installed to {cache_dir}")
        return cache_dir

    def _create_staging_dir(self, version: str) -> Path:
        """Create a private scratch directory inside the version's cache dir."""
        cache_dir = self.cache_dir(version)
        try:
            cache_dir.mkdir(parents=True, exist_ok=True)
            return Path(tempfile.mkdtemp(prefix=STAGING_PREFIX, dir=cache_dir))
        except OSError as e:
            raise InstallFilesystemError(
                self.tool.name,
                version,
                f"Failed to create cache directory {cache_dir} for "
                f"{self.tool.display_name} {version}: {e}",
            ) from e

    def _finalize(self, staged: Path, version: str) -> None:
        """Make the staged binary executable and move it to its final name."""
        binary = self.binary_path(version)
        try:
            os.chmod(staged, EXECUTABLE_MODE)
            os.replace(staged, binary)
        except OSError as e:
            raise InstallFilesystemError(
                self.tool.name,
                version,
                f"Failed to install {binary} for "
                f"{self.tool.display_name} {version}: {e}",
            ) from e

    def write_body(
        self,
        response: requests.Response,
        destination: Path,
        version: str,
        agent: ToolAgent,
    ) -> None:
        """Stream a download body to disk, mapping failures to install errors."""
        try:
            write_response(
                response,
                destination,
                progress_callback=lambda p: agent.debug(f"{self.tool.name}: {p}"),
            )
        except requests.RequestException as e:
            raise DownloadError(
                self.tool.name,
                version,
                f"Failed to download {self.tool.display_name} {version}: {e}",
            ) from e
        except OSError as e:
            raise InstallFilesystemError(
                self.tool.name,
                version,
                f"Failed to write {destination} for "
                f"{self.tool.display_name} {version}: {e}",
            ) from e

    def _open_download(self, url: str, version: str) -> requests.Response:
        try:
            response = http_get(url, timeout=self.timeout, stream=True)
        except requests.RequestException as e:
            raise DownloadError(
                self.tool.name,
                version,
                f"Failed to download {self.tool.display_name} {version}: {e}",
            ) from e

        if not response.ok:
            response.close()
            raise DownloadError(
                self.tool.name,
                version,
                f"Failed to download {self.tool.display_name} {version}: "
                f"{response.status_code} {response.reason}",
                status_code=response.status_code,
            )

        return response


__all__ = [
    "ArchiveArtifact",
    "BinaryArtifact",
    "Artifact",
    "VersionInstaller",
]
