"""
Version request resolution.

One algorithm serves every tool; the only per-tool part is the injected
latest-version fetcher.

Resolution priority (on the trimmed request):
1. 'skip'   -> None (do not install)
2. 'x.y.z'  -> returned as-is
3. 'latest' -> fetched from upstream
4. ''       -> version file, falling back to latest when there is none
"""

import logging
from pathlib import Path
from typing import Callable, Optional, Union

from versionkit.core.exceptions import InvalidVersionSpecError
from versionkit.versions.file_reader import VersionFileReader
from versionkit.versions.semver import VersionSource, VersionSpec, is_exact_version

logger = logging.getLogger(__name__)

SKIP = "skip"
LATEST = "latest"
ACCEPTED_FORMS = "Use 'x.y.z', 'latest', or 'skip'."


class VersionResolver:
    """
    Resolves a version request to a concrete VersionSpec.

    Args:
        tool_name: Tool name used in error messages
        fetch_latest: Callable returning the newest upstream x.y.z version
        file_reader: Version file lookup (default: VersionFileReader())

    Example:
        >>> resolver = VersionResolver("terraform", lambda: "1.9.8")
        >>> resolver.resolve("latest", ".terraform-version", ".").resolved
        '1.9.8'
    """

    def __init__(
        self,
        tool_name: str,
        fetch_latest: Callable[[], str],
        file_reader: Optional[VersionFileReader] = None,
    ):
        self.tool_name = tool_name
        self.fetch_latest = fetch_latest
        self.file_reader = file_reader or VersionFileReader()

    def resolve(
        self,
        version: str,
        version_file: str,
        working_directory: Union[str, Path],
    ) -> Optional[VersionSpec]:
        """
        Resolve a version request.

        Args:
            version: '1.9.8', 'latest', 'skip', or empty
            version_file: Version file name (e.g., '.terraform-version')
            working_directory: Starting directory for the version file search

        Returns:
            Resolved VersionSpec, or None when installation should be skipped

        Raises:
            InvalidVersionSpecError: If the request or file content is malformed
            UpstreamFetchError: If the latest version cannot be fetched
            NoQualifyingVersionError: If upstream lists no stable version
        """
        request = (version or "").strip()

        if request.lower() == SKIP:
            return None

        if is_exact_version(request):
            return VersionSpec(request, request, VersionSource.INPUT)

        if request.lower() == LATEST:
            return VersionSpec(LATEST, self._latest(), VersionSource.LATEST)

        if request == "":
            file_version = self.file_reader.read(working_directory, version_file)
            if file_version:
                return self._resolve_file_version(file_version, version_file)
            logger.debug(f"No {version_file} found, resolving latest {self.tool_name}")
            return VersionSpec(LATEST, self._latest(), VersionSource.LATEST)

        raise InvalidVersionSpecError(
            request,
            f"Invalid {self.tool_name} version spec: '{request}'. {ACCEPTED_FORMS}",
        )

    def _resolve_file_version(
        self, file_version: str, version_file: str
    ) -> Optional[VersionSpec]:
        """Resolve a version string read from a version file."""
        if file_version.lower() == SKIP:
            return None

        if file_version.lower() == LATEST:
            return VersionSpec(file_version, self._latest(), VersionSource.FILE)

        if is_exact_version(file_version):
            return VersionSpec(file_version, file_version, VersionSource.FILE)

        raise InvalidVersionSpecError(
            file_version,
            f"Invalid version in {version_file}: '{file_version}'. {ACCEPTED_FORMS}",
        )

    def _latest(self) -> str:
        latest = self.fetch_latest()
        logger.debug(f"Latest {self.tool_name} version: {latest}")
        return latest


__all__ = ["VersionResolver", "SKIP", "LATEST"]
