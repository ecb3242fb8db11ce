"""
Latest-version discovery strategies.

Each strategy is a callable taking no arguments and returning the newest
exact ``x.y.z`` version published upstream:

- HashiCorpIndexFetcher: reads the HashiCorp releases ``index.json`` listing
  every published version and picks the highest stable one.
- GitHubLatestReleaseFetcher: asks the GitHub Releases API for the single
  latest release and strips the ``v`` prefix from its tag.
"""

import logging
import os
from typing import Optional

import requests

from versionkit.core.download import DEFAULT_TIMEOUT, http_get
from versionkit.core.exceptions import (
    NoQualifyingVersionError,
    RateLimitError,
    UpstreamFetchError,
)
from versionkit.versions.semver import is_exact_version, version_sort_key

logger = logging.getLogger(__name__)

HASHICORP_RELEASES_URL = "https://releases.hashicorp.com"
GITHUB_API_URL = "https://api.github.com"


def select_latest_stable(versions) -> Optional[str]:
    """
    Pick the highest exact ``x.y.z`` version, ignoring prereleases.

    Comparison is numeric, so '1.10.0' sorts above '1.9.8'.

    Example:
        >>> select_latest_stable(["1.9.8", "1.10.0-alpha1", "1.8.5"])
        '1.9.8'
    """
    stable = sorted(
        (v for v in versions if isinstance(v, str) and is_exact_version(v)),
        key=version_sort_key,
        reverse=True,
    )
    return stable[0] if stable else None


class HashiCorpIndexFetcher:
    """
    Latest stable version from a HashiCorp releases index.

    Args:
        product: Product name in the releases site (e.g., 'terraform')
        display_name: Name used in error messages (e.g., 'Terraform')
        base_url: Releases site root
        timeout: Request timeout in seconds
    """

    def __init__(
        self,
        product: str,
        display_name: Optional[str] = None,
        base_url: str = HASHICORP_RELEASES_URL,
        timeout: int = DEFAULT_TIMEOUT,
    ):
        self.product = product
        self.display_name = display_name or product
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    @property
    def index_url(self) -> str:
        return f"{self.base_url}/{self.product}/index.json"

    def __call__(self) -> str:
        url = self.index_url
        try:
            response = http_get(url, timeout=self.timeout)
        except requests.RequestException as e:
            raise UpstreamFetchError(
                f"Failed to fetch {self.display_name} version index: {e}"
            ) from e

        if not response.ok:
            raise UpstreamFetchError(
                f"Failed to fetch {self.display_name} version index: "
                f"{response.status_code} {response.reason}",
                status_code=response.status_code,
            )

        try:
            versions = response.json()["versions"]
        except (ValueError, KeyError, TypeError) as e:
            raise UpstreamFetchError(
                f"Malformed {self.display_name} version index at {url}: {e}"
            ) from e

        if not isinstance(versions, (dict, list)):
            raise UpstreamFetchError(
                f"Malformed {self.display_name} version index at {url}: "
                f"'versions' is {type(versions).__name__}"
            )

        latest = select_latest_stable(versions)
        if latest is None:
            raise NoQualifyingVersionError(
                f"No stable {self.display_name} versions found in the version index"
            )

        logger.debug(f"Latest {self.display_name} version from index: {latest}")
        return latest


class GitHubLatestReleaseFetcher:
    """
    Latest release version from the GitHub Releases API.

    Unauthenticated calls are limited to 60 requests per hour. When
    ``GITHUB_TOKEN`` is available it is sent as a bearer token.

    Args:
        repository: ``owner/name`` of the GitHub repository
        display_name: Name used in error messages (e.g., 'Terragrunt')
        token: API token; falls back to $GITHUB_TOKEN at call time
        api_url: GitHub API root
        timeout: Request timeout in seconds
    """

    def __init__(
        self,
        repository: str,
        display_name: Optional[str] = None,
        token: Optional[str] = None,
        api_url: str = GITHUB_API_URL,
        timeout: int = DEFAULT_TIMEOUT,
    ):
        self.repository = repository
        self.display_name = display_name or repository.split("/")[-1]
        self.token = token
        self.api_url = api_url.rstrip("/")
        self.timeout = timeout

    @property
    def release_url(self) -> str:
        return f"{self.api_url}/repos/{self.repository}/releases/latest"

    def request_headers(self) -> dict:
        headers = {"Accept": "application/vnd.github.v3+json"}
        token = self.token if self.token is not None else os.environ.get("GITHUB_TOKEN")
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return headers

    def __call__(self) -> str:
        try:
            response = http_get(
                self.release_url, headers=self.request_headers(), timeout=self.timeout
            )
        except requests.RequestException as e:
            raise UpstreamFetchError(
                f"Failed to fetch latest {self.display_name} version: {e}"
            ) from e

        if response.status_code == 403:
            raise RateLimitError(
                f"Failed to fetch latest {self.display_name} version: "
                f"{response.status_code} {response.reason} "
                "(GitHub API rate limit, set GITHUB_TOKEN to increase the limit)",
                status_code=response.status_code,
            )
        if not response.ok:
            raise UpstreamFetchError(
                f"Failed to fetch latest {self.display_name} version: "
                f"{response.status_code} {response.reason}",
                status_code=response.status_code,
            )

        try:
            tag = response.json()["tag_name"]
        except (ValueError, KeyError, TypeError) as e:
            raise UpstreamFetchError(
                f"Malformed {self.display_name} release response: {e}"
            ) from e

        if not isinstance(tag, str):
            raise UpstreamFetchError(
                f"Unexpected {self.display_name} latest version format: {tag!r}"
            )

        version = tag[1:] if tag.startswith("v") else tag
        if not is_exact_version(version):
            raise UpstreamFetchError(
                f"Unexpected {self.display_name} latest version format: '{tag}'"
            )

        logger.debug(f"Latest {self.display_name} release: {tag}")
        return version


__all__ = [
    "HASHICORP_RELEASES_URL",
    "GITHUB_API_URL",
    "select_latest_stable",
    "HashiCorpIndexFetcher",
    "GitHubLatestReleaseFetcher",
]
