"""
HTTP transport for release indexes and release artifacts.

This module wraps ``requests`` with the defaults every versionkit request
shares:
- A fixed identifying User-Agent header
- A request timeout (no retries, no resume)
- Streaming writes of artifact bodies with optional progress reporting

Status handling is left to the callers, which turn non-success responses
into tool-specific errors.
"""

import logging
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, Optional

import requests

logger = logging.getLogger(__name__)

USER_AGENT = "versionkit"
DEFAULT_TIMEOUT = 30
CHUNK_SIZE = 8192


@dataclass
class DownloadProgress:
    """Progress information for an artifact download."""

    bytes_downloaded: int
    total_bytes: int
    speed_bps: float  # bytes per second

    @property
    def percentage(self) -> float:
        if self.total_bytes <= 0:
            return 0.0
        return self.bytes_downloaded / self.total_bytes * 100

    def __str__(self) -> str:
        return format_progress(self)


def http_get(
    url: str,
    headers: Optional[Dict[str, str]] = None,
    timeout: int = DEFAULT_TIMEOUT,
    stream: bool = False,
) -> requests.Response:
    """
    Issue a GET request with the versionkit User-Agent.

    Args:
        url: URL to fetch
        headers: Extra request headers (override the defaults)
        timeout: Request timeout in seconds
        stream: Defer downloading the body until it is iterated

    Returns:
        The response, whatever its status code

    Raises:
        requests.RequestException: On connection failures and timeouts
    """
    request_headers = {"User-Agent": USER_AGENT}
    if headers:
        request_headers.update(headers)

    logger.debug(f"GET {url}")
    response = requests.get(
        url,
        headers=request_headers,
        timeout=timeout,
        stream=stream,
        allow_redirects=True,
    )
    logger.debug(f"GET {url} -> {response.status_code}")
    return response


def write_response(
    response: requests.Response,
    destination: Path,
    progress_callback: Optional[Callable[[DownloadProgress], None]] = None,
) -> int:
    """
    Stream a response body to a file.

    Args:
        response: Response opened with ``stream=True``
        destination: File to create or overwrite
        progress_callback: Called at most every 0.5s and once at the end

    Returns:
        Number of bytes written

    Raises:
        OSError: If the destination cannot be written
        requests.RequestException: If the connection drops mid-body
    """
    content_length = response.headers.get("content-length")
    total_size = int(content_length) if content_length else 0

    downloaded = 0
    start_time = time.time()
    last_report = start_time

    with open(destination, "wb") as f:
        for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
            if not chunk:
                continue
            f.write(chunk)
            downloaded += len(chunk)

            now = time.time()
            if progress_callback and now - last_report >= 0.5:
                elapsed = now - start_time
                progress_callback(
                    DownloadProgress(
                        downloaded, total_size, downloaded / elapsed if elapsed else 0
                    )
                )
                last_report = now

    if progress_callback:
        elapsed = time.time() - start_time
        progress_callback(
            DownloadProgress(
                downloaded,
                total_size or downloaded,
                downloaded / elapsed if elapsed else 0,
            )
        )

    logger.debug(f"Wrote {downloaded} bytes to {destination}")
    return downloaded


def format_progress(progress: DownloadProgress) -> str:
    """
    Format progress for display.

    Example:
        >>> print(format_progress(DownloadProgress(52428800, 104857600, 1048576)))
        50.0/100.0 MB (50.0%) at 1.0 MB/s
    """
    mb_downloaded = progress.bytes_downloaded / 1024 / 1024
    speed_mbps = progress.speed_bps / 1024 / 1024

    if progress.total_bytes > 0:
        mb_total = progress.total_bytes / 1024 / 1024
        return (
            f"{mb_downloaded:.1f}/{mb_total:.1f} MB "
            f"({progress.percentage:.1f}%) "
            f"at {speed_mbps:.1f} MB/s"
        )
    return f"{mb_downloaded:.1f} MB at {speed_mbps:.1f} MB/s"
