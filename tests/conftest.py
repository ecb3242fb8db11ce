"""
Pytest configuration and shared fixtures for versionkit tests.
"""

from typing import List, Optional, Sequence
from unittest.mock import Mock

import pytest

from versionkit.core.agent import ExecResult, ToolAgent
from versionkit.core.platform import PlatformInfo, clear_platform_cache


def pytest_addoption(parser):
    """Add custom command line options."""
    parser.addoption(
        "--integration",
        action="store_true",
        default=False,
        help="run integration tests that require network access",
    )


def pytest_collection_modifyitems(config, items):
    """Skip integration tests unless --integration flag is provided."""
    if not config.getoption("--integration"):
        skip_integration = pytest.mark.skip(reason="need --integration option to run")
        for item in items:
            if "integration" in item.keywords:
                item.add_marker(skip_integration)


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers",
        "integration: marks tests as integration tests (requires --integration)",
    )
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )


# ============================================================================
# Shared Test Fixtures
# ============================================================================


class RecordingAgent(ToolAgent):
    """
    In-memory agent that records calls instead of touching the system.

    ``exec_handler`` decides what each command returns; by default every
    command succeeds with empty output.
    """

    def __init__(self, exec_handler=None):
        self.exec_handler = exec_handler
        self.exec_calls: List[tuple] = []
        self.paths: List[str] = []
        self.messages: List[tuple] = []

    def exec(
        self,
        command: str,
        args: Optional[Sequence[str]] = None,
        cwd=None,
        silent: bool = False,
        ignore_return_code: bool = False,
    ) -> ExecResult:
        args = list(args or [])
        self.exec_calls.append((command, args))
        if self.exec_handler is not None:
            return self.exec_handler(command, args)
        return ExecResult(0, "", "")

    def add_path(self, path) -> None:
        self.paths.append(str(path))

    def info(self, message: str) -> None:
        self.messages.append(("info", message))

    def warning(self, message: str) -> None:
        self.messages.append(("warning", message))

    def debug(self, message: str) -> None:
        self.messages.append(("debug", message))

    def logged(self, level: str) -> List[str]:
        return [m for lvl, m in self.messages if lvl == level]


@pytest.fixture
def agent() -> RecordingAgent:
    """Agent that records exec calls, PATH additions and messages."""
    return RecordingAgent()


@pytest.fixture
def mock_agent() -> Mock:
    """Mock agent for tests that only check interactions."""
    return Mock(spec=ToolAgent)


@pytest.fixture
def linux_amd64() -> PlatformInfo:
    return PlatformInfo("linux", "amd64")


@pytest.fixture
def cache_root(tmp_path):
    """Empty tool cache root."""
    root = tmp_path / "tool-cache"
    root.mkdir()
    return root


@pytest.fixture(autouse=True)
def _reset_platform_cache():
    """Keep platform detection from leaking between tests."""
    clear_platform_cache()
    yield
    clear_platform_cache()
