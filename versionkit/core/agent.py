"""
Agent capability consumed by the version management pipeline.

The agent is the only route to process execution, PATH management and
user-facing logging. The pipeline depends on the ToolAgent interface;
LocalAgent is the implementation used by the CLI and by CI runners.
"""

import logging
import os
import subprocess
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import List, MutableMapping, Optional, Sequence, Union

from versionkit.core.exceptions import AgentExecError

logger = logging.getLogger(__name__)

# Exit status reported when the executable cannot be found (POSIX shell convention)
COMMAND_NOT_FOUND = 127


@dataclass(frozen=True)
class ExecResult:
    """Outcome of a command run through the agent."""

    exit_code: int
    stdout: str
    stderr: str


class ToolAgent(ABC):
    """
    Minimal agent interface needed by the version manager.

    Implementations must run commands from an argument list, never through
    a shell.
    """

    @abstractmethod
    def exec(
        self,
        command: str,
        args: Optional[Sequence[str]] = None,
        cwd: Optional[Union[str, Path]] = None,
        silent: bool = False,
        ignore_return_code: bool = False,
    ) -> ExecResult:
        """
        Run a command and collect its output.

        Args:
            command: Executable name or path
            args: Literal arguments
            cwd: Working directory for the command
            silent: Do not echo the command and its output
            ignore_return_code: Return non-zero exit codes instead of raising

        Returns:
            ExecResult with exit code, stdout and stderr
        """
        pass

    @abstractmethod
    def add_path(self, path: Union[str, Path]) -> None:
        """Prepend a directory to the executable search path."""
        pass

    @abstractmethod
    def info(self, message: str) -> None:
        pass

    @abstractmethod
    def warning(self, message: str) -> None:
        pass

    @abstractmethod
    def debug(self, message: str) -> None:
        pass


class LocalAgent(ToolAgent):
    """
    Agent backed by ``subprocess`` and ``logging``.

    ``add_path`` updates the PATH of the current process and, when running
    under GitHub Actions, appends the directory to the ``$GITHUB_PATH`` file
    so later workflow steps see it too.
    """

    def __init__(
        self,
        environ: Optional[MutableMapping[str, str]] = None,
        log: Optional[logging.Logger] = None,
    ):
        self.environ = os.environ if environ is None else environ
        self.log = log or logger

    def exec(
        self,
        command: str,
        args: Optional[Sequence[str]] = None,
        cwd: Optional[Union[str, Path]] = None,
        silent: bool = False,
        ignore_return_code: bool = False,
    ) -> ExecResult:
        argv: List[str] = [command, *(args or [])]
        if not silent:
            self.log.info(f"[command]{' '.join(argv)}")

        try:
            completed = subprocess.run(
                argv,
                cwd=str(cwd) if cwd else None,
                capture_output=True,
                text=True,
                env=dict(self.environ),
            )
            result = ExecResult(
                exit_code=completed.returncode,
                stdout=completed.stdout.strip(),
                stderr=completed.stderr.strip(),
            )
        except FileNotFoundError as e:
            result = ExecResult(
                exit_code=COMMAND_NOT_FOUND,
                stdout="",
                stderr=f"Unable to locate executable file: {command} ({e})",
            )

        if not silent:
            for line in result.stdout.splitlines():
                self.log.info(line)
            for line in result.stderr.splitlines():
                self.log.info(line)

        if result.exit_code != 0 and not ignore_return_code:
            raise AgentExecError(command, result.exit_code, result.stderr)

        return result

    def add_path(self, path: Union[str, Path]) -> None:
        path = str(path)
        current = self.environ.get("PATH", "")
        self.environ["PATH"] = f"{path}{os.pathsep}{current}" if current else path
        self.log.debug(f"Added {path} to PATH")

        github_path = self.environ.get("GITHUB_PATH")
        if github_path:
            with open(github_path, "a", encoding="utf-8") as f:
                f.write(f"{path}\n")

    def info(self, message: str) -> None:
        self.log.info(message)

    def warning(self, message: str) -> None:
        self.log.warning(message)

    def debug(self, message: str) -> None:
        self.log.debug(message)


__all__ = ["ExecResult", "ToolAgent", "LocalAgent", "COMMAND_NOT_FOUND"]
