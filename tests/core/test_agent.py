"""
Unit tests for the local agent.

Commands are run through mocked subprocess calls, except for a couple of
tests that use the running Python interpreter as a portable executable.
"""

import os
import subprocess
import sys
from unittest.mock import Mock, patch

import pytest

from versionkit.core.agent import COMMAND_NOT_FOUND, ExecResult, LocalAgent
from versionkit.core.exceptions import AgentExecError


def _completed(returncode=0, stdout="", stderr=""):
    return subprocess.CompletedProcess(
        args=[], returncode=returncode, stdout=stdout, stderr=stderr
    )


class TestExec:
    """Tests for LocalAgent.exec."""

    def test_runs_argument_list_without_shell(self):
        agent = LocalAgent(environ={"PATH": "/usr/bin"})

        with patch("subprocess.run", return_value=_completed(stdout="ok\n")) as run:
            result = agent.exec("unzip", ["-o", "a b.zip"], silent=True)

        argv = run.call_args[0][0]
        assert argv == ["unzip", "-o", "a b.zip"]
        assert "shell" not in run.call_args[1]
        assert result == ExecResult(0, "ok", "")

    def test_passes_cwd_and_environment(self, tmp_path):
        agent = LocalAgent(environ={"PATH": "/custom/bin"})

        with patch("subprocess.run", return_value=_completed()) as run:
            agent.exec("terraform", ["--version"], cwd=tmp_path, silent=True)

        kwargs = run.call_args[1]
        assert kwargs["cwd"] == str(tmp_path)
        assert kwargs["env"] == {"PATH": "/custom/bin"}

    def test_non_zero_exit_raises(self):
        agent = LocalAgent(environ={})

        with patch(
            "subprocess.run", return_value=_completed(2, stderr="bad archive\n")
        ):
            with pytest.raises(AgentExecError) as exc_info:
                agent.exec("unzip", ["x.zip"], silent=True)

        assert exc_info.value.exit_code == 2
        assert "bad archive" in str(exc_info.value)

    def test_ignore_return_code(self):
        agent = LocalAgent(environ={})

        with patch("subprocess.run", return_value=_completed(1, stderr="nope")):
            result = agent.exec(
                "terraform", ["--version"], silent=True, ignore_return_code=True
            )

        assert result.exit_code == 1
        assert result.stderr == "nope"

    def test_missing_executable(self):
        agent = LocalAgent(environ={})

        with patch("subprocess.run", side_effect=FileNotFoundError("no such file")):
            result = agent.exec("unzip", [], silent=True, ignore_return_code=True)

        assert result.exit_code == COMMAND_NOT_FOUND
        assert "Unable to locate executable file: unzip" in result.stderr

    def test_echoes_command_and_output_when_not_silent(self):
        log = Mock()
        agent = LocalAgent(environ={}, log=log)

        with patch("subprocess.run", return_value=_completed(stdout="line1\nline2")):
            agent.exec("terragrunt", ["--version"])

        logged = [c[0][0] for c in log.info.call_args_list]
        assert logged == ["[command]terragrunt --version", "line1", "line2"]

    def test_silent_logs_nothing(self):
        log = Mock()
        agent = LocalAgent(environ={}, log=log)

        with patch("subprocess.run", return_value=_completed(stdout="output")):
            agent.exec("terragrunt", ["--version"], silent=True)

        log.info.assert_not_called()

    def test_real_process(self):
        agent = LocalAgent(environ=dict(os.environ))

        result = agent.exec(sys.executable, ["-c", "print('hello')"], silent=True)

        assert result.exit_code == 0
        assert result.stdout == "hello"


class TestAddPath:
    """Tests for LocalAgent.add_path."""

    def test_prepends_to_path(self):
        environ = {"PATH": "/usr/bin"}
        agent = LocalAgent(environ=environ)

        agent.add_path("/cache/terraform/1.9.8/amd64")

        assert environ["PATH"] == f"/cache/terraform/1.9.8/amd64{os.pathsep}/usr/bin"

    def test_empty_path(self):
        environ = {}
        agent = LocalAgent(environ=environ)

        agent.add_path("/cache/bin")

        assert environ["PATH"] == "/cache/bin"

    def test_appends_to_github_path_file(self, tmp_path):
        github_path = tmp_path / "github_path"
        github_path.write_text("/existing\n")
        environ = {"PATH": "/usr/bin", "GITHUB_PATH": str(github_path)}
        agent = LocalAgent(environ=environ)

        agent.add_path(tmp_path / "bin")

        assert github_path.read_text() == f"/existing\n{tmp_path / 'bin'}\n"


def test_log_methods_forward_to_logger():
    log = Mock()
    agent = LocalAgent(environ={}, log=log)

    agent.info("installing")
    agent.warning("mismatch")
    agent.debug("details")

    log.info.assert_called_once_with("installing")
    log.warning.assert_called_once_with("mismatch")
    log.debug.assert_called_once_with("details")
