"""Unit tests for executor module."""

import subprocess
from unittest import mock

import pytest

from seavan.executor import CommandResult, SubprocessExecutor


class TestCommandResult:
    """Tests for CommandResult."""

    def test_success(self):
        """Test that exit code 0 is success."""
        result = CommandResult(args=["docker"], returncode=0, stdout="", stderr="")
        assert result.success is True

    def test_failure(self):
        """Test that a non-zero exit code is failure."""
        result = CommandResult(args=["docker"], returncode=2, stdout="", stderr="x")
        assert result.success is False


class TestSubprocessExecutor:
    """Tests for SubprocessExecutor."""

    def test_default_program(self):
        """Test that docker is the default build tool."""
        executor = SubprocessExecutor()
        assert executor.program == "docker"
        assert executor.timeout is None

    @mock.patch("seavan.executor.subprocess.run")
    def test_successful_run(self, mock_run, tmp_path):
        """Test successful command execution."""
        mock_run.return_value = subprocess.CompletedProcess(
            args=["docker", "build"], returncode=0, stdout="done", stderr=""
        )

        result = SubprocessExecutor().run(["build", "."], cwd=tmp_path)

        assert result.returncode == 0
        assert result.stdout == "done"
        assert result.args == ["docker", "build", "."]
        mock_run.assert_called_once()
        call_args = mock_run.call_args
        assert call_args.args[0] == ["docker", "build", "."]
        assert call_args.kwargs["cwd"] == tmp_path
        assert call_args.kwargs["capture_output"] is True
        assert call_args.kwargs["text"] is True
        assert call_args.kwargs["timeout"] is None

    @mock.patch("seavan.executor.subprocess.run")
    def test_failed_run(self, mock_run, tmp_path):
        """Test that a non-zero exit is reported, not raised."""
        mock_run.return_value = subprocess.CompletedProcess(
            args=["docker"], returncode=1, stdout="", stderr="error message"
        )

        result = SubprocessExecutor().run(["build", "."], cwd=tmp_path)

        assert result.success is False
        assert result.stderr == "error message"

    @mock.patch("seavan.executor.subprocess.run")
    def test_custom_program_and_timeout(self, mock_run, tmp_path):
        """Test that program and timeout are passed through."""
        mock_run.return_value = subprocess.CompletedProcess(
            args=["podman"], returncode=0, stdout=None, stderr=None
        )

        result = SubprocessExecutor("podman", timeout=30).run(["build"], cwd=tmp_path)

        assert mock_run.call_args.args[0] == ["podman", "build"]
        assert mock_run.call_args.kwargs["timeout"] == 30
        assert result.stdout == ""
        assert result.stderr == ""

    @mock.patch("seavan.executor.subprocess.run")
    def test_program_not_found(self, mock_run, tmp_path):
        """Test that a missing program propagates FileNotFoundError."""
        mock_run.side_effect = FileNotFoundError()

        with pytest.raises(FileNotFoundError):
            SubprocessExecutor().run(["build"], cwd=tmp_path)

    @mock.patch("seavan.executor.subprocess.run")
    def test_timeout_propagates(self, mock_run, tmp_path):
        """Test that an exceeded deadline propagates TimeoutExpired."""
        mock_run.side_effect = subprocess.TimeoutExpired(cmd="docker", timeout=5)

        with pytest.raises(subprocess.TimeoutExpired):
            SubprocessExecutor(timeout=5).run(["build"], cwd=tmp_path)
