"""
Unit tests for jobdsl_remote.cli_store module.

Tests the Jenkins CLI transport with mocked subprocess calls.
"""

import subprocess
from unittest.mock import patch

import pytest

from jobdsl_common.errors import RemoteStoreError
from jobdsl_remote.cli_store import JenkinsCliStore


def completed(returncode: int = 0, stdout: str = "", stderr: str = ""):
    """Helper to build a finished process result."""
    return subprocess.CompletedProcess(
        args=[], returncode=returncode, stdout=stdout, stderr=stderr
    )


@pytest.fixture
def store():
    return JenkinsCliStore("http://ci:8080", "/opt/jenkins-cli.jar", timeout=5.0)


class TestCommandLine:
    """Test suite for CLI argument construction."""

    def test_command_without_auth(self, store):
        """Test the basic argument vector."""
        assert store._command("get-job", "build") == [
            "java",
            "-jar",
            "/opt/jenkins-cli.jar",
            "-s",
            "http://ci:8080",
            "get-job",
            "build",
        ]

    def test_command_with_auth_and_java(self):
        """Test that -auth and a custom java executable are passed through."""
        store = JenkinsCliStore(
            "http://ci", "cli.jar", java="/usr/bin/java17", auth="bob:token"
        )

        assert store._command("update-job", "x") == [
            "/usr/bin/java17",
            "-jar",
            "cli.jar",
            "-s",
            "http://ci",
            "-auth",
            "bob:token",
            "update-job",
            "x",
        ]


class TestExists:
    """Test suite for the get-job existence check."""

    def test_exists_true(self, store):
        """Test that exit code 0 means the job exists."""
        with patch(
            "jobdsl_remote.cli_store.subprocess.run", return_value=completed(0)
        ) as mock_run:
            assert store.exists("build") is True

        args, kwargs = mock_run.call_args
        assert args[0][-2:] == ["get-job", "build"]
        assert kwargs["timeout"] == 5.0
        assert kwargs["input"] is None

    def test_exists_false_on_no_such_job_exit_code(self, store):
        """Test that the no-such-job exit code means absent."""
        with patch(
            "jobdsl_remote.cli_store.subprocess.run", return_value=completed(3)
        ):
            assert store.exists("build") is False

    def test_exists_false_on_no_such_job_message(self, store):
        """Test that the no-such-job message means absent."""
        with patch(
            "jobdsl_remote.cli_store.subprocess.run",
            return_value=completed(1, stderr="ERROR: No such job 'build'\n"),
        ):
            assert store.exists("build") is False

    def test_exists_other_failure_raises(self, store):
        """Test that other failures are reported instead of treated as absent."""
        with patch(
            "jobdsl_remote.cli_store.subprocess.run",
            return_value=completed(7, stderr="Authentication failed\n"),
        ):
            with pytest.raises(RemoteStoreError) as exc_info:
                store.exists("build")

        error = exc_info.value
        assert error.operation == "exists"
        assert error.status == 7
        assert error.detail == "Authentication failed"

    def test_exists_timeout_raises(self, store):
        """Test that a hung existence check is reported as a failure."""
        with patch(
            "jobdsl_remote.cli_store.subprocess.run",
            side_effect=subprocess.TimeoutExpired(cmd="java", timeout=5.0),
        ):
            with pytest.raises(RemoteStoreError, match="timed out after 5.0s"):
                store.exists("build")

    def test_missing_java_raises(self, store):
        """Test that a missing java executable is reported."""
        with patch(
            "jobdsl_remote.cli_store.subprocess.run",
            side_effect=FileNotFoundError("java"),
        ):
            with pytest.raises(RemoteStoreError, match="could not run java"):
                store.exists("build")


class TestWrites:
    """Test suite for create-job and update-job."""

    @pytest.mark.parametrize(
        "method,command", [("create", "create-job"), ("update", "update-job")]
    )
    def test_document_written_to_stdin(self, store, method, command):
        """Test that the document is passed as the process input."""
        with patch(
            "jobdsl_remote.cli_store.subprocess.run", return_value=completed(0)
        ) as mock_run:
            getattr(store, method)("build", "<project />")

        args, kwargs = mock_run.call_args
        assert args[0][-2:] == [command, "build"]
        assert kwargs["input"] == "<project />"
        assert kwargs["capture_output"] is True
        assert kwargs["encoding"] == "utf-8"

    @pytest.mark.parametrize("method", ["create", "update"])
    def test_non_zero_exit_raises(self, store, method):
        """Test that a failing write is reported with its status."""
        with patch(
            "jobdsl_remote.cli_store.subprocess.run",
            return_value=completed(1, stderr="ERROR: Invalid XML\n"),
        ):
            with pytest.raises(RemoteStoreError) as exc_info:
                getattr(store, method)("build", "<project />")

        assert exc_info.value.operation == method
        assert exc_info.value.status == 1
        assert "Invalid XML" in str(exc_info.value)

    def test_write_timeout_raises(self, store):
        """Test that a hung write is reported as a failure."""
        with patch(
            "jobdsl_remote.cli_store.subprocess.run",
            side_effect=subprocess.TimeoutExpired(cmd="java", timeout=5.0),
        ):
            with pytest.raises(RemoteStoreError) as exc_info:
                store.create("build", "<project />")

        assert exc_info.value.operation == "create"
        assert exc_info.value.status is None
