"""
Remote store backed by the Jenkins CLI jar.

Every operation runs ``java -jar <cli-jar> -s <server> <command> <job>`` as a
short-lived subprocess. The document is written to the process's stdin and
the process is always waited for (or killed on timeout) before the call
returns, so no process outlives a single operation.
"""

import logging
import subprocess

from jobdsl_common.errors import RemoteStoreError
from jobdsl_common.store import RemoteStore

logger = logging.getLogger(__name__)

# Exit code the CLI returns for an IllegalArgumentException such as "No such job"
EXIT_NO_SUCH_JOB = 3


class JenkinsCliStore(RemoteStore):
    """
    Manages jobs on a Jenkins server through its command-line client.

    This class provides the three operations the sync engine needs
    (get-job, create-job, update-job) with per-call timeouts.
    """

    def __init__(
        self,
        server: str,
        cli_jar: str,
        java: str = "java",
        timeout: float | None = 60.0,
        auth: str | None = None,
    ):
        """
        Initialize the CLI store.

        Args:
            server: Jenkins server URL passed with ``-s``
            cli_jar: Path to jenkins-cli.jar
            java: Java executable used to run the jar
            timeout: Seconds before an invocation is killed (None waits forever)
            auth: Optional ``user:token`` or ``@file`` passed with ``-auth``
        """
        self.server = server
        self.cli_jar = cli_jar
        self.java = java
        self.timeout = timeout
        self.auth = auth

    def _command(self, command: str, name: str) -> list[str]:
        """
        Build the argument vector for one CLI invocation.

        Args:
            command: CLI command (get-job, create-job, update-job)
            name: Job name

        Returns:
            Argument list for subprocess
        """
        args = [self.java, "-jar", str(self.cli_jar), "-s", self.server]
        if self.auth:
            args.extend(["-auth", self.auth])
        args.extend([command, name])
        return args

    def _run(
        self, operation: str, command: str, name: str, document: str | None = None
    ) -> subprocess.CompletedProcess:
        """Run one CLI command to completion, writing ``document`` to stdin."""
        args = self._command(command, name)
        logger.debug(f"Running Jenkins CLI: {command} {name}")
        try:
            return subprocess.run(
                args,
                input=document,
                capture_output=True,
                text=True,
                encoding="utf-8",
                timeout=self.timeout,
            )
        except subprocess.TimeoutExpired as e:
            raise RemoteStoreError(
                name, operation, detail=f"timed out after {self.timeout}s"
            ) from e
        except OSError as e:
            raise RemoteStoreError(
                name, operation, detail=f"could not run {self.java}: {e}"
            ) from e

    def exists(self, name: str) -> bool:
        result = self._run("exists", "get-job", name)

        if result.returncode == 0:
            return True
        if result.returncode == EXIT_NO_SUCH_JOB or "No such job" in result.stderr:
            return False

        raise RemoteStoreError(
            name, "exists", status=result.returncode, detail=result.stderr.strip()
        )

    def create(self, name: str, document: str) -> None:
        self._write("create", "create-job", name, document)

    def update(self, name: str, document: str) -> None:
        self._write("update", "update-job", name, document)

    def _write(self, operation: str, command: str, name: str, document: str) -> None:
        result = self._run(operation, command, name, document)

        if result.stdout:
            logger.debug(f"{command} {name}: {result.stdout.strip()}")

        if result.returncode != 0:
            raise RemoteStoreError(
                name,
                operation,
                status=result.returncode,
                detail=result.stderr.strip(),
            )
