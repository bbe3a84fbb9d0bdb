"""
Configuration loading for the jobdsl command line.

A jobs file is an ordinary Python file evaluated once with ``runpy``. It
must define ``jobs(j)``, which receives a JobsBuilder, and may define the
module-level constants ``SERVER`` and ``CLI_JAR``::

    SERVER = "http://jenkins.example.com"

    def jobs(j):
        j.job("build", lambda job: job.subversion("svn://repo/trunk").sh("make"))

Settings resolve in priority order: command-line option, environment
variable, jobs-file constant, built-in default.
"""

import logging
import os
import runpy
from dataclasses import dataclass
from pathlib import Path

from jobdsl_common.errors import ConfigurationError, JobDslError
from jobdsl_common.models import Jobs

logger = logging.getLogger(__name__)

DEFAULT_JOBS_FILE = "jenkins_jobs.py"
DEFAULT_SERVER_URL = "http://localhost:8080"
DEFAULT_CLI_JAR = "jenkins-cli.jar"
DEFAULT_TRANSPORT = "cli"
DEFAULT_TIMEOUT = 60.0

TRANSPORTS = ("cli", "http")


@dataclass
class JobsFile:
    """The evaluated contents of a jobs file."""

    path: Path
    jobs: Jobs
    server: str | None = None
    cli_jar: str | None = None


def get_jobs_file_path(cli_arg: str | None = None) -> Path:
    """
    Get the jobs file path from CLI args or environment or use default.

    Environment variables:
    - JOBDSL_FILE: Path to the jobs file
    """
    if cli_arg:
        return Path(cli_arg)
    return Path(os.environ.get("JOBDSL_FILE", DEFAULT_JOBS_FILE))


def load_jobs_file(path: str | Path) -> JobsFile:
    """
    Evaluate a jobs file and build its Jobs collection.

    Args:
        path: Path to a ``.py`` jobs file

    Returns:
        JobsFile with the built jobs and any server settings it declares

    Raises:
        ConfigurationError: If the file is missing, is not Python, does not
                            define a callable ``jobs``, or raises while it is
                            evaluated or while ``jobs(j)`` runs
    """
    jobs_path = Path(path).expanduser().resolve()
    if not jobs_path.exists():
        raise ConfigurationError("file", f"jobs file not found: {jobs_path}")
    if jobs_path.suffix != ".py":
        raise ConfigurationError(
            "file", f"jobs file must be a .py file, got: {jobs_path.name}"
        )

    logger.debug(f"Loading jobs file {jobs_path}")
    try:
        namespace = runpy.run_path(
            str(jobs_path), run_name=f"jobdsl_{jobs_path.stem}"
        )
    except JobDslError:
        raise
    except Exception as e:
        raise ConfigurationError(
            "file", f"{jobs_path.name}: {type(e).__name__}: {e}"
        ) from e

    configure = namespace.get("jobs")
    if not callable(configure):
        raise ConfigurationError(
            "jobs", f"{jobs_path.name} must define a function jobs(j)"
        )

    try:
        jobs = Jobs.from_config(configure)
    except JobDslError:
        raise
    except Exception as e:
        raise ConfigurationError(
            "file", f"{jobs_path.name}: {type(e).__name__}: {e}"
        ) from e
    logger.debug(f"Loaded {len(jobs)} job(s) from {jobs_path.name}")

    return JobsFile(
        path=jobs_path,
        jobs=jobs,
        server=namespace.get("SERVER"),
        cli_jar=namespace.get("CLI_JAR"),
    )


def get_server_url(cli_arg: str | None = None, file_value: str | None = None) -> str:
    """
    Get the Jenkins server URL.

    Environment variables:
    - JENKINS_URL: Server URL
    """
    if cli_arg:
        return cli_arg
    env_url = os.environ.get("JENKINS_URL")
    if env_url:
        return env_url
    return file_value or DEFAULT_SERVER_URL


def get_cli_jar(cli_arg: str | None = None, file_value: str | None = None) -> str:
    """
    Get the path to the Jenkins CLI jar.

    Environment variables:
    - JENKINS_CLI_JAR: Path to jenkins-cli.jar
    """
    if cli_arg:
        return cli_arg
    env_jar = os.environ.get("JENKINS_CLI_JAR")
    if env_jar:
        return env_jar
    return file_value or DEFAULT_CLI_JAR


def get_transport(cli_arg: str | None = None) -> str:
    """
    Get the remote transport name ("cli" or "http").

    Environment variables:
    - JOBDSL_TRANSPORT: Transport name
    """
    transport = cli_arg or os.environ.get("JOBDSL_TRANSPORT", DEFAULT_TRANSPORT)
    if transport not in TRANSPORTS:
        raise ConfigurationError(
            "transport",
            f"unknown transport '{transport}' (expected one of: {', '.join(TRANSPORTS)})",
        )
    return transport


def get_timeout(cli_arg: float | None = None) -> float:
    """
    Get the per-call timeout in seconds.

    Environment variables:
    - JOBDSL_TIMEOUT: Seconds before a remote call is abandoned
    """
    if cli_arg is not None:
        if cli_arg <= 0:
            logger.warning(f"Invalid timeout={cli_arg}, using default {DEFAULT_TIMEOUT}")
            return DEFAULT_TIMEOUT
        return cli_arg

    try:
        timeout = float(os.environ.get("JOBDSL_TIMEOUT", str(DEFAULT_TIMEOUT)))
        if timeout <= 0:
            logger.warning(
                f"Invalid JOBDSL_TIMEOUT={timeout}, using default {DEFAULT_TIMEOUT}"
            )
            return DEFAULT_TIMEOUT
        return timeout
    except ValueError:
        logger.warning(
            f"Invalid JOBDSL_TIMEOUT={os.environ.get('JOBDSL_TIMEOUT')}, "
            f"using default {DEFAULT_TIMEOUT}"
        )
        return DEFAULT_TIMEOUT
