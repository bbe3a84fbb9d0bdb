"""
Command line for rendering and publishing declared Jenkins jobs.

Commands:
    jobdsl list      List declared jobs
    jobdsl info      Show the resolved server and CLI jar
    jobdsl render    Print or write job config.xml documents
    jobdsl publish   Create or update every job on the server
"""

import json
import logging
import os
import sys
from pathlib import Path

import click

from jobdsl_common.errors import JobDslError, PublishError
from jobdsl_common.renderer import render_job, render_jobs
from jobdsl_common.store import RemoteStore
from jobdsl_controller.publisher import JobPublisher, PublishReport
from jobdsl_remote.cli_store import JenkinsCliStore
from jobdsl_remote.http_store import JenkinsHttpStore

from .config import (
    TRANSPORTS,
    JobsFile,
    get_cli_jar,
    get_jobs_file_path,
    get_server_url,
    get_timeout,
    get_transport,
    load_jobs_file,
)

logger = logging.getLogger(__name__)


def fail(message: str) -> None:
    """Print an error and exit with status 1."""
    click.echo(f"Error: {message}", err=True)
    sys.exit(1)


def load(ctx: click.Context) -> JobsFile:
    """Load the jobs file selected on the command group."""
    try:
        return load_jobs_file(ctx.obj["file"])
    except JobDslError as e:
        fail(str(e))


@click.group()
@click.option(
    "--file",
    "-f",
    "jobs_file",
    default=None,
    help="Jobs file (default: JOBDSL_FILE env or jenkins_jobs.py)",
)
@click.option(
    "--log-level",
    default="WARNING",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]),
    help="Logging level (default: WARNING)",
)
@click.pass_context
def cli(ctx: click.Context, jobs_file: str | None, log_level: str):
    """Job DSL - Render and publish Jenkins jobs declared in Python."""
    logging.basicConfig(
        level=getattr(logging, log_level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    ctx.ensure_object(dict)
    ctx.obj["file"] = get_jobs_file_path(jobs_file)


@cli.command("list")
@click.option("--json", "json_output", is_flag=True, help="Output as JSON")
@click.pass_context
def list_jobs(ctx: click.Context, json_output: bool):
    """List declared jobs in declaration order."""
    project = load(ctx)

    if json_output:
        click.echo(
            json.dumps(
                [job.to_summary_dict() for _, job in project.jobs.items()], indent=2
            )
        )
        return

    if not len(project.jobs):
        click.echo("No jobs declared.")
        return

    for name, job in project.jobs.items():
        scm = type(job.scm).__name__
        click.echo(f"{name:<40} {scm:<18} {len(job.builders)} step(s)")


@cli.command("info")
@click.option("--server", default=None, help="Jenkins URL (default: JENKINS_URL env)")
@click.option("--cli-jar", default=None, help="Path to jenkins-cli.jar")
@click.pass_context
def info(ctx: click.Context, server: str | None, cli_jar: str | None):
    """Show the resolved server URL and CLI jar."""
    project = load(ctx)
    click.echo(f"Jobs file: {project.path}")
    click.echo(f"Server:    {get_server_url(server, project.server)}")
    click.echo(f"CLI jar:   {get_cli_jar(cli_jar, project.cli_jar)}")


@cli.command("render")
@click.argument("name", required=False)
@click.option(
    "--output-dir",
    "-o",
    type=click.Path(file_okay=False),
    default=None,
    help="Write every job to DIR/<name>.xml",
)
@click.pass_context
def render(ctx: click.Context, name: str | None, output_dir: str | None):
    """Print one job's config.xml, or write all of them to a directory."""
    project = load(ctx)

    try:
        if output_dir:
            documents = render_jobs(project.jobs)
            target = Path(output_dir)
            target.mkdir(parents=True, exist_ok=True)
            for job_name, document in documents:
                (target / f"{job_name}.xml").write_text(document, encoding="utf-8")
            click.echo(f"✓ Wrote {len(documents)} job(s) to {target}")
            return

        if name is None:
            fail("give a job name or --output-dir")
        if name not in project.jobs:
            fail(f"no job named '{name}' in {project.path.name}")
        click.echo(render_job(project.jobs[name]))
    except JobDslError as e:
        fail(str(e))


def build_store(
    transport: str,
    server: str,
    cli_jar: str,
    timeout: float,
    auth: str | None = None,
    user: str | None = None,
    token: str | None = None,
) -> RemoteStore:
    """Create the RemoteStore for the selected transport."""
    if transport == "http":
        return JenkinsHttpStore(server, user=user, token=token, timeout=timeout)
    return JenkinsCliStore(server, cli_jar, timeout=timeout, auth=auth)


def print_report(report: PublishReport) -> None:
    for result in report.results:
        if result.success:
            click.echo(f"✓ {result.operation}d {result.name}")
        else:
            click.echo(f"✗ {result.name}: {result.error}", err=True)


@cli.command("publish")
@click.option("--server", default=None, help="Jenkins URL (default: JENKINS_URL env)")
@click.option("--cli-jar", default=None, help="Path to jenkins-cli.jar")
@click.option(
    "--transport",
    type=click.Choice(TRANSPORTS),
    default=None,
    help="Remote transport (default: JOBDSL_TRANSPORT env or cli)",
)
@click.option("--auth", default=None, help="CLI -auth value (default: JENKINS_AUTH env)")
@click.option("--user", default=None, help="HTTP user (default: JENKINS_USER env)")
@click.option("--token", default=None, help="HTTP API token (default: JENKINS_TOKEN env)")
@click.option(
    "--timeout", type=float, default=None, help="Seconds per remote call (default: 60)"
)
@click.option(
    "--continue-on-error",
    is_flag=True,
    help="Keep publishing remaining jobs after a failure",
)
@click.option("--json", "json_output", is_flag=True, help="Output report as JSON")
@click.pass_context
def publish(
    ctx: click.Context,
    server: str | None,
    cli_jar: str | None,
    transport: str | None,
    auth: str | None,
    user: str | None,
    token: str | None,
    timeout: float | None,
    continue_on_error: bool,
    json_output: bool,
):
    """Create or update every declared job on the server."""
    project = load(ctx)

    try:
        store = build_store(
            get_transport(transport),
            get_server_url(server, project.server),
            get_cli_jar(cli_jar, project.cli_jar),
            get_timeout(timeout),
            auth=auth or os.environ.get("JENKINS_AUTH"),
            user=user or os.environ.get("JENKINS_USER"),
            token=token or os.environ.get("JENKINS_TOKEN"),
        )
    except JobDslError as e:
        fail(str(e))

    publisher = JobPublisher(store, continue_on_error=continue_on_error)
    aborted = None
    try:
        report = publisher.publish(project.jobs)
    except PublishError as e:
        report, aborted = e.report, str(e)
    except JobDslError as e:
        fail(str(e))
    finally:
        store.close()

    if json_output:
        click.echo(json.dumps(report.to_dict(), indent=2))
    else:
        print_report(report)

    if aborted:
        fail(aborted)
    sys.exit(0 if report.ok else 1)


def main():
    """Main entry point for the jobdsl CLI."""
    cli(obj={})


if __name__ == "__main__":
    main()
