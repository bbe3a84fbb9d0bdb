"""
Renders a Job into its Jenkins ``config.xml`` document.

Section order is fixed; the server's project loader is sensitive to both the
order and the presence of several sections.
"""

from .emitter import DocumentEmitter
from .errors import RenderError
from .models import Job, Jobs

# Scalar settings written after the builders, in this order
TRAILER: tuple[tuple[str, bool | None], ...] = (
    ("actions", None),
    ("description", None),
    ("keepDependencies", False),
    ("canRoam", True),
    ("disabled", False),
    ("blockBuildWhenDownstreamBuilding", False),
    ("blockBuildWhenUpstreamBuilding", False),
    ("concurrentBuild", False),
)


def _emit_job(job: Job, out: DocumentEmitter) -> None:
    with out.element("properties"):
        if job.parameters:
            with out.element("hudson.model.ParametersDefinitionProperty"):
                with out.element("parameterDefinitions"):
                    for parameter in job.parameters:
                        parameter.emit(out)

    if job.workspace is not None:
        out.leaf("customWorkspace", job.workspace)

    with out.element("publishers"):
        for archiver in job.artifacts:
            archiver.emit(out)
        for publisher in job.publishers:
            publisher.emit(out)

    job.scm.emit(out)

    with out.element("triggers", {"class": "vector"}):
        for trigger in job.triggers:
            trigger.emit(out)

    with out.element("builders"):
        for builder in job.builders:
            builder.emit(out)

    for tag, value in TRAILER:
        out.leaf(tag, value)

    for fragment in job.raws:
        fragment(out)


def render_job(job: Job) -> str:
    """
    Serialize a job to its XML document.

    Args:
        job: Job to render

    Returns:
        The complete document as a string

    Raises:
        RenderError: If any section fails to emit or leaves an element open
    """
    out = DocumentEmitter("project")
    try:
        _emit_job(job, out)
        return out.tostring()
    except Exception as e:
        raise RenderError(job.name, str(e)) from e


def render_jobs(jobs: Jobs) -> list[tuple[str, str]]:
    """Render every job in declaration order; fails before returning anything."""
    return [(name, render_job(job)) for name, job in jobs.items()]
