"""
Job DSL common module.

This module contains the job domain model, capability providers, the
document renderer and the remote store interface used across the jobdsl
components (remote transports, controller, admin CLI).

The common module has no dependencies on other jobdsl_* modules, making it
a pure domain layer that can be imported by any component.
"""

from .emitter import DocumentEmitter
from .errors import (
    ConfigurationError,
    EmitterError,
    JobDslError,
    PublishError,
    RemoteStoreError,
    RenderError,
)
from .models import (
    DEFAULT_POLL_SCHEDULE,
    ArtifactArchiver,
    DownstreamTrigger,
    Job,
    JobBuilder,
    Jobs,
    JobsBuilder,
    NullScm,
    PollingTrigger,
    ShellStep,
    StringParameterDef,
    VersionControlScm,
)
from .renderer import render_job, render_jobs
from .store import RemoteStore

__all__ = [
    "DEFAULT_POLL_SCHEDULE",
    "ArtifactArchiver",
    "ConfigurationError",
    "DocumentEmitter",
    "DownstreamTrigger",
    "EmitterError",
    "Job",
    "JobBuilder",
    "JobDslError",
    "Jobs",
    "JobsBuilder",
    "NullScm",
    "PollingTrigger",
    "PublishError",
    "RemoteStore",
    "RemoteStoreError",
    "RenderError",
    "ShellStep",
    "StringParameterDef",
    "VersionControlScm",
    "render_job",
    "render_jobs",
]
