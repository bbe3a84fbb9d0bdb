"""
Exception hierarchy shared by every jobdsl component.

All errors derive from JobDslError so that command-line entry points can
report any domain failure with a single except clause.
"""

from typing import Any


class JobDslError(Exception):
    """Base class for all job DSL errors."""


class ConfigurationError(JobDslError):
    """
    Raised when a job declaration or jobs file is invalid.

    Attributes:
        field: Name of the offending field (e.g. "name", "url")
    """

    def __init__(self, field: str, message: str):
        self.field = field
        super().__init__(f"{field}: {message}")


class EmitterError(JobDslError):
    """
    Raised when document elements are opened or closed out of order, or when
    text or an attribute value contains a character XML 1.0 does not allow.
    """


class RenderError(JobDslError):
    """
    Raised when a job cannot be serialized to its document.

    Attributes:
        job_name: Name of the job being rendered
    """

    def __init__(self, job_name: str, message: str):
        self.job_name = job_name
        super().__init__(f"Failed to render job '{job_name}': {message}")


class RemoteStoreError(JobDslError):
    """
    Raised when a remote store operation fails.

    Attributes:
        name: Job name the operation targeted
        operation: "exists", "create" or "update"
        status: Exit code or HTTP status, None if the call never completed
        detail: Diagnostic output from the server or transport
    """

    def __init__(
        self,
        name: str,
        operation: str,
        status: int | None = None,
        detail: str = "",
    ):
        self.name = name
        self.operation = operation
        self.status = status
        self.detail = detail
        message = f"{operation} failed for job '{name}'"
        if status is not None:
            message += f" (status {status})"
        if detail:
            message += f": {detail}"
        super().__init__(message)


class PublishError(JobDslError):
    """
    Raised when publishing stops at the first failed job.

    Attributes:
        report: PublishReport holding every result collected so far
    """

    def __init__(self, report: Any, message: str):
        self.report = report
        super().__init__(message)
