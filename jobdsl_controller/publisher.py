"""
Job publisher that synchronizes declared jobs with a remote store.

Each job is reconciled in declaration order: ask whether the server knows
the job, then update it if it does or create it if it does not. All
documents are rendered before the first remote call, so a rendering failure
never leaves the server with a partially published collection.
"""

import logging
from dataclasses import dataclass, field
from typing import Any

from jobdsl_common.errors import PublishError, RemoteStoreError
from jobdsl_common.models import Jobs
from jobdsl_common.renderer import render_jobs
from jobdsl_common.store import RemoteStore

logger = logging.getLogger(__name__)


@dataclass
class PublishResult:
    """
    Outcome of publishing a single job.

    ``operation`` is the call that decided the outcome: "create" or "update"
    on success, or whichever call failed ("exists", "create", "update").
    """

    name: str
    operation: str
    success: bool
    error: str | None = None
    status: int | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert result to dictionary format (for JSON output)."""
        result: dict[str, Any] = {
            "name": self.name,
            "operation": self.operation,
            "success": self.success,
        }
        if self.error is not None:
            result["error"] = self.error
        if self.status is not None:
            result["status"] = self.status
        return result


@dataclass
class PublishReport:
    """Results of one publish run, in publish order."""

    results: list[PublishResult] = field(default_factory=list)

    @property
    def succeeded(self) -> list[PublishResult]:
        return [r for r in self.results if r.success]

    @property
    def failed(self) -> list[PublishResult]:
        return [r for r in self.results if not r.success]

    @property
    def ok(self) -> bool:
        return not self.failed

    def to_dict(self) -> dict[str, Any]:
        return {
            "ok": self.ok,
            "results": [r.to_dict() for r in self.results],
        }


class JobPublisher:
    """
    Sync engine that pushes rendered jobs to a remote store.

    Jobs are processed strictly one after another; both remote calls for a
    job complete before the next job is checked.
    """

    def __init__(self, store: RemoteStore, continue_on_error: bool = False):
        """
        Initialize the publisher.

        Args:
            store: Remote store to synchronize against
            continue_on_error: Keep going after a failed job instead of
                               raising PublishError at the first failure
        """
        self.store = store
        self.continue_on_error = continue_on_error

    def publish(self, jobs: Jobs) -> PublishReport:
        """
        Create or update every job on the remote store.

        Args:
            jobs: Jobs collection to publish

        Returns:
            PublishReport with one result per attempted job

        Raises:
            RenderError: If any job fails to render (before any remote call)
            PublishError: On the first failed job, unless continue_on_error
        """
        documents = render_jobs(jobs)
        logger.info(f"Publishing {len(documents)} job(s)")

        report = PublishReport()
        for name, document in documents:
            result = self.publish_one(name, document)
            report.results.append(result)

            if not result.success and not self.continue_on_error:
                raise PublishError(
                    report, f"Publishing stopped at job '{name}': {result.error}"
                )

        logger.info(
            f"Published {len(report.succeeded)} job(s), {len(report.failed)} failed"
        )
        return report

    def publish_one(self, name: str, document: str) -> PublishResult:
        """
        Create or update a single already-rendered job.

        Args:
            name: Job name
            document: Rendered config.xml payload

        Returns:
            PublishResult describing what happened
        """
        operation = "exists"
        try:
            if self.store.exists(name):
                operation = "update"
                logger.info(f"Updating job {name}")
                self.store.update(name, document)
            else:
                operation = "create"
                logger.info(f"Creating job {name}")
                self.store.create(name, document)
        except RemoteStoreError as e:
            logger.error(f"Failed to publish job {name}: {e}")
            return PublishResult(
                name=name,
                operation=e.operation or operation,
                success=False,
                error=str(e),
                status=e.status,
            )

        return PublishResult(name=name, operation=operation, success=True)
