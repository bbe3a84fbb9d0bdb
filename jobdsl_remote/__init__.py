"""
Job DSL remote module.

This module contains the RemoteStore implementations used to synchronize
jobs with a CI server: the Jenkins CLI jar, the Jenkins HTTP API, and an
in-memory store for tests and dry runs.

The remote layer depends on jobdsl_common for the store interface and
errors, and is used by jobdsl_controller and jobdsl_admin.
"""

from .cli_store import JenkinsCliStore
from .http_store import JenkinsHttpStore
from .memory_store import InMemoryStore

__all__ = ["JenkinsCliStore", "JenkinsHttpStore", "InMemoryStore"]
