"""
Job DSL admin module.

Provides the ``jobdsl`` command line and the jobs-file loader it uses.
"""

from .config import JobsFile, load_jobs_file

__all__ = ["JobsFile", "load_jobs_file"]
