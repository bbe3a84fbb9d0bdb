"""
Job DSL controller module.

This module contains the publisher that reconciles the declared jobs
(desired state) with the jobs known to the CI server (actual state) by
creating or updating each one.
"""

from .publisher import JobPublisher, PublishReport, PublishResult

__all__ = ["JobPublisher", "PublishReport", "PublishResult"]
