"""
Abstract remote store interface for job synchronization.

This module defines the contract any CI server transport must follow,
allowing the sync engine to run against the Jenkins CLI, the HTTP API or an
in-memory double without knowing which.
"""

from abc import ABC, abstractmethod


class RemoteStore(ABC):
    """
    Abstract base class for the CI server's job management operations.

    Implementations must perform each call synchronously and release any
    process or connection they open before returning.
    """

    @abstractmethod
    def exists(self, name: str) -> bool:
        """
        Check whether a job is known to the server.

        Args:
            name: Job name

        Returns:
            True if the job exists, False if the server confirms it does not

        Raises:
            RemoteStoreError: If the existence check itself failed
        """
        pass

    @abstractmethod
    def create(self, name: str, document: str) -> None:
        """
        Create a new job from its configuration document.

        Args:
            name: Job name
            document: Rendered config.xml payload

        Raises:
            RemoteStoreError: If the server rejected or never completed the call
        """
        pass

    @abstractmethod
    def update(self, name: str, document: str) -> None:
        """
        Replace an existing job's configuration document.

        Args:
            name: Job name
            document: Rendered config.xml payload

        Raises:
            RemoteStoreError: If the server rejected or never completed the call
        """
        pass

    def close(self) -> None:
        """Release any pooled resources. Stores without any need no override."""
