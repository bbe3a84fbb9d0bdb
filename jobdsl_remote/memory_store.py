"""
In-memory remote store.

Keeps job documents in a dict and records every call in order. Used as the
test double for the sync engine and for dry runs.
"""

from jobdsl_common.errors import RemoteStoreError
from jobdsl_common.store import RemoteStore


class InMemoryStore(RemoteStore):
    """
    Dict-backed RemoteStore.

    Attributes:
        documents: job name -> last written document
        calls: (operation, name) tuples in call order
    """

    def __init__(
        self,
        documents: dict[str, str] | None = None,
        failures: dict[tuple[str, str], int | None] | None = None,
    ):
        """
        Initialize the store.

        Args:
            documents: Jobs that already exist, name -> document
            failures: (operation, name) pairs that should fail, mapped to the
                      status reported in the raised RemoteStoreError
        """
        self.documents: dict[str, str] = dict(documents or {})
        self.failures = dict(failures or {})
        self.calls: list[tuple[str, str]] = []

    def _record(self, operation: str, name: str) -> None:
        self.calls.append((operation, name))
        if (operation, name) in self.failures:
            raise RemoteStoreError(
                name,
                operation,
                status=self.failures[(operation, name)],
                detail="simulated failure",
            )

    def exists(self, name: str) -> bool:
        self._record("exists", name)
        return name in self.documents

    def create(self, name: str, document: str) -> None:
        self._record("create", name)
        if name in self.documents:
            raise RemoteStoreError(name, "create", detail="job already exists")
        self.documents[name] = document

    def update(self, name: str, document: str) -> None:
        self._record("update", name)
        if name not in self.documents:
            raise RemoteStoreError(name, "update", status=404, detail="no such job")
        self.documents[name] = document
