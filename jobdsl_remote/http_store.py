"""
Remote store backed by the Jenkins HTTP API.

Uses the remote access API directly instead of the CLI jar:

- ``GET  /job/<name>/api/json``     existence check (200 / 404)
- ``POST /createItem?name=<name>``  create from config.xml
- ``POST /job/<name>/config.xml``   replace config.xml
"""

import logging
from urllib.parse import quote

import requests

from jobdsl_common.errors import RemoteStoreError
from jobdsl_common.store import RemoteStore

logger = logging.getLogger(__name__)


class JenkinsHttpStore(RemoteStore):
    """Manages jobs through the Jenkins REST endpoints."""

    def __init__(
        self,
        server: str,
        user: str | None = None,
        token: str | None = None,
        timeout: float | None = 30.0,
        session: requests.Session | None = None,
    ):
        """
        Initialize the HTTP store.

        Args:
            server: Base URL of the Jenkins server
            user: Optional user name for basic auth
            token: API token for ``user``
            timeout: Seconds to wait for each request
            session: Optional preconfigured session (one is created otherwise)
        """
        self.server = server.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        if user and token:
            self.session.auth = (user, token)

    def __enter__(self) -> "JenkinsHttpStore":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        """Release pooled connections."""
        self.session.close()

    def _job_url(self, name: str) -> str:
        return f"{self.server}/job/{quote(name, safe='')}"

    def _request(self, operation: str, name: str, method: str, url: str, **kwargs):
        try:
            return self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.exceptions.RequestException as e:
            raise RemoteStoreError(name, operation, detail=str(e)) from e

    def exists(self, name: str) -> bool:
        response = self._request(
            "exists", name, "GET", f"{self._job_url(name)}/api/json"
        )

        if response.status_code == 200:
            return True
        if response.status_code == 404:
            return False

        raise RemoteStoreError(
            name, "exists", status=response.status_code, detail=response.reason or ""
        )

    def create(self, name: str, document: str) -> None:
        self._post(
            "create", name, f"{self.server}/createItem", document, params={"name": name}
        )

    def update(self, name: str, document: str) -> None:
        self._post("update", name, f"{self._job_url(name)}/config.xml", document)

    def _post(
        self,
        operation: str,
        name: str,
        url: str,
        document: str,
        params: dict | None = None,
    ) -> None:
        logger.debug(f"POST {url} ({operation} {name})")
        response = self._request(
            operation,
            name,
            "POST",
            url,
            params=params,
            data=document.encode("utf-8"),
            headers={"Content-Type": "application/xml; charset=utf-8"},
        )

        if not response.ok:
            raise RemoteStoreError(
                name,
                operation,
                status=response.status_code,
                detail=response.text.strip()[:500],
            )
