"""Jira REST API client."""

from __future__ import annotations

import base64
import logging
import threading
from collections.abc import Callable
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

import requests

from semantic_release_jira.errors import ConfigurationError, HttpError

if TYPE_CHECKING:
    from semantic_release_jira.models import JiraConfig

logger = logging.getLogger(__name__)


class JiraClient:
    """Minimal client for the Jira Cloud REST API v3."""

    def __init__(
        self,
        config: JiraConfig,
        session_factory: Callable[[], requests.Session] = requests.Session,
    ):
        self.config = config
        self.base_url = f"https://{config.host}"
        self._session_factory = session_factory
        self._local = threading.local()

        credentials = f"{config.email}:{config.token}"
        encoded = base64.b64encode(credentials.encode()).decode()
        self.headers = {
            "Authorization": f"Basic {encoded}",
            "Accept": "application/json",
            "Content-Type": "application/json",
        }

    @property
    def session(self) -> requests.Session:
        """Session of the calling thread; ``publish`` updates tickets from worker threads."""
        session: requests.Session | None = getattr(self._local, "session", None)
        if session is None:
            session = self._session_factory()
            session.headers.update(self.headers)
            self._local.session = session
        return session

    def request(self, path: str, method: str = "GET", body: Any = None) -> Any:
        """
        Send one request to Jira and return the decoded JSON response.

        Args:
            path: API path starting with ``/``, appended to the configured host.
            method: HTTP method.
            body: JSON-serializable payload, sent only when not ``None``.

        Raises:
            HttpError: If Jira answers with a non-2xx status.

        """
        url = f"{self.base_url}{path}"
        logger.debug(f"{method} {url}")

        response = self.session.request(method, url, json=body)
        if not response.ok:
            raise HttpError(response.status_code, response.text)

        # PUT /issue answers 204 No Content
        if not response.content:
            return None
        return response.json()

    def test_connection(self) -> Any:
        """Fetch the authenticated user to check credentials and connectivity."""
        return self.request("/rest/api/3/myself")

    def find_version(self, name: str) -> dict[str, Any] | None:
        """Return the project version whose name is exactly ``name``, if any."""
        project_key = self._require_project_key()
        versions = self.request(f"/rest/api/3/project/{project_key}/versions") or []

        for version in versions:
            if version.get("name") == name:
                return version
        return None

    def ensure_version(self, name: str) -> dict[str, Any]:
        """Return the project version called ``name``, creating it as released if absent."""
        existing = self.find_version(name)
        if existing is not None:
            logger.debug(f"Version {name} already exists (id={existing.get('id')})")
            return existing

        project_key = self._require_project_key()
        logger.debug(f"Creating version {name} in project {project_key}")
        created: dict[str, Any] = self.request(
            "/rest/api/3/version",
            method="POST",
            body={
                "name": name,
                "project": project_key,
                "released": True,
                "releaseDate": datetime.now(UTC).strftime("%Y-%m-%d"),
            },
        )
        return created

    def add_fix_version_to_issue(self, issue_key: str, version_id: str) -> Any:
        """Add ``version_id`` to the fix versions of ``issue_key``, keeping existing ones."""
        return self.request(
            f"/rest/api/3/issue/{issue_key}",
            method="PUT",
            body={"update": {"fixVersions": [{"add": {"id": version_id}}]}},
        )

    def _require_project_key(self) -> str:
        if not self.config.project_key:
            raise ConfigurationError("Jira project key is not configured")
        return self.config.project_key
