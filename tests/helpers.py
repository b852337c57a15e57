"""Test doubles for the Jira REST API."""

from __future__ import annotations

import json
from typing import Any
from unittest.mock import MagicMock


def make_response(
    status_code: int = 200, payload: Any = None, text: str | None = None
) -> MagicMock:
    """Build a fake ``requests.Response``."""
    response = MagicMock()
    response.status_code = status_code
    response.ok = 200 <= status_code < 300
    if text is None:
        text = "" if payload is None else json.dumps(payload)
    response.text = text
    response.content = text.encode()
    response.json.return_value = payload
    return response


class FakeJira:
    """In-memory stand-in for the Jira REST API, plugged in as ``session.request``."""

    def __init__(self, versions: list[dict[str, Any]] | None = None) -> None:
        self.versions = versions if versions is not None else []
        self.fix_versions: dict[str, list[str]] = {}
        self.failing_issues: set[str] = set()
        self.calls: list[tuple[str, str]] = []

    def __call__(self, method: str, url: str, json: Any = None) -> MagicMock:
        path = url.split("atlassian.net", 1)[1]
        self.calls.append((method, path))

        if method == "GET" and path == "/rest/api/3/myself":
            return make_response(payload={"emailAddress": "release@example.com"})
        if method == "GET" and path.endswith("/versions"):
            return make_response(payload=self.versions)
        if method == "POST" and path == "/rest/api/3/version":
            version = {"id": str(10000 + len(self.versions)), **json}
            self.versions.append(version)
            return make_response(201, payload=version)
        if method == "PUT" and path.startswith("/rest/api/3/issue/"):
            issue_key = path.rsplit("/", 1)[1]
            if issue_key in self.failing_issues:
                return make_response(404, text='{"errorMessages":["Issue does not exist"]}')
            for change in json["update"]["fixVersions"]:
                self.fix_versions.setdefault(issue_key, []).append(change["add"]["id"])
            return make_response(204)
        return make_response(404, text="Not Found")

