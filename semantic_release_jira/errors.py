"""Exceptions raised by the semantic-release-jira plugin."""

from __future__ import annotations


class SemanticReleaseJiraError(Exception):
    """Base class for plugin errors."""


class ConfigurationError(SemanticReleaseJiraError):
    """Required configuration is missing or invalid."""

    def __init__(self, message: str, missing: list[str] | None = None) -> None:
        super().__init__(message)
        self.missing = missing or []


class ConnectivityError(SemanticReleaseJiraError):
    """The Jira connectivity probe failed."""


class HttpError(SemanticReleaseJiraError):
    """Jira answered with a non-2xx status."""

    def __init__(self, status_code: int, body: str) -> None:
        super().__init__(f"HTTP {status_code}: {body}")
        self.status_code = status_code
        self.body = body


class PatternError(SemanticReleaseJiraError, ValueError):
    """The ticket pattern is not a valid regular expression."""
