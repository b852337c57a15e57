"""Ticket key extraction from commit messages."""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from typing import Any

from semantic_release_jira.errors import PatternError
from semantic_release_jira.models import Commit


def _message(commit: Commit | Mapping[str, Any]) -> str:
    if isinstance(commit, Commit):
        return commit.message or ""
    return commit.get("message") or ""


def extract_jira_keys(commits: Iterable[Commit | Mapping[str, Any]], pattern: str) -> list[str]:
    """
    Extract unique Jira keys from commit messages.

    Matching is case-insensitive; keys are returned uppercased, in order of
    first appearance (commit order, then left to right within a message).

    Raises:
        PatternError: If ``pattern`` is not a valid regular expression.

    """
    try:
        regex = re.compile(pattern, re.IGNORECASE)
    except re.error as e:
        raise PatternError(f"Invalid ticket pattern {pattern!r}: {e}") from e

    # dict keeps insertion order, so it doubles as an ordered set
    keys: dict[str, None] = {}
    for commit in commits:
        for match in regex.finditer(_message(commit)):
            # group(0): patterns with capture groups still yield the whole key
            key = match.group(0).upper()
            if key:
                keys.setdefault(key, None)
    return list(keys)
