"""Shared test fixtures for semantic-release-jira tests."""

from __future__ import annotations

import subprocess
from pathlib import Path

import pytest

from semantic_release_jira.models import Commit, JiraConfig, ReleaseContext
from tests.helpers import FakeJira


@pytest.fixture
def jira_env() -> dict[str, str]:
    """Complete set of Jira environment values."""
    return {
        "JIRA_HOST": "example.atlassian.net",
        "JIRA_EMAIL": "release@example.com",
        "JIRA_API_TOKEN": "fake-token",
        "JIRA_PROJECT": "PIX",
    }


@pytest.fixture
def jira_config() -> JiraConfig:
    """Connection settings for a test Jira instance."""
    return JiraConfig(
        host="example.atlassian.net",
        email="release@example.com",
        token="fake-token",
        project_key="PIX",
    )


@pytest.fixture
def sample_commits() -> list[Commit]:
    """Commits referencing a few tickets, with one duplicate."""
    return [
        Commit(message="feat(users): add user page (PIX-123)"),
        Commit(message="fix: login error\n\nRefs pix-456, PIX-123"),
        Commit(message="chore: update dependencies"),
    ]


@pytest.fixture
def release_context(sample_commits: list[Commit]) -> ReleaseContext:
    """Release context for version 1.2.0."""
    return ReleaseContext.model_validate(
        {"nextRelease": {"version": "1.2.0"}, "commits": [c.model_dump() for c in sample_commits]}
    )


@pytest.fixture
def fake_jira() -> FakeJira:
    """Empty fake Jira project."""
    return FakeJira()


def _git(repo_path: Path, *args: str) -> None:
    subprocess.run(["git", *args], cwd=repo_path, check=True, capture_output=True)


@pytest.fixture
def git_repo(tmp_path: Path) -> Path:
    """
    Temporary git repository with history::

        Initial commit  <- tag v1.0.0
        feat: PIX-1 first feature
        fix: PIX-2 and pix-1 follow-up
    """
    repo_path = tmp_path / "test-repo"
    repo_path.mkdir()

    _git(repo_path, "init")
    _git(repo_path, "config", "user.email", "test@example.com")
    _git(repo_path, "config", "user.name", "Test User")
    _git(repo_path, "config", "commit.gpgsign", "false")
    _git(repo_path, "config", "tag.gpgsign", "false")

    readme = repo_path / "README.md"
    readme.write_text("# Test Repository\n")
    _git(repo_path, "add", ".")
    _git(repo_path, "commit", "-m", "Initial commit")
    _git(repo_path, "tag", "v1.0.0")

    for i, message in enumerate(["feat: PIX-1 first feature", "fix: PIX-2 and pix-1 follow-up"]):
        (repo_path / f"file{i}.txt").write_text(message)
        _git(repo_path, "add", ".")
        _git(repo_path, "commit", "-m", message)

    return repo_path
