"""Unit tests for semantic_release_jira.git_manager module."""

from __future__ import annotations

import subprocess
from pathlib import Path

import pytest

from semantic_release_jira.git_manager import GitManager


class TestGitManagerInit:
    """Tests for GitManager initialization."""

    def test_defaults_to_cwd(self) -> None:
        """Test that the current directory is used by default."""
        assert GitManager().local_path == Path.cwd()

    def test_custom_local_path(self, tmp_path: Path) -> None:
        """Test initialization with custom local path."""
        manager = GitManager(local_path=tmp_path)
        assert manager.local_path == tmp_path
        assert manager.repo is None

    def test_open_non_repository(self, tmp_path: Path) -> None:
        """Test that opening a plain directory fails."""
        manager = GitManager(local_path=tmp_path / "missing")
        with pytest.raises(ValueError, match="Not a git repository"):
            manager.open()


class TestGitManagerOperations:
    """Tests for GitManager operations on a real repository."""

    @pytest.fixture
    def manager(self, git_repo: Path) -> GitManager:
        manager = GitManager(local_path=git_repo)
        manager.open()
        return manager

    def test_latest_tag(self, manager: GitManager) -> None:
        """Test finding the most recent tag."""
        assert manager.latest_tag() == "v1.0.0"

    def test_latest_tag_without_tags(self, git_repo: Path) -> None:
        """Test that a repository without tags yields None."""
        subprocess.run(
            ["git", "tag", "-d", "v1.0.0"], cwd=git_repo, check=True, capture_output=True
        )
        manager = GitManager(local_path=git_repo)
        manager.open()
        assert manager.latest_tag() is None

    def test_commits_since_tag_newest_first(self, manager: GitManager) -> None:
        """Test the commit range after a tag."""
        commits = manager.get_commits(since="v1.0.0")
        assert [c.message.strip() for c in commits if c.message] == [
            "fix: PIX-2 and pix-1 follow-up",
            "feat: PIX-1 first feature",
        ]
        assert all(c.hash and len(c.hash) == 40 for c in commits)

    def test_all_commits(self, manager: GitManager) -> None:
        """Test that without a lower bound every commit is returned."""
        commits = manager.get_commits()
        assert len(commits) == 3
        assert commits[-1].message is not None
        assert commits[-1].message.strip() == "Initial commit"

    def test_commits_until(self, manager: GitManager) -> None:
        """Test an explicit upper bound."""
        commits = manager.get_commits(since="v1.0.0", until="HEAD~1")
        assert len(commits) == 1


class TestGitManagerErrorHandling:
    """Tests for GitManager error handling."""

    def test_get_commits_without_open_raises_error(self) -> None:
        """Test that reading commits requires an opened repository."""
        with pytest.raises(ValueError, match="Repository not initialized"):
            GitManager().get_commits()

    def test_latest_tag_without_open_raises_error(self) -> None:
        """Test that reading tags requires an opened repository."""
        with pytest.raises(ValueError, match="Repository not initialized"):
            GitManager().latest_tag()

    def test_unknown_revision(self, git_repo: Path) -> None:
        """Test that an unknown ref is reported as ValueError."""
        manager = GitManager(local_path=git_repo)
        manager.open()
        with pytest.raises(ValueError, match="Invalid commit range"):
            manager.get_commits(since="v9.9.9")
