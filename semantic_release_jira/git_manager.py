"""Git operations for collecting the commits of a release."""

from __future__ import annotations

import logging
from pathlib import Path

import git

from semantic_release_jira.models import Commit

logger = logging.getLogger(__name__)


class GitManager:
    """Reads commits and tags from a local repository."""

    def __init__(self, local_path: Path | None = None):
        self.local_path = local_path or Path.cwd()
        self.repo: git.Repo | None = None

    def open(self) -> git.Repo:
        """Open the repository at ``local_path``."""
        try:
            self.repo = git.Repo(self.local_path, search_parent_directories=True)
        except (git.InvalidGitRepositoryError, git.NoSuchPathError) as e:
            raise ValueError(f"Not a git repository: {self.local_path}") from e
        logger.debug(f"Opened repository at {self.repo.working_tree_dir}")
        return self.repo

    def latest_tag(self) -> str | None:
        """Return the most recent tag reachable from HEAD, or None."""
        if not self.repo:
            raise ValueError("Repository not initialized. Call open() first.")

        try:
            return str(self.repo.git.describe("--tags", "--abbrev=0"))
        except git.GitCommandError:
            return None

    def get_commits(self, since: str | None = None, until: str = "HEAD") -> list[Commit]:
        """
        Return the commits in ``since..until``, newest first.

        Args:
            since: Exclusive lower bound (tag, branch or sha). All commits
                reachable from ``until`` when None.
            until: Inclusive upper bound.

        """
        if not self.repo:
            raise ValueError("Repository not initialized. Call open() first.")

        rev = f"{since}..{until}" if since else until
        try:
            commits = [
                Commit(message=_decode(c.message), hash=c.hexsha)
                for c in self.repo.iter_commits(rev)
            ]
        except git.GitCommandError as e:
            raise ValueError(f"Invalid commit range {rev}: {e}") from e
        logger.debug(f"Found {len(commits)} commits in {rev}")
        return commits


def _decode(message: str | bytes) -> str:
    if isinstance(message, bytes):
        return message.decode("utf-8", errors="replace")
    return message
