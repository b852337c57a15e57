"""Example usage of the semantic-release-jira plugin."""

import logging
import os
from pathlib import Path

from semantic_release_jira import extract_jira_keys, publish, verify_conditions
from semantic_release_jira.git_manager import GitManager
from semantic_release_jira.models import PluginConfig

logging.basicConfig(level=logging.INFO, format="%(message)s")


# Example 1: Check credentials before a release
def example_verify() -> None:
    """Fail early when the Jira environment is incomplete."""
    verify_conditions(PluginConfig(), dict(os.environ))


# Example 2: Publish from a host-supplied release context
def example_publish_from_context() -> None:
    """Publish with the context shape a release host hands to plugins."""
    context = {
        "nextRelease": {"version": "1.4.0"},
        "commits": [
            {"message": "feat(users): add user page (PIX-123)"},
            {"message": "fix: login error, refs PIX-456"},
        ],
    }

    result = publish({}, context, dict(os.environ))
    print(f"Updated: {', '.join(result.updated) or '-'}")
    print(f"Failed: {', '.join(result.failed) or '-'}")


# Example 3: Publish the commits since the last tag of a local repository
def example_publish_from_git(repo: Path = Path(".")) -> None:
    """Collect commits with GitManager, then publish with a custom ticket pattern."""
    git_manager = GitManager(local_path=repo)
    git_manager.open()
    commits = git_manager.get_commits(since=git_manager.latest_tag())

    options = PluginConfig(ticket_pattern=r"(?:PIX|OPS)-\d+", max_workers=4)
    context = {"nextRelease": {"version": "1.5.0"}, "commits": commits}
    publish(options, context, dict(os.environ))


# Example 4: Preview the tickets of a release
def example_preview_keys() -> None:
    """Extract ticket keys without talking to Jira."""
    commits = [{"message": "PIX-1 and pix-2"}, {"message": "PIX-1 again"}]
    print(extract_jira_keys(commits, r"[A-Z]+-\d+"))  # ['PIX-1', 'PIX-2']


if __name__ == "__main__":
    example_preview_keys()
