"""Jira integration for semantic-release style release pipelines."""

from semantic_release_jira.jira_client import JiraClient
from semantic_release_jira.models import JiraConfig, PluginConfig, ReleaseContext
from semantic_release_jira.plugin import publish, verify_conditions
from semantic_release_jira.utils import extract_jira_keys

__version__ = "0.1.0"
__all__ = [
    "JiraClient",
    "JiraConfig",
    "PluginConfig",
    "ReleaseContext",
    "extract_jira_keys",
    "publish",
    "verify_conditions",
]
