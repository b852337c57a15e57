"""Release lifecycle steps: verify conditions and publish."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from concurrent.futures import ThreadPoolExecutor
from typing import Any

from pydantic import ValidationError

from semantic_release_jira.config import build_jira_config, missing_env_vars
from semantic_release_jira.errors import ConfigurationError, ConnectivityError
from semantic_release_jira.jira_client import JiraClient
from semantic_release_jira.models import (
    JiraVersion,
    PluginConfig,
    PublishResult,
    ReleaseContext,
    TicketUpdateResult,
)
from semantic_release_jira.utils import extract_jira_keys

PREFIX = "[semantic-release-jira]"

_default_logger = logging.getLogger(__name__)


def _plugin_config(options: PluginConfig | Mapping[str, Any] | None) -> PluginConfig:
    if options is None:
        return PluginConfig()
    if isinstance(options, PluginConfig):
        return options
    try:
        return PluginConfig(**options)
    except ValidationError as e:
        raise ConfigurationError(f"{PREFIX} Invalid plugin options : {e}") from e


def _release_context(context: ReleaseContext | Mapping[str, Any]) -> ReleaseContext:
    if isinstance(context, ReleaseContext):
        return context
    try:
        return ReleaseContext.model_validate(context)
    except ValidationError as e:
        raise ConfigurationError(f"{PREFIX} Invalid release context : {e}") from e


def verify_conditions(
    plugin_config: PluginConfig | Mapping[str, Any] | None,
    env: Mapping[str, str],
    logger: logging.Logger | None = None,
) -> None:
    """
    Check the Jira environment variables and credentials.

    Raises:
        ConfigurationError: If a required variable is missing. No request is sent.
        ConnectivityError: If Jira cannot be reached with the given credentials.

    """
    log = logger or _default_logger
    options = _plugin_config(plugin_config)

    missing = missing_env_vars(env)
    if missing:
        raise ConfigurationError(
            f"{PREFIX} Missing environment variable : {', '.join(missing)}", missing=missing
        )

    jira_config = build_jira_config(env, options, with_project=False)

    try:
        JiraClient(jira_config).test_connection()
    except Exception as e:
        raise ConnectivityError(f"{PREFIX} Jira connection error : {e}") from e
    log.info(f"{PREFIX} Jira connection successful ✅")


def publish(
    plugin_config: PluginConfig | Mapping[str, Any] | None,
    context: ReleaseContext | Mapping[str, Any],
    env: Mapping[str, str],
    logger: logging.Logger | None = None,
) -> PublishResult:
    """
    Ensure the release version exists in Jira and add it to every referenced ticket.

    Failures while updating individual tickets are logged and do not fail the
    run. Errors while looking up or creating the version propagate.
    """
    log = logger or _default_logger
    options = _plugin_config(plugin_config)
    release = _release_context(context)
    version_name = release.next_release.version

    jira_config = build_jira_config(env, options)
    jira_client = JiraClient(jira_config)

    if options.dry_run:
        return _dry_run(jira_client, release, jira_config.ticket_pattern, log)

    jira_version = JiraVersion.model_validate(jira_client.ensure_version(version_name))
    log.info(f"{PREFIX} Jira version « {version_name} » ready (id={jira_version.id})")

    issue_keys = extract_jira_keys(release.commits, jira_config.ticket_pattern)
    result = PublishResult(version=jira_version, issue_keys=issue_keys)
    if not issue_keys:
        log.info(f"{PREFIX} No Jira ticket detected.")
        return result
    log.info(f"{PREFIX} Tickets found : {', '.join(issue_keys)}")

    def update(issue_key: str) -> TicketUpdateResult:
        try:
            jira_client.add_fix_version_to_issue(issue_key, jira_version.id)
        except Exception as e:
            log.error(f"{PREFIX} ⚠️ Error updating {issue_key} : {e}")
            return TicketUpdateResult(issue_key=issue_key, success=False, error=str(e))
        log.info(f"{PREFIX} ➜ {issue_key} updated with version {version_name}.")
        return TicketUpdateResult(issue_key=issue_key, success=True)

    max_workers = options.max_workers or len(issue_keys)
    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        result.results = list(executor.map(update, issue_keys))

    log.info(f"{PREFIX} {len(result.updated)} ticket(s) updated, {len(result.failed)} failed")
    return result


def _dry_run(
    jira_client: JiraClient, release: ReleaseContext, ticket_pattern: str, log: logging.Logger
) -> PublishResult:
    """Report what ``publish`` would do without writing to Jira."""
    version_name = release.next_release.version
    existing = jira_client.find_version(version_name)
    version = JiraVersion.model_validate(existing) if existing is not None else None
    if version is not None:
        log.info(f"{PREFIX} [dry-run] Jira version « {version_name} » exists (id={version.id})")
    else:
        log.info(f"{PREFIX} [dry-run] Jira version « {version_name} » would be created")

    issue_keys = extract_jira_keys(release.commits, ticket_pattern)
    if not issue_keys:
        log.info(f"{PREFIX} No Jira ticket detected.")
    else:
        log.info(f"{PREFIX} [dry-run] Tickets that would be updated : {', '.join(issue_keys)}")
    return PublishResult(version=version, issue_keys=issue_keys, dry_run=True)
