"""Configuration management."""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from pathlib import Path

import yaml
from dotenv import dotenv_values
from pydantic import ValidationError

from semantic_release_jira.errors import ConfigurationError
from semantic_release_jira.models import DEFAULT_TICKET_PATTERN, JiraConfig, PluginConfig

logger = logging.getLogger(__name__)

JIRA_HOST = "JIRA_HOST"
JIRA_EMAIL = "JIRA_EMAIL"
JIRA_API_TOKEN = "JIRA_API_TOKEN"
JIRA_PROJECT = "JIRA_PROJECT"
JIRA_TICKET_REGEX = "JIRA_TICKET_REGEX"

# Order matters: missing variables are reported in this order.
REQUIRED_ENV_VARS = (JIRA_HOST, JIRA_EMAIL, JIRA_API_TOKEN, JIRA_PROJECT)


def missing_env_vars(env: Mapping[str, str]) -> list[str]:
    """Return the required variables that are absent or empty."""
    return [name for name in REQUIRED_ENV_VARS if not env.get(name)]


def build_jira_config(
    env: Mapping[str, str],
    plugin_config: PluginConfig | None = None,
    *,
    with_project: bool = True,
) -> JiraConfig:
    """Build the connection settings from environment values and plugin options."""
    ticket_pattern = (
        env.get(JIRA_TICKET_REGEX)
        or (plugin_config.ticket_pattern if plugin_config else None)
        or DEFAULT_TICKET_PATTERN
    )
    try:
        return JiraConfig(
            host=env.get(JIRA_HOST) or "",
            email=env.get(JIRA_EMAIL) or "",
            token=env.get(JIRA_API_TOKEN) or "",
            project_key=env.get(JIRA_PROJECT) if with_project else None,
            ticket_pattern=ticket_pattern,
        )
    except ValidationError as e:
        raise ConfigurationError(f"Invalid Jira configuration: {e}") from e


def load_plugin_config(config_path: Path | None = None) -> PluginConfig:
    """Load plugin options from a YAML file or use defaults."""
    if config_path and config_path.exists():
        with open(config_path) as f:
            config_data = yaml.safe_load(f) or {}
        if not isinstance(config_data, dict):
            raise ConfigurationError(f"Plugin options in {config_path} must be a mapping")
        try:
            return PluginConfig(**config_data)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid plugin options in {config_path}: {e}") from e
    if config_path:
        logger.debug(f"Plugin options file {config_path} not found, using defaults")
    return PluginConfig()


def save_plugin_config(config: PluginConfig, config_path: Path) -> None:
    """Save plugin options to a YAML file."""
    config_path.parent.mkdir(parents=True, exist_ok=True)
    data = config.model_dump(mode="json")

    with open(config_path, "w") as f:
        yaml.dump(data, f, default_flow_style=False, sort_keys=False)


def load_env(env_file: Path | None = None) -> dict[str, str]:
    """Return the process environment, overlaid with the values of a dotenv ``env_file``."""
    if env_file is None:
        return dict(os.environ)
    if not env_file.exists():
        raise ConfigurationError(f"Environment file not found: {env_file}")

    # keys declared without a value come back as None
    file_values = {k: v for k, v in dotenv_values(env_file).items() if v is not None}
    logger.debug(f"Loaded {len(file_values)} values from {env_file}")
    return {**os.environ, **file_values}
