"""CLI interface for semantic-release-jira."""

import logging
from pathlib import Path
from typing import Annotated

import requests
import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from semantic_release_jira.config import load_env, load_plugin_config, save_plugin_config
from semantic_release_jira.errors import SemanticReleaseJiraError
from semantic_release_jira.git_manager import GitManager
from semantic_release_jira.models import NextRelease, PluginConfig, PublishResult, ReleaseContext
from semantic_release_jira.plugin import publish as publish_release
from semantic_release_jira.plugin import verify_conditions

app = typer.Typer(
    name="semantic-release-jira",
    help="Attach release versions to the Jira tickets referenced in commits",
    add_completion=False,
)

console = Console()


def _setup_logging(verbose: bool) -> logging.Logger:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False, markup=False)],
        force=True,
    )
    return logging.getLogger("semantic_release_jira")


def _print_summary(result: PublishResult) -> None:
    if not result.results:
        return
    table = Table(title=f"Jira tickets for {result.version.name if result.version else '?'}")
    table.add_column("Ticket")
    table.add_column("Status")
    table.add_column("Error")
    for item in result.results:
        status = "[green]✓ updated[/green]" if item.success else "[red]✗ failed[/red]"
        table.add_row(item.issue_key, status, escape(item.error or ""))
    console.print(table)


@app.command()
def verify(
    config: Annotated[
        Path | None, typer.Option("--config", "-c", help="Plugin options YAML file")
    ] = None,
    env_file: Annotated[
        Path | None, typer.Option("--env-file", help="File with KEY=VALUE environment values")
    ] = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Debug logging")] = False,
) -> None:
    """Check the Jira environment variables and credentials."""
    logger = _setup_logging(verbose)
    try:
        verify_conditions(load_plugin_config(config), load_env(env_file), logger=logger)
    except SemanticReleaseJiraError as e:
        console.print(f"[bold red]Error: {escape(str(e))}[/bold red]")
        raise typer.Exit(1) from e


@app.command()
def publish(
    version: Annotated[str, typer.Option("--version", help="Version being released")],
    repo: Annotated[Path, typer.Option("--repo", "-r", help="Local git repository")] = Path("."),
    since: Annotated[
        str | None,
        typer.Option("--from", help="Exclusive start of the commit range (default: latest tag)"),
    ] = None,
    until: Annotated[str, typer.Option("--to", help="End of the commit range")] = "HEAD",
    config: Annotated[
        Path | None, typer.Option("--config", "-c", help="Plugin options YAML file")
    ] = None,
    env_file: Annotated[
        Path | None, typer.Option("--env-file", help="File with KEY=VALUE environment values")
    ] = None,
    dry_run: Annotated[
        bool, typer.Option("--dry-run", help="Report changes without writing to Jira")
    ] = False,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Debug logging")] = False,
) -> None:
    """Create the Jira version and add it to the tickets referenced in the commit range."""
    logger = _setup_logging(verbose)
    try:
        options = load_plugin_config(config)
        if dry_run:
            options = options.model_copy(update={"dry_run": True})

        git_manager = GitManager(local_path=repo)
        git_manager.open()
        start = since or git_manager.latest_tag()
        commits = git_manager.get_commits(since=start, until=until)
        console.print(
            f"[dim]{len(commits)} commit(s) in {f'{start}..' if start else ''}{until}[/dim]"
        )

        context = ReleaseContext(next_release=NextRelease(version=version), commits=commits)
        result = publish_release(options, context, load_env(env_file), logger=logger)
    except (SemanticReleaseJiraError, ValueError, requests.RequestException) as e:
        console.print(f"[bold red]Error: {escape(str(e))}[/bold red]")
        raise typer.Exit(1) from e

    _print_summary(result)
    if result.failed:
        console.print(f"\n[yellow]⚠ {len(result.failed)} ticket(s) could not be updated[/yellow]")


@app.command()
def init(
    output: Annotated[Path, typer.Option("--output", "-o", help="Output options file")] = Path(
        "semantic-release-jira.yaml"
    ),
    ticket_pattern: Annotated[
        str | None, typer.Option("--ticket-pattern", "-p", help="Ticket key regular expression")
    ] = None,
) -> None:
    """Initialize a plugin options file."""
    try:
        save_plugin_config(PluginConfig(ticket_pattern=ticket_pattern), output)
    except OSError as e:
        console.print(f"[bold red]Error: {escape(str(e))}[/bold red]")
        raise typer.Exit(1) from e

    console.print(f"[green]✓ Plugin options saved to {output}[/green]")
    console.print(f"\nRun with: semantic-release-jira publish --version <x.y.z> --config {output}")


@app.command(name="version")
def show_version() -> None:
    """Show version information."""
    from semantic_release_jira import __version__

    console.print(f"semantic-release-jira version {__version__}")


if __name__ == "__main__":
    app()
