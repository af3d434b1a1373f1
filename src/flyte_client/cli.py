"""Command-line interface for the Flyte client."""

import asyncio
import json
import sys
from pathlib import Path

import typer
import yaml
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from .client import ClientError, FlyteClient
from .models import ClientConfig, LinkDocument, RetryPolicy
from .utils import merge_config, setup_logging

app = typer.Typer(
    name="flyte-client",
    help="Discover and query the links advertised by a Flyte API",
    no_args_is_help=True,
)

console = Console()
err_console = Console(file=sys.stderr)

TimeoutOption = typer.Option(10.0, "--timeout", "-t", help="Network timeout in seconds")
MaxAttemptsOption = typer.Option(
    1, "--max-attempts", help="Attempts to fetch the API links (0 = retry forever)"
)
ConfigOption = typer.Option(
    None,
    "--config",
    "-c",
    help="Path to configuration file (YAML or JSON)",
    exists=True,
)
LogLevelOption = typer.Option("WARNING", help="Log level")


def build_config(
    url: str,
    timeout: float,
    max_attempts: int,
    config_file: Path | None,
    log_level: str = "WARNING",
) -> ClientConfig:
    """Build the client configuration from command-line options.

    Values from ``config_file`` take precedence over the options; nested
    sections such as ``retry`` are merged key by key.
    """
    try:
        config = ClientConfig(
            base_url=url,
            timeout_seconds=timeout,
            retry=RetryPolicy(max_attempts=max_attempts or None),
            log_level=log_level,
        )
    except ValueError as e:
        err_console.print(f"[red]Error:[/red] Invalid options: {e}")
        raise typer.Exit(1)

    if config_file:
        config = load_config(config_file, config)

    setup_logging(config.log_level)
    return config


def build_client(config: ClientConfig) -> FlyteClient:
    """Create the client used by the commands."""
    return FlyteClient.from_config(config)


def load_config(config_file: Path, base_config: ClientConfig) -> ClientConfig:
    """Load configuration from file, overriding ``base_config``."""
    try:
        with open(config_file) as f:
            if config_file.suffix.lower() in [".yaml", ".yml"]:
                config_data = yaml.safe_load(f)
            else:
                config_data = json.load(f)

        return merge_config(base_config, config_data)

    except (OSError, ValueError, yaml.YAMLError) as e:
        err_console.print(f"[red]Error:[/red] Failed to load config file: {e}")
        raise typer.Exit(1)


async def _load_links(client: FlyteClient) -> LinkDocument:
    async with client:
        return await client.bootstrap()


@app.command()
def links(
    url: str = typer.Argument(..., help="Flyte API URL (e.g., http://localhost:8080/v1)"),
    timeout: float = TimeoutOption,
    max_attempts: int = MaxAttemptsOption,
    config_file: Path | None = ConfigOption,
    log_level: str = LogLevelOption,
) -> None:
    """List the links advertised by a Flyte API."""
    config = build_config(url, timeout, max_attempts, config_file, log_level)

    try:
        document = asyncio.run(_load_links(build_client(config)))
    except ClientError as e:
        err_console.print(f"[red]Error:[/red] Failed to get api links: {e}")
        raise typer.Exit(1)

    if not document.links:
        console.print("[yellow]The API does not advertise any links[/yellow]")
        return

    table = Table(title=f"API Links ({config.base_url})")
    table.add_column("Relation", style="cyan")
    table.add_column("Href", style="green")

    for link in document.links:
        table.add_row(link.rel, link.href)

    console.print(table)


@app.command()
def resolve(
    url: str = typer.Argument(..., help="Flyte API URL (e.g., http://localhost:8080/v1)"),
    rel: str = typer.Argument(..., help="Relation to resolve (e.g., info/health)"),
    timeout: float = TimeoutOption,
    max_attempts: int = MaxAttemptsOption,
    config_file: Path | None = ConfigOption,
    log_level: str = LogLevelOption,
) -> None:
    """Resolve a link relation to its URL."""
    config = build_config(url, timeout, max_attempts, config_file, log_level)

    async def resolve_rel() -> str:
        async with build_client(config) as client:
            return await client.get_link(rel)

    try:
        href = asyncio.run(resolve_rel())
    except ClientError as e:
        err_console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    console.print(href)


@app.command()
def health(
    url: str = typer.Argument(..., help="Flyte API URL (e.g., http://localhost:8080/v1)"),
    timeout: float = TimeoutOption,
    max_attempts: int = MaxAttemptsOption,
    config_file: Path | None = ConfigOption,
    log_level: str = LogLevelOption,
) -> None:
    """Check the health of a Flyte API."""
    config = build_config(url, timeout, max_attempts, config_file, log_level)

    async def check_health() -> tuple[str, int]:
        async with build_client(config) as client:
            health_url = await client.get_health_check_url()
            response = await client.check_health()
            return health_url, response.status_code

    try:
        health_url, status_code = asyncio.run(check_health())
    except ClientError as e:
        err_console.print(f"[red]Error:[/red] Failed to check health: {e}")
        raise typer.Exit(1)

    console.print(
        Panel.fit(
            f"[bold green]HEALTHY[/bold green]\n\n"
            f"[bold]API:[/bold] {config.base_url}\n"
            f"[bold]Health Check:[/bold] {health_url}\n"
            f"[bold]Status:[/bold] {status_code}",
            title="Health Status",
            border_style="green",
        )
    )


def main() -> None:
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
