"""
coverresolver CLI - add cover-image URLs to a JSON list of games.
"""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.progress import BarColumn, Progress, SpinnerColumn, TaskProgressColumn, TextColumn
from rich.table import Table

from .common.exceptions import CoverResolverError
from .config import (
    DEFAULT_OUTPUT_FILE,
    ENV_IGDB_CLIENT_ID,
    ENV_IGDB_CLIENT_SECRET,
    ENV_RAWG_KEY,
    ENV_TGDB_KEY,
    EXAMPLE_GAMES,
    RAWG,
    THEGAMESDB,
)
from .logging_cfg import configure_logging
from .metadata_providers import PROVIDERS, create_provider
from .metadata_providers.platforms import supported_platforms
from .orchestrator import BatchOrchestrator

app = typer.Typer(
    help="Resolve cover images for a JSON list of games using RAWG, TheGamesDB or IGDB.",
    rich_markup_mode="rich",
    add_completion=False,
)
console = Console(stderr=True)


def _read_input(source: str) -> str:
    if source == "-":
        return sys.stdin.read()
    path = Path(source)
    if not path.is_file():
        raise typer.BadParameter(f"Input file not found: {source}")
    return path.read_text(encoding="utf-8")


def _write_output(payload: list, destination: str) -> None:
    text = json.dumps(payload, indent=2, ensure_ascii=False)
    if destination == "-":
        typer.echo(text)
        return
    Path(destination).write_text(text + "\n", encoding="utf-8")


@app.command("resolve")
def cmd_resolve(
    source: str = typer.Argument("-", help="JSON file with the game list, or '-' for stdin."),
    provider: str = typer.Option(RAWG, "--provider", "-p", help="rawg | thegamesdb | igdb"),
    output: str = typer.Option(
        DEFAULT_OUTPUT_FILE, "--output", "-o", help="Where to write the result ('-' for stdout)."
    ),
    rawg_key: Optional[str] = typer.Option(
        None, envvar=ENV_RAWG_KEY, help="RAWG API key (optional).", show_default=False
    ),
    tgdb_key: Optional[str] = typer.Option(
        None, envvar=ENV_TGDB_KEY, help="TheGamesDB API key (required for thegamesdb).",
        show_default=False,
    ),
    igdb_client_id: Optional[str] = typer.Option(
        None, envvar=ENV_IGDB_CLIENT_ID, help="Twitch client ID (required for igdb).",
        show_default=False,
    ),
    igdb_client_secret: Optional[str] = typer.Option(
        None, envvar=ENV_IGDB_CLIENT_SECRET, help="Twitch client secret (required for igdb).",
        show_default=False,
    ),
    log_format: str = typer.Option("auto", help="auto | json | human"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
):
    """
    [bold green]Resolve covers[/bold green]

    Reads a JSON array of [bold]{"title", "systemName"}[/bold] objects and writes
    the same array with an [bold]imageUrl[/bold] added wherever a cover was found.
    """
    configure_logging(log_format, logging.DEBUG if verbose else logging.WARNING)
    text = _read_input(source)

    api_key = tgdb_key if provider.lower() == THEGAMESDB else rawg_key
    try:
        cover_provider = create_provider(
            provider,
            api_key=api_key,
            client_id=igdb_client_id,
            client_secret=igdb_client_secret,
        )
    except CoverResolverError as e:
        console.print(f"[bold red]✘[/bold red] {e}")
        raise typer.Exit(code=1)

    try:
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            TaskProgressColumn(),
            console=console,
        ) as progress:
            task = progress.add_task("Resolving covers...", total=None)

            def prog_wrapper(processed, total, title):
                progress.update(
                    task, completed=processed, total=total, description=f"{processed}/{total} {title}"
                )

            orch = BatchOrchestrator(cover_provider, progress_cb=prog_wrapper)
            result = orch.run(text)
    except CoverResolverError as e:
        console.print(f"[bold red]✘[/bold red] {e}")
        raise typer.Exit(code=1)
    finally:
        cover_provider.close()

    _write_output(result.to_list(), output)
    console.print(f"[bold green]✔[/bold green] {result.summary}")
    if output != "-":
        console.print(f"Saved to [underline]{output}[/underline]")


@app.command("platforms")
def cmd_platforms(
    provider: Optional[str] = typer.Option(None, "--provider", "-p", help="Only show one provider."),
):
    """
    [bold cyan]Supported platforms[/bold cyan]

    Lists the platform names recognised in [bold]systemName[/bold] and the id each
    provider filters on. Other names are searched without a platform filter.
    """
    names = sorted(PROVIDERS)
    if provider:
        if provider.lower() not in PROVIDERS:
            console.print(f"[bold red]✘[/bold red] Unknown provider: {provider}")
            raise typer.Exit(code=1)
        names = [provider.lower()]

    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("Platform", style="dim")
    for name in names:
        table.add_column(PROVIDERS[name].display_name, justify="right")

    first = PROVIDERS[names[0]].platform_table
    for platform in supported_platforms(first):
        row = [platform]
        for name in names:
            ids = PROVIDERS[name].platform_table.get(platform, ())
            row.append(", ".join(str(i) for i in ids))
        table.add_row(*row)
    Console().print(table)


@app.command("example")
def cmd_example():
    """Print a sample input list."""
    typer.echo(json.dumps(EXAMPLE_GAMES, indent=4, ensure_ascii=False))


def main():
    app()


if __name__ == "__main__":
    main()
