"""
Commandes CLI de generation hors ligne.

- generate-collections: parcours des archives et ecriture des collections
- generate-trending: selection des tendances films/series
"""

import asyncio
from typing import Annotated

import typer
from rich.markup import escape
from rich.progress import Progress, SpinnerColumn, TextColumn

from hachi.adapters.cli.helpers import CatalogName, console, with_container
from hachi.core.errors import CatalogError


def generate_collections(
    catalog: Annotated[
        CatalogName,
        typer.Option("--catalog", "-c", help="Catalogue a generer"),
    ] = CatalogName.ANIME,
) -> None:
    """Genere les collections du catalogue a partir des archives."""
    asyncio.run(_generate_collections_async(catalog))


@with_container()
async def _generate_collections_async(container, catalog: CatalogName) -> None:
    if catalog == CatalogName.ANIME:
        generator = container.anime_feed_generator()
    else:
        generator = container.streaming_feed_generator()

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
        transient=True,
    ) as progress:
        progress.add_task(f"[cyan]Parcours des archives ({catalog.value})...", total=None)
        report = await generator.generate()

    console.print(
        f"[bold green]{len(report.collections)}[/bold green] collection(s) generee(s)"
    )
    for name in report.failed:
        console.print(f"[red]Echec:[/red] {escape(name)}")
    if report.failed:
        raise typer.Exit(code=1)


def generate_trending() -> None:
    """Genere les tendances du catalogue films/series."""
    asyncio.run(_generate_trending_async())


@with_container()
async def _generate_trending_async(container) -> None:
    generator = container.streaming_feed_generator()
    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
        transient=True,
    ) as progress:
        progress.add_task("[cyan]Selection des tendances...", total=None)
        try:
            shows = await generator.generate_trending()
        except CatalogError as exc:
            console.print(f"[red]Erreur:[/red] {escape(str(exc))}")
            raise typer.Exit(code=1)

    console.print(f"[bold green]{len(shows)}[/bold green] tendance(s) generee(s)")
    for show in shows:
        console.print(f"  - {show.title} [dim]({show.id})[/dim]")
