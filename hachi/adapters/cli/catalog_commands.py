"""
Commandes CLI de consultation des catalogues.

- search: recherche par titre
- show: fiche complete reconciliee
- episodes: episodes d'une saison
- videos: flux lisibles d'un episode ou d'un film
- feed: collections precalculees
- trending: tendances precalculees
"""

import asyncio
from typing import Annotated

import typer
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from hachi.adapters.cli.helpers import CatalogName, console, get_catalog, with_container
from hachi.core.entities import Show
from hachi.core.errors import CatalogError

CatalogOption = Annotated[
    CatalogName,
    typer.Option("--catalog", "-c", help="Catalogue interroge"),
]


def _fail(exc: CatalogError) -> None:
    console.print(f"[red]Erreur:[/red] {escape(str(exc))}")
    raise typer.Exit(code=1)


def _show_panel(show: Show) -> Panel:
    lines = [
        f"[bold]{escape(show.title)}[/bold] [dim]({escape(show.id)})[/dim]",
        f"Type: {show.kind.value}",
    ]
    if show.release_date:
        lines.append(f"Sortie: {show.release_date}")
    if show.status:
        lines.append(f"Statut: {show.status.value}")
    lines.append(f"Note: {show.rating:.1f}")
    if show.genres:
        lines.append(f"Genres: {escape(', '.join(show.genres))}")
    if show.seasons:
        season_names = ", ".join(season.name for season in show.seasons)
        lines.append(f"Saisons: {escape(season_names)}")
    for label, url in (
        ("Jaquette", show.poster_url),
        ("Fond", show.backdrop_url),
        ("Logo", show.logo_url),
    ):
        if url:
            lines.append(f"{label}: {escape(url)}")
    if show.overview:
        lines.append("")
        lines.append(escape(show.overview))
    return Panel("\n".join(lines), title="Fiche", border_style="cyan")


def search(
    query: Annotated[str, typer.Argument(help="Titre recherche")],
    catalog: CatalogOption = CatalogName.ANIME,
) -> None:
    """Recherche des series par titre."""
    asyncio.run(_search_async(query, catalog))


@with_container()
async def _search_async(container, query: str, catalog: CatalogName) -> None:
    try:
        entries = await get_catalog(container, catalog).search_shows(query)
    except CatalogError as exc:
        _fail(exc)
        return

    if not entries:
        console.print("[yellow]Aucun resultat.[/yellow]")
        return

    table = Table(title=f"Resultats pour '{escape(query)}'")
    table.add_column("ID", style="cyan")
    table.add_column("Titre")
    table.add_column("Type")
    table.add_column("Annee", justify="right")
    table.add_column("Langue")
    for entry in entries:
        table.add_row(
            escape(entry.id),
            escape(entry.title),
            entry.kind.value,
            str(entry.year or ""),
            entry.language or "",
        )
    console.print(table)


def show(
    show_id: Annotated[str, typer.Argument(help="Identifiant composite (ex: 42-my-show)")],
    catalog: CatalogOption = CatalogName.ANIME,
) -> None:
    """Affiche la fiche complete d'une serie ou d'un film."""
    asyncio.run(_show_async(show_id, catalog))


@with_container()
async def _show_async(container, show_id: str, catalog: CatalogName) -> None:
    try:
        result = await get_catalog(container, catalog).get_show(show_id)
    except CatalogError as exc:
        _fail(exc)
        return
    console.print(_show_panel(result))


def episodes(
    show_id: Annotated[str, typer.Argument(help="Identifiant composite de la serie")],
    season: Annotated[int, typer.Option("--season", "-s", help="Numero de saison")] = 0,
    catalog: CatalogOption = CatalogName.ANIME,
) -> None:
    """Liste les episodes d'une saison."""
    asyncio.run(_episodes_async(show_id, season, catalog))


@with_container()
async def _episodes_async(container, show_id: str, season: int, catalog: CatalogName) -> None:
    try:
        results = await get_catalog(container, catalog).get_episodes(show_id, season)
    except CatalogError as exc:
        _fail(exc)
        return

    if not results:
        console.print("[yellow]Aucun episode.[/yellow]")
        return

    table = Table(title=f"Episodes de {escape(show_id)} (saison {season})")
    table.add_column("N", justify="right")
    table.add_column("ID", style="cyan")
    table.add_column("Titre")
    table.add_column("Filler")
    for episode in results:
        table.add_row(
            str(episode.number),
            escape(episode.id),
            escape(episode.title or ""),
            "oui" if episode.is_filler else "",
        )
    console.print(table)


def videos(
    media_id: Annotated[str, typer.Argument(help="Identifiant d'episode ou de film")],
    catalog: CatalogOption = CatalogName.ANIME,
) -> None:
    """Affiche les flux lisibles d'un episode ou d'un film."""
    asyncio.run(_videos_async(media_id, catalog))


@with_container()
async def _videos_async(container, media_id: str, catalog: CatalogName) -> None:
    try:
        assets = await get_catalog(container, catalog).get_video_assets(media_id)
    except CatalogError as exc:
        _fail(exc)
        return

    for asset in assets:
        console.print(f"[green]{escape(asset.url)}[/green]")
        for name, value in asset.headers.items():
            console.print(f"  [dim]{escape(name)}:[/dim] {escape(value)}")


def feed(catalog: CatalogOption = CatalogName.ANIME) -> None:
    """Affiche les collections precalculees."""
    asyncio.run(_feed_async(catalog))


@with_container()
async def _feed_async(container, catalog: CatalogName) -> None:
    collections = await get_catalog(container, catalog).get_feed_collections()
    if not collections:
        console.print("[yellow]Aucune collection generee.[/yellow]")
        return

    table = Table(title="Collections")
    table.add_column("ID", style="cyan")
    table.add_column("Nom")
    table.add_column("Categorie")
    table.add_column("Series", justify="right")
    for collection in collections:
        table.add_row(
            escape(collection.id),
            escape(collection.name),
            collection.category.value if collection.category else "",
            str(len(collection.shows)),
        )
    console.print(table)


def trending(catalog: CatalogOption = CatalogName.STREAMING) -> None:
    """Affiche les tendances precalculees."""
    asyncio.run(_trending_async(catalog))


@with_container()
async def _trending_async(container, catalog: CatalogName) -> None:
    shows = await get_catalog(container, catalog).get_trending_shows()
    if not shows:
        console.print("[yellow]Aucune tendance generee.[/yellow]")
        return
    for result in shows:
        console.print(_show_panel(result))
