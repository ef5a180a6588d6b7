"""
Commandes CLI de maintenance du catalogue.
"""

import asyncio
from typing import Annotated, Optional

import typer
from rich.table import Table

from movieverse.adapters.cli.helpers import console, suppress_loguru, with_container
from movieverse.core.categories import category_keys
from movieverse.core.exceptions import InvalidCategoryError
from movieverse.services.warmup import WarmupReport


def warm(
    categories: Annotated[
        Optional[list[str]],
        typer.Argument(help="Categories a charger (toutes par defaut)"),
    ] = None,
    attempts: Annotated[
        int,
        typer.Option("--attempts", "-a", min=1, help="Tentatives par categorie sur erreur TMDB transitoire"),
    ] = 3,
    wait: Annotated[
        float,
        typer.Option("--wait", "-w", min=0, help="Delai en secondes entre deux tentatives"),
    ] = 2.0,
) -> None:
    """Pre-remplit la base avec les listes TMDB des categories."""
    unknown = [c for c in categories or [] if c not in category_keys()]
    if unknown:
        console.print(f"[red]Categorie(s) inconnue(s) :[/red] {', '.join(unknown)}")
        console.print(f"[dim]Categories disponibles : {', '.join(category_keys())}[/dim]")
        raise typer.Exit(code=1)

    report = asyncio.run(_warm_async(categories or None, attempts, wait))
    _display_report(report)
    if report.failed:
        raise typer.Exit(code=1)


@with_container()
async def _warm_async(
    container, categories: Optional[list[str]], attempts: int, wait: float
) -> WarmupReport:
    """Implementation async de la commande warm."""
    if not container.config().tmdb_enabled:
        console.print("[yellow]Aucune cle TMDB configuree (MOVIEVERSE_TMDB_API_KEY).[/yellow]")

    warmer = container.catalog_warmer(max_attempts=attempts, wait_seconds=wait)

    def _progress(key: str, count: int) -> None:
        console.print(f"[green]OK[/green] {key} : {count} film(s)")

    with suppress_loguru():
        try:
            return await warmer.warm(categories, on_progress=_progress)
        except InvalidCategoryError as e:
            console.print(f"[red]{e.message}[/red] : {e.category}")
            raise typer.Exit(code=1) from e


def _display_report(report: WarmupReport) -> None:
    """Affiche le resume du pre-remplissage."""
    table = Table(title="Pre-remplissage du catalogue")
    table.add_column("Categorie", style="cyan")
    table.add_column("Resultat")

    for key, count in report.warmed.items():
        table.add_row(key, f"[green]{count} film(s)[/green]")
    for key, kind in report.failed.items():
        table.add_row(key, f"[red]echec ({kind})[/red]")

    console.print(table)
    console.print(f"Total : {report.total_movies} film(s) en base")
