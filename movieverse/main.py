"""
Point d'entree CLI de MovieVerse.

Initialise le container DI, configure le logging et fournit les commandes CLI.
"""

from typing import Annotated

import typer
from loguru import logger

from movieverse import __version__
from movieverse.adapters.cli.commands import warm
from movieverse.config import Settings
from movieverse.container import Container
from movieverse.core.categories import category_keys
from movieverse.logging_config import configure_logging

app = typer.Typer(
    name="movieverse",
    help="Backend du catalogue de films MovieVerse",
)
container = Container()

app.command()(warm)


def get_config() -> Settings:
    """Recupere les parametres de l'application depuis le container DI."""
    return container.config()


@app.command()
def info() -> None:
    """Affiche la configuration actuelle."""
    config = get_config()
    logger.info("Configuration MovieVerse")
    typer.echo(f"Base de donnees : {config.database_url}")
    typer.echo(f"API TMDB : {'activee' if config.tmdb_enabled else 'desactivee'}")
    typer.echo(f"Timeout TMDB : {config.tmdb_timeout_seconds}s")
    typer.echo(f"Seuil par categorie : {config.category_threshold}")
    typer.echo(f"Cache des listes : {'active' if config.listing_cache_enabled else 'desactive'}")
    typer.echo(f"Categories : {', '.join(category_keys())}")
    typer.echo(f"Niveau de log : {config.log_level}")


@app.command()
def version() -> None:
    """Affiche les informations de version."""
    typer.echo(f"MovieVerse v{__version__}")


@app.command(name="init-db")
def init_database() -> None:
    """Cree les tables manquantes."""
    container.database.init()
    typer.echo(f"Base initialisee : {get_config().database_url}")


@app.command()
def serve(
    host: Annotated[str, typer.Option(help="Adresse d'ecoute")] = "0.0.0.0",
    port: Annotated[int, typer.Option(help="Port d'ecoute")] = 5001,
    reload: Annotated[bool, typer.Option(help="Rechargement automatique")] = False,
) -> None:
    """Lance le serveur web MovieVerse."""
    import uvicorn

    typer.echo(f"Demarrage du serveur sur {host}:{port}")
    # log_config=None : uvicorn garde la redirection vers loguru
    uvicorn.run(
        "movieverse.web.app:app", host=host, port=port, reload=reload, log_config=None
    )


def main() -> None:
    """Point d'entree de l'application."""
    settings = container.config()
    configure_logging(
        log_level=settings.log_level,
        log_file=settings.log_file,
        rotation_size=settings.log_rotation_size,
        retention_count=settings.log_retention_count,
    )

    logger.info("Demarrage de MovieVerse", version=__version__)

    app()


if __name__ == "__main__":
    main()
