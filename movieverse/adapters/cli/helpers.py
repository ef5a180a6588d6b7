"""
Outils communs aux commandes CLI.

- console : sortie Rich unique pour toutes les commandes
- suppress_loguru : coupe les logs du package pendant un affichage Rich
- with_container : fournit un Container pret a l'emploi a une commande async
"""

from contextlib import contextmanager
from functools import wraps

from loguru import logger
from rich.console import Console

from movieverse.container import Container

console = Console()


@contextmanager
def suppress_loguru(package: str = "movieverse"):
    """Desactive les logs du package le temps du bloc (tableaux, progression)."""
    logger.disable(package)
    try:
        yield
    finally:
        logger.enable(package)


def with_container(requires_db: bool = True):
    """
    Passe un Container en premier argument de la coroutine decoree.

    La base est initialisee si requires_db, et le client TMDB est ferme
    a la sortie, meme en cas d'erreur.

    Exemple:
        @with_container()
        async def _warm_async(container, categories):
            warmer = container.catalog_warmer()
    """

    def decorator(func):
        @wraps(func)
        async def wrapper(*args, **kwargs):
            container = Container()
            if requires_db:
                container.database.init()
            try:
                return await func(container, *args, **kwargs)
            finally:
                await container.tmdb_client().close()

        return wrapper

    return decorator
