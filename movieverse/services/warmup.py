"""
Pre-remplissage des listes par categorie.

Utilise par la commande CLI `warm` : chaque categorie passe par
CatalogService.get_category, qui ne fait qu'un seul appel TMDB. Les
erreurs TRANSIENT sont relancees ici, cote appelant, avec un delai fixe.
Les autres erreurs (429, cle invalide, 404) sont definitives pour la
categorie et n'interrompent pas les suivantes.
"""

from dataclasses import dataclass, field
from typing import Callable, Iterable, Optional

from loguru import logger
from tenacity import retry, retry_if_exception, stop_after_attempt, wait_fixed

from movieverse.core.categories import category_keys
from movieverse.core.exceptions import ProviderError, ProviderErrorKind
from movieverse.services.catalog import CatalogService


@dataclass
class WarmupReport:
    """Resultat du pre-remplissage."""

    warmed: dict[str, int] = field(default_factory=dict)
    failed: dict[str, str] = field(default_factory=dict)

    @property
    def total_movies(self) -> int:
        return sum(self.warmed.values())


def _is_transient(exc: BaseException) -> bool:
    return isinstance(exc, ProviderError) and exc.kind == ProviderErrorKind.TRANSIENT


def with_transient_retry(max_attempts: int = 3, wait_seconds: float = 2.0):
    """
    Decorateur relancant une coroutine sur ProviderError TRANSIENT.

    Args:
        max_attempts: Nombre maximum de tentatives
        wait_seconds: Delai fixe entre deux tentatives

    Example:
        @with_transient_retry(max_attempts=3)
        async def load():
            return await catalog.get_category("action")
    """
    return retry(
        retry=retry_if_exception(_is_transient),
        wait=wait_fixed(wait_seconds),
        stop=stop_after_attempt(max_attempts),
        reraise=True,
    )


class CatalogWarmer:
    """
    Charge une ou plusieurs categories en base.

    Example:
        warmer = CatalogWarmer(catalog_service)
        report = await warmer.warm(["action", "comedy"])
    """

    def __init__(
        self,
        catalog: CatalogService,
        max_attempts: int = 3,
        wait_seconds: float = 2.0,
    ) -> None:
        self._catalog = catalog
        self._max_attempts = max_attempts
        self._wait_seconds = wait_seconds

    async def warm(
        self,
        categories: Optional[Iterable[str]] = None,
        on_progress: Optional[Callable[[str, int], None]] = None,
    ) -> WarmupReport:
        """
        Charge les categories demandees (toutes par defaut).

        Args:
            categories: Cles de categorie, toutes si None
            on_progress: Appele apres chaque categorie reussie (cle, nombre)

        Raises:
            InvalidCategoryError: Une cle est inconnue
        """
        report = WarmupReport()
        for key in categories if categories is not None else category_keys():

            @with_transient_retry(self._max_attempts, self._wait_seconds)
            async def _load():
                return await self._catalog.get_category(key)

            try:
                movies = await _load()
            except ProviderError as e:
                logger.warning(f"Pre-remplissage {key}: echec ({e.kind.value})")
                report.failed[key] = e.kind.value
                continue

            report.warmed[key] = len(movies)
            if on_progress is not None:
                on_progress(key, len(movies))

        return report
