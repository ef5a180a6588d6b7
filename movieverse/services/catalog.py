"""
Service cache-aside du catalogue.

Decide pour chaque lecture s'il faut servir la base ou interroger TMDB,
normalise les reponses, les fusionne avec l'etat local (reactions,
captures, categories) et degrade proprement quand le fournisseur echoue.

Deux chemins de lecture :
- get_category : au moins CATEGORY_SUFFICIENCY_THRESHOLD films en base
  pour la categorie => servis tels quels ; sinon la liste amont remplace
  entierement la vue locale (pas de complement partiel).
- get_details : un film en base avec captures est complet et servi tel
  quel ; sinon detail TMDB, fusion des reactions, upsert par identite.
  Un echec amont produit une fiche provisoire, jamais une erreur.
"""

import asyncio
import time
from typing import Optional

from loguru import logger

from movieverse.adapters.api.cache import ListingCache
from movieverse.core.categories import resolve_category
from movieverse.core.entities.media import Movie
from movieverse.core.exceptions import ProviderError, ProviderErrorKind, StorageError
from movieverse.core.ports.api_clients import ICatalogClient
from movieverse.core.ports.repositories import IMovieRepository
from movieverse.services.normalizer import (
    normalize_details,
    normalize_listing_item,
    placeholder_movie,
)
from movieverse.utils.constants import CATEGORY_SUFFICIENCY_THRESHOLD


class EndpointCooldown:
    """
    Delai fixe impose apres un 429 sur un endpoint.

    Etat partage par tous les appels du processus : cree a la premiere
    reponse RATE_LIMITED, consomme par l'appel suivant au meme endpoint.
    """

    def __init__(self, delay_seconds: float = 1.0) -> None:
        self._delay = delay_seconds
        self._until: dict[str, float] = {}

    def mark(self, endpoint: str) -> None:
        """Enregistre un 429 sur l'endpoint."""
        self._until[endpoint] = time.monotonic() + self._delay

    def remaining(self, endpoint: str) -> float:
        """Secondes restantes avant le prochain appel autorise."""
        until = self._until.get(endpoint)
        if until is None:
            return 0.0
        return max(0.0, until - time.monotonic())

    async def wait(self, endpoint: str) -> None:
        """Attend la fin du delai de l'endpoint s'il en reste un."""
        remaining = self.remaining(endpoint)
        if remaining > 0:
            logger.info(f"Pause de {remaining:.2f}s avant nouvel appel a {endpoint} (429 recent)")
            await asyncio.sleep(remaining)
        self._until.pop(endpoint, None)


class CatalogService:
    """
    Orchestrateur cache-aside entre la base et le fournisseur.

    Example:
        service = CatalogService(movie_repo, tmdb_client)
        movies = await service.get_category("action")
        movie = await service.get_details("tmdb", "27205")
    """

    def __init__(
        self,
        movie_repo: IMovieRepository,
        catalog_client: ICatalogClient,
        cooldown: Optional[EndpointCooldown] = None,
        listing_cache: Optional[ListingCache] = None,
        category_threshold: int = CATEGORY_SUFFICIENCY_THRESHOLD,
    ) -> None:
        """
        Initialise le service.

        Args:
            movie_repo: Repository des films
            catalog_client: Client du fournisseur (TMDB)
            cooldown: Etat de pause apres 429 (partage entre requetes)
            listing_cache: Accelerateur optionnel devant la base
            category_threshold: Nombre de films suffisant pour servir la base
        """
        self._movie_repo = movie_repo
        self._client = catalog_client
        self._cooldown = cooldown or EndpointCooldown()
        self._listing_cache = listing_cache
        self._threshold = category_threshold

    async def get_category(self, category_key: str) -> list[Movie]:
        """
        Retourne les films d'une categorie.

        Raises:
            InvalidCategoryError: Cle inconnue (aucun appel amont)
            ProviderError: Echec amont, propage tel quel
            StorageError: Lecture de la base impossible
        """
        query = resolve_category(category_key)

        if self._listing_cache is not None:
            cached = await self._listing_cache.get(category_key)
            if cached is not None:
                logger.debug(f"Categorie {category_key}: servie par le cache des listes")
                return cached

        stored = self._movie_repo.list_by_category(category_key)
        if len(stored) >= self._threshold:
            logger.debug(f"Categorie {category_key}: {len(stored)} film(s) servis depuis la base")
            if self._listing_cache is not None:
                await self._listing_cache.set(category_key, stored)
            return stored

        logger.info(
            f"Categorie {category_key}: {len(stored)} film(s) en base "
            f"(seuil {self._threshold}), appel TMDB"
        )
        await self._cooldown.wait(query.endpoint)
        try:
            raw_items = await self._client.fetch_category(category_key)
        except ProviderError as e:
            if e.kind == ProviderErrorKind.RATE_LIMITED:
                self._cooldown.mark(query.endpoint)
            logger.warning(f"Categorie {category_key}: echec TMDB ({e.kind.value}) - {e.message}")
            raise

        movies = [
            normalize_listing_item(item, category=category_key, is_series=query.is_series)
            for item in raw_items
            if isinstance(item, dict) and item.get("id") is not None
        ]
        for movie in movies:
            self._save_listing(movie, category_key)

        if self._listing_cache is not None:
            await self._listing_cache.invalidate(category_key)

        logger.info(f"Categorie {category_key}: {len(movies)} film(s) recuperes depuis TMDB")
        return movies

    def _save_listing(self, movie: Movie, category_key: str) -> None:
        """Upsert d'un element de liste ; un echec d'ecriture est journalise."""
        try:
            self._movie_repo.upsert_listing(movie, category_key)
        except StorageError as e:
            logger.error(
                f"Categorie {category_key}: sauvegarde impossible de {movie.identity} - {e.message}"
            )

    async def _invalidate_tags(self, source: str, external_id: str) -> None:
        """Invalide les listes memorisees des categories du film."""
        try:
            categories = self._movie_repo.list_categories(source, external_id)
        except StorageError as e:
            logger.warning(
                f"Detail {source}:{external_id}: etiquettes illisibles, cache vide - {e.message}"
            )
            await self._listing_cache.clear()
            return
        for category in categories:
            await self._listing_cache.invalidate(category)

    async def get_details(self, source: str, external_id: str) -> Movie:
        """
        Retourne le detail d'un film, sans jamais lever d'erreur fournisseur.

        Raises:
            StorageError: Lecture de la base impossible
        """
        existing = self._movie_repo.get_by_identity(source, external_id)
        if existing is not None and existing.is_complete:
            logger.debug(f"Detail {source}:{external_id}: servi depuis la base")
            return existing

        if source != self._client.source:
            logger.warning(f"Detail {source}:{external_id}: source non supportee")
            return placeholder_movie(source, external_id)

        is_series = existing.is_series if existing is not None else False
        endpoint = "/tv" if is_series else "/movie"

        await self._cooldown.wait(endpoint)
        try:
            raw = await self._client.fetch_details(external_id, is_series=is_series)
            movie = normalize_details(raw, is_series=is_series)
        except ProviderError as e:
            if e.kind == ProviderErrorKind.RATE_LIMITED:
                self._cooldown.mark(endpoint)
            logger.warning(
                f"Detail {source}:{external_id}: echec TMDB ({e.kind.value}), fiche provisoire"
            )
            return placeholder_movie(source, external_id)
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            logger.warning(f"Detail {source}:{external_id}: reponse TMDB inexploitable ({e})")
            return placeholder_movie(source, external_id)

        movie.source = source
        movie.external_id = external_id
        if existing is not None:
            # Les reactions accumulees ne sont jamais remises a zero
            movie.reaction_counts = dict(existing.reaction_counts)
            movie.user_reactions = list(existing.user_reactions)
            movie.category = existing.category

        try:
            saved = self._movie_repo.upsert_details(movie)
        except StorageError as e:
            logger.error(f"Detail {source}:{external_id}: sauvegarde impossible - {e.message}")
            return movie

        if self._listing_cache is not None:
            await self._invalidate_tags(source, external_id)

        logger.info(f"Detail {source}:{external_id}: '{saved.title}' enregistre")
        return saved
