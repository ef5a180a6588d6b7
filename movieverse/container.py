"""
Container d'injection de dependances via dependency-injector.

Fournit une gestion centralisee des dependances pour les interfaces CLI et Web.
Les repositories et services qui en dependent sont des Factory (session
fraiche a chaque appel) ; le client TMDB, le cache des listes et l'etat
de pause apres 429 sont des Singleton partages par tout le processus.
"""

from pathlib import Path
from typing import Optional

from dependency_injector import containers, providers

from movieverse.adapters.api.cache import ListingCache
from movieverse.adapters.api.tmdb_client import TMDBClient
from movieverse.config import Settings
from movieverse.infrastructure.persistence.database import get_session, init_db
from movieverse.infrastructure.persistence.repositories import (
    SQLModelMovieRepository,
    SQLModelReviewRepository,
    SQLModelWatchlistRepository,
)
from movieverse.services.catalog import CatalogService, EndpointCooldown
from movieverse.services.notices import NoticeService
from movieverse.services.reactions import ReactionService
from movieverse.services.reviews import ReviewService
from movieverse.services.warmup import CatalogWarmer
from movieverse.services.watchlist import WatchlistService


def _build_listing_cache(enabled: bool, cache_dir: Path) -> Optional[ListingCache]:
    """Cree le cache des listes seulement s'il est active."""
    if not enabled:
        return None
    return ListingCache(cache_dir=str(cache_dir))


class Container(containers.DeclarativeContainer):
    """Container DI de l'application.

    Utilisation :
        container = Container()
        container.database.init()  # Initialise la DB une fois
        catalog = container.catalog_service()
        movies = await catalog.get_category("action")
    """

    # Configuration - singleton charge une seule fois
    config = providers.Singleton(Settings)

    # Database - Resource pour initialisation unique
    database = providers.Resource(init_db)

    # Session factory - nouvelle session a chaque appel
    session = providers.Factory(lambda: next(get_session()))

    # Repositories - Factory pour nouvelle instance avec session fraiche
    movie_repository = providers.Factory(
        SQLModelMovieRepository,
        session=session,
    )
    review_repository = providers.Factory(
        SQLModelReviewRepository,
        session=session,
    )
    watchlist_repository = providers.Factory(
        SQLModelWatchlistRepository,
        session=session,
    )

    # Client TMDB - Singleton, sans cle il leve UNAUTHORIZED sans appel reseau
    tmdb_client = providers.Singleton(
        TMDBClient,
        api_key=config.provided.tmdb_api_key,
        timeout=config.provided.tmdb_timeout_seconds,
    )

    # Etat partage entre requetes
    endpoint_cooldown = providers.Singleton(
        EndpointCooldown,
        delay_seconds=config.provided.rate_limit_cooldown_seconds,
    )
    listing_cache = providers.Singleton(
        _build_listing_cache,
        enabled=config.provided.listing_cache_enabled,
        cache_dir=config.provided.listing_cache_dir,
    )

    # Services - Factory car dependent de repositories (sessions fraiches)
    catalog_service = providers.Factory(
        CatalogService,
        movie_repo=movie_repository,
        catalog_client=tmdb_client,
        cooldown=endpoint_cooldown,
        listing_cache=listing_cache,
        category_threshold=config.provided.category_threshold,
    )
    reaction_service = providers.Factory(
        ReactionService,
        movie_repo=movie_repository,
    )
    review_service = providers.Factory(
        ReviewService,
        review_repo=review_repository,
    )
    watchlist_service = providers.Factory(
        WatchlistService,
        watchlist_repo=watchlist_repository,
    )
    notice_service = providers.Singleton(NoticeService)

    # Pre-remplissage CLI
    catalog_warmer = providers.Factory(
        CatalogWarmer,
        catalog=catalog_service,
    )
