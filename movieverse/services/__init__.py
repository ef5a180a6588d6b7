"""
Services metier de MovieVerse.

- catalog : cache-aside entre la base et TMDB
- normalizer : conversion des reponses TMDB en entites Movie
- reactions, reviews, watchlist, notices : contributions des utilisateurs
- warmup : pre-remplissage des categories (CLI)
"""

from movieverse.services.catalog import CatalogService, EndpointCooldown
from movieverse.services.notices import NoticeService
from movieverse.services.reactions import ReactionService
from movieverse.services.reviews import ReviewService
from movieverse.services.warmup import CatalogWarmer, WarmupReport
from movieverse.services.watchlist import WatchlistService

__all__ = [
    "CatalogService",
    "CatalogWarmer",
    "EndpointCooldown",
    "NoticeService",
    "ReactionService",
    "ReviewService",
    "WarmupReport",
    "WatchlistService",
]
