"""
Implementations SQLModel des repositories.

Ce module contient les implementations concretes des interfaces repository
definies dans movieverse/core/ports/repositories.py.

Chaque repository :
- Herite de l'interface ABC correspondante du domaine
- Recoit une session SQLModel via injection de dependances
- Convertit entre entites de domaine (dataclass) et modeles DB (SQLModel)
- Convertit les erreurs SQLAlchemy en StorageError
"""

from movieverse.infrastructure.persistence.repositories.movie_repository import (
    SQLModelMovieRepository,
)
from movieverse.infrastructure.persistence.repositories.review_repository import (
    SQLModelReviewRepository,
)
from movieverse.infrastructure.persistence.repositories.watchlist_repository import (
    SQLModelWatchlistRepository,
)

__all__ = [
    "SQLModelMovieRepository",
    "SQLModelReviewRepository",
    "SQLModelWatchlistRepository",
]
