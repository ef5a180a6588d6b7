"""
Service des listes de films a voir.
"""

from typing import Optional

from loguru import logger

from movieverse.core.entities.watchlist import WatchlistEntry
from movieverse.core.exceptions import NotFoundError, ValidationError
from movieverse.core.ports.repositories import IWatchlistRepository


class WatchlistService:
    """Ajout, retrait et lecture de la liste d'un utilisateur."""

    def __init__(self, watchlist_repo: IWatchlistRepository) -> None:
        self._watchlist_repo = watchlist_repo

    def list_watchlist(self, user_id: str) -> list[WatchlistEntry]:
        """Entrees de l'utilisateur dans l'ordre d'ajout."""
        return self._watchlist_repo.list_for_user(user_id)

    def add_to_watchlist(
        self,
        user_id: object,
        source: object,
        external_id: object,
        title: object,
        poster: Optional[str] = None,
    ) -> WatchlistEntry:
        """
        Ajoute un film a la liste.

        Raises:
            ValidationError: Champ requis manquant
            ConflictError: Film deja present
        """
        fields = [str(v).strip() if v is not None else "" for v in (user_id, source, external_id, title)]
        if not all(fields):
            raise ValidationError("Missing required fields")
        user, src, ext_id, name = fields

        entry = self._watchlist_repo.add(
            WatchlistEntry(user_id=user, source=src, external_id=ext_id, title=name, poster=poster)
        )
        logger.info(f"Watchlist {user}: ajout de {src}:{ext_id}")
        return entry

    def remove_from_watchlist(self, user_id: str, source: Optional[str], external_id: str) -> None:
        """
        Retire un film de la liste.

        Raises:
            ValidationError: Source absente
            NotFoundError: Film absent de la liste
        """
        if not source or not source.strip():
            raise ValidationError("Source is required")
        if not self._watchlist_repo.remove(user_id, source.strip(), external_id):
            raise NotFoundError("Movie not found in watchlist")
        logger.info(f"Watchlist {user_id}: retrait de {source}:{external_id}")
