"""
Implementation SQLModel du repository Watchlist.
"""

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from movieverse.core.entities.watchlist import WatchlistEntry
from movieverse.core.exceptions import ConflictError
from movieverse.core.ports.repositories import IWatchlistRepository
from movieverse.infrastructure.persistence.database import storage_guard
from movieverse.infrastructure.persistence.models import WatchlistEntryModel


class SQLModelWatchlistRepository(IWatchlistRepository):
    """Repository SQLModel pour les listes de films a voir."""

    def __init__(self, session: Session) -> None:
        self._session = session

    @staticmethod
    def _to_entity(model: WatchlistEntryModel) -> WatchlistEntry:
        return WatchlistEntry(
            user_id=model.user_id,
            source=model.source,
            external_id=model.external_id,
            title=model.title,
            poster=model.poster,
        )

    def list_for_user(self, user_id: str) -> list[WatchlistEntry]:
        """Entrees d'un utilisateur dans l'ordre d'ajout."""
        with storage_guard(self._session, "lecture watchlist"):
            models = self._session.exec(
                select(WatchlistEntryModel)
                .where(WatchlistEntryModel.user_id == user_id)
                .order_by(WatchlistEntryModel.id)
            ).all()
            return [self._to_entity(m) for m in models]

    def add(self, entry: WatchlistEntry) -> WatchlistEntry:
        """Ajoute une entree, ConflictError si elle existe deja."""
        with storage_guard(self._session, "ecriture watchlist"):
            model = WatchlistEntryModel(
                user_id=entry.user_id,
                source=entry.source,
                external_id=entry.external_id,
                title=entry.title,
                poster=entry.poster,
            )
            self._session.add(model)
            try:
                self._session.commit()
            except IntegrityError as e:
                self._session.rollback()
                raise ConflictError("Movie already in watchlist") from e
            self._session.refresh(model)
            return self._to_entity(model)

    def remove(self, user_id: str, source: str, external_id: str) -> bool:
        """Retire une entree. Retourne True si supprimee."""
        with storage_guard(self._session, "suppression watchlist"):
            model = self._session.exec(
                select(WatchlistEntryModel).where(
                    WatchlistEntryModel.user_id == user_id,
                    WatchlistEntryModel.source == source,
                    WatchlistEntryModel.external_id == external_id,
                )
            ).first()
            if model is None:
                return False
            self._session.delete(model)
            self._session.commit()
            return True
