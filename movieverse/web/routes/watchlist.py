"""
Routes de la liste de films a voir d'un utilisateur.

Les identifiants utilisateur sont opaques : aucune verification de compte.
Ajout et retrait renvoient la liste mise a jour.
"""

from typing import Optional

from fastapi import APIRouter, Depends

from ...services.watchlist import WatchlistService
from ..deps import get_watchlist_service
from ..schemas import WatchlistEntryIn, WatchlistEntryOut

router = APIRouter(prefix="/api/watchlist", tags=["watchlist"])


def _entries(service: WatchlistService, user_id: str) -> list[WatchlistEntryOut]:
    return [WatchlistEntryOut.model_validate(e) for e in service.list_watchlist(user_id)]


@router.get("/{user_id}", response_model=list[WatchlistEntryOut])
def list_watchlist(user_id: str, watchlist: WatchlistService = Depends(get_watchlist_service)):
    return _entries(watchlist, user_id)


@router.post("/{user_id}", response_model=list[WatchlistEntryOut])
def add_to_watchlist(
    user_id: str,
    body: WatchlistEntryIn,
    watchlist: WatchlistService = Depends(get_watchlist_service),
):
    watchlist.add_to_watchlist(user_id, body.source, body.external_id, body.title, body.poster)
    return _entries(watchlist, user_id)


@router.delete("/{user_id}/{external_id}", response_model=list[WatchlistEntryOut])
def remove_from_watchlist(
    user_id: str,
    external_id: str,
    source: Optional[str] = None,
    watchlist: WatchlistService = Depends(get_watchlist_service),
):
    watchlist.remove_from_watchlist(user_id, source, external_id)
    return _entries(watchlist, user_id)
