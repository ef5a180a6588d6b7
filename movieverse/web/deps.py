"""
Dependances partagees des routes.

Chaque requete obtient ses services depuis le Container stocke dans
app.state, avec une session SQLModel fermee a la fin de la requete.
"""

from collections.abc import Iterator
from contextlib import contextmanager

from fastapi import Request
from sqlmodel import Session

from ..container import Container
from ..services.catalog import CatalogService
from ..services.notices import NoticeService
from ..services.reactions import ReactionService
from ..services.reviews import ReviewService
from ..services.watchlist import WatchlistService


def get_container(request: Request) -> Container:
    return request.app.state.container


@contextmanager
def _request_session(container: Container) -> Iterator[Session]:
    session = container.session()
    try:
        yield session
    finally:
        session.close()


def get_catalog_service(request: Request) -> Iterator[CatalogService]:
    container = get_container(request)
    with _request_session(container) as session:
        yield container.catalog_service(
            movie_repo=container.movie_repository(session=session)
        )


def get_reaction_service(request: Request) -> Iterator[ReactionService]:
    container = get_container(request)
    with _request_session(container) as session:
        yield container.reaction_service(
            movie_repo=container.movie_repository(session=session)
        )


def get_review_service(request: Request) -> Iterator[ReviewService]:
    container = get_container(request)
    with _request_session(container) as session:
        yield container.review_service(
            review_repo=container.review_repository(session=session)
        )


def get_watchlist_service(request: Request) -> Iterator[WatchlistService]:
    container = get_container(request)
    with _request_session(container) as session:
        yield container.watchlist_service(
            watchlist_repo=container.watchlist_repository(session=session)
        )


def get_notice_service(request: Request) -> NoticeService:
    return get_container(request).notice_service()
