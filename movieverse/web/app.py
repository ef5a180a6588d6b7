"""
Application FastAPI de MovieVerse.

Initialise l'application web avec le Container DI, installe CORS et
les handlers d'erreurs, puis monte les routers JSON.
"""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger

from ..config import Settings
from ..container import Container
from .errors import register_exception_handlers
from .routes.movies import router as movies_router
from .routes.reviews import router as reviews_router
from .routes.watchlist import router as watchlist_router


def create_app(container: Optional[Container] = None) -> FastAPI:
    """
    Construit l'application.

    Args:
        container: Container deja configure (tests). Si absent, un
            Container est cree au demarrage et la base initialisee.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Initialise le Container DI au demarrage et ferme les clients a l'arret."""
        active = container
        if active is None:
            active = Container()
            active.database.init()
        app.state.container = active
        logger.info("MovieVerse API demarree")
        yield
        await active.tmdb_client().close()
        listing_cache = active.listing_cache()
        if listing_cache is not None:
            listing_cache.close()

    app = FastAPI(title="MovieVerse", lifespan=lifespan)

    settings = container.config() if container is not None else Settings()
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)

    @app.get("/api")
    async def health():
        return {"message": "MovieVerse Backend is running!"}

    app.include_router(movies_router)
    app.include_router(reviews_router)
    app.include_router(watchlist_router)
    return app


app = create_app()
