"""
Tests unitaires pour ListingCache.

Ces tests verifient:
- Stockage et recuperation des listes par categorie
- Invalidation d'une categorie sans toucher les autres
- Nettoyage complet du cache
"""

from pathlib import Path

import pytest

from movieverse.adapters.api.cache import ListingCache
from movieverse.core.entities.media import Movie


class TestListingCache:
    """Tests pour la classe ListingCache."""

    @pytest.fixture
    def cache(self, tmp_path: Path) -> ListingCache:
        """Cree un cache avec un repertoire temporaire."""
        cache = ListingCache(cache_dir=str(tmp_path / "listings"))
        yield cache
        cache.close()

    @pytest.mark.asyncio
    async def test_get_returns_none_for_unknown_category(self, cache: ListingCache) -> None:
        assert await cache.get("action") is None

    @pytest.mark.asyncio
    async def test_set_then_get_returns_movies(self, cache: ListingCache) -> None:
        movies = [Movie(external_id="27205", title="Inception")]

        await cache.set("action", movies)
        result = await cache.get("action")

        assert result == movies

    @pytest.mark.asyncio
    async def test_invalidate_only_drops_one_category(self, cache: ListingCache) -> None:
        await cache.set("action", [Movie(external_id="1")])
        await cache.set("drama", [Movie(external_id="2")])

        await cache.invalidate("action")

        assert await cache.get("action") is None
        assert await cache.get("drama") is not None

    @pytest.mark.asyncio
    async def test_invalidate_missing_category_is_noop(self, cache: ListingCache) -> None:
        await cache.invalidate("comedy")

        assert await cache.get("comedy") is None

    @pytest.mark.asyncio
    async def test_clear_removes_everything(self, cache: ListingCache) -> None:
        await cache.set("action", [Movie(external_id="1")])
        await cache.set("drama", [Movie(external_id="2")])

        await cache.clear()

        assert await cache.get("action") is None
        assert await cache.get("drama") is None
