"""
Accelerateur de lecture des listes par categorie.

Le cache utilise diskcache et se place devant la base : il ne remplace
jamais le stockage persistant. Il n'a ni TTL ni politique d'eviction,
une entree vit jusqu'a son invalidation, declenchee par chaque ecriture
touchant la categorie.
"""

import asyncio
from typing import Any, Optional

from diskcache import Cache


class ListingCache:
    """
    Cache asynchrone des resultats de listes par categorie.

    Utilise diskcache pour le stockage et run_in_executor pour
    les operations asynchrones non-bloquantes.

    Example:
        cache = ListingCache(cache_dir=".cache/listings")
        await cache.set("action", movies)
        movies = await cache.get("action")
        await cache.invalidate("action")
    """

    KEY_PREFIX = "category:"

    def __init__(self, cache_dir: str = ".cache/listings") -> None:
        """
        Initialise le cache avec un repertoire de stockage.

        Args:
            cache_dir: Chemin vers le repertoire du cache (cree si inexistant)
        """
        self._cache = Cache(cache_dir)

    def _key(self, category: str) -> str:
        return f"{self.KEY_PREFIX}{category}"

    async def get(self, category: str) -> Optional[Any]:
        """
        Recupere la liste memorisee d'une categorie.

        Returns:
            La liste stockee ou None si absente ou invalidee
        """
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self._cache.get, self._key(category))

    async def set(self, category: str, value: Any) -> None:
        """Memorise la liste d'une categorie (sans expiration)."""
        loop = asyncio.get_running_loop()
        await loop.run_in_executor(None, self._cache.set, self._key(category), value)

    async def invalidate(self, category: str) -> None:
        """Supprime l'entree d'une categorie."""
        loop = asyncio.get_running_loop()
        await loop.run_in_executor(None, self._cache.delete, self._key(category))

    async def clear(self) -> None:
        """Supprime toutes les entrees du cache."""
        loop = asyncio.get_running_loop()
        await loop.run_in_executor(None, self._cache.clear)

    def close(self) -> None:
        """Ferme la connexion au cache (a appeler a la fin)."""
        self._cache.close()
