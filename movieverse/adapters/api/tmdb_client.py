"""
Client TMDB pour les listes par categorie et le detail des films/series.

Implemente l'interface ICatalogClient pour TMDB (The Movie Database).
Chaque appel est une tentative unique avec timeout court : un timeout,
une erreur reseau ou une reponse non-2xx est convertie en ProviderError
typee (RATE_LIMITED, UNAUTHORIZED, NOT_FOUND, TRANSIENT). Aucune relance
n'est faite ici, l'appelant decide.

Usage:
    client = TMDBClient(api_key="your_key")
    items = await client.fetch_category("action")
    details = await client.fetch_details("19995")
    await client.close()
"""

from typing import Any, Optional

import httpx
from loguru import logger

from movieverse.core.categories import resolve_category
from movieverse.core.exceptions import ProviderError, ProviderErrorKind
from movieverse.core.ports.api_clients import ICatalogClient
from movieverse.utils.constants import CATEGORY_PAGE_SIZE, TMDB_BASE_URL

DETAILS_APPEND = "credits,videos,images,watch/providers"


class TMDBClient(ICatalogClient):
    """
    Client API TMDB pour les metadonnees de films et series.

    Implemente ICatalogClient avec:
    - Listes par categorie (discover, trending, top rated)
    - Detail complet (credits, videos, images, watch providers)
    - Classification des echecs en ProviderError

    Example:
        client = TMDBClient(api_key="xxx", timeout=5.0)

        items = await client.fetch_category("bollywood")
        details = await client.fetch_details(str(items[0]["id"]))

        await client.close()
    """

    def __init__(
        self,
        api_key: Optional[str],
        timeout: float = 5.0,
        base_url: str = TMDB_BASE_URL,
    ) -> None:
        """
        Initialise le client TMDB.

        Args:
            api_key: Cle API TMDB (v3) ou Read Access Token (v4)
            timeout: Timeout de chaque requete en secondes
            base_url: URL de base de l'API TMDB v3
        """
        self._api_key = api_key
        self._timeout = timeout
        self._base_url = base_url
        self._client: Optional[httpx.AsyncClient] = None

    def _get_client(self) -> httpx.AsyncClient:
        """
        Retourne le client HTTP, le cree si necessaire (lazy init).

        Supporte les deux modes d'authentification TMDB:
        - API Key v3 (32 caracteres hex) : passe en parametre api_key
        - Read Access Token v4 (long JWT) : passe en header Bearer
        """
        if self._client is None or self._client.is_closed:
            is_v4_token = len(self._api_key or "") > 40

            headers = {"Accept": "application/json"}
            params = {}

            if is_v4_token:
                headers["Authorization"] = f"Bearer {self._api_key}"
            else:
                params["api_key"] = self._api_key

            self._client = httpx.AsyncClient(
                base_url=self._base_url,
                headers=headers,
                params=params,
                timeout=self._timeout,
            )
        return self._client

    @property
    def source(self) -> str:
        """Retourne l'identifiant de la source API."""
        return "tmdb"

    async def _get(self, path: str, params: dict[str, Any]) -> dict[str, Any]:
        """
        Execute une requete GET unique et retourne le JSON.

        Raises:
            ProviderError: Cle absente, timeout, erreur reseau, statut non-2xx
                ou corps qui n'est pas un objet JSON
        """
        if not self._api_key:
            raise ProviderError(
                ProviderErrorKind.UNAUTHORIZED,
                "Cle API TMDB non configuree",
                endpoint=path,
            )

        client = self._get_client()
        try:
            response = await client.get(path, params=params)
        except httpx.TimeoutException as e:
            raise ProviderError(
                ProviderErrorKind.TRANSIENT,
                f"Timeout TMDB sur {path}",
                endpoint=path,
            ) from e
        except httpx.HTTPError as e:
            raise ProviderError(
                ProviderErrorKind.TRANSIENT,
                f"Erreur reseau TMDB sur {path}: {e}",
                endpoint=path,
            ) from e

        if not response.is_success:
            raise ProviderError.from_status(response.status_code, path)

        try:
            data = response.json()
        except ValueError as e:
            raise ProviderError(
                ProviderErrorKind.TRANSIENT,
                f"Reponse TMDB illisible sur {path}",
                status_code=response.status_code,
                endpoint=path,
            ) from e

        if not isinstance(data, dict):
            raise ProviderError(
                ProviderErrorKind.TRANSIENT,
                f"Reponse TMDB inattendue sur {path}: objet JSON attendu",
                status_code=response.status_code,
                endpoint=path,
            )
        return data

    async def fetch_category(self, category_key: str, page: int = 1) -> list[dict[str, Any]]:
        """
        Recupere une page de la liste d'une categorie.

        La cle est resolue avant tout appel reseau : une cle inconnue leve
        InvalidCategoryError sans contacter TMDB.

        Args:
            category_key: Cle de categorie (ex: "action", "webseries")
            page: Numero de page TMDB

        Returns:
            Au plus CATEGORY_PAGE_SIZE elements bruts
        """
        query = resolve_category(category_key)
        params = {**query.params, "page": page, "language": "en-US"}

        logger.debug(f"TMDB liste {category_key}: {query.endpoint} {params}")
        data = await self._get(query.endpoint, params)
        return list(data.get("results") or [])[:CATEGORY_PAGE_SIZE]

    async def fetch_details(self, external_id: str, is_series: bool = False) -> dict[str, Any]:
        """
        Recupere le detail complet d'un film ou d'une serie.

        Args:
            external_id: ID TMDB de l'element
            is_series: True pour l'endpoint /tv au lieu de /movie

        Returns:
            Element brut avec credits, videos, images et watch/providers
        """
        path = f"/tv/{external_id}" if is_series else f"/movie/{external_id}"
        params = {
            "language": "en-US",
            "append_to_response": DETAILS_APPEND,
            "include_image_language": "en,null",
        }

        logger.debug(f"TMDB detail: {path}")
        return await self._get(path, params)

    async def close(self) -> None:
        """
        Ferme le client HTTP.

        Doit etre appele a la fin de l'utilisation pour liberer
        les ressources reseau.
        """
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
            self._client = None
