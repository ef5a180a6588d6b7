"""
Interfaces ports pour les clients API.

Interface abstraite (port) definissant le contrat du fournisseur de
catalogue externe. L'implementation (adaptateur) est le client TMDB.

Les charges utiles renvoyees sont brutes (dict au format du fournisseur) :
seul le normaliseur connait ce format.
"""

from abc import ABC, abstractmethod
from typing import Any


class ICatalogClient(ABC):
    """
    Interface du fournisseur de metadonnees.

    Chaque appel est une tentative unique avec timeout borne. Les echecs
    sont leves sous forme de ProviderError ; la decision de relancer,
    degrader ou propager appartient a l'appelant.
    """

    @abstractmethod
    async def fetch_category(self, category_key: str, page: int = 1) -> list[dict[str, Any]]:
        """
        Recupere une page de la liste associee a une categorie.

        Args :
            category_key : Cle de categorie (voir core/categories.py)
            page : Numero de page amont (1-indexe)

        Retourne :
            Elements bruts du fournisseur

        Raises :
            InvalidCategoryError : Cle inconnue (aucun appel reseau)
            ProviderError : Echec amont
        """
        ...

    @abstractmethod
    async def fetch_details(self, external_id: str, is_series: bool = False) -> dict[str, Any]:
        """
        Recupere le detail complet d'un element.

        Args :
            external_id : ID de l'element chez le fournisseur
            is_series : True pour interroger l'endpoint series

        Retourne :
            Element brut avec credits, videos, images et watch providers

        Raises :
            ProviderError : Echec amont
        """
        ...

    @property
    @abstractmethod
    def source(self) -> str:
        """Retourne l'identifiant de la source API (ex: 'tmdb')."""
        ...

    async def close(self) -> None:
        """Libere les ressources reseau du client (aucune par defaut)."""
        return None
