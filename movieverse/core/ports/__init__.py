"""
Ports (interfaces abstraites) définissant les contrats pour les adaptateurs.

Ports repository : Contrats de persistance des données
- IMovieRepository : Stockage des films et de leurs réactions
- IReviewRepository : Stockage des critiques et réponses
- IWatchlistRepository : Stockage des listes de films à voir

Port client API : Contrat du fournisseur de catalogue
- ICatalogClient : Listes par catégorie et détails
"""

from movieverse.core.ports.api_clients import ICatalogClient
from movieverse.core.ports.repositories import (
    IMovieRepository,
    IReviewRepository,
    IWatchlistRepository,
)

__all__ = [
    # Repositories
    "IMovieRepository",
    "IReviewRepository",
    "IWatchlistRepository",
    # API
    "ICatalogClient",
]
