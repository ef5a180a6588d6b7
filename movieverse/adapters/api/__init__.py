"""
Clients API externes pour les metadonnees du catalogue.

Ce module fournit:
- TMDBClient: client TMDB (listes par categorie et details)
- ListingCache: accelerateur de lecture des listes, invalide a chaque ecriture

Le client implemente ICatalogClient defini dans core/ports/api_clients.py.
"""

from movieverse.adapters.api.cache import ListingCache
from movieverse.adapters.api.tmdb_client import TMDBClient

__all__ = [
    "ListingCache",
    "TMDBClient",
]
