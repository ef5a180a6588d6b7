"""
Resolution des cles de categorie vers les endpoints TMDB.

Chaque cle de l'ensemble ferme est traduite en un couple
(endpoint, parametres de requete). Les categories de genre filtrent par
identifiant de genre TMDB, les categories de langue/region par langue
originale, "classics" trie par note avec un plafond de date de sortie,
et "webseries"/"tvshows" ciblent l'endpoint series avec is_series=True.
"""

from dataclasses import dataclass, field
from typing import Optional

from movieverse.core.exceptions import InvalidCategoryError


@dataclass(frozen=True)
class CategoryQuery:
    """
    Requete amont associee a une cle de categorie.

    Attributs :
        key : Cle de categorie (ex: "action")
        endpoint : Chemin TMDB relatif (ex: "/discover/movie")
        params : Parametres de requete specifiques a la categorie
        is_series : True si l'endpoint renvoie des series, None si mixte
    """

    key: str
    endpoint: str
    params: dict[str, str] = field(default_factory=dict)
    is_series: Optional[bool] = False


_DISCOVER_MOVIE = "/discover/movie"
_DISCOVER_TV = "/discover/tv"

CATEGORY_QUERIES: dict[str, CategoryQuery] = {
    # Tendances : films et series melanges, type lu par element (media_type)
    "trending": CategoryQuery("trending", "/trending/all/week", is_series=None),
    "action": CategoryQuery("action", _DISCOVER_MOVIE, {"with_genres": "28"}),
    "comedy": CategoryQuery("comedy", _DISCOVER_MOVIE, {"with_genres": "35"}),
    "drama": CategoryQuery("drama", _DISCOVER_MOVIE, {"with_genres": "18"}),
    "bollywood": CategoryQuery(
        "bollywood", _DISCOVER_MOVIE, {"with_original_language": "hi"}
    ),
    "hollywood": CategoryQuery(
        "hollywood",
        _DISCOVER_MOVIE,
        {"with_original_language": "en", "region": "US"},
    ),
    "tamil": CategoryQuery("tamil", _DISCOVER_MOVIE, {"with_original_language": "ta"}),
    "telugu": CategoryQuery("telugu", _DISCOVER_MOVIE, {"with_original_language": "te"}),
    "webseries": CategoryQuery("webseries", _DISCOVER_TV, is_series=True),
    "tvshows": CategoryQuery("tvshows", _DISCOVER_TV, is_series=True),
    "topimdb": CategoryQuery("topimdb", "/movie/top_rated"),
    "classics": CategoryQuery(
        "classics",
        _DISCOVER_MOVIE,
        {"sort_by": "vote_average.desc", "primary_release_date.lte": "1990-12-31"},
    ),
}


def resolve_category(key: str) -> CategoryQuery:
    """
    Retourne la requete amont d'une cle de categorie.

    Raises:
        InvalidCategoryError: Si la cle n'appartient pas a l'ensemble connu
    """
    query = CATEGORY_QUERIES.get(key)
    if query is None:
        raise InvalidCategoryError(key)
    return query


def category_keys() -> tuple[str, ...]:
    """Liste des cles de categorie supportees."""
    return tuple(CATEGORY_QUERIES)
