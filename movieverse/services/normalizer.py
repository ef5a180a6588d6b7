"""
Normalisation des charges utiles TMDB vers l'entite Movie.

Le normaliseur est le seul consommateur du format du fournisseur. Chaque
champ optionnel recoit une valeur par defaut deterministe, de sorte que
deux charges utiles de completude differente produisent la meme forme.

- normalize_listing_item : element d'une liste (discover, trending...)
- normalize_details : reponse de detail (credits, videos, images inclus)
- placeholder_movie : enregistrement degrade quand le detail echoue
"""

from typing import Any, Optional

from movieverse.core.entities.media import (
    DEFAULT_SOURCE,
    NOT_AVAILABLE,
    PLACEHOLDER_POSTER_URL,
    Movie,
)
from movieverse.utils.constants import (
    MAX_CAST_MEMBERS,
    MAX_SCREENSHOTS,
    TMDB_GENRE_MAPPING,
    TMDB_IMAGE_BASE_URL,
    TMDB_TV_GENRE_MAPPING,
    YOUTUBE_WATCH_URL,
)

DEFAULT_TITLE = "Unknown Title"
DEFAULT_OVERVIEW = "No overview available."
PLACEHOLDER_TITLE = "Movie Not Found"
PLACEHOLDER_OVERVIEW = "Movie details not available."


def format_rating(vote_average: Any) -> str:
    """Note avec une decimale ("7.6"), "N/A" si absente."""
    if vote_average is None:
        return NOT_AVAILABLE
    try:
        return f"{float(vote_average):.1f}"
    except (TypeError, ValueError):
        return NOT_AVAILABLE


def image_url(path: Optional[str]) -> str:
    """URL complete d'une image TMDB, placeholder si le chemin manque."""
    if not path:
        return PLACEHOLDER_POSTER_URL
    return f"{TMDB_IMAGE_BASE_URL}{path}"


def format_currency(amount: Any) -> str:
    """Montant en dollars avec separateurs ("$1,234,567"), "N/A" si nul."""
    if not amount:
        return NOT_AVAILABLE
    return f"${int(amount):,}"


def format_runtime(minutes: Any) -> str:
    """Duree en minutes ("148 min"), "N/A" si nulle."""
    if not minutes:
        return NOT_AVAILABLE
    return f"{int(minutes)} min"


def _release_year(release_date: str) -> str:
    if release_date and len(release_date) >= 4:
        return release_date[:4]
    return NOT_AVAILABLE


def _objects(value: Any) -> list[dict[str, Any]]:
    """Objets JSON d'une liste ; une valeur d'une autre forme compte comme absente."""
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, dict)]


def _section(data: dict[str, Any], key: str) -> dict[str, Any]:
    value = data.get(key)
    return value if isinstance(value, dict) else {}


def _names(items: Any) -> list[str]:
    return [item["name"] for item in _objects(items) if item.get("name")]


def _is_series(item: dict[str, Any], is_series: Optional[bool]) -> bool:
    # None : liste mixte (trending), le type est porte par l'element
    if is_series is None:
        return item.get("media_type") == "tv"
    return is_series


def _base_fields(item: dict[str, Any], series: bool) -> dict[str, Any]:
    """Champs communs aux listes et aux details."""
    if series:
        title = item.get("name") or item.get("original_name")
        release_date = item.get("first_air_date") or ""
    else:
        title = item.get("title") or item.get("original_title")
        release_date = item.get("release_date") or ""

    return {
        "source": DEFAULT_SOURCE,
        "external_id": str(item["id"]),
        "title": title or DEFAULT_TITLE,
        "poster": image_url(item.get("poster_path")),
        "overview": item.get("overview") or DEFAULT_OVERVIEW,
        "release_date": release_date or NOT_AVAILABLE,
        "release_year": _release_year(release_date),
        "rating": format_rating(item.get("vote_average")),
        "language": item.get("original_language") or NOT_AVAILABLE,
        "is_series": series,
    }


def normalize_listing_item(
    item: dict[str, Any],
    category: Optional[str] = None,
    is_series: Optional[bool] = False,
) -> Movie:
    """
    Convertit un element de liste TMDB en Movie.

    Args:
        item: Element brut (film ou serie)
        category: Categorie sous laquelle l'element a ete recupere
        is_series: Drapeau de la categorie, None pour une liste mixte

    Returns:
        Movie avec les champs de niveau liste remplis, defauts ailleurs
    """
    series = _is_series(item, is_series)
    genre_ids = [gid for gid in item.get("genre_ids") or [] if isinstance(gid, int)]
    mapping = TMDB_TV_GENRE_MAPPING if series else TMDB_GENRE_MAPPING
    genres = [
        mapping.get(gid) or TMDB_GENRE_MAPPING[gid]
        for gid in genre_ids
        if gid in mapping or gid in TMDB_GENRE_MAPPING
    ]

    return Movie(
        **_base_fields(item, series),
        genres=genres,
        genre_ids=genre_ids,
        category=category,
    )


def _director(data: dict[str, Any], series: bool) -> str:
    if series:
        creators = _names(data.get("created_by"))
        if creators:
            return creators[0]
    for member in _objects(_section(data, "credits").get("crew")):
        if member.get("job") == "Director" and member.get("name"):
            return member["name"]
    return NOT_AVAILABLE


def _cast(data: dict[str, Any]) -> list[str]:
    cast = _names(_section(data, "credits").get("cast"))[:MAX_CAST_MEMBERS]
    return cast or [NOT_AVAILABLE]


def _trailer(data: dict[str, Any]) -> str:
    for video in _objects(_section(data, "videos").get("results")):
        if video.get("type") == "Trailer" and video.get("site") == "YouTube" and video.get("key"):
            return f"{YOUTUBE_WATCH_URL}{video['key']}"
    return NOT_AVAILABLE


def _screenshots(data: dict[str, Any]) -> list[str]:
    backdrops = _objects(_section(data, "images").get("backdrops"))
    return [
        f"{TMDB_IMAGE_BASE_URL}{image['file_path']}"
        for image in backdrops[:MAX_SCREENSHOTS]
        if image.get("file_path")
    ]


def normalize_details(data: dict[str, Any], is_series: bool = False) -> Movie:
    """
    Convertit une reponse de detail TMDB en Movie complet.

    Resout en plus des champs de liste : realisateur (premier membre de
    l'equipe au poste "Director", premier createur pour une serie),
    casting (cinq premiers noms), bande-annonce (premiere video
    "Trailer" YouTube) et captures (cinq premiers backdrops).

    Args:
        data: Reponse brute de /movie/{id} ou /tv/{id}
        is_series: True si la reponse vient de /tv/{id}

    Returns:
        Movie sans categorie ni etat de reactions (fusionnes par l'appelant)
    """
    series = is_series or data.get("media_type") == "tv"

    if series:
        run_times = data.get("episode_run_time")
        run_times = run_times if isinstance(run_times, list) else []
        runtime = format_runtime(run_times[0] if run_times else None)
    else:
        runtime = format_runtime(data.get("runtime"))

    countries = _names(data.get("production_countries"))
    genres = _objects(data.get("genres"))

    return Movie(
        **_base_fields(data, series),
        genres=_names(genres),
        genre_ids=[g["id"] for g in genres if isinstance(g.get("id"), int)],
        director=_director(data, series),
        cast=_cast(data),
        runtime=runtime,
        budget=format_currency(data.get("budget")),
        revenue=format_currency(data.get("revenue")),
        production_companies=_names(data.get("production_companies")),
        country=", ".join(countries) if countries else NOT_AVAILABLE,
        status=data.get("status") or NOT_AVAILABLE,
        tagline=data.get("tagline") or NOT_AVAILABLE,
        trailer=_trailer(data),
        watch_providers=dict(_section(_section(data, "watch/providers"), "results")),
        screenshots=_screenshots(data),
    )


def placeholder_movie(source: str, external_id: str) -> Movie:
    """
    Enregistrement degrade renvoye quand le detail ne peut etre obtenu.

    Bien forme mais visiblement incomplet : valeurs sentinelles partout
    et compteurs de reactions a zero.
    """
    return Movie(
        source=source,
        external_id=external_id,
        title=PLACEHOLDER_TITLE,
        poster=PLACEHOLDER_POSTER_URL,
        overview=PLACEHOLDER_OVERVIEW,
    )
