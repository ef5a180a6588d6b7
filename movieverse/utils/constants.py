"""
Constantes globales pour MovieVerse.

Ce module contient :
- Les URLs de base TMDB (API, images, bandes-annonces)
- Le seuil de suffisance du cache des listes par categorie
- Les tailles des listes derivees (casting, captures)
- Le mapping des IDs de genre TMDB vers noms anglais
- Les annonces affichees sur l'accueil
"""

TMDB_BASE_URL = "https://api.themoviedb.org/3"
TMDB_IMAGE_BASE_URL = "https://image.tmdb.org/t/p/w500"
YOUTUBE_WATCH_URL = "https://www.youtube.com/watch?v="

# Nombre minimum de films en base pour servir une categorie sans appel amont
CATEGORY_SUFFICIENCY_THRESHOLD = 20

# Nombre de resultats conserves par page de liste TMDB
CATEGORY_PAGE_SIZE = 20

MAX_CAST_MEMBERS = 5
MAX_SCREENSHOTS = 5

# Mapping des IDs de genre TMDB (films) vers noms anglais
TMDB_GENRE_MAPPING = {
    28: "Action",
    12: "Adventure",
    16: "Animation",
    35: "Comedy",
    80: "Crime",
    99: "Documentary",
    18: "Drama",
    10751: "Family",
    14: "Fantasy",
    36: "History",
    27: "Horror",
    10402: "Music",
    9648: "Mystery",
    10749: "Romance",
    878: "Science Fiction",
    10770: "TV Movie",
    53: "Thriller",
    10752: "War",
    37: "Western",
}

# Mapping des IDs de genre TMDB (series TV) vers noms anglais
TMDB_TV_GENRE_MAPPING = {
    10759: "Action & Adventure",
    16: "Animation",
    35: "Comedy",
    80: "Crime",
    99: "Documentary",
    18: "Drama",
    10751: "Family",
    10762: "Kids",
    9648: "Mystery",
    10763: "News",
    10764: "Reality",
    10765: "Sci-Fi & Fantasy",
    10766: "Soap",
    10767: "Talk",
    10768: "War & Politics",
    37: "Western",
}

NOTICES = (
    "New movies added to Trending and Top IMDb!",
    "Check out our latest Bollywood releases!",
    "Web Series section updated with new episodes!",
    "Login to submit reviews and join the community!",
)
