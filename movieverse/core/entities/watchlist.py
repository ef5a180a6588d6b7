"""
Watchlist entity.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass
class WatchlistEntry:
    """
    Movie saved by a user for later.

    Attributes:
        user_id: Opaque user identifier supplied by the caller
        source: Provider of the movie
        external_id: Provider id of the movie
        title: Title displayed in the list
        poster: Poster URL, if known
    """

    user_id: str
    source: str
    external_id: str
    title: str
    poster: Optional[str] = None
