"""
Media metadata entities.

Entities representing movies and TV shows served by the catalog,
with the locally accumulated reaction state.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

NOT_AVAILABLE = "N/A"
PLACEHOLDER_POSTER_URL = "https://placehold.co/300x450?text=No+Poster"
DEFAULT_SOURCE = "tmdb"


class ReactionKind(str, Enum):
    """Closed set of reactions a user can leave on a movie."""

    EXCELLENT = "excellent"
    LOVED = "loved"
    THANKS = "thanks"
    WOW = "wow"
    SAD = "sad"


def empty_reaction_counts() -> dict[str, int]:
    """Return a counter mapping with every reaction kind at zero."""
    return {kind.value: 0 for kind in ReactionKind}


@dataclass(frozen=True)
class MovieIdentity:
    """
    Durable identity of a movie record.

    Attributes:
        source: Upstream provider identifier ("tmdb")
        external_id: Item id at the provider
    """

    source: str
    external_id: str

    def __str__(self) -> str:
        return f"{self.source}:{self.external_id}"


@dataclass
class UserReaction:
    """One reaction left by one user."""

    user_id: str
    reaction: str


@dataclass
class Movie:
    """
    Movie or series metadata, normalized from the provider.

    Every optional attribute carries a deterministic default so that two
    records built from payloads of different completeness share one shape.

    Attributes:
        source: Upstream provider identifier
        external_id: Provider item id
        title: Title (series name for series)
        poster: Full poster URL or placeholder
        overview: Plot summary
        release_date: ISO date string or "N/A"
        release_year: Four-digit year string or "N/A"
        rating: Vote average with one decimal, or "N/A"
        genres: Genre names
        genre_ids: Provider genre ids
        director: Director name (first creator for series)
        cast: Up to five cast names
        runtime: "<n> min" or "N/A"
        budget: "$1,234" or "N/A"
        revenue: "$1,234" or "N/A"
        production_companies: Company names
        language: Original language code
        country: Production countries, comma separated
        status: Release status at the provider
        tagline: Tagline
        trailer: YouTube watch URL or "N/A"
        watch_providers: Opaque provider-shaped mapping
        category: Listing bucket the record was last ingested under
        screenshots: Up to five backdrop URLs
        is_series: True when the item is a TV series
        reaction_counts: Count per ReactionKind value
        user_reactions: One entry per user, in submission order
    """

    source: str = DEFAULT_SOURCE
    external_id: str = ""
    title: str = NOT_AVAILABLE
    poster: str = PLACEHOLDER_POSTER_URL
    overview: str = NOT_AVAILABLE
    release_date: str = NOT_AVAILABLE
    release_year: str = NOT_AVAILABLE
    rating: str = NOT_AVAILABLE
    genres: list[str] = field(default_factory=list)
    genre_ids: list[int] = field(default_factory=list)
    director: str = NOT_AVAILABLE
    cast: list[str] = field(default_factory=lambda: [NOT_AVAILABLE])
    runtime: str = NOT_AVAILABLE
    budget: str = NOT_AVAILABLE
    revenue: str = NOT_AVAILABLE
    production_companies: list[str] = field(default_factory=list)
    language: str = NOT_AVAILABLE
    country: str = NOT_AVAILABLE
    status: str = NOT_AVAILABLE
    tagline: str = NOT_AVAILABLE
    trailer: str = NOT_AVAILABLE
    watch_providers: dict[str, Any] = field(default_factory=dict)
    category: Optional[str] = None
    screenshots: list[str] = field(default_factory=list)
    is_series: bool = False
    reaction_counts: dict[str, int] = field(default_factory=empty_reaction_counts)
    user_reactions: list[UserReaction] = field(default_factory=list)

    @property
    def identity(self) -> MovieIdentity:
        """Identity (source, external_id) of the record."""
        return MovieIdentity(self.source, self.external_id)

    @property
    def is_complete(self) -> bool:
        """A record carrying screenshots has been through a detail fetch."""
        return bool(self.screenshots)
