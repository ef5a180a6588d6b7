"""
Business entities representing core domain concepts.

Exports:
- Movie: Normalized movie/series metadata with reaction state
- MovieIdentity: Durable (source, external_id) identity
- ReactionKind: Closed set of reaction kinds
- UserReaction: One user's reaction
- Review / Reply: Review threads
- WatchlistEntry: Movie saved by a user
"""

from movieverse.core.entities.media import (
    Movie,
    MovieIdentity,
    ReactionKind,
    UserReaction,
    empty_reaction_counts,
)
from movieverse.core.entities.review import Reply, Review
from movieverse.core.entities.watchlist import WatchlistEntry

__all__ = [
    "Movie",
    "MovieIdentity",
    "ReactionKind",
    "UserReaction",
    "empty_reaction_counts",
    "Reply",
    "Review",
    "WatchlistEntry",
]
