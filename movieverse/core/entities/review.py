"""
Review entities.

A review is linked to a movie identity (not owned by the movie) and owns
its replies exclusively.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional


@dataclass
class Reply:
    """
    Reply appended to a review.

    Attributes:
        text: Reply body (trimmed)
        name: Author name
        email: Author email
        created_at: Submission time (UTC)
    """

    text: str
    name: str
    email: str
    created_at: Optional[datetime] = None


@dataclass
class Review:
    """
    Review left on a movie.

    Attributes:
        id: Generated id, None until persisted
        source: Provider of the reviewed movie
        external_id: Provider id of the reviewed movie
        text: Review body (trimmed)
        name: Author name
        email: Author email
        created_at: Submission time (UTC)
        replies: Replies in insertion order (oldest first)
    """

    id: Optional[str] = None
    source: str = ""
    external_id: str = ""
    text: str = ""
    name: str = ""
    email: str = ""
    created_at: Optional[datetime] = None
    replies: list[Reply] = field(default_factory=list)
