"""
Schemas pydantic des corps de requete et des reponses JSON.

Les cles JSON sont en camelCase (externalId, reactionCounts...) pour
rester compatibles avec les clients existants.
"""

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ApiModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


# Reponses


class UserReactionOut(ApiModel):
    user_id: str
    reaction: str


class MovieOut(ApiModel):
    """Fiche film telle que renvoyee aux clients."""

    source: str
    external_id: str
    title: str
    poster: str
    overview: str
    release_date: str
    release_year: str
    rating: str = Field(alias="imdbRating")
    genres: list[str]
    genre_ids: list[int]
    director: str
    cast: list[str]
    runtime: str
    budget: str
    revenue: str
    production_companies: list[str]
    language: str
    country: str
    status: str
    tagline: str
    trailer: str
    watch_providers: dict[str, Any]
    category: Optional[str] = None
    screenshots: list[str]
    is_series: bool
    reaction_counts: dict[str, int]
    user_reactions: list[UserReactionOut]


class ReactionCountsOut(ApiModel):
    reaction_counts: dict[str, int]


class ReplyOut(ApiModel):
    text: str
    name: str
    email: str
    created_at: Optional[datetime] = None


class ReviewOut(ApiModel):
    id: Optional[str] = None
    source: str
    external_id: str
    text: str
    name: str
    email: str
    created_at: Optional[datetime] = None
    replies: list[ReplyOut]


class WatchlistEntryOut(ApiModel):
    source: str
    external_id: str
    title: str
    poster: Optional[str] = None


class NoticeOut(ApiModel):
    text: str


# Requetes : champs optionnels, la validation metier est faite par les services


class ReactionIn(ApiModel):
    user_id: Optional[str] = None
    reaction: Optional[str] = None


class ReviewIn(ApiModel):
    text: Optional[str] = None
    name: Optional[str] = None
    email: Optional[str] = None


class WatchlistEntryIn(ApiModel):
    source: Optional[str] = None
    external_id: Optional[str] = None
    title: Optional[str] = None
    poster: Optional[str] = None
