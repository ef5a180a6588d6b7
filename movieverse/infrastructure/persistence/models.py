"""
Modeles SQLModel pour la base de donnees MovieVerse.

Ces modeles representent les tables de la base de donnees.
Ils sont distincts des entites de domaine (dataclass dans core/entities/)
selon l'architecture hexagonale.

Tables:
- movies: Films et series, identite unique (source, external_id)
- movie_categories: Etiquettes de categorie (un film peut en porter plusieurs)
- movie_reactions: Une reaction par utilisateur et par film
- movie_reaction_counts: Compteur par film et par type de reaction
- reviews: Critiques, indexees par (source, external_id)
- review_replies: Reponses, rattachees a leur critique
- watchlist_entries: Films a voir, par utilisateur

Les champs JSON (*_json) permettent de stocker des listes et l'objet
opaque des watch providers de maniere serialisee.
"""

from __future__ import annotations

import json
from datetime import datetime
from typing import Any, Optional

from sqlalchemy import UniqueConstraint
from sqlmodel import Field, Index, SQLModel


class MovieModel(SQLModel, table=True):
    """
    Modele representant un film ou une serie.

    Les compteurs et reactions vivent dans leurs propres tables pour que
    l'ajout d'une reaction et l'increment du compteur soient atomiques.
    """

    __tablename__ = "movies"
    __table_args__ = (
        UniqueConstraint("source", "external_id", name="uq_movies_identity"),
    )

    id: int | None = Field(default=None, primary_key=True)
    source: str = Field(index=True)
    external_id: str = Field(index=True)
    title: str
    poster: str
    overview: str
    release_date: str
    release_year: str
    rating: str
    genres_json: str | None = None  # JSON: ["Action", "Drama"]
    genre_ids_json: str | None = None  # JSON: [28, 18]
    director: str
    cast_json: str | None = None  # JSON: ["Acteur 1", ...]
    runtime: str
    budget: str
    revenue: str
    production_companies_json: str | None = None
    language: str
    country: str
    status: str
    tagline: str
    trailer: str
    watch_providers_json: str | None = None  # JSON opaque, jamais destructure
    category: str | None = Field(default=None)  # Derniere categorie d'ingestion
    screenshots_json: str | None = None
    is_series: bool = Field(default=False)
    created_at: datetime | None = Field(default_factory=datetime.utcnow)
    updated_at: datetime | None = Field(default_factory=datetime.utcnow)

    @property
    def genres(self) -> list[str]:
        """Retourne les genres deserialises."""
        return _load_list(self.genres_json)

    @property
    def screenshots(self) -> list[str]:
        """Retourne les captures deserialisees."""
        return _load_list(self.screenshots_json)

    @property
    def watch_providers(self) -> dict[str, Any]:
        """Retourne l'objet watch providers tel que recu."""
        if self.watch_providers_json:
            return json.loads(self.watch_providers_json)
        return {}


class MovieCategoryModel(SQLModel, table=True):
    """Etiquette d'appartenance d'un film a une liste de categorie."""

    __tablename__ = "movie_categories"
    __table_args__ = (
        UniqueConstraint("movie_id", "category", name="uq_movie_categories"),
    )

    id: int | None = Field(default=None, primary_key=True)
    movie_id: int = Field(foreign_key="movies.id", index=True)
    category: str = Field(index=True)
    created_at: datetime | None = Field(default_factory=datetime.utcnow)


class MovieReactionModel(SQLModel, table=True):
    """Reaction d'un utilisateur a un film (au plus une par couple)."""

    __tablename__ = "movie_reactions"
    __table_args__ = (
        UniqueConstraint("movie_id", "user_id", name="uq_movie_reactions_user"),
    )

    id: int | None = Field(default=None, primary_key=True)
    movie_id: int = Field(foreign_key="movies.id", index=True)
    user_id: str
    reaction: str
    created_at: datetime | None = Field(default_factory=datetime.utcnow)


class MovieReactionCountModel(SQLModel, table=True):
    """Compteur d'un type de reaction pour un film."""

    __tablename__ = "movie_reaction_counts"

    movie_id: int = Field(foreign_key="movies.id", primary_key=True)
    reaction: str = Field(primary_key=True)
    count: int = Field(default=0)


class ReviewModel(SQLModel, table=True):
    """
    Critique d'un film.

    Liee a l'identite du film par (source, external_id), sans cle etrangere :
    une critique reste valide meme si le film n'est pas en base.
    """

    __tablename__ = "reviews"
    __table_args__ = (
        Index("ix_reviews_source_external_id", "source", "external_id"),
    )

    id: int | None = Field(default=None, primary_key=True)
    source: str
    external_id: str
    text: str
    name: str
    email: str
    created_at: datetime | None = Field(default_factory=datetime.utcnow)


class ReviewReplyModel(SQLModel, table=True):
    """Reponse a une critique, possedee par celle-ci."""

    __tablename__ = "review_replies"

    id: int | None = Field(default=None, primary_key=True)
    review_id: int = Field(foreign_key="reviews.id", index=True)
    text: str
    name: str
    email: str
    created_at: datetime | None = Field(default_factory=datetime.utcnow)


class WatchlistEntryModel(SQLModel, table=True):
    """Film a voir d'un utilisateur."""

    __tablename__ = "watchlist_entries"
    __table_args__ = (
        UniqueConstraint("user_id", "source", "external_id", name="uq_watchlist_entry"),
    )

    id: int | None = Field(default=None, primary_key=True)
    user_id: str = Field(index=True)
    source: str
    external_id: str
    title: str
    poster: Optional[str] = None
    created_at: datetime | None = Field(default_factory=datetime.utcnow)


def _load_list(raw: Optional[str]) -> list[Any]:
    if raw:
        return json.loads(raw)
    return []
