"""
Implementation SQLModel du repository Movie.

Implemente l'interface IMovieRepository pour la persistance des films,
de leurs etiquettes de categorie et de leur etat de reactions.
"""

import json
from datetime import datetime
from typing import Optional

from sqlalchemy import update
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from movieverse.core.entities.media import (
    Movie,
    ReactionKind,
    UserReaction,
    empty_reaction_counts,
)
from movieverse.core.exceptions import DuplicateReactionError, NotFoundError
from movieverse.core.ports.repositories import IMovieRepository
from movieverse.infrastructure.persistence.database import storage_guard
from movieverse.infrastructure.persistence.models import (
    MovieCategoryModel,
    MovieModel,
    MovieReactionCountModel,
    MovieReactionModel,
)


class SQLModelMovieRepository(IMovieRepository):
    """
    Repository SQLModel pour les films.

    Implemente IMovieRepository avec conversion bidirectionnelle
    entre l'entite Movie (domaine) et MovieModel (persistance).
    """

    def __init__(self, session: Session) -> None:
        """
        Initialise le repository avec une session SQLModel.

        Args :
            session : Session SQLModel active pour les operations DB
        """
        self._session = session

    # ------------------------------------------------------------------
    # Conversion
    # ------------------------------------------------------------------

    def _to_entity(
        self,
        model: MovieModel,
        counts: Optional[dict[str, int]] = None,
        reactions: Optional[list[UserReaction]] = None,
    ) -> Movie:
        """
        Convertit un modele DB en entite domaine.

        Args :
            model : Le modele MovieModel depuis la DB
            counts : Compteurs deja charges (sinon lus en base)
            reactions : Reactions deja chargees (sinon lues en base)
        """
        if counts is None or reactions is None:
            counts_by_movie, reactions_by_movie = self._load_reaction_state([model.id])
            counts = counts_by_movie[model.id]
            reactions = reactions_by_movie[model.id]

        return Movie(
            source=model.source,
            external_id=model.external_id,
            title=model.title,
            poster=model.poster,
            overview=model.overview,
            release_date=model.release_date,
            release_year=model.release_year,
            rating=model.rating,
            genres=model.genres,
            genre_ids=json.loads(model.genre_ids_json) if model.genre_ids_json else [],
            director=model.director,
            cast=json.loads(model.cast_json) if model.cast_json else [],
            runtime=model.runtime,
            budget=model.budget,
            revenue=model.revenue,
            production_companies=(
                json.loads(model.production_companies_json)
                if model.production_companies_json
                else []
            ),
            language=model.language,
            country=model.country,
            status=model.status,
            tagline=model.tagline,
            trailer=model.trailer,
            watch_providers=model.watch_providers,
            category=model.category,
            screenshots=model.screenshots,
            is_series=model.is_series,
            reaction_counts=counts,
            user_reactions=reactions,
        )

    def _to_model(self, entity: Movie) -> MovieModel:
        """
        Convertit une entite domaine en modele DB (insertion).
        """
        model = MovieModel(source=entity.source, external_id=entity.external_id)
        self._apply_details(model, entity)
        model.category = entity.category
        return model

    @staticmethod
    def _apply_listing(model: MovieModel, entity: Movie) -> None:
        """Copie les champs de niveau liste."""
        model.title = entity.title
        model.poster = entity.poster
        model.overview = entity.overview
        model.release_date = entity.release_date
        model.release_year = entity.release_year
        model.rating = entity.rating
        model.genres_json = json.dumps(entity.genres)
        model.genre_ids_json = json.dumps(entity.genre_ids)
        model.language = entity.language
        model.is_series = entity.is_series
        model.updated_at = datetime.utcnow()

    @classmethod
    def _apply_details(cls, model: MovieModel, entity: Movie) -> None:
        """Copie tous les champs de metadonnees (liste + detail)."""
        cls._apply_listing(model, entity)
        model.director = entity.director
        model.cast_json = json.dumps(entity.cast)
        model.runtime = entity.runtime
        model.budget = entity.budget
        model.revenue = entity.revenue
        model.production_companies_json = json.dumps(entity.production_companies)
        model.country = entity.country
        model.status = entity.status
        model.tagline = entity.tagline
        model.trailer = entity.trailer
        model.watch_providers_json = json.dumps(entity.watch_providers)
        model.screenshots_json = json.dumps(entity.screenshots)

    # ------------------------------------------------------------------
    # Lectures
    # ------------------------------------------------------------------

    def _get_model(self, source: str, external_id: str) -> Optional[MovieModel]:
        statement = select(MovieModel).where(
            MovieModel.source == source,
            MovieModel.external_id == external_id,
        )
        return self._session.exec(statement).first()

    def _load_reaction_state(
        self, movie_ids: list[int]
    ) -> tuple[dict[int, dict[str, int]], dict[int, list[UserReaction]]]:
        """Charge compteurs et reactions de plusieurs films en deux requetes."""
        counts: dict[int, dict[str, int]] = {mid: empty_reaction_counts() for mid in movie_ids}
        reactions: dict[int, list[UserReaction]] = {mid: [] for mid in movie_ids}
        if not movie_ids:
            return counts, reactions

        count_rows = self._session.exec(
            select(MovieReactionCountModel).where(
                MovieReactionCountModel.movie_id.in_(movie_ids)
            )
        ).all()
        for row in count_rows:
            counts[row.movie_id][row.reaction] = row.count

        reaction_rows = self._session.exec(
            select(MovieReactionModel)
            .where(MovieReactionModel.movie_id.in_(movie_ids))
            .order_by(MovieReactionModel.id)
        ).all()
        for row in reaction_rows:
            reactions[row.movie_id].append(UserReaction(row.user_id, row.reaction))

        return counts, reactions

    def get_by_identity(self, source: str, external_id: str) -> Optional[Movie]:
        """Recupere un film par son identite (source, external_id)."""
        with storage_guard(self._session, "lecture film"):
            model = self._get_model(source, external_id)
            if model:
                return self._to_entity(model)
            return None

    def list_by_category(self, category: str) -> list[Movie]:
        """Liste les films etiquetes avec une categorie, dans l'ordre d'etiquetage."""
        with storage_guard(self._session, "lecture categorie"):
            statement = (
                select(MovieModel)
                .join(MovieCategoryModel, MovieCategoryModel.movie_id == MovieModel.id)
                .where(MovieCategoryModel.category == category)
                .order_by(MovieCategoryModel.id)
            )
            models = self._session.exec(statement).all()
            counts, reactions = self._load_reaction_state([m.id for m in models])
            return [self._to_entity(m, counts[m.id], reactions[m.id]) for m in models]

    def list_categories(self, source: str, external_id: str) -> list[str]:
        """Etiquettes d'un film dans l'ordre d'etiquetage."""
        with storage_guard(self._session, "lecture etiquettes"):
            statement = (
                select(MovieCategoryModel.category)
                .join(MovieModel, MovieCategoryModel.movie_id == MovieModel.id)
                .where(
                    MovieModel.source == source,
                    MovieModel.external_id == external_id,
                )
                .order_by(MovieCategoryModel.id)
            )
            return list(self._session.exec(statement).all())

    def get_reaction_counts(self, source: str, external_id: str) -> Optional[dict[str, int]]:
        """Compteurs de reactions d'un film, None si inconnu."""
        with storage_guard(self._session, "lecture reactions"):
            model = self._get_model(source, external_id)
            if model is None:
                return None
            counts, _ = self._load_reaction_state([model.id])
            return counts[model.id]

    # ------------------------------------------------------------------
    # Ecritures
    # ------------------------------------------------------------------

    def _insert(self, entity: Movie) -> MovieModel:
        """Insere un film et initialise ses compteurs a zero."""
        model = self._to_model(entity)
        self._session.add(model)
        self._session.flush()
        for kind in ReactionKind:
            self._session.add(
                MovieReactionCountModel(movie_id=model.id, reaction=kind.value, count=0)
            )
        return model

    def upsert_listing(self, movie: Movie, category: str) -> Movie:
        """
        Insere ou met a jour un film d'une liste, cle (source, external_id, category).

        Un enregistrement existant ne voit que ses champs de liste rafraichis.
        """
        with storage_guard(self._session, "ecriture liste"):
            model = self._get_model(movie.source, movie.external_id)
            if model is None:
                model = self._insert(movie)
            else:
                self._apply_listing(model, movie)
            model.category = category
            self._session.add(model)

            tag = self._session.exec(
                select(MovieCategoryModel).where(
                    MovieCategoryModel.movie_id == model.id,
                    MovieCategoryModel.category == category,
                )
            ).first()
            if tag is None:
                self._session.add(MovieCategoryModel(movie_id=model.id, category=category))

            self._session.commit()
            self._session.refresh(model)
            return self._to_entity(model)

    def upsert_details(self, movie: Movie) -> Movie:
        """
        Insere ou met a jour un film detaille, cle (source, external_id).

        Les etiquettes de categorie et l'etat de reactions ne sont pas modifies.
        """
        with storage_guard(self._session, "ecriture detail"):
            model = self._get_model(movie.source, movie.external_id)
            if model is None:
                model = self._insert(movie)
            else:
                self._apply_details(model, movie)
                if movie.category is not None:
                    model.category = movie.category
            self._session.add(model)
            self._session.commit()
            self._session.refresh(model)
            return self._to_entity(model)

    def add_reaction(
        self, source: str, external_id: str, user_id: str, reaction: str
    ) -> dict[str, int]:
        """
        Ajoute la reaction et incremente le compteur dans une seule transaction.

        L'increment est calcule cote SQL (count = count + 1) et la contrainte
        unique (movie_id, user_id) rejette un second ajout concurrent.
        """
        with storage_guard(self._session, "ecriture reaction"):
            model = self._get_model(source, external_id)
            if model is None:
                raise NotFoundError("Movie not found")

            already = self._session.exec(
                select(MovieReactionModel).where(
                    MovieReactionModel.movie_id == model.id,
                    MovieReactionModel.user_id == user_id,
                )
            ).first()
            if already is not None:
                raise DuplicateReactionError(user_id)

            self._session.add(
                MovieReactionModel(movie_id=model.id, user_id=user_id, reaction=reaction)
            )
            try:
                self._session.flush()
            except IntegrityError as e:
                self._session.rollback()
                raise DuplicateReactionError(user_id) from e

            result = self._session.connection().execute(
                update(MovieReactionCountModel)
                .where(
                    MovieReactionCountModel.movie_id == model.id,
                    MovieReactionCountModel.reaction == reaction,
                )
                .values(count=MovieReactionCountModel.count + 1)
            )
            if result.rowcount == 0:
                self._session.add(
                    MovieReactionCountModel(movie_id=model.id, reaction=reaction, count=1)
                )
            self._session.commit()

            counts, _ = self._load_reaction_state([model.id])
            return counts[model.id]
