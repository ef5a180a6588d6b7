"""
Tests du SQLModelMovieRepository sur SQLite en memoire.

Couvre l'identite (source, external_id), les etiquettes de categorie,
la separation liste / detail et l'atomicite des reactions.
"""

from types import SimpleNamespace

import pytest
from sqlalchemy.exc import OperationalError
from sqlmodel import Session, SQLModel, create_engine, select

from movieverse.core.entities.media import Movie
from movieverse.core.exceptions import DuplicateReactionError, NotFoundError, StorageError
from movieverse.infrastructure.persistence.models import (
    MovieCategoryModel,
    MovieModel,
    MovieReactionCountModel,
    MovieReactionModel,
)
from movieverse.infrastructure.persistence.repositories import SQLModelMovieRepository


@pytest.fixture
def repo(session: Session) -> SQLModelMovieRepository:
    return SQLModelMovieRepository(session)


def _listing(external_id: str = "27205", title: str = "Inception", **kwargs) -> Movie:
    return Movie(
        external_id=external_id,
        title=title,
        rating="8.4",
        genres=["Action"],
        genre_ids=[28],
        **kwargs,
    )


def _detailed(external_id: str = "27205", **kwargs) -> Movie:
    return Movie(
        external_id=external_id,
        title="Inception",
        director="Christopher Nolan",
        cast=["Leonardo DiCaprio"],
        runtime="148 min",
        watch_providers={"US": {"flatrate": [{"provider_name": "Netflix"}]}},
        screenshots=["https://img/1.jpg", "https://img/2.jpg"],
        **kwargs,
    )


class TestUpsertListing:
    """Tests pour upsert_listing()."""

    def test_insert_creates_record_and_tag(self, repo: SQLModelMovieRepository):
        saved = repo.upsert_listing(_listing(), "action")

        assert saved.title == "Inception"
        assert saved.category == "action"
        assert saved.reaction_counts == {"excellent": 0, "loved": 0, "thanks": 0, "wow": 0, "sad": 0}
        assert [m.external_id for m in repo.list_by_category("action")] == ["27205"]

    def test_upsert_is_idempotent(self, repo: SQLModelMovieRepository, session: Session):
        repo.upsert_listing(_listing(), "action")
        repo.upsert_listing(_listing(), "action")

        assert len(session.exec(select(MovieModel)).all()) == 1
        assert len(session.exec(select(MovieCategoryModel)).all()) == 1

    def test_second_category_adds_tag_not_record(
        self, repo: SQLModelMovieRepository, session: Session
    ):
        repo.upsert_listing(_listing(), "action")
        repo.upsert_listing(_listing(), "trending")

        assert len(session.exec(select(MovieModel)).all()) == 1
        assert len(repo.list_by_category("action")) == 1
        assert len(repo.list_by_category("trending")) == 1
        # La derniere ingestion fixe la categorie affichee
        assert repo.get_by_identity("tmdb", "27205").category == "trending"

    def test_refreshes_listing_fields_only(self, repo: SQLModelMovieRepository):
        repo.upsert_details(_detailed())
        repo.add_reaction("tmdb", "27205", "user-1", "wow")

        repo.upsert_listing(_listing(title="Inception (2010)"), "action")

        stored = repo.get_by_identity("tmdb", "27205")
        assert stored.title == "Inception (2010)"
        assert stored.screenshots == ["https://img/1.jpg", "https://img/2.jpg"]
        assert stored.director == "Christopher Nolan"
        assert stored.watch_providers == {"US": {"flatrate": [{"provider_name": "Netflix"}]}}
        assert stored.reaction_counts["wow"] == 1

    def test_list_keeps_ingestion_order(self, repo: SQLModelMovieRepository):
        for external_id in ["3", "1", "2"]:
            repo.upsert_listing(_listing(external_id=external_id), "drama")

        assert [m.external_id for m in repo.list_by_category("drama")] == ["3", "1", "2"]

    def test_unknown_category_lists_nothing(self, repo: SQLModelMovieRepository):
        assert repo.list_by_category("comedy") == []

    def test_list_categories_in_tagging_order(self, repo: SQLModelMovieRepository):
        repo.upsert_listing(_listing(), "trending")
        repo.upsert_listing(_listing(), "action")
        repo.upsert_listing(_listing(external_id="155"), "drama")

        assert repo.list_categories("tmdb", "27205") == ["trending", "action"]
        assert repo.list_categories("tmdb", "1") == []


class TestUpsertDetails:
    """Tests pour upsert_details()."""

    def test_insert_round_trips_all_fields(self, repo: SQLModelMovieRepository):
        repo.upsert_details(_detailed())

        stored = repo.get_by_identity("tmdb", "27205")
        assert stored.director == "Christopher Nolan"
        assert stored.cast == ["Leonardo DiCaprio"]
        assert stored.runtime == "148 min"
        assert stored.is_complete

    def test_keeps_tags_reactions_and_category(self, repo: SQLModelMovieRepository):
        repo.upsert_listing(_listing(), "action")
        repo.add_reaction("tmdb", "27205", "user-1", "loved")

        repo.upsert_details(_detailed())

        stored = repo.get_by_identity("tmdb", "27205")
        assert stored.category == "action"
        assert stored.reaction_counts["loved"] == 1
        assert [r.user_id for r in stored.user_reactions] == ["user-1"]
        assert len(repo.list_by_category("action")) == 1

    def test_unknown_identity_returns_none(self, repo: SQLModelMovieRepository):
        assert repo.get_by_identity("tmdb", "1") is None


class TestReactions:
    """Tests pour add_reaction() et get_reaction_counts()."""

    def test_distinct_users_are_all_counted(self, repo: SQLModelMovieRepository):
        repo.upsert_listing(_listing(), "action")

        for i in range(7):
            counts = repo.add_reaction("tmdb", "27205", f"user-{i}", "excellent")

        assert counts["excellent"] == 7
        stored = repo.get_by_identity("tmdb", "27205")
        assert len(stored.user_reactions) == 7
        assert stored.reaction_counts["excellent"] == 7

    def test_counts_match_user_reactions(self, repo: SQLModelMovieRepository):
        repo.upsert_listing(_listing(), "action")
        for user, kind in [("a", "loved"), ("b", "wow"), ("c", "loved"), ("d", "sad")]:
            repo.add_reaction("tmdb", "27205", user, kind)

        stored = repo.get_by_identity("tmdb", "27205")
        per_kind = {kind: 0 for kind in stored.reaction_counts}
        for reaction in stored.user_reactions:
            per_kind[reaction.reaction] += 1
        assert per_kind == stored.reaction_counts

    def test_duplicate_user_is_rejected_without_increment(self, repo: SQLModelMovieRepository):
        repo.upsert_listing(_listing(), "action")
        repo.add_reaction("tmdb", "27205", "user-1", "loved")

        with pytest.raises(DuplicateReactionError):
            repo.add_reaction("tmdb", "27205", "user-1", "sad")

        counts = repo.get_reaction_counts("tmdb", "27205")
        assert counts["loved"] == 1
        assert counts["sad"] == 0

    def test_unknown_movie_raises_not_found(self, repo: SQLModelMovieRepository):
        with pytest.raises(NotFoundError):
            repo.add_reaction("tmdb", "1", "user-1", "loved")

    def test_missing_counter_row_is_created(
        self, repo: SQLModelMovieRepository, session: Session
    ):
        repo.upsert_listing(_listing(), "action")
        row = session.exec(
            select(MovieReactionCountModel).where(MovieReactionCountModel.reaction == "thanks")
        ).one()
        session.delete(row)
        session.commit()

        counts = repo.add_reaction("tmdb", "27205", "user-1", "thanks")

        assert counts["thanks"] == 1

    def test_counts_for_unknown_movie_is_none(self, repo: SQLModelMovieRepository):
        assert repo.get_reaction_counts("tmdb", "1") is None


class TestConcurrentReactions:
    """Deux soumissions simultanees du meme utilisateur, sur deux connexions."""

    @pytest.fixture
    def file_engine(self, tmp_path):
        engine = create_engine(f"sqlite:///{tmp_path / 'reactions.db'}")
        SQLModel.metadata.create_all(engine)
        yield engine
        engine.dispose()

    def test_insert_after_check_is_rejected_by_unique_constraint(
        self, file_engine, monkeypatch
    ):
        with Session(file_engine) as setup:
            SQLModelMovieRepository(setup).upsert_listing(_listing(), "action")

        first = Session(file_engine)
        second = Session(file_engine)
        original_exec = first.exec

        def exec_then_race(statement, *args, **kwargs):
            result = original_exec(statement, *args, **kwargs)
            entity = statement.column_descriptions[0]["entity"]
            if entity is not MovieReactionModel:
                return result
            # L'autre requete passe entre la verification et l'insertion
            rows = result.all()
            SQLModelMovieRepository(second).add_reaction("tmdb", "27205", "user-1", "loved")
            return SimpleNamespace(first=lambda: rows[0] if rows else None)

        monkeypatch.setattr(first, "exec", exec_then_race)

        with pytest.raises(DuplicateReactionError):
            SQLModelMovieRepository(first).add_reaction("tmdb", "27205", "user-1", "sad")

        first.close()
        second.close()
        with Session(file_engine) as check:
            reactions = check.exec(select(MovieReactionModel)).all()
            counts = SQLModelMovieRepository(check).get_reaction_counts("tmdb", "27205")
        assert [(r.user_id, r.reaction) for r in reactions] == [("user-1", "loved")]
        assert counts["loved"] == 1
        assert counts["sad"] == 0


class TestStorageErrors:
    """Les erreurs SQLAlchemy deviennent des StorageError."""

    def test_read_failure_is_wrapped(self, session: Session, monkeypatch):
        repo = SQLModelMovieRepository(session)

        def _boom(*args, **kwargs):
            raise OperationalError("SELECT", {}, Exception("database is locked"))

        monkeypatch.setattr(session, "exec", _boom)

        with pytest.raises(StorageError):
            repo.list_by_category("action")
