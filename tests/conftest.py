"""
Fixtures pytest partagees pour les tests MovieVerse.

Ce module contient les fixtures communes utilisees dans les tests:
- Base SQLite en memoire (une connexion partagee par test)
- Settings de test avec chemins temporaires
"""

from pathlib import Path
from typing import Iterator

import pytest
from sqlalchemy import Engine
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from movieverse.config import Settings
from movieverse.infrastructure.persistence import models  # noqa: F401


@pytest.fixture
def engine() -> Iterator[Engine]:
    """Engine SQLite en memoire avec toutes les tables creees."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session(engine: Engine) -> Iterator[Session]:
    """Session SQLModel sur la base en memoire."""
    with Session(engine) as session:
        yield session


@pytest.fixture
def test_settings(tmp_path: Path) -> Settings:
    """
    Settings de test avec chemins temporaires.

    Le fichier .env du projet est ignore pour isoler les tests.
    """
    return Settings(
        _env_file=None,
        database_url=f"sqlite:///{tmp_path / 'movieverse.db'}",
        tmdb_api_key="test_api_key",
        rate_limit_cooldown_seconds=0.0,
        listing_cache_dir=tmp_path / "cache",
        log_file=tmp_path / "logs" / "movieverse.log",
    )
