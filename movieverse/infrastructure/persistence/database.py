"""
Configuration de la base de donnees pour MovieVerse.

Ce module fournit :
- Engine SQLAlchemy (SQLite par defaut) avec configuration multi-thread
- Session factory
- Fonction d'initialisation des tables
- storage_guard : conversion des erreurs SQLAlchemy en StorageError

La base de donnees est configuree via MOVIEVERSE_DATABASE_URL (defaut: sqlite:///movieverse.db).
"""

from collections.abc import Generator, Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Optional

from sqlalchemy import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, SQLModel, create_engine

from movieverse.core.exceptions import StorageError

# Engine global - initialise lors du premier appel a get_engine()
_engine: Optional[Engine] = None


def get_engine() -> Engine:
    """
    Retourne l'engine, en le creant si necessaire.

    Utilise la configuration de l'application pour l'URL de la BDD.
    """
    global _engine
    if _engine is None:
        from movieverse.config import Settings
        settings = Settings()

        db_url = settings.database_url
        connect_args = {}
        if db_url.startswith("sqlite"):
            connect_args["check_same_thread"] = False
            # Creer le repertoire parent si l'URL est un fichier SQLite
            if db_url.startswith("sqlite:///") and not db_url.startswith("sqlite:///:memory:"):
                db_path = Path(db_url.replace("sqlite:///", ""))
                db_path.parent.mkdir(exist_ok=True, parents=True)

        _engine = create_engine(db_url, echo=False, connect_args=connect_args)
    return _engine


def get_session() -> Generator[Session, None, None]:
    """
    Generateur de session SQLModel.

    Utilisation avec next() :
        session = next(get_session())

    Yields:
        Session SQLModel connectee a l'engine
    """
    with Session(get_engine()) as session:
        yield session


def init_db() -> None:
    """
    Initialise la base de donnees en creant toutes les tables.

    Importe les modeles pour enregistrer leurs metadonnees dans
    SQLModel.metadata, puis cree les tables manquantes.

    Doit etre appelee une fois au demarrage de l'application.
    """
    # L'import est fait ici pour eviter les imports circulaires
    from movieverse.infrastructure.persistence import models  # noqa: F401

    SQLModel.metadata.create_all(get_engine())


@contextmanager
def storage_guard(session: Session, action: str) -> Iterator[None]:
    """
    Convertit toute erreur SQLAlchemy en StorageError.

    La transaction en cours est annulee avant de lever.

    Args:
        session: Session dont la transaction doit etre annulee
        action: Description courte de l'operation (pour le message)
    """
    try:
        yield
    except SQLAlchemyError as e:
        session.rollback()
        raise StorageError(f"Echec base de donnees ({action}): {e}") from e
