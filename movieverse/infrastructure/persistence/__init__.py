"""
Module de persistance pour MovieVerse.

Ce module fournit l'infrastructure de stockage utilisant SQLModel (SQLAlchemy) :

- database.py : Configuration de l'engine, session factory, initialisation
- models.py : Modeles SQLModel representant les tables de la base de donnees
- repositories/ : Implementations des ports repository

Usage:
    from movieverse.infrastructure.persistence import init_db, get_session

    init_db()  # Cree les tables si necessaire
    session = next(get_session())
"""

from movieverse.infrastructure.persistence.database import (
    get_engine,
    get_session,
    init_db,
    storage_guard,
)

__all__ = [
    "get_engine",
    "get_session",
    "init_db",
    "storage_guard",
]
