"""
Module de persistance SQLite pour SerieSync.

- database.py : Engine SQLite, session factory, initialisation
- models.py : Modeles SQLModel (tables)
- repositories/ : Conversion modeles <-> entites de domaine

Usage:
    from seriesync.infrastructure.persistence import init_db, get_session

    init_db()
    session = next(get_session())
"""

from seriesync.infrastructure.persistence.database import get_engine, get_session, init_db

__all__ = ["get_engine", "get_session", "init_db"]
