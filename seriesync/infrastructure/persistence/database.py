"""
Acces a la base de donnees du catalogue.

- get_engine : engine partage, cree a la demande depuis SERIESYNC_DATABASE_URL
- get_session : generateur de session SQLModel
- init_db : creation des tables manquantes

Pour SQLite, le fichier de base est cree dans un repertoire existant et les
connexions attendent (timeout) plutot que d'echouer sur un verrou.
"""

from collections.abc import Generator
from pathlib import Path
from typing import Optional

from loguru import logger
from sqlalchemy import Engine
from sqlmodel import Session, SQLModel, create_engine

_SQLITE_PREFIX = "sqlite:///"
_SQLITE_LOCK_TIMEOUT = 30

_engine: Optional[Engine] = None


def _connect_args(database_url: str) -> dict:
    if not database_url.startswith("sqlite"):
        return {}
    return {"check_same_thread": False, "timeout": _SQLITE_LOCK_TIMEOUT}


def _ensure_sqlite_directory(database_url: str) -> None:
    if not database_url.startswith(_SQLITE_PREFIX):
        return
    location = database_url[len(_SQLITE_PREFIX):]
    if location and location != ":memory:":
        Path(location).parent.mkdir(parents=True, exist_ok=True)


def get_engine(database_url: Optional[str] = None) -> Engine:
    """
    Retourne l'engine partage, en le creant au premier appel.

    Args :
        database_url : URL explicite, sinon celle des Settings
    """
    global _engine
    if _engine is None:
        if database_url is None:
            from seriesync.config import Settings

            database_url = Settings().database_url
        _ensure_sqlite_directory(database_url)
        _engine = create_engine(database_url, echo=False, connect_args=_connect_args(database_url))
        logger.debug("Engine cree pour {}", database_url)
    return _engine


def get_session() -> Generator[Session, None, None]:
    """
    Generateur de session SQLModel.

    Utilisation :
        session = next(get_session())
    """
    with Session(get_engine()) as session:
        yield session


def init_db() -> None:
    """Cree les tables du catalogue si elles n'existent pas."""
    # Import local: enregistre les tables dans SQLModel.metadata
    from seriesync.infrastructure.persistence import models  # noqa: F401

    SQLModel.metadata.create_all(get_engine())
