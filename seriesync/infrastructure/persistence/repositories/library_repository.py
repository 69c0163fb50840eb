"""
Implementation SQLModel du repository Library.

Les bibliotheques sont gerees hors du moteur: ce repository se limite a la
lecture, plus un ajout utilise par l'initialisation et les tests.
"""

from typing import Optional

from sqlmodel import Session

from seriesync.core.entities.media import Library
from seriesync.core.ports.repositories import ILibraryRepository
from seriesync.infrastructure.persistence.models import LibraryModel


class SQLModelLibraryRepository(ILibraryRepository):
    """Repository SQLModel pour les bibliotheques."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def _to_entity(self, model: LibraryModel) -> Library:
        return Library(id=model.id or 0, path=model.path, name=model.name)

    def get_by_id(self, library_id: int) -> Optional[Library]:
        """Recupere une bibliotheque par son ID."""
        model = self._session.get(LibraryModel, library_id)
        if model:
            return self._to_entity(model)
        return None

    def add(self, path: str, name: str = "") -> Library:
        """Enregistre une bibliotheque."""
        model = LibraryModel(path=path, name=name)
        self._session.add(model)
        self._session.commit()
        self._session.refresh(model)
        return self._to_entity(model)
