"""
Implementation SQLModel du repository des lots de candidats.

Un seul lot par (media_type, media_id): chaque recherche remplace
integralement le lot precedent.
"""

import json
from typing import Optional

from sqlalchemy import delete
from sqlmodel import Session, select

from seriesync.core.entities.search import SearchBatch, SearchCandidate
from seriesync.core.ports.repositories import ISearchResultRepository
from seriesync.core.value_objects import MediaType
from seriesync.infrastructure.persistence.models import SearchResultModel


class SQLModelSearchResultRepository(ISearchResultRepository):
    """
    Repository SQLModel pour les lots de candidats en attente de selection.

    Les candidats sont stockes en JSON dans la colonne data_json, dans
    l'ordre ou les fournisseurs les ont retournes (l'index de selection
    manuelle s'y refere).
    """

    def __init__(self, session: Session) -> None:
        """
        Initialise le repository avec une session SQLModel.

        Args :
            session : Session SQLModel active pour les operations DB
        """
        self._session = session

    def _to_entity(self, model: SearchResultModel) -> SearchBatch:
        return SearchBatch(
            media_type=model.media_type,
            media_id=model.media_id,
            name=model.name,
            candidates=[SearchCandidate.from_dict(item) for item in model.data],
        )

    def replace(self, batch: SearchBatch) -> None:
        """Remplace (suppression puis insertion) le lot d'un media."""
        self._session.exec(
            delete(SearchResultModel).where(
                SearchResultModel.media_type == batch.media_type,
                SearchResultModel.media_id == batch.media_id,
            )
        )
        model = SearchResultModel(
            media_type=batch.media_type,
            media_id=batch.media_id,
            name=batch.name,
            data_json=json.dumps([candidate.to_dict() for candidate in batch.candidates]),
        )
        self._session.add(model)
        self._session.commit()

    def get(self, media_type: MediaType, media_id: int) -> Optional[SearchBatch]:
        """Recupere le lot d'un media, None si absent."""
        statement = select(SearchResultModel).where(
            SearchResultModel.media_type == media_type.value,
            SearchResultModel.media_id == media_id,
        )
        model = self._session.exec(statement).first()
        if model:
            return self._to_entity(model)
        return None

    def delete(self, media_type: MediaType, media_id: int) -> bool:
        """Supprime le lot d'un media. Retourne True si supprime."""
        result = self._session.exec(
            delete(SearchResultModel).where(
                SearchResultModel.media_type == media_type.value,
                SearchResultModel.media_id == media_id,
            )
        )
        self._session.commit()
        return bool(result.rowcount)

    def list_pending(self, media_type: MediaType) -> list[SearchBatch]:
        """Liste les lots en attente pour un type de media."""
        statement = (
            select(SearchResultModel)
            .where(SearchResultModel.media_type == media_type.value)
            .order_by(SearchResultModel.media_id)
        )
        return [self._to_entity(model) for model in self._session.exec(statement).all()]
