"""
Implementation SQLModel du repository Person.

Les personnes sont dedoublonnees par nom et liees aux medias par la table
person_links.
"""

from typing import Optional

from sqlalchemy import delete
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from seriesync.core.entities.media import Person
from seriesync.core.ports.repositories import IPersonRepository
from seriesync.core.value_objects import MediaType
from seriesync.infrastructure.persistence.models import PersonLinkModel, PersonModel


class SQLModelPersonRepository(IPersonRepository):
    """Repository SQLModel pour les personnes et leurs liens."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def _to_entity(self, model: PersonModel) -> Person:
        return Person(id=model.id, name=model.name)

    def _find(self, name: str) -> Optional[PersonModel]:
        statement = select(PersonModel).where(PersonModel.name == name)
        return self._session.exec(statement).first()

    def get_by_name(self, name: str) -> Optional[Person]:
        """Recupere une personne par son nom."""
        model = self._find(name)
        if model:
            return self._to_entity(model)
        return None

    def add(self, person: Person) -> Person:
        """Cree une personne, ou retourne l'existante."""
        existing = self._find(person.name)
        if existing:
            return self._to_entity(existing)
        model = PersonModel(name=person.name)
        try:
            self._session.add(model)
            self._session.commit()
        except IntegrityError:
            self._session.rollback()
            existing = self._find(person.name)
            if existing is None:
                raise
            return self._to_entity(existing)
        self._session.refresh(model)
        return self._to_entity(model)

    def add_link(self, person_id: int, media_type: MediaType, media_id: int) -> None:
        """Lie une personne a un media (sans doublon)."""
        statement = select(PersonLinkModel).where(
            PersonLinkModel.person_id == person_id,
            PersonLinkModel.media_type == media_type.value,
            PersonLinkModel.media_id == media_id,
        )
        if self._session.exec(statement).first():
            return
        self._session.add(
            PersonLinkModel(person_id=person_id, media_type=media_type.value, media_id=media_id)
        )
        self._session.commit()

    def delete_links(self, media_type: MediaType, media_id: int) -> int:
        """Supprime tous les liens de personnes d'un media."""
        result = self._session.exec(
            delete(PersonLinkModel).where(
                PersonLinkModel.media_type == media_type.value,
                PersonLinkModel.media_id == media_id,
            )
        )
        self._session.commit()
        return result.rowcount or 0

    def list_for_media(self, media_type: MediaType, media_id: int) -> list[Person]:
        """Liste les personnes liees a un media."""
        statement = (
            select(PersonModel)
            .join(PersonLinkModel, PersonLinkModel.person_id == PersonModel.id)
            .where(
                PersonLinkModel.media_type == media_type.value,
                PersonLinkModel.media_id == media_id,
            )
        )
        return [self._to_entity(model) for model in self._session.exec(statement).all()]
