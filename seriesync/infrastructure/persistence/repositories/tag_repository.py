"""
Implementation SQLModel du repository Tag.

Les tags sont des entites de reference dedoublonnees par (nom, valeur),
liees aux medias par la table tag_links.
"""

from typing import Optional

from sqlalchemy import delete
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from seriesync.core.entities.media import Tag
from seriesync.core.ports.repositories import ITagRepository
from seriesync.core.value_objects import MediaType
from seriesync.infrastructure.persistence.models import TagLinkModel, TagModel


class SQLModelTagRepository(ITagRepository):
    """Repository SQLModel pour les tags et leurs liens."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def _to_entity(self, model: TagModel) -> Tag:
        return Tag(id=model.id, name=model.name, value=model.value, icon=model.icon)

    def _find(self, name: str, value: str) -> Optional[TagModel]:
        statement = select(TagModel).where(TagModel.name == name, TagModel.value == value)
        return self._session.exec(statement).first()

    def get_by_value(self, name: str, value: str) -> Optional[Tag]:
        """Recupere un tag par (nom, valeur)."""
        model = self._find(name, value)
        if model:
            return self._to_entity(model)
        return None

    def add(self, tag: Tag) -> Tag:
        """Cree un tag, ou retourne l'existant."""
        existing = self._find(tag.name, tag.value)
        if existing:
            return self._to_entity(existing)
        model = TagModel(name=tag.name, value=tag.value, icon=tag.icon)
        try:
            self._session.add(model)
            self._session.commit()
        except IntegrityError:
            self._session.rollback()
            existing = self._find(tag.name, tag.value)
            if existing is None:
                raise
            return self._to_entity(existing)
        self._session.refresh(model)
        return self._to_entity(model)

    def add_link(self, tag_id: int, media_type: MediaType, media_id: int) -> None:
        """Lie un tag a un media (sans doublon)."""
        statement = select(TagLinkModel).where(
            TagLinkModel.tag_id == tag_id,
            TagLinkModel.media_type == media_type.value,
            TagLinkModel.media_id == media_id,
        )
        if self._session.exec(statement).first():
            return
        self._session.add(
            TagLinkModel(tag_id=tag_id, media_type=media_type.value, media_id=media_id)
        )
        self._session.commit()

    def delete_links(self, media_type: MediaType, media_id: int) -> int:
        """Supprime tous les liens de tags d'un media."""
        result = self._session.exec(
            delete(TagLinkModel).where(
                TagLinkModel.media_type == media_type.value,
                TagLinkModel.media_id == media_id,
            )
        )
        self._session.commit()
        return result.rowcount or 0

    def list_for_media(self, media_type: MediaType, media_id: int) -> list[Tag]:
        """Liste les tags lies a un media."""
        statement = (
            select(TagModel)
            .join(TagLinkModel, TagLinkModel.tag_id == TagModel.id)
            .where(
                TagLinkModel.media_type == media_type.value,
                TagLinkModel.media_id == media_id,
            )
        )
        return [self._to_entity(model) for model in self._session.exec(statement).all()]
