"""
Liaison des entites de reference (tags, personnes) a un media.

Les tags sont retrouves par (nom, valeur) et les personnes par nom; ils sont
crees a la premiere rencontre puis reutilises.
"""

from seriesync.core.entities.media import Person, Tag
from seriesync.core.ports.providers import PersonData, TagData
from seriesync.core.ports.repositories import IPersonRepository, ITagRepository
from seriesync.core.value_objects import MediaType


def link_tag(
    tag_repo: ITagRepository,
    media_type: MediaType,
    media_id: int,
    tag: TagData,
) -> Tag:
    """Lie un tag au media, en le creant s'il n'existe pas."""
    entity = tag_repo.get_by_value(tag.name, tag.value)
    if entity is None:
        entity = tag_repo.add(Tag(name=tag.name, value=tag.value, icon=tag.icon))
    tag_repo.add_link(entity.id, media_type, media_id)
    return entity


def link_person(
    person_repo: IPersonRepository,
    media_type: MediaType,
    media_id: int,
    person: PersonData,
) -> Person:
    """Lie une personne au media, en la creant si elle n'existe pas."""
    entity = person_repo.get_by_name(person.name)
    if entity is None:
        entity = person_repo.add(Person(name=person.name))
    person_repo.add_link(entity.id, media_type, media_id)
    return entity
