"""
Modeles SQLModel pour la base de donnees SerieSync.

Ces modeles representent les tables de la base de donnees SQLite.
Ils sont distincts des entites de domaine (dataclass dans core/entities/)
selon l'architecture hexagonale.

Tables:
- libraries: Bibliotheques (lecture seule pour le moteur)
- shows / seasons / episodes: Catalogue des series
- video_files: Fichiers video associes a un episode
- tags / tag_links, people / person_links: Entites de reference et leurs liens
- search_results: Lots de candidats en attente de selection manuelle
- provider_configs: Fournisseurs actives par type de media

Les contraintes d'unicite portent les invariants du catalogue: la base est
le seul point de serialisation entre les taches de scan concurrentes.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import Any

from sqlmodel import Field, SQLModel, UniqueConstraint

from seriesync.core.value_objects import UpdateMode


def utc_now() -> datetime:
    """Horodatage UTC avec fuseau (colonnes created_at/updated_at)."""
    return datetime.now(timezone.utc)


class LibraryModel(SQLModel, table=True):
    """Bibliotheque de medias (racine sur le disque)."""

    __tablename__ = "libraries"

    id: int | None = Field(default=None, primary_key=True)
    name: str = ""
    path: str
    media_type: str = "tvs"


class ShowModel(SQLModel, table=True):
    """
    Modele representant une serie TV.

    path est relatif a la racine de la bibliotheque (nom du dossier).
    """

    __tablename__ = "shows"

    id: int | None = Field(default=None, primary_key=True)
    library_id: int = Field(foreign_key="libraries.id", index=True)
    title: str = Field(index=True)
    path: str = Field(index=True)
    overview: str | None = None
    icon: str | None = None
    fanart: str | None = None
    website: str | None = None
    trailer: str | None = None
    premiered: int | None = None  # timestamp unix
    rating: float | None = None
    provider_name: str | None = None
    provider_id: str | None = None
    provider_data: str | None = None
    provider_link: str | None = None
    update_mode: int = Field(default=UpdateMode.ENABLED)
    created_at: datetime | None = Field(default_factory=utc_now)
    updated_at: datetime | None = Field(default_factory=utc_now)


class SeasonModel(SQLModel, table=True):
    """Saison d'une serie, unique par (show_id, season_number)."""

    __tablename__ = "seasons"
    __table_args__ = (
        UniqueConstraint("show_id", "season_number", name="uq_seasons_show_season"),
    )

    id: int | None = Field(default=None, primary_key=True)
    show_id: int = Field(foreign_key="shows.id", index=True)
    season_number: int
    title: str = ""
    overview: str | None = None
    icon: str | None = None
    fanart: str | None = None
    trailer: str | None = None
    premiered: int | None = None
    rating: float | None = None
    provider_name: str | None = None
    provider_id: str | None = None
    provider_data: str | None = None
    provider_link: str | None = None
    update_mode: int = Field(default=UpdateMode.ENABLED)
    created_at: datetime | None = Field(default_factory=utc_now)
    updated_at: datetime | None = Field(default_factory=utc_now)


class EpisodeModel(SQLModel, table=True):
    """Episode d'une serie, unique par (show_id, season_number, episode_number)."""

    __tablename__ = "episodes"
    __table_args__ = (
        UniqueConstraint(
            "show_id", "season_number", "episode_number", name="uq_episodes_show_season_episode"
        ),
    )

    id: int | None = Field(default=None, primary_key=True)
    show_id: int = Field(foreign_key="shows.id", index=True)
    season_number: int
    episode_number: int
    title: str = ""
    overview: str | None = None
    icon: str | None = None
    premiered: int | None = None
    rating: float | None = None
    provider_name: str | None = None
    provider_id: str | None = None
    provider_data: str | None = None
    provider_link: str | None = None
    update_mode: int = Field(default=UpdateMode.ENABLED)
    created_at: datetime | None = Field(default_factory=utc_now)
    updated_at: datetime | None = Field(default_factory=utc_now)


class VideoFileModel(SQLModel, table=True):
    """
    Fichier video associe a une entite media.

    path est relatif a la racine de la bibliotheque.
    """

    __tablename__ = "video_files"
    __table_args__ = (
        UniqueConstraint("library_id", "path", name="uq_video_files_library_path"),
    )

    id: int | None = Field(default=None, primary_key=True)
    library_id: int = Field(foreign_key="libraries.id", index=True)
    path: str = Field(index=True)
    media_type: str = "tvs_episode"
    media_id: int = Field(index=True)
    size_bytes: int = 0
    created_at: datetime | None = Field(default_factory=utc_now)
    updated_at: datetime | None = Field(default_factory=utc_now)


class TagModel(SQLModel, table=True):
    """Tag de reference, unique par (name, value)."""

    __tablename__ = "tags"
    __table_args__ = (UniqueConstraint("name", "value", name="uq_tags_name_value"),)

    id: int | None = Field(default=None, primary_key=True)
    name: str = Field(index=True)
    value: str
    icon: str | None = None


class TagLinkModel(SQLModel, table=True):
    """Lien entre un tag et un media."""

    __tablename__ = "tag_links"
    __table_args__ = (
        UniqueConstraint("tag_id", "media_type", "media_id", name="uq_tag_links"),
    )

    id: int | None = Field(default=None, primary_key=True)
    tag_id: int = Field(foreign_key="tags.id", index=True)
    media_type: str
    media_id: int = Field(index=True)


class PersonModel(SQLModel, table=True):
    """Personne de reference, unique par nom."""

    __tablename__ = "people"

    id: int | None = Field(default=None, primary_key=True)
    name: str = Field(unique=True, index=True)


class PersonLinkModel(SQLModel, table=True):
    """Lien entre une personne et un media."""

    __tablename__ = "person_links"
    __table_args__ = (
        UniqueConstraint("person_id", "media_type", "media_id", name="uq_person_links"),
    )

    id: int | None = Field(default=None, primary_key=True)
    person_id: int = Field(foreign_key="people.id", index=True)
    media_type: str
    media_id: int = Field(index=True)


class SearchResultModel(SQLModel, table=True):
    """
    Lot de candidats de recherche pour un media en attente de selection.

    Remplace integralement (suppression puis insertion) a chaque recherche.
    """

    __tablename__ = "search_results"
    __table_args__ = (
        UniqueConstraint("media_type", "media_id", name="uq_search_results_media"),
    )

    id: int | None = Field(default=None, primary_key=True)
    media_type: str
    media_id: int = Field(index=True)
    name: str = ""
    data_json: str = "[]"  # JSON: liste de SearchCandidate
    created_at: datetime | None = Field(default_factory=utc_now)

    @property
    def data(self) -> list[dict[str, Any]]:
        """Retourne les candidats deserialises."""
        if self.data_json:
            return json.loads(self.data_json)
        return []

    @data.setter
    def data(self, value: list[dict[str, Any]]) -> None:
        """Serialise les candidats en JSON."""
        self.data_json = json.dumps(value)


class ProviderConfigModel(SQLModel, table=True):
    """
    Configuration d'un fournisseur pour un type de media.

    priority: ordre croissant de preference. settings_json: parametres plats
    (cle/valeur) passes au fournisseur a l'initialisation.
    """

    __tablename__ = "provider_configs"
    __table_args__ = (
        UniqueConstraint("provider", "media_type", name="uq_provider_configs"),
    )

    id: int | None = Field(default=None, primary_key=True)
    provider: str
    media_type: str = "tvs"
    enabled: bool = True
    priority: int = 0
    settings_json: str | None = None

    @property
    def settings(self) -> dict[str, str]:
        """Retourne les parametres deserialises."""
        if self.settings_json:
            return json.loads(self.settings_json)
        return {}

    @settings.setter
    def settings(self, value: dict[str, str]) -> None:
        """Serialise les parametres en JSON."""
        self.settings_json = json.dumps(value)
