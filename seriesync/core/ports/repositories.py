"""
Interfaces ports pour les repositories.

Interfaces abstraites (ports) definissant les contrats pour la persistance
du catalogue. Les implementations (adaptateurs) fournissent le stockage
concret (SQLite via SQLModel).

Le stockage est seul garant des contraintes d'unicite (saison par serie,
episode par saison, fichier par bibliotheque, tags et personnes): les
insertions sur une cle naturelle existante retournent l'entree existante.
"""

from abc import ABC, abstractmethod
from typing import Optional

from seriesync.core.entities.media import (
    Episode,
    Library,
    Person,
    Season,
    Show,
    Tag,
    VideoFile,
)
from seriesync.core.entities.search import SearchBatch, SelectionResult
from seriesync.core.value_objects import MediaType


class ILibraryRepository(ABC):
    """Interface de lecture des bibliotheques."""

    @abstractmethod
    def get_by_id(self, library_id: int) -> Optional[Library]:
        """Recupere une bibliotheque par son ID."""
        ...


class IShowRepository(ABC):
    """
    Interface de stockage des series.
    """

    @abstractmethod
    def get_by_id(self, show_id: int) -> Optional[Show]:
        """Recupere une serie par son ID."""
        ...

    @abstractmethod
    def list_by_library(self, library_id: int) -> list[Show]:
        """Liste les series d'une bibliotheque."""
        ...

    @abstractmethod
    def save(self, show: Show) -> Show:
        """Sauvegarde une serie (insertion ou mise a jour)."""
        ...

    @abstractmethod
    def set_binding(self, show_id: int, selection: SelectionResult, update_mode: int) -> None:
        """Ecrit la liaison fournisseur et le mode de mise a jour d'une serie."""
        ...


class ISeasonRepository(ABC):
    """
    Interface de stockage des saisons.
    """

    @abstractmethod
    def list_by_show(self, show_id: int) -> list[Season]:
        """Liste les saisons d'une serie, par numero croissant."""
        ...

    @abstractmethod
    def save(self, season: Season) -> Season:
        """
        Sauvegarde une saison.

        Sans ID, la saison est inseree, ou mise a jour si (show_id,
        season_number) existe deja.
        """
        ...

    @abstractmethod
    def reset_all_for_show(self, show_id: int, update_mode: int) -> int:
        """
        Efface la liaison fournisseur de toutes les saisons d'une serie
        et leur affecte le mode donne. Retourne le nombre de saisons.
        """
        ...


class IEpisodeRepository(ABC):
    """
    Interface de stockage des episodes.
    """

    @abstractmethod
    def get_by_id(self, episode_id: int) -> Optional[Episode]:
        """Recupere un episode par son ID."""
        ...

    @abstractmethod
    def list_by_show(self, show_id: int) -> list[Episode]:
        """Liste les episodes d'une serie."""
        ...

    @abstractmethod
    def get_by_number(self, show_id: int, season: int, number: int) -> Optional[Episode]:
        """Recupere un episode par sa numerotation dans la serie."""
        ...

    @abstractmethod
    def save(self, episode: Episode) -> Episode:
        """
        Sauvegarde un episode.

        Sans ID, l'episode est insere, ou mis a jour si (show_id,
        season_number, episode_number) existe deja.
        """
        ...

    @abstractmethod
    def reset_all_for_show(self, show_id: int, update_mode: int) -> int:
        """
        Efface la liaison fournisseur de tous les episodes d'une serie
        et leur affecte le mode donne. Retourne le nombre d'episodes.
        """
        ...


class IVideoFileRepository(ABC):
    """
    Interface de stockage des fichiers video.
    """

    @abstractmethod
    def get_by_path(self, library_id: int, path: str) -> Optional[VideoFile]:
        """Recupere un fichier par (bibliotheque, chemin relatif)."""
        ...

    @abstractmethod
    def add(self, video_file: VideoFile) -> VideoFile:
        """Enregistre un fichier (retourne l'existant si le chemin est connu)."""
        ...

    @abstractmethod
    def touch(self, video_file_id: int, size_bytes: Optional[int] = None) -> None:
        """Met a jour la date (et la taille) d'un fichier connu."""
        ...


class ITagRepository(ABC):
    """
    Interface de stockage des tags et de leurs liens.
    """

    @abstractmethod
    def get_by_value(self, name: str, value: str) -> Optional[Tag]:
        """Recupere un tag par (nom, valeur)."""
        ...

    @abstractmethod
    def add(self, tag: Tag) -> Tag:
        """Cree un tag (retourne l'existant si (nom, valeur) est connu)."""
        ...

    @abstractmethod
    def add_link(self, tag_id: int, media_type: MediaType, media_id: int) -> None:
        """Lie un tag a un media (sans doublon)."""
        ...

    @abstractmethod
    def delete_links(self, media_type: MediaType, media_id: int) -> int:
        """Supprime tous les liens de tags d'un media."""
        ...

    @abstractmethod
    def list_for_media(self, media_type: MediaType, media_id: int) -> list[Tag]:
        """Liste les tags lies a un media."""
        ...


class IPersonRepository(ABC):
    """
    Interface de stockage des personnes et de leurs liens.
    """

    @abstractmethod
    def get_by_name(self, name: str) -> Optional[Person]:
        """Recupere une personne par son nom."""
        ...

    @abstractmethod
    def add(self, person: Person) -> Person:
        """Cree une personne (retourne l'existante si le nom est connu)."""
        ...

    @abstractmethod
    def add_link(self, person_id: int, media_type: MediaType, media_id: int) -> None:
        """Lie une personne a un media (sans doublon)."""
        ...

    @abstractmethod
    def delete_links(self, media_type: MediaType, media_id: int) -> int:
        """Supprime tous les liens de personnes d'un media."""
        ...

    @abstractmethod
    def list_for_media(self, media_type: MediaType, media_id: int) -> list[Person]:
        """Liste les personnes liees a un media."""
        ...


class ISearchResultRepository(ABC):
    """
    Interface de stockage des lots de candidats en attente de selection.
    """

    @abstractmethod
    def replace(self, batch: SearchBatch) -> None:
        """Remplace (suppression puis insertion) le lot d'un media."""
        ...

    @abstractmethod
    def get(self, media_type: MediaType, media_id: int) -> Optional[SearchBatch]:
        """Recupere le lot d'un media, None si absent."""
        ...

    @abstractmethod
    def delete(self, media_type: MediaType, media_id: int) -> bool:
        """Supprime le lot d'un media. Retourne True si supprime."""
        ...


class IProviderConfigRepository(ABC):
    """
    Interface de lecture de la configuration des fournisseurs.
    """

    @abstractmethod
    def list_enabled(
        self, media_type: MediaType
    ) -> tuple[list[str], dict[str, dict[str, str]]]:
        """
        Liste les fournisseurs actives pour un type de media.

        Retourne :
            (noms tries par priorite, mapping nom -> parametres cle/valeur)
        """
        ...
