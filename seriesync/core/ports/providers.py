"""
Interfaces ports pour les fournisseurs de metadonnees de series.

Interface abstraite (port) definissant le contrat d'un fournisseur externe.
Les implementations concretes sont fournies par des paquets tiers et
enregistrees dans le ProviderRegistry (entry points "seriesync.providers").

Chaque appel peut echouer independamment; le moteur journalise l'echec au
point d'appel et le traite comme une absence de donnees.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Optional

from seriesync.core.entities.search import SearchCandidate


@dataclass
class ProviderInfo:
    """
    Informations de liaison retournees avec chaque detail.

    Attributs :
        provider_name : Nom du fournisseur
        provider_id : ID de l'entite chez le fournisseur
        provider_data : Donnees opaques a conserver
        provider_link : URL de la fiche chez le fournisseur
    """

    provider_name: str = ""
    provider_id: str = ""
    provider_data: str = ""
    provider_link: str = ""


@dataclass
class ShowDetails:
    """Metadonnees detaillees d'une serie."""

    title: str
    overview: Optional[str] = None
    icon: Optional[str] = None
    fanart: Optional[str] = None
    website: Optional[str] = None
    trailer: Optional[str] = None
    premiered: Optional[int] = None
    rating: Optional[float] = None
    info: ProviderInfo = field(default_factory=ProviderInfo)


@dataclass
class SeasonDetails:
    """Metadonnees detaillees d'une saison."""

    title: str
    overview: Optional[str] = None
    icon: Optional[str] = None
    fanart: Optional[str] = None
    trailer: Optional[str] = None
    premiered: Optional[int] = None
    rating: Optional[float] = None
    info: ProviderInfo = field(default_factory=ProviderInfo)


@dataclass
class EpisodeDetails:
    """Metadonnees detaillees d'un episode."""

    title: str
    overview: Optional[str] = None
    icon: Optional[str] = None
    premiered: Optional[int] = None
    rating: Optional[float] = None
    info: ProviderInfo = field(default_factory=ProviderInfo)


@dataclass
class TagData:
    """Tag propose par un fournisseur (genre, studio, ...)."""

    name: str
    value: str
    icon: Optional[str] = None


@dataclass
class PersonData:
    """Personne proposee par un fournisseur (acteur, createur, ...)."""

    name: str
    role: Optional[str] = None


class IShowProvider(ABC):
    """
    Interface d'un fournisseur de metadonnees de series TV.

    Cycle de vie:
        provider = factory()
        provider.setup(settings)          # une fois, parametres du fournisseur
        await provider.search_show(title) # recherche sans liaison
        provider.configure(id, data)      # liaison a une serie
        await provider.fetch_show()       # details de la serie liee
        await provider.close()
    """

    name: str = ""

    @abstractmethod
    def setup(self, settings: dict[str, str]) -> None:
        """Initialise le fournisseur avec ses parametres (cle/valeur)."""
        ...

    @abstractmethod
    def configure(self, provider_id: str, provider_data: str) -> None:
        """Lie le fournisseur a une serie (ID et donnees opaques)."""
        ...

    @abstractmethod
    async def search_show(self, title: str) -> list[SearchCandidate]:
        """Recherche des series par titre."""
        ...

    @abstractmethod
    async def fetch_show(self) -> ShowDetails:
        """Recupere les details de la serie liee."""
        ...

    @abstractmethod
    async def fetch_season(self, season: int) -> SeasonDetails:
        """Recupere les details d'une saison de la serie liee."""
        ...

    @abstractmethod
    async def fetch_episode(self, season: int, episode: int) -> EpisodeDetails:
        """Recupere les details d'un episode de la serie liee."""
        ...

    @abstractmethod
    async def list_show_tags(self) -> list[TagData]:
        """Liste les tags de la serie liee."""
        ...

    @abstractmethod
    async def list_show_people(self) -> list[PersonData]:
        """Liste les personnes de la serie liee."""
        ...

    async def close(self) -> None:
        """Libere les ressources du fournisseur (clients HTTP, ...)."""
        return None
