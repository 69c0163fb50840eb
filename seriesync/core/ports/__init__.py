"""
Ports (interfaces abstraites) definissant les contrats pour les adaptateurs.

Ports repository : Contrats de persistance du catalogue
- ILibraryRepository, IShowRepository, ISeasonRepository, IEpisodeRepository
- IVideoFileRepository, ITagRepository, IPersonRepository
- ISearchResultRepository, IProviderConfigRepository

Ports fournisseur : Contrat des sources de metadonnees externes
- IShowProvider : Recherche et details serie/saison/episode
- ShowDetails, SeasonDetails, EpisodeDetails, TagData, PersonData, ProviderInfo
"""

from seriesync.core.ports.providers import (
    EpisodeDetails,
    IShowProvider,
    PersonData,
    ProviderInfo,
    SeasonDetails,
    ShowDetails,
    TagData,
)
from seriesync.core.ports.repositories import (
    IEpisodeRepository,
    ILibraryRepository,
    IPersonRepository,
    IProviderConfigRepository,
    ISearchResultRepository,
    ISeasonRepository,
    IShowRepository,
    ITagRepository,
    IVideoFileRepository,
)

__all__ = [
    # Repositories
    "ILibraryRepository",
    "IShowRepository",
    "ISeasonRepository",
    "IEpisodeRepository",
    "IVideoFileRepository",
    "ITagRepository",
    "IPersonRepository",
    "ISearchResultRepository",
    "IProviderConfigRepository",
    # Fournisseurs
    "IShowProvider",
    "ShowDetails",
    "SeasonDetails",
    "EpisodeDetails",
    "TagData",
    "PersonData",
    "ProviderInfo",
]
