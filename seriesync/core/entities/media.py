"""
Entites du catalogue media.

Entites representant la bibliotheque, les series, saisons, episodes et
fichiers video, ainsi que les entites de reference (tags, personnes)
liees aux series.
"""

from dataclasses import dataclass
from typing import Optional

from seriesync.core.value_objects import MediaType, UpdateMode


@dataclass
class Library:
    """
    Bibliotheque de medias.

    Lue une seule fois au debut d'un scan, jamais modifiee par le moteur.

    Attributs :
        id : ID de la bibliotheque
        path : Chemin racine sur le disque
        name : Nom d'affichage
    """

    id: int
    path: str
    name: str = ""


@dataclass
class Show:
    """
    Serie TV du catalogue.

    Creee lorsqu'un dossier racine de la bibliotheque n'a pas d'entree,
    modifiee a chaque (re)chargement des metadonnees du fournisseur.

    Attributs :
        id : ID interne (None tant que non persistee)
        title : Titre (nom du dossier a la creation, puis titre fournisseur)
        library_id : ID de la bibliotheque
        path : Chemin relatif a la racine de la bibliotheque
        provider_name : Nom du fournisseur lie
        provider_id : ID de la serie chez le fournisseur
        provider_data : Donnees opaques du fournisseur
        update_mode : Mode de mise a jour (voir UpdateMode)
        overview : Resume
        premiered : Date de premiere diffusion (timestamp unix)
        rating : Note
    """

    id: Optional[int] = None
    title: str = ""
    library_id: int = 0
    path: str = ""
    provider_name: Optional[str] = None
    provider_id: Optional[str] = None
    provider_data: Optional[str] = None
    update_mode: int = UpdateMode.ENABLED
    overview: Optional[str] = None
    premiered: Optional[int] = None
    rating: Optional[float] = None
    icon: Optional[str] = None
    fanart: Optional[str] = None
    website: Optional[str] = None
    trailer: Optional[str] = None
    provider_link: Optional[str] = None

    @property
    def is_bound(self) -> bool:
        """Indique si un fournisseur est lie a la serie."""
        return bool(self.provider_id) and bool((self.provider_name or "").strip())


@dataclass
class Season:
    """
    Saison d'une serie, unique par (show_id, season_number).
    """

    id: Optional[int] = None
    show_id: int = 0
    season_number: int = 0
    title: str = ""
    overview: Optional[str] = None
    icon: Optional[str] = None
    fanart: Optional[str] = None
    trailer: Optional[str] = None
    premiered: Optional[int] = None
    rating: Optional[float] = None
    provider_link: Optional[str] = None
    provider_name: Optional[str] = None
    provider_id: Optional[str] = None
    provider_data: Optional[str] = None
    update_mode: int = UpdateMode.ENABLED


@dataclass
class Episode:
    """
    Episode d'une serie, unique par (show_id, season_number, episode_number).
    """

    id: Optional[int] = None
    show_id: int = 0
    season_number: int = 0
    episode_number: int = 0
    title: str = ""
    overview: Optional[str] = None
    icon: Optional[str] = None
    provider_link: Optional[str] = None
    premiered: Optional[int] = None
    rating: Optional[float] = None
    provider_name: Optional[str] = None
    provider_id: Optional[str] = None
    provider_data: Optional[str] = None
    update_mode: int = UpdateMode.ENABLED


@dataclass
class VideoFile:
    """
    Association entre un fichier video et une entite media.

    Creee une seule fois par fichier decouvert; le chemin est relatif
    a la racine de la bibliotheque.
    """

    id: Optional[int] = None
    library_id: int = 0
    path: str = ""
    media_type: MediaType = MediaType.TVS_EPISODE
    media_id: int = 0
    size_bytes: int = 0


@dataclass
class Tag:
    """Tag de reference, dedoublonne par (name, value)."""

    id: Optional[int] = None
    name: str = ""
    value: str = ""
    icon: Optional[str] = None


@dataclass
class Person:
    """Personne de reference, dedoublonnee par nom."""

    id: Optional[int] = None
    name: str = ""
