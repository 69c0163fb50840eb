"""
Objets valeur pour la classification des medias et l'etat de mise a jour.

- MediaType : type de media manipule par le catalogue
- UpdateMode : valeurs entieres du mode de mise a jour des series/saisons/episodes
- EpisodeNumbering : couple (saison, episode) extrait d'un nom de fichier
"""

from dataclasses import dataclass
from enum import Enum


class MediaType(str, Enum):
    """Type de media gere par le catalogue.

    Valeurs:
        TVS: Serie TV (dossier racine de la bibliotheque)
        TVS_EPISODE: Episode de serie (fichier video)
        MOVIE: Film (declare mais non supporte par le scan)
    """

    TVS = "tvs"
    TVS_EPISODE = "tvs_episode"
    MOVIE = "movie"


class UpdateMode:
    """
    Valeurs du mode de mise a jour d'une entite.

    Une entite est eligible au rafraichissement si son mode est > 0.
    UPDATED marque une entite rafraichie lors d'un scan: elle n'est plus
    eligible tant qu'une selection (FORCE) ne la reactive pas.
    """

    UPDATED = -1
    FROZEN = 0
    ENABLED = 1
    FORCE = 2

    @staticmethod
    def is_eligible(mode: int) -> bool:
        """Indique si une entite avec ce mode peut etre rafraichie."""
        return mode > 0


@dataclass(frozen=True)
class EpisodeNumbering:
    """
    Numerotation d'un episode extraite d'un nom de fichier.

    Attributs:
        season: Numero de saison (entier positif ou nul)
        episode: Numero d'episode dans la saison
    """

    season: int
    episode: int

    @property
    def label(self) -> str:
        """Libelle court au format s01e02."""
        return f"s{self.season:02d}e{self.episode:02d}"
