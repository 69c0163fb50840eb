"""
Objets valeur immutables representant des concepts du domaine sans identite.

Exports :
- MediaType : Type de media (TVS, TVS_EPISODE, MOVIE)
- UpdateMode : Valeurs du mode de mise a jour (FROZEN, ENABLED, FORCE, UPDATED)
- EpisodeNumbering : Couple (saison, episode) extrait d'un nom de fichier
"""

from seriesync.core.value_objects.media_type import (
    EpisodeNumbering,
    MediaType,
    UpdateMode,
)

__all__ = [
    "EpisodeNumbering",
    "MediaType",
    "UpdateMode",
]
