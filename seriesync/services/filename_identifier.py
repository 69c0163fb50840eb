r"""
Extraction du couple (saison, episode) depuis un nom de fichier.

Deux motifs independants, insensibles a la casse:
- saison : premier entier apres "S" et avant "E" (s(\d+)e)
- episode : premier entier apres le "E" qui suit la saison (s\d+e(\d+))

Les deux doivent correspondre: aucune inference partielle (saison seule ou
episode seul) n'est faite.
"""

import re
from typing import Optional

from seriesync.core.value_objects import EpisodeNumbering

SEASON_PATTERN = re.compile(r"s(\d+)e", re.IGNORECASE)
EPISODE_PATTERN = re.compile(r"s\d+e(\d+)", re.IGNORECASE)


def extract_season_episode(filename: str) -> Optional[EpisodeNumbering]:
    """
    Extrait la numerotation d'un episode.

    Exemples :
        "Show.Name.S02E05.mkv" -> EpisodeNumbering(season=2, episode=5)
        "Show.Name.Episode5.mkv" -> None

    Retourne :
        EpisodeNumbering, ou None si la saison ou l'episode est absent
    """
    season_match = SEASON_PATTERN.search(filename)
    episode_match = EPISODE_PATTERN.search(filename)
    if not season_match or not episode_match:
        return None
    return EpisodeNumbering(
        season=int(season_match.group(1)),
        episode=int(episode_match.group(1)),
    )
