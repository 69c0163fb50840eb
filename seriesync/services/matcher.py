"""
Service de correspondance entre un titre et des candidats de recherche.

Le score est calcule avec token_sort_ratio (rapidfuzz): insensible a la
casse, a l'ordre des mots et a la ponctuation. Le meilleur candidat n'est
accepte que si son score depasse strictement le seuil (85 par defaut).

La selection est deterministe: a score egal, le premier candidat dans
l'ordre d'entree l'emporte.
"""

from rapidfuzz import fuzz, utils

from seriesync.core.entities.search import SearchCandidate
from seriesync.core.exceptions import NoConfidentMatchError
from seriesync.utils.constants import DEFAULT_MATCH_THRESHOLD


def calculate_title_score(query_title: str, candidate_title: str) -> float:
    """
    Calcule la similarite entre deux titres (0-100).

    Utilise token_sort_ratio pour l'independance a l'ordre des mots,
    normalise via default_process (minuscules, ponctuation retiree).
    """
    return fuzz.token_sort_ratio(
        query_title, candidate_title, processor=utils.default_process
    )


def select_best_candidate(
    candidates: list[SearchCandidate],
    title: str,
    year: int = 0,
    threshold: float = DEFAULT_MATCH_THRESHOLD,
) -> SearchCandidate:
    """
    Selectionne le candidat correspondant le mieux au titre.

    Args :
        candidates : Candidats dans l'ordre des fournisseurs
        title : Titre recherche
        year : Annee de premiere diffusion (0 = pas de filtre)
        threshold : Score a depasser strictement

    Retourne :
        Le premier candidat atteignant le score maximum

    Raises :
        NoConfidentMatchError : si aucun candidat ne depasse le seuil
    """
    if year > 0:
        candidates = [c for c in candidates if c.premiere_year == year]

    best = None
    best_score = 0.0
    for candidate in candidates:
        score = calculate_title_score(title, candidate.title)
        if best is None or score > best_score:
            best = candidate
            best_score = score

    if best is None or best_score <= threshold:
        raise NoConfidentMatchError(title, best_score)
    return best


class MatcherService:
    """
    Service de selection automatique injectable.

    Porte le seuil d'acceptation configure (match_score_threshold).
    """

    def __init__(self, threshold: float = DEFAULT_MATCH_THRESHOLD) -> None:
        self._threshold = threshold

    @property
    def threshold(self) -> float:
        return self._threshold

    def score(self, title: str, candidate: SearchCandidate) -> float:
        """Score d'un candidat pour un titre (0-100)."""
        return calculate_title_score(title, candidate.title)

    def select_best(
        self, candidates: list[SearchCandidate], title: str, year: int = 0
    ) -> SearchCandidate:
        """Selectionne le meilleur candidat (voir select_best_candidate)."""
        return select_best_candidate(candidates, title, year, self._threshold)
