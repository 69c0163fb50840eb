"""
Application d'une liaison fournisseur a une serie.

SelectionApplier est le point de convergence de la selection automatique
(reconciliation avec auto_add) et de la selection manuelle (index dans un
lot de candidats persiste). L'application invalide tout ce qui derive de la
liaison precedente pour que le prochain rafraichissement reconstruise
saisons, episodes, tags et personnes depuis le nouveau fournisseur.
"""

from loguru import logger

from seriesync.core.entities.search import SearchCandidate, SelectionResult
from seriesync.core.exceptions import SelectionError, UnsupportedMediaTypeError
from seriesync.core.ports.repositories import (
    IEpisodeRepository,
    IPersonRepository,
    ISearchResultRepository,
    ISeasonRepository,
    IShowRepository,
    ITagRepository,
)
from seriesync.core.value_objects import MediaType, UpdateMode


class SelectionApplier:
    """
    Applique une liaison fournisseur a une serie.

    Ecritures, dans cet ordre:
    1. liaison de la serie, mode FORCE
    2. saisons: liaison effacee, mode FORCE
    3. episodes: liaison effacee, mode FORCE
    4. suppression des liens de tags
    5. suppression des liens de personnes

    Aucune transaction englobante: une erreur interrompt la sequence et
    remonte a l'appelant. Rejouer la meme selection retablit la coherence.
    """

    def __init__(
        self,
        show_repo: IShowRepository,
        season_repo: ISeasonRepository,
        episode_repo: IEpisodeRepository,
        tag_repo: ITagRepository,
        person_repo: IPersonRepository,
    ) -> None:
        self._show_repo = show_repo
        self._season_repo = season_repo
        self._episode_repo = episode_repo
        self._tag_repo = tag_repo
        self._person_repo = person_repo

    def apply(self, show_id: int, selection: SelectionResult) -> None:
        """Applique la liaison et invalide les associations de la serie."""
        self._show_repo.set_binding(show_id, selection, UpdateMode.FORCE)
        seasons = self._season_repo.reset_all_for_show(show_id, UpdateMode.FORCE)
        episodes = self._episode_repo.reset_all_for_show(show_id, UpdateMode.FORCE)
        tags = self._tag_repo.delete_links(MediaType.TVS, show_id)
        people = self._person_repo.delete_links(MediaType.TVS, show_id)
        logger.debug(
            "Liaison {}:{} appliquee a la serie {} "
            "({} saisons, {} episodes reinitialises, {} tags, {} personnes retires)",
            selection.provider_name,
            selection.provider_id,
            show_id,
            seasons,
            episodes,
            tags,
            people,
        )


class SelectionService:
    """
    Selection manuelle d'un candidat dans un lot persiste.
    """

    def __init__(
        self,
        search_repo: ISearchResultRepository,
        applier: SelectionApplier,
    ) -> None:
        self._search_repo = search_repo
        self._applier = applier

    def pending(self, media_type: MediaType, media_id: int) -> list[SearchCandidate]:
        """Retourne les candidats en attente pour un media (vide si aucun lot)."""
        batch = self._search_repo.get(media_type, media_id)
        if batch is None:
            return []
        return batch.candidates

    def select(self, media_type: MediaType, media_id: int, index: int) -> SearchCandidate:
        """
        Applique le candidat d'index donne puis supprime le lot.

        L'existence du lot et la validite de l'index sont verifiees avant
        toute ecriture.

        Raises :
            UnsupportedMediaTypeError : si le type n'est pas une serie
            SelectionError : si aucun lot n'existe ou si l'index est invalide
        """
        if media_type != MediaType.TVS:
            raise UnsupportedMediaTypeError(media_type)

        batch = self._search_repo.get(media_type, media_id)
        if batch is None:
            raise SelectionError(f"no search results for {media_type.value} {media_id}")
        if index < 0 or index >= len(batch.candidates):
            raise SelectionError(
                f"index {index} out of range ({len(batch.candidates)} results)"
            )

        candidate = batch.candidates[index]
        self._applier.apply(media_id, SelectionResult.from_candidate(candidate))
        self._search_repo.delete(media_type, media_id)
        logger.info(
            "Candidat {} ({}:{}) selectionne pour {} {}",
            candidate.title,
            candidate.provider_name,
            candidate.provider_id,
            media_type.value,
            media_id,
        )
        return candidate
