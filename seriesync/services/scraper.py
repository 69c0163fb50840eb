"""
Points d'entree du moteur: scan d'une bibliotheque et selection manuelle.

Seules les series TV ("tvs") sont prises en charge. Tout autre type de media
(films, scan 3D) echoue immediatement, avant toute lecture du catalogue.
"""

from typing import Optional, Union

from loguru import logger

from seriesync.config import ScanConfig
from seriesync.core.entities.search import SearchCandidate
from seriesync.core.exceptions import ConfigurationError, UnsupportedMediaTypeError
from seriesync.core.value_objects import MediaType
from seriesync.services.scan_orchestrator import ScanOrchestrator, ScanReport
from seriesync.services.selection import SelectionService


def parse_media_type(value: Union[str, MediaType]) -> MediaType:
    """
    Convertit un type de media (valeur ou enum).

    Raises :
        UnsupportedMediaTypeError : si la valeur est inconnue
    """
    if isinstance(value, MediaType):
        return value
    try:
        return MediaType(value.strip().lower())
    except ValueError as e:
        raise UnsupportedMediaTypeError(value) from e


class ScraperService:
    """
    Facade des deux points d'entree exposes (CLI et HTTP).
    """

    def __init__(self, orchestrator: ScanOrchestrator, selection: SelectionService) -> None:
        self._orchestrator = orchestrator
        self._selection = selection

    async def start_scan(
        self,
        media_type: Union[str, MediaType],
        library_id: Optional[int],
        config: ScanConfig,
    ) -> ScanReport:
        """
        Lance le scan d'une bibliotheque.

        Raises :
            UnsupportedMediaTypeError : si le type n'est pas "tvs"
            ConfigurationError : si aucune bibliotheque n'est donnee
            ScanAbortedError : si le scan ne peut pas commencer
        """
        kind = parse_media_type(media_type)
        if kind != MediaType.TVS:
            raise UnsupportedMediaTypeError(kind.value)
        if not library_id:
            raise ConfigurationError("library id is required")

        logger.info("Scan {} demande pour la bibliotheque {}", kind.value, library_id)
        return await self._orchestrator.scan(library_id, config)

    def select_scraper_result(
        self,
        media_type: Union[str, MediaType],
        media_id: int,
        index: int,
    ) -> SearchCandidate:
        """
        Applique le candidat d'index donne d'un lot persiste.

        Raises :
            UnsupportedMediaTypeError : si le type n'est pas "tvs"
            SelectionError : si aucun lot n'existe ou si l'index est invalide
        """
        return self._selection.select(parse_media_type(media_type), media_id, index)

    def pending_results(
        self, media_type: Union[str, MediaType], media_id: int
    ) -> list[SearchCandidate]:
        """Candidats en attente de selection pour un media."""
        return self._selection.pending(parse_media_type(media_type), media_id)
