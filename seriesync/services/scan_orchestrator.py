"""
Orchestration du scan d'une bibliotheque de series.

Le scan lit une seule fois la bibliotheque, le catalogue de ses series et la
liste de ses dossiers racine, puis applique la reconciliation a chaque
dossier:

- max_concurrent_scans <= 1 : dossiers traites un par un, dans l'ordre du listing
- sinon : au plus max_concurrent_scans dossiers en cours simultanement
  (asyncio.Semaphore), le scan attend la fin de tous les dossiers

L'echec d'un dossier est journalise et rapporte dans le ScanReport sans
interrompre le scan. Seuls les echecs avant tout traitement (bibliotheque,
catalogue, listing) levent ScanAbortedError.
"""

import asyncio
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Mapping, Optional

from loguru import logger
from sqlalchemy.exc import SQLAlchemyError

from seriesync.adapters.file_system import FileSystemAdapter
from seriesync.adapters.providers.registry import ProviderRegistry, ProviderSet
from seriesync.config import ScanConfig
from seriesync.core.entities.media import Show
from seriesync.core.exceptions import ScanAbortedError
from seriesync.core.ports.repositories import (
    ILibraryRepository,
    IProviderConfigRepository,
    IShowRepository,
)
from seriesync.core.value_objects import MediaType
from seriesync.services.reconciler import (
    EntityOutcome,
    OutcomeStatus,
    ScanContext,
    ShowReconciler,
)


@dataclass
class ScanReport:
    """
    Bilan d'un scan de bibliotheque.

    Attributs :
        library_id : Bibliotheque scannee
        outcomes : Un resultat par dossier racine, dans l'ordre du listing
    """

    library_id: int
    outcomes: list[EntityOutcome] = field(default_factory=list)

    def _count(self, status: OutcomeStatus) -> int:
        return sum(1 for outcome in self.outcomes if outcome.status == status)

    @property
    def succeeded(self) -> int:
        return self._count(OutcomeStatus.SUCCESS)

    @property
    def failed(self) -> int:
        return self._count(OutcomeStatus.FAILED)

    @property
    def skipped(self) -> int:
        return self._count(OutcomeStatus.SKIPPED)

    @property
    def episodes_created(self) -> int:
        return sum(outcome.episodes_created for outcome in self.outcomes)


class ScanOrchestrator:
    """
    Scan d'une bibliotheque de series TV.

    Le registre de fournisseurs est possede par l'orchestrateur: une session
    de fournisseurs est ouverte au debut de chaque scan et fermee a la fin.
    """

    def __init__(
        self,
        library_repo: ILibraryRepository,
        show_repo: IShowRepository,
        provider_config_repo: IProviderConfigRepository,
        registry: ProviderRegistry,
        reconciler: ShowReconciler,
        file_system: Optional[FileSystemAdapter] = None,
    ) -> None:
        self._library_repo = library_repo
        self._show_repo = show_repo
        self._provider_config_repo = provider_config_repo
        self._registry = registry
        self._reconciler = reconciler
        self._file_system = file_system or FileSystemAdapter()

    async def scan(self, library_id: int, config: ScanConfig) -> ScanReport:
        """
        Scanne une bibliotheque.

        Les sous-repertoires caches (nom commencant par ".") ne sont pas
        des series et ne sont pas traites.

        Args :
            library_id : ID de la bibliotheque
            config : Options du scan

        Retourne :
            ScanReport avec un EntityOutcome par sous-repertoire

        Raises :
            ScanAbortedError : si le scan ne peut pas commencer
        """
        try:
            library = self._library_repo.get_by_id(library_id)
            if library is None:
                raise ScanAbortedError(f"library {library_id} not found")
            # Instantane partage, non mis a jour pendant le scan
            known: Mapping[str, Show] = MappingProxyType(
                {show.path: show for show in self._show_repo.list_by_library(library.id)}
            )
            names, settings = self._provider_config_repo.list_enabled(MediaType.TVS)
        except SQLAlchemyError as e:
            raise ScanAbortedError(f"catalog read failed: {e}") from e

        root = Path(library.path)
        try:
            folders = [folder.name for folder in self._file_system.list_directories(root)]
        except OSError as e:
            raise ScanAbortedError(f"cannot list {root}: {e}") from e

        logger.info(
            "Scan de la bibliotheque {} ({} dossiers, {} series connues)",
            library.id,
            len(folders),
            len(known),
        )

        providers: Optional[ProviderSet] = None
        try:
            providers = self._registry.open_session(names, settings)
            context = ScanContext(library=library, root=root, providers=providers, config=config)
            if config.max_concurrent_scans <= 1:
                outcomes = []
                for folder in folders:
                    outcomes.append(await self._run(context, folder, known))
            else:
                semaphore = asyncio.Semaphore(config.max_concurrent_scans)

                async def admitted(folder: str) -> EntityOutcome:
                    async with semaphore:
                        return await self._run(context, folder, known)

                outcomes = list(await asyncio.gather(*(admitted(folder) for folder in folders)))
        finally:
            if providers is not None:
                await providers.close()

        report = ScanReport(library_id=library.id, outcomes=outcomes)
        logger.info(
            "Scan termine: {} succes, {} echecs, {} ignores, {} episodes ajoutes",
            report.succeeded,
            report.failed,
            report.skipped,
            report.episodes_created,
        )
        return report

    async def _run(
        self, context: ScanContext, folder: str, known: Mapping[str, Show]
    ) -> EntityOutcome:
        try:
            return await self._reconciler.reconcile(context, folder, known.get(folder))
        except Exception as e:
            logger.exception("Echec du traitement de {}", folder)
            return EntityOutcome(folder=folder, status=OutcomeStatus.FAILED, error=str(e))
