"""
Reconciliation d'un dossier de bibliotheque avec le catalogue.

Pour chaque dossier racine (serie candidate), ShowReconciler fait evoluer la
serie dans les etats:

    UNKNOWN -> ADDED -> BOUND -> REFRESHED

- UNKNOWN : aucune serie au catalogue pour ce dossier, elle est creee
- ADDED : serie sans liaison fournisseur, recherche chez tous les fournisseurs
  puis selection automatique (auto_add) ou lot de candidats persiste
- BOUND : serie liee a un fournisseur
- REFRESHED : metadonnees rechargees pendant ce scan (serie, tags,
  personnes, saisons eligibles)

Une serie liee voit ensuite ses fichiers video rapproches des episodes, meme
lorsqu'elle est gelee (mode 0): seule l'actualisation des metadonnees est
bloquee par le gel.

Les erreurs fournisseur sont journalisees au point d'appel et traitees comme
une absence de donnees. Les erreurs de stockage interrompent la serie
courante et sont rapportees dans son EntityOutcome.
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional

from loguru import logger
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from seriesync.adapters.file_system import FileSystemAdapter
from seriesync.adapters.providers.registry import ProviderSet
from seriesync.config import ScanConfig
from seriesync.core.entities.media import Episode, Library, Season, Show, VideoFile
from seriesync.core.entities.search import SearchBatch, SearchCandidate, SelectionResult
from seriesync.core.exceptions import NoConfidentMatchError, ProviderNotFoundError
from seriesync.core.ports.providers import (
    EpisodeDetails,
    IShowProvider,
    SeasonDetails,
)
from seriesync.core.ports.repositories import (
    IEpisodeRepository,
    IPersonRepository,
    ISearchResultRepository,
    ISeasonRepository,
    IShowRepository,
    ITagRepository,
    IVideoFileRepository,
)
from seriesync.core.value_objects import MediaType, UpdateMode
from seriesync.services.filename_identifier import extract_season_episode
from seriesync.services.linking import link_person, link_tag
from seriesync.services.matcher import MatcherService
from seriesync.services.selection import SelectionApplier


class ShowState(str, Enum):
    """Etat d'une serie au cours de sa reconciliation."""

    UNKNOWN = "unknown"
    ADDED = "added"
    BOUND = "bound"
    REFRESHED = "refreshed"


class OutcomeStatus(str, Enum):
    """Resultat du traitement d'un dossier."""

    SUCCESS = "success"
    FAILED = "failed"
    SKIPPED = "skipped"


@dataclass
class EntityOutcome:
    """
    Resultat de la reconciliation d'un dossier.

    Attributs :
        folder : Nom du dossier (chemin relatif de la serie)
        show_id : ID de la serie, None si la creation a echoue
        state : Dernier etat atteint
        status : success, failed (erreur de stockage) ou skipped (serie gelee)
        error : Message d'erreur en cas d'echec
        episodes_created : Fichiers video enregistres pendant ce scan
        files_skipped : Fichiers ignores (numerotation absente, pas de donnees)
    """

    folder: str
    show_id: Optional[int] = None
    state: ShowState = ShowState.UNKNOWN
    status: OutcomeStatus = OutcomeStatus.SUCCESS
    error: Optional[str] = None
    episodes_created: int = 0
    files_skipped: int = 0


@dataclass
class ScanContext:
    """
    Contexte partage (en lecture) par les taches d'un scan.

    Attributs :
        library : Bibliotheque scannee
        root : Racine de la bibliotheque sur le disque
        providers : Fournisseurs de la session de scan
        config : Options du scan
    """

    library: Library
    root: Path
    providers: ProviderSet
    config: ScanConfig


class ShowReconciler:
    """
    Machine a etats de reconciliation d'une serie.

    Une instance peut servir plusieurs taches concurrentes: tout l'etat propre
    a une serie (saisons connues, fournisseur lie) est local a l'appel de
    reconcile().
    """

    def __init__(
        self,
        show_repo: IShowRepository,
        season_repo: ISeasonRepository,
        episode_repo: IEpisodeRepository,
        video_file_repo: IVideoFileRepository,
        tag_repo: ITagRepository,
        person_repo: IPersonRepository,
        search_repo: ISearchResultRepository,
        applier: SelectionApplier,
        matcher: MatcherService,
        file_system: Optional[FileSystemAdapter] = None,
        session: Optional[Session] = None,
    ) -> None:
        self._show_repo = show_repo
        self._season_repo = season_repo
        self._episode_repo = episode_repo
        self._video_file_repo = video_file_repo
        self._tag_repo = tag_repo
        self._person_repo = person_repo
        self._search_repo = search_repo
        self._applier = applier
        self._matcher = matcher
        self._file_system = file_system or FileSystemAdapter()
        self._session = session

    async def reconcile(
        self,
        context: ScanContext,
        folder: str,
        known: Optional[Show] = None,
    ) -> EntityOutcome:
        """
        Reconcilie un dossier racine de la bibliotheque.

        Args :
            context : Contexte du scan
            folder : Nom du dossier (relatif a la racine)
            known : Serie du catalogue pour ce dossier, None si inconnue

        Retourne :
            EntityOutcome du dossier (jamais d'exception pour une erreur de stockage)
        """
        outcome = EntityOutcome(folder=folder)
        try:
            await self._reconcile(context, folder, known, outcome)
        except SQLAlchemyError as e:
            outcome.status = OutcomeStatus.FAILED
            outcome.error = str(e)
            logger.error("Erreur de stockage pour {}: {}", folder, e)
            if self._session is not None:
                self._session.rollback()
        return outcome

    async def _reconcile(
        self,
        context: ScanContext,
        folder: str,
        known: Optional[Show],
        outcome: EntityOutcome,
    ) -> None:
        provider: Optional[IShowProvider] = None

        if known is None:
            show = self._show_repo.save(
                Show(title=folder, library_id=context.library.id, path=folder)
            )
            outcome.show_id = show.id
            outcome.state = ShowState.ADDED
            logger.info("Nouvelle serie: {}", folder)
            show, provider = await self._add(context, show, outcome)
        else:
            show = known
            outcome.show_id = show.id
            outcome.state = ShowState.BOUND if show.is_bound else ShowState.ADDED
            if not UpdateMode.is_eligible(show.update_mode):
                logger.debug("Serie {} non eligible (mode {})", show.title, show.update_mode)
                if not show.is_bound:
                    outcome.status = OutcomeStatus.SKIPPED
                    return
            elif show.is_bound:
                provider = self._bind(context, show, outcome)
                if provider is None:
                    return
                show = await self._refresh(show, provider, outcome)
            else:
                show, provider = await self._add(context, show, outcome)

        if not show.is_bound:
            return
        if provider is None:
            provider = self._bind(context, show, outcome)
            if provider is None:
                return
        await self._discover_episodes(context, show, provider, outcome)

    def _bind(
        self, context: ScanContext, show: Show, outcome: EntityOutcome
    ) -> Optional[IShowProvider]:
        """Cree l'instance de fournisseur liee a la serie."""
        try:
            return context.providers.bound(
                show.provider_name or "", show.provider_id or "", show.provider_data
            )
        except ProviderNotFoundError as e:
            outcome.status = OutcomeStatus.FAILED
            outcome.error = str(e)
            logger.error("Serie {}: {}", show.title, e)
            return None

    async def _search(self, context: ScanContext, title: str) -> list[SearchCandidate]:
        """Interroge tous les fournisseurs et concatene leurs resultats."""
        results: list[SearchCandidate] = []
        for name, provider in context.providers.search_providers():
            try:
                found = await provider.search_show(title)
            except Exception as e:
                logger.warning("Recherche {} chez {} en echec: {}", title, name, e)
                continue
            for candidate in found:
                if not candidate.provider_name:
                    candidate.provider_name = name
                results.append(candidate)
        return results

    async def _add(
        self, context: ScanContext, show: Show, outcome: EntityOutcome
    ) -> tuple[Show, Optional[IShowProvider]]:
        """
        Recherche une serie non liee chez les fournisseurs.

        Avec auto_add, le meilleur candidat est applique puis la serie est
        rafraichie. Sinon (ou sans candidat confiant), le lot de candidats
        remplace le lot precedent en attente de selection manuelle.
        """
        candidates = await self._search(context, show.title)

        if context.config.auto_add and candidates:
            try:
                best = self._matcher.select_best(candidates, show.title)
            except NoConfidentMatchError as e:
                logger.info(
                    "Aucune correspondance pour {} (meilleur score {:.0f})",
                    show.title,
                    e.best_score,
                )
            else:
                self._applier.apply(show.id, SelectionResult.from_candidate(best))
                show = self._show_repo.get_by_id(show.id) or show
                outcome.state = ShowState.BOUND
                logger.info("Serie {} liee a {}:{}", show.title, best.provider_name, best.provider_id)
                provider = self._bind(context, show, outcome)
                if provider is None:
                    return show, None
                return await self._refresh(show, provider, outcome), provider

        if candidates:
            self._search_repo.replace(
                SearchBatch(
                    media_type=MediaType.TVS.value,
                    media_id=show.id,
                    name=show.title,
                    candidates=candidates,
                )
            )
            logger.info("{} candidats en attente pour {}", len(candidates), show.title)
        else:
            # Un ancien lot ne doit plus pouvoir etre selectionne
            self._search_repo.delete(MediaType.TVS, show.id)
            logger.warning("Aucun resultat de recherche pour {}", show.title)
        return show, None

    async def _refresh(
        self, show: Show, provider: IShowProvider, outcome: EntityOutcome
    ) -> Show:
        """Recharge les metadonnees d'une serie liee, ses tags, personnes et saisons."""
        try:
            details = await provider.fetch_show()
        except Exception as e:
            logger.warning("Details de {} indisponibles: {}", show.title, e)
            return show

        show.title = details.title or show.title
        show.overview = details.overview
        show.icon = details.icon
        show.fanart = details.fanart
        show.website = details.website
        show.trailer = details.trailer
        show.premiered = details.premiered
        show.rating = details.rating
        show.provider_link = details.info.provider_link or show.provider_link
        show.provider_data = details.info.provider_data or show.provider_data
        show.update_mode = UpdateMode.UPDATED
        show = self._show_repo.save(show)
        outcome.state = ShowState.REFRESHED

        try:
            tags = await provider.list_show_tags()
        except Exception as e:
            logger.warning("Tags de {} indisponibles: {}", show.title, e)
            tags = []
        for tag in tags:
            link_tag(self._tag_repo, MediaType.TVS, show.id, tag)

        try:
            people = await provider.list_show_people()
        except Exception as e:
            logger.warning("Personnes de {} indisponibles: {}", show.title, e)
            people = []
        for person in people:
            link_person(self._person_repo, MediaType.TVS, show.id, person)

        await self._refresh_seasons(show, provider)
        logger.info("Serie {} mise a jour", show.title)
        return show

    async def _refresh_seasons(self, show: Show, provider: IShowProvider) -> None:
        for season in self._season_repo.list_by_show(show.id):
            if not UpdateMode.is_eligible(season.update_mode):
                continue
            details = await self._fetch_season(provider, show, season.season_number)
            if details is None:
                continue
            self._season_repo.save(_apply_season(season, details))

    async def _fetch_season(
        self, provider: IShowProvider, show: Show, number: int
    ) -> Optional[SeasonDetails]:
        try:
            return await provider.fetch_season(number)
        except Exception as e:
            logger.warning("Saison {} de {} indisponible: {}", number, show.title, e)
            return None

    async def _fetch_episode(
        self, provider: IShowProvider, show: Show, season: int, number: int
    ) -> Optional[EpisodeDetails]:
        try:
            return await provider.fetch_episode(season, number)
        except Exception as e:
            logger.warning(
                "Episode s{:02d}e{:02d} de {} indisponible: {}", season, number, show.title, e
            )
            return None

    async def _discover_episodes(
        self,
        context: ScanContext,
        show: Show,
        provider: IShowProvider,
        outcome: EntityOutcome,
    ) -> None:
        """Rapproche chaque fichier video de la serie d'un episode du catalogue."""
        # Saisons connues: accumulateur propre a cette serie
        known_seasons = {season.season_number for season in self._season_repo.list_by_show(show.id)}

        for path in self._file_system.list_video_files(context.root / show.path):
            relative = path.relative_to(context.root).as_posix()
            await self._process_file(context, show, provider, path, relative, known_seasons, outcome)

    async def _process_file(
        self,
        context: ScanContext,
        show: Show,
        provider: IShowProvider,
        path: Path,
        relative: str,
        known_seasons: set[int],
        outcome: EntityOutcome,
    ) -> None:
        video_file = self._video_file_repo.get_by_path(context.library.id, relative)
        if video_file is not None:
            episode = self._episode_repo.get_by_id(video_file.media_id)
            if episode is None or not UpdateMode.is_eligible(episode.update_mode):
                return
            details = await self._fetch_episode(
                provider, show, episode.season_number, episode.episode_number
            )
            if details is not None:
                self._episode_repo.save(_apply_episode(episode, details))
            self._video_file_repo.touch(video_file.id, self._file_system.get_size(path))
            return

        numbering = extract_season_episode(path.name)
        if numbering is None:
            logger.warning("Saison/episode introuvable dans {}", relative)
            outcome.files_skipped += 1
            return

        if numbering.season not in known_seasons:
            details = await self._fetch_season(provider, show, numbering.season)
            season = Season(show_id=show.id, season_number=numbering.season)
            if details is not None:
                season = _apply_season(season, details)
            else:
                season.title = f"Season {numbering.season}"
                season.update_mode = UpdateMode.UPDATED
            self._season_repo.save(season)
            known_seasons.add(numbering.season)

        existing = self._episode_repo.get_by_number(show.id, numbering.season, numbering.episode)
        if existing is not None:
            # Episode deja au catalogue: le fichier s'y rattache, le gel est respecte
            if UpdateMode.is_eligible(existing.update_mode):
                details = await self._fetch_episode(
                    provider, show, numbering.season, numbering.episode
                )
                if details is not None:
                    existing = self._episode_repo.save(_apply_episode(existing, details))
            self._register_file(context, show, path, relative, existing, outcome)
            return

        episode = Episode(
            show_id=show.id,
            season_number=numbering.season,
            episode_number=numbering.episode,
        )
        details = await self._fetch_episode(provider, show, numbering.season, numbering.episode)
        if details is not None:
            episode = _apply_episode(episode, details)
        elif context.config.add_unknown:
            episode.title = path.name
            episode.update_mode = UpdateMode.UPDATED
        else:
            logger.warning("Pas de donnees pour {}, fichier ignore", relative)
            outcome.files_skipped += 1
            return

        episode = self._episode_repo.save(episode)
        self._register_file(context, show, path, relative, episode, outcome)

    def _register_file(
        self,
        context: ScanContext,
        show: Show,
        path: Path,
        relative: str,
        episode: Episode,
        outcome: EntityOutcome,
    ) -> None:
        self._video_file_repo.add(
            VideoFile(
                library_id=context.library.id,
                path=relative,
                media_type=MediaType.TVS_EPISODE,
                media_id=episode.id,
                size_bytes=self._file_system.get_size(path),
            )
        )
        outcome.episodes_created += 1
        logger.debug(
            "Episode s{:02d}e{:02d} ajoute pour {}",
            episode.season_number,
            episode.episode_number,
            show.title,
        )


def _apply_season(season: Season, details: SeasonDetails) -> Season:
    season.title = details.title or season.title or f"Season {season.season_number}"
    season.overview = details.overview
    season.icon = details.icon
    season.fanart = details.fanart
    season.trailer = details.trailer
    season.premiered = details.premiered
    season.rating = details.rating
    season.provider_name = details.info.provider_name or None
    season.provider_id = details.info.provider_id or None
    season.provider_data = details.info.provider_data or None
    season.provider_link = details.info.provider_link or None
    season.update_mode = UpdateMode.UPDATED
    return season


def _apply_episode(episode: Episode, details: EpisodeDetails) -> Episode:
    episode.title = details.title or episode.title
    episode.overview = details.overview
    episode.icon = details.icon
    episode.premiered = details.premiered
    episode.rating = details.rating
    episode.provider_name = details.info.provider_name or None
    episode.provider_id = details.info.provider_id or None
    episode.provider_data = details.info.provider_data or None
    episode.provider_link = details.info.provider_link or None
    episode.update_mode = UpdateMode.UPDATED
    return episode
