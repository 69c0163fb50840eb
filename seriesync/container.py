"""
Container d'injection de dependances via dependency-injector.

Fournit une gestion centralisee des dependances pour les interfaces CLI et Web.
Un scan utilise une seule session SQLModel partagee par tous ses repositories:
build_scraper_service assemble le graphe complet autour de cette session.
"""

from dependency_injector import containers, providers
from sqlmodel import Session

from .adapters.file_system import FileSystemAdapter
from .adapters.providers.registry import ProviderRegistry
from .config import Settings
from .infrastructure.persistence.database import get_session, init_db
from .infrastructure.persistence.repositories import (
    SQLModelEpisodeRepository,
    SQLModelLibraryRepository,
    SQLModelPersonRepository,
    SQLModelProviderConfigRepository,
    SQLModelSearchResultRepository,
    SQLModelSeasonRepository,
    SQLModelShowRepository,
    SQLModelTagRepository,
    SQLModelVideoFileRepository,
)
from .services.matcher import MatcherService
from .services.reconciler import ShowReconciler
from .services.scan_orchestrator import ScanOrchestrator
from .services.scraper import ScraperService
from .services.selection import SelectionApplier, SelectionService


def build_scraper_service(
    session: Session,
    registry: ProviderRegistry,
    matcher: MatcherService,
    file_system: FileSystemAdapter,
) -> ScraperService:
    """
    Assemble le service de scan et de selection autour d'une session.

    Args :
        session : Session SQLModel partagee par les repositories
        registry : Registre des fournisseurs
        matcher : Service de selection automatique
        file_system : Adaptateur de parcours de la bibliotheque
    """
    show_repo = SQLModelShowRepository(session)
    season_repo = SQLModelSeasonRepository(session)
    episode_repo = SQLModelEpisodeRepository(session)
    tag_repo = SQLModelTagRepository(session)
    person_repo = SQLModelPersonRepository(session)
    search_repo = SQLModelSearchResultRepository(session)

    applier = SelectionApplier(
        show_repo=show_repo,
        season_repo=season_repo,
        episode_repo=episode_repo,
        tag_repo=tag_repo,
        person_repo=person_repo,
    )
    reconciler = ShowReconciler(
        show_repo=show_repo,
        season_repo=season_repo,
        episode_repo=episode_repo,
        video_file_repo=SQLModelVideoFileRepository(session),
        tag_repo=tag_repo,
        person_repo=person_repo,
        search_repo=search_repo,
        applier=applier,
        matcher=matcher,
        file_system=file_system,
        session=session,
    )
    orchestrator = ScanOrchestrator(
        library_repo=SQLModelLibraryRepository(session),
        show_repo=show_repo,
        provider_config_repo=SQLModelProviderConfigRepository(session),
        registry=registry,
        reconciler=reconciler,
        file_system=file_system,
    )
    return ScraperService(
        orchestrator=orchestrator,
        selection=SelectionService(search_repo=search_repo, applier=applier),
    )


def _discovered_registry() -> ProviderRegistry:
    registry = ProviderRegistry()
    registry.discover()
    return registry


class Container(containers.DeclarativeContainer):
    """Container DI de l'application.

    Utilisation :
        container = Container()
        container.database.init()  # Initialise la DB une fois
        scraper = container.scraper_service()
        report = await scraper.start_scan("tvs", 1, container.config().scan_config())
    """

    # Configuration - singleton charge une seule fois
    config = providers.Singleton(Settings)

    # Database - Resource pour initialisation unique
    database = providers.Resource(init_db)

    # Session factory - nouvelle session a chaque appel
    session = providers.Factory(lambda: next(get_session()))

    # Adapters
    file_system = providers.Singleton(FileSystemAdapter)
    provider_registry = providers.Singleton(_discovered_registry)

    # Repositories - Factory pour nouvelle instance avec session fraiche
    library_repository = providers.Factory(SQLModelLibraryRepository, session=session)
    show_repository = providers.Factory(SQLModelShowRepository, session=session)
    search_result_repository = providers.Factory(SQLModelSearchResultRepository, session=session)
    provider_config_repository = providers.Factory(
        SQLModelProviderConfigRepository, session=session
    )

    # Service de scoring (stateless - Singleton)
    matcher_service = providers.Singleton(
        MatcherService,
        threshold=config.provided.match_score_threshold,
    )

    # Scan et selection - Factory: une session par appel
    scraper_service = providers.Factory(
        build_scraper_service,
        session=session,
        registry=provider_registry,
        matcher=matcher_service,
        file_system=file_system,
    )
