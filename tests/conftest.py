"""
Fixtures pytest partagees pour les tests SerieSync.

Ce module contient les fixtures communes utilisees dans les tests:
- Engine SQLite en memoire (StaticPool) et session SQLModel
- Fournisseur de metadonnees en memoire (FakeProvider) pilote par un FakeCatalog
- Bibliotheque temporaire et service de scan assemble
- Compteur d'ecritures SQL (INSERT/UPDATE/DELETE)
"""

import asyncio
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Iterator, Optional

import pytest
from sqlalchemy import event
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from seriesync.adapters.file_system import FileSystemAdapter
from seriesync.adapters.providers.registry import ProviderRegistry
from seriesync.config import Settings
from seriesync.container import build_scraper_service
from seriesync.core.entities.media import Library
from seriesync.core.entities.search import SearchCandidate
from seriesync.core.ports.providers import (
    EpisodeDetails,
    IShowProvider,
    PersonData,
    ProviderInfo,
    SeasonDetails,
    ShowDetails,
    TagData,
)
from seriesync.core.value_objects import MediaType
from seriesync.infrastructure.persistence import models  # noqa: F401
from seriesync.infrastructure.persistence.repositories import (
    SQLModelLibraryRepository,
    SQLModelProviderConfigRepository,
)
from seriesync.services.matcher import MatcherService
from seriesync.services.scraper import ScraperService


@dataclass
class FakeCatalog:
    """
    Donnees servies par FakeProvider.

    Les cles sont l'ID fournisseur de la serie (shows, tags, people), suivi
    des numeros de saison/episode (seasons, episodes). Une cle absente fait
    echouer l'appel correspondant, comme un fournisseur sans donnees.
    """

    candidates: list[SearchCandidate] = field(default_factory=list)
    shows: dict[str, ShowDetails] = field(default_factory=dict)
    seasons: dict[tuple[str, int], SeasonDetails] = field(default_factory=dict)
    episodes: dict[tuple[str, int, int], EpisodeDetails] = field(default_factory=dict)
    tags: dict[str, list[TagData]] = field(default_factory=dict)
    people: dict[str, list[PersonData]] = field(default_factory=dict)
    fail_search: bool = False
    delay: float = 0.0
    calls: list[tuple] = field(default_factory=list)
    instances: list["FakeProvider"] = field(default_factory=list)

    def add_show(self, provider_id: str, title: str, premiered: int = 0) -> None:
        """Declare une serie trouvable par recherche et par details."""
        self.candidates.append(
            SearchCandidate(
                title=title,
                provider_name="fake",
                provider_id=provider_id,
                provider_data=f"data-{provider_id}",
                premiered=premiered,
            )
        )
        self.shows[provider_id] = ShowDetails(
            title=title,
            overview=f"Resume de {title}",
            premiered=premiered or None,
            info=ProviderInfo("fake", provider_id, f"data-{provider_id}", f"https://fake/{provider_id}"),
        )

    def add_episode(self, provider_id: str, season: int, episode: int, title: str) -> None:
        self.episodes[(provider_id, season, episode)] = EpisodeDetails(
            title=title,
            info=ProviderInfo("fake", f"{provider_id}-{season}-{episode}"),
        )

    def add_season(self, provider_id: str, season: int, title: str) -> None:
        self.seasons[(provider_id, season)] = SeasonDetails(
            title=title,
            info=ProviderInfo("fake", f"{provider_id}-{season}"),
        )


class FakeProvider(IShowProvider):
    """Fournisseur en memoire, une instance par appel de la fabrique."""

    def __init__(self, catalog: FakeCatalog) -> None:
        self.catalog = catalog
        self.settings: dict[str, str] = {}
        self.provider_id: Optional[str] = None
        self.closed = False
        catalog.instances.append(self)

    def setup(self, settings: dict[str, str]) -> None:
        self.settings = settings

    def configure(self, provider_id: str, provider_data: str) -> None:
        self.provider_id = provider_id

    async def _pause(self) -> None:
        if self.catalog.delay:
            await asyncio.sleep(self.catalog.delay)

    async def search_show(self, title: str) -> list[SearchCandidate]:
        self.catalog.calls.append(("search", title))
        await self._pause()
        if self.catalog.fail_search:
            raise ConnectionError("search unavailable")
        return [SearchCandidate.from_dict(c.to_dict()) for c in self.catalog.candidates]

    async def fetch_show(self) -> ShowDetails:
        self.catalog.calls.append(("show", self.provider_id))
        await self._pause()
        return self.catalog.shows[self.provider_id]

    async def fetch_season(self, season: int) -> SeasonDetails:
        self.catalog.calls.append(("season", self.provider_id, season))
        return self.catalog.seasons[(self.provider_id, season)]

    async def fetch_episode(self, season: int, episode: int) -> EpisodeDetails:
        self.catalog.calls.append(("episode", self.provider_id, season, episode))
        return self.catalog.episodes[(self.provider_id, season, episode)]

    async def list_show_tags(self) -> list[TagData]:
        return list(self.catalog.tags.get(self.provider_id, []))

    async def list_show_people(self) -> list[PersonData]:
        return list(self.catalog.people.get(self.provider_id, []))

    async def close(self) -> None:
        self.closed = True


@dataclass
class WriteCounter:
    """Compte les requetes d'ecriture executees sur l'engine."""

    statements: list[str] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.statements)

    def reset(self) -> None:
        self.statements.clear()


@pytest.fixture
def engine():
    """Engine SQLite en memoire partage par toutes les sessions du test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session(engine) -> Iterator[Session]:
    with Session(engine) as session:
        yield session


@pytest.fixture
def write_counter(engine) -> WriteCounter:
    """Enregistre chaque INSERT, UPDATE ou DELETE emis sur l'engine."""
    counter = WriteCounter()

    def before_cursor_execute(conn, cursor, statement, parameters, context, executemany):
        if statement.lstrip().split(" ", 1)[0].upper() in {"INSERT", "UPDATE", "DELETE"}:
            counter.statements.append(statement)

    event.listen(engine, "before_cursor_execute", before_cursor_execute)
    yield counter
    event.remove(engine, "before_cursor_execute", before_cursor_execute)


@pytest.fixture
def catalog() -> FakeCatalog:
    return FakeCatalog()


@pytest.fixture
def registry(catalog: FakeCatalog) -> ProviderRegistry:
    """Registre contenant le fournisseur "fake"."""
    registry = ProviderRegistry()
    registry.register("fake", lambda: FakeProvider(catalog))
    return registry


@pytest.fixture
def library_root(tmp_path: Path) -> Path:
    root = tmp_path / "series"
    root.mkdir()
    return root


@pytest.fixture
def library(session: Session, library_root: Path) -> Library:
    """Bibliotheque de test, avec le fournisseur "fake" active pour les series."""
    library = SQLModelLibraryRepository(session).add(str(library_root), name="Series")
    SQLModelProviderConfigRepository(session).save("fake", MediaType.TVS, {"apikey": "secret"})
    return library


@pytest.fixture
def scraper(session: Session, registry: ProviderRegistry, library: Library) -> ScraperService:
    return build_scraper_service(session, registry, MatcherService(), FileSystemAdapter())


@pytest.fixture
def make_file(library_root: Path) -> Callable[[str], Path]:
    """Cree un fichier (vide) relatif a la racine de la bibliotheque."""

    def _make(relative: str, content: bytes = b"x") -> Path:
        path = library_root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(content)
        return path

    return _make


@pytest.fixture
def test_settings(tmp_path: Path) -> Settings:
    """Settings de test avec chemins temporaires."""
    return Settings(
        database_url=f"sqlite:///{tmp_path}/test.db",
        auto_add=False,
        add_unknown=True,
        max_concurrent_scans=1,
        match_score_threshold=85,
        log_file=tmp_path / "test.log",
    )
