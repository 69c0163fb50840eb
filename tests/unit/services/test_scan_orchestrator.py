"""
Tests de l'orchestration du scan (ScanOrchestrator).

Couvre:
- Borne de concurrence et traitement unique de chaque dossier
- Ordre du listing en mode sequentiel
- Echecs avant traitement (ScanAbortedError) et echecs par dossier
- Fermeture des fournisseurs de la session de scan
"""

import asyncio
from unittest.mock import MagicMock

import pytest

from seriesync.adapters.file_system import FileSystemAdapter
from seriesync.config import ScanConfig
from seriesync.core.entities.media import Show
from seriesync.core.exceptions import ScanAbortedError
from seriesync.core.value_objects import MediaType
from seriesync.infrastructure.persistence.repositories import (
    SQLModelLibraryRepository,
    SQLModelProviderConfigRepository,
    SQLModelShowRepository,
)
from seriesync.services.reconciler import EntityOutcome, OutcomeStatus
from seriesync.services.scan_orchestrator import ScanOrchestrator, ScanReport


class TrackingReconciler:
    """Reconciliateur factice mesurant le nombre de dossiers en cours."""

    def __init__(self, delay: float = 0.01, failing: frozenset = frozenset()) -> None:
        self.delay = delay
        self.failing = failing
        self.in_flight = 0
        self.peak = 0
        self.seen: list[str] = []
        self.known: dict = {}

    async def reconcile(self, context, folder, known=None):
        self.in_flight += 1
        self.peak = max(self.peak, self.in_flight)
        self.seen.append(folder)
        self.known[folder] = known
        try:
            await asyncio.sleep(self.delay)
            if folder in self.failing:
                raise RuntimeError(f"boom {folder}")
            return EntityOutcome(folder=folder, episodes_created=1)
        finally:
            self.in_flight -= 1


@pytest.fixture
def folders(library_root):
    names = [f"Show {i:02d}" for i in range(10)]
    for name in names:
        (library_root / name).mkdir()
    return names


def _orchestrator(session, registry, reconciler, file_system=None) -> ScanOrchestrator:
    return ScanOrchestrator(
        library_repo=SQLModelLibraryRepository(session),
        show_repo=SQLModelShowRepository(session),
        provider_config_repo=SQLModelProviderConfigRepository(session),
        registry=registry,
        reconciler=reconciler,
        file_system=file_system or FileSystemAdapter(),
    )


class TestConcurrency:
    """Admission des dossiers."""

    @pytest.mark.asyncio
    async def test_bounded_concurrency(self, session, registry, library, folders):
        reconciler = TrackingReconciler()
        orchestrator = _orchestrator(session, registry, reconciler)

        report = await orchestrator.scan(library.id, ScanConfig(max_concurrent_scans=3))

        assert reconciler.peak <= 3
        assert reconciler.peak > 1
        assert sorted(reconciler.seen) == folders
        assert [o.folder for o in report.outcomes] == folders
        assert report.succeeded == 10
        assert report.episodes_created == 10

    @pytest.mark.asyncio
    async def test_sequential_keeps_listing_order(self, session, registry, library, folders):
        reconciler = TrackingReconciler()
        orchestrator = _orchestrator(session, registry, reconciler)

        await orchestrator.scan(library.id, ScanConfig(max_concurrent_scans=1))

        assert reconciler.peak == 1
        assert reconciler.seen == folders

    @pytest.mark.asyncio
    async def test_failure_is_isolated(self, session, registry, library, folders):
        reconciler = TrackingReconciler(failing=frozenset({"Show 03"}))
        orchestrator = _orchestrator(session, registry, reconciler)

        report = await orchestrator.scan(library.id, ScanConfig(max_concurrent_scans=4))

        assert report.failed == 1
        assert report.succeeded == 9
        failed = next(o for o in report.outcomes if o.status == OutcomeStatus.FAILED)
        assert failed.folder == "Show 03"
        assert "boom" in failed.error


class TestScanInputs:
    """Lecture de la bibliotheque et du catalogue."""

    @pytest.mark.asyncio
    async def test_known_show_is_passed_by_folder(self, session, registry, library, folders):
        SQLModelShowRepository(session).save(
            Show(title="Show 01", library_id=library.id, path="Show 01")
        )
        reconciler = TrackingReconciler()

        await _orchestrator(session, registry, reconciler).scan(library.id, ScanConfig())

        assert reconciler.known["Show 01"].title == "Show 01"
        assert reconciler.known["Show 02"] is None

    @pytest.mark.asyncio
    async def test_files_and_hidden_entries_are_ignored(
        self, session, registry, library, library_root
    ):
        (library_root / "Lost").mkdir()
        (library_root / ".trash").mkdir()
        (library_root / "readme.txt").write_text("x")
        reconciler = TrackingReconciler()

        report = await _orchestrator(session, registry, reconciler).scan(library.id, ScanConfig())

        assert reconciler.seen == ["Lost"]
        assert len(report.outcomes) == 1

    @pytest.mark.asyncio
    async def test_missing_library_aborts(self, session, registry, library):
        reconciler = TrackingReconciler()

        with pytest.raises(ScanAbortedError):
            await _orchestrator(session, registry, reconciler).scan(999, ScanConfig())
        assert reconciler.seen == []

    @pytest.mark.asyncio
    async def test_unlistable_root_aborts(self, session, registry, library):
        file_system = MagicMock(spec=FileSystemAdapter)
        file_system.list_directories.side_effect = PermissionError("denied")
        reconciler = TrackingReconciler()

        with pytest.raises(ScanAbortedError):
            await _orchestrator(session, registry, reconciler, file_system).scan(
                library.id, ScanConfig()
            )

    @pytest.mark.asyncio
    async def test_providers_are_closed(self, session, registry, library, folders, catalog):
        reconciler = TrackingReconciler(failing=frozenset({"Show 00"}))

        await _orchestrator(session, registry, reconciler).scan(library.id, ScanConfig())

        assert catalog.instances
        assert all(instance.closed for instance in catalog.instances)
        assert catalog.instances[0].settings == {"apikey": "secret"}


class TestEndToEnd:
    """Scan concurrent avec la vraie reconciliation."""

    @pytest.mark.asyncio
    async def test_concurrent_scan_of_ten_shows(self, scraper, session, library, make_file, catalog):
        catalog.delay = 0.005
        for i in range(10):
            title = f"Series Number {i}"
            catalog.add_show(str(i), title)
            catalog.add_episode(str(i), 1, 1, f"Episode {i}")
            make_file(f"{title}/{title.replace(' ', '.')}.S01E01.mkv")

        report = await scraper.start_scan(
            "tvs", library.id, ScanConfig(auto_add=True, max_concurrent_scans=3)
        )

        assert report.failed == 0
        assert report.episodes_created == 10
        shows = SQLModelShowRepository(session).list_by_library(library.id)
        assert len(shows) == 10
        assert all(show.is_bound for show in shows)
        assert {show.path: show.provider_id for show in shows} == {
            f"Series Number {i}": str(i) for i in range(10)
        }


    @pytest.mark.asyncio
    async def test_provider_setup_failure_does_not_abort(
        self, scraper, registry, session, library, make_file, catalog
    ):
        broken = MagicMock(name="broken")
        broken.setup.side_effect = KeyError("apikey")
        registry.register("broken", lambda: broken)
        SQLModelProviderConfigRepository(session).save("broken", MediaType.TVS, priority=1)
        catalog.add_show("4607", "Lost")
        catalog.add_episode("4607", 1, 1, "Pilot")
        make_file("Lost/Lost.S01E01.mkv")

        report = await scraper.start_scan("tvs", library.id, ScanConfig(auto_add=True))

        assert report.failed == 0
        assert report.episodes_created == 1
        assert all(instance.closed for instance in catalog.instances)

def test_report_counts():
    report = ScanReport(
        library_id=1,
        outcomes=[
            EntityOutcome("a", episodes_created=2),
            EntityOutcome("b", status=OutcomeStatus.FAILED),
            EntityOutcome("c", status=OutcomeStatus.SKIPPED),
        ],
    )

    assert (report.succeeded, report.failed, report.skipped) == (1, 1, 1)
    assert report.episodes_created == 2
