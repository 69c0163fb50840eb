"""
Tests des routes HTTP de scan et de selection.

Le container de l'application est remplace par un mock (app.state.container)
avant le demarrage: le lifespan ne cree alors pas de container reel.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from seriesync.config import ScanConfig
from seriesync.core.entities.search import SearchCandidate
from seriesync.core.exceptions import (
    ConfigurationError,
    ScanAbortedError,
    SelectionError,
    UnsupportedMediaTypeError,
)
from seriesync.services.reconciler import EntityOutcome, ShowState
from seriesync.services.scan_orchestrator import ScanReport
from seriesync.web.app import app


@pytest.fixture
def scraper():
    service = MagicMock()
    service.start_scan = AsyncMock()
    return service


@pytest.fixture
def client(scraper):
    container = MagicMock()
    container.config.return_value.scan_config.return_value = ScanConfig()
    container.scraper_service.return_value = scraper
    app.state.container = container
    with TestClient(app) as client:
        yield client
    app.state.container = None


class TestScanRoute:
    def test_scan_returns_report(self, client, scraper):
        scraper.start_scan.return_value = ScanReport(
            library_id=1,
            outcomes=[EntityOutcome("Lost", 3, ShowState.REFRESHED, episodes_created=2)],
        )

        response = client.post("/api/scan/tvs", params={"library": 1})

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "ok"
        assert body["data"]["succeeded"] == 1
        assert body["data"]["episodes_created"] == 2
        assert body["data"]["outcomes"][0] == {
            "folder": "Lost",
            "show_id": 3,
            "state": "refreshed",
            "status": "success",
            "error": None,
            "episodes_created": 2,
            "files_skipped": 0,
        }

    def test_scan_options_merge_with_settings(self, client, scraper):
        scraper.start_scan.return_value = ScanReport(library_id=1)

        client.post(
            "/api/scan/tvs",
            params={"library": 1},
            json={"auto_add": True, "max_concurrent_scans": 3},
        )

        media_type, library_id, config = scraper.start_scan.await_args.args
        assert (media_type, library_id) == ("tvs", 1)
        assert config == ScanConfig(auto_add=True, add_unknown=True, max_concurrent_scans=3)

    @pytest.mark.parametrize(
        "error",
        [
            UnsupportedMediaTypeError("movie"),
            ConfigurationError("library id is required"),
            ScanAbortedError("library 9 not found"),
        ],
    )
    def test_client_errors(self, client, scraper, error):
        scraper.start_scan.side_effect = error

        response = client.post("/api/scan/movie")

        assert response.status_code == 400
        assert response.json() == {"status": "error", "data": str(error)}

    def test_unexpected_error(self, client, scraper):
        scraper.start_scan.side_effect = RuntimeError("boom")

        response = client.post("/api/scan/tvs", params={"library": 1})

        assert response.status_code == 500
        assert response.json()["status"] == "error"


class TestSelectRoute:
    def test_select_returns_candidate(self, client, scraper):
        scraper.select_scraper_result.return_value = SearchCandidate("Lost", "tvdb", "4607")

        response = client.post("/api/select/tvs/5/0")

        assert response.status_code == 200
        assert response.json()["data"]["provider_id"] == "4607"
        scraper.select_scraper_result.assert_called_once_with("tvs", 5, 0)

    def test_select_invalid_index(self, client, scraper):
        scraper.select_scraper_result.side_effect = SelectionError("index 4 out of range")

        response = client.post("/api/select/tvs/5/4")

        assert response.status_code == 400
        assert response.json() == {"status": "error", "data": "index 4 out of range"}
