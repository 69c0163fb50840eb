"""
Routes du scan et de la selection manuelle.

Reponses au format {"status": "ok" | "error", "data": ...}. Les erreurs de
configuration, de selection et les scans impossibles a demarrer renvoient
400; toute autre erreur renvoie 500.
"""

import logging
from dataclasses import asdict
from typing import Any, Optional

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from ...config import ScanConfig
from ...core.exceptions import (
    ConfigurationError,
    ScanAbortedError,
    SelectionError,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api")

_CLIENT_ERRORS = (ConfigurationError, SelectionError, ScanAbortedError)


class ScanRequest(BaseModel):
    """Options de scan; les champs absents prennent la valeur de la configuration."""

    auto_add: Optional[bool] = None
    add_unknown: Optional[bool] = None
    enable_3d_scan: Optional[bool] = None
    max_concurrent_scans: Optional[int] = Field(default=None, ge=1)


def _ok(data: Any) -> JSONResponse:
    return JSONResponse({"status": "ok", "data": data})


def _error(message: str, status_code: int) -> JSONResponse:
    return JSONResponse({"status": "error", "data": message}, status_code=status_code)


def _merge(defaults: ScanConfig, request: Optional[ScanRequest]) -> ScanConfig:
    if request is None:
        return defaults
    values = asdict(defaults)
    values.update(request.model_dump(exclude_none=True))
    return ScanConfig(**values)


@router.post("/scan/{media_type}")
async def start_scan(
    request: Request,
    media_type: str,
    library: Optional[int] = None,
    options: Optional[ScanRequest] = None,
) -> JSONResponse:
    """Lance le scan d'une bibliotheque et retourne le bilan par dossier."""
    container = request.app.state.container
    config = _merge(container.config().scan_config(), options)
    scraper = container.scraper_service()
    try:
        report = await scraper.start_scan(media_type, library, config)
    except _CLIENT_ERRORS as e:
        return _error(str(e), 400)
    except Exception as e:
        logger.exception("Scan %s de la bibliotheque %s en echec", media_type, library)
        return _error(str(e), 500)

    return _ok(
        {
            "library_id": report.library_id,
            "succeeded": report.succeeded,
            "failed": report.failed,
            "skipped": report.skipped,
            "episodes_created": report.episodes_created,
            "outcomes": [asdict(outcome) for outcome in report.outcomes],
        }
    )


@router.post("/select/{media_type}/{media_id}/{index}")
async def select_result(
    request: Request,
    media_type: str,
    media_id: int,
    index: int,
) -> JSONResponse:
    """Applique le candidat d'index donne au media."""
    container = request.app.state.container
    scraper = container.scraper_service()
    try:
        candidate = scraper.select_scraper_result(media_type, media_id, index)
    except _CLIENT_ERRORS as e:
        return _error(str(e), 400)
    except Exception as e:
        logger.exception("Selection %s pour %s %s en echec", index, media_type, media_id)
        return _error(str(e), 500)
    return _ok(candidate.to_dict())
