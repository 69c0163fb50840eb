"""
Application FastAPI de SerieSync.

Initialise l'application web avec le Container DI et monte les routes.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI

from .. import __version__
from ..container import Container
from .routes.scan import router as scan_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialise le Container DI au démarrage."""
    if getattr(app.state, "container", None) is None:
        container = Container()
        container.database.init()
        app.state.container = container
    yield


app = FastAPI(title="SerieSync", version=__version__, lifespan=lifespan)

# Routes
app.include_router(scan_router)
