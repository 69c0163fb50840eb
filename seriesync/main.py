"""
Point d'entrée CLI de SerieSync.

Initialise le container DI, configure le logging et fournit les commandes CLI.
"""

from typing import Annotated

import typer
from loguru import logger

from . import __version__
from .adapters.cli.commands import providers, results, scan, select
from .config import Settings
from .container import Container
from .logging_config import configure_logging

app = typer.Typer(
    name="seriesync",
    help="Reconciliation d'une bibliotheque de series avec son catalogue",
)
container = Container()

# Monter les commandes depuis commands.py
app.command()(scan)
app.command()(results)
app.command()(select)
app.command()(providers)


def get_config() -> Settings:
    """Récupère les paramètres de l'application depuis le container DI."""
    return container.config()


@app.command()
def info() -> None:
    """Affiche la configuration actuelle."""
    config = get_config()
    typer.echo(f"Base de données : {config.database_url}")
    typer.echo(f"Sélection automatique : {'activée' if config.auto_add else 'désactivée'}")
    typer.echo(f"Épisodes inconnus : {'ajoutés' if config.add_unknown else 'ignorés'}")
    typer.echo(f"Scans simultanés : {config.max_concurrent_scans}")
    typer.echo(f"Seuil de correspondance : {config.match_score_threshold}")
    typer.echo(f"Niveau de log : {config.log_level}")


@app.command()
def version() -> None:
    """Affiche les informations de version."""
    typer.echo(f"SerieSync v{__version__}")


@app.command()
def serve(
    host: Annotated[str, typer.Option(help="Adresse d'écoute")] = "127.0.0.1",
    port: Annotated[int, typer.Option(help="Port d'écoute")] = 8000,
    reload: Annotated[bool, typer.Option(help="Rechargement automatique")] = False,
) -> None:
    """Lance l'API web SerieSync."""
    import uvicorn

    typer.echo(f"Démarrage du serveur sur {host}:{port}")
    uvicorn.run("seriesync.web.app:app", host=host, port=port, reload=reload)


def main() -> None:
    """Point d'entrée de l'application."""
    # Charge la configuration et configure le logging
    settings = container.config()
    configure_logging(settings)

    # Initialise la base de données (crée les tables si nécessaire)
    container.database.init()

    logger.info("Démarrage de SerieSync", version=__version__)

    # Lance la CLI
    app()


if __name__ == "__main__":
    main()
