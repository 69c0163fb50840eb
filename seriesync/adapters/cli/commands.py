"""
Commandes Typer du moteur de reconciliation.

Ce module fournit les commandes CLI:
- scan: Scan d'une bibliotheque de series
- results: Candidats en attente de selection pour une serie
- select: Selection manuelle d'un candidat
- providers: Fournisseurs enregistres et actives
"""

from typing import Annotated, NoReturn, Optional

import typer
from rich.table import Table

from seriesync.adapters.cli.helpers import async_command, console, with_container
from seriesync.config import ScanConfig
from seriesync.core.exceptions import SeriesyncError
from seriesync.core.value_objects import MediaType
from seriesync.services.reconciler import OutcomeStatus

_STATUS_STYLES = {
    OutcomeStatus.SUCCESS: "green",
    OutcomeStatus.FAILED: "red",
    OutcomeStatus.SKIPPED: "yellow",
}


def _fail(error: Exception) -> NoReturn:
    console.print(f"[red]Erreur:[/red] {error}")
    raise typer.Exit(code=1)


@async_command
@with_container()
async def scan(
    container,
    library_id: Annotated[int, typer.Argument(help="ID de la bibliotheque a scanner")],
    auto_add: Annotated[
        Optional[bool],
        typer.Option("--auto-add/--no-auto-add", help="Selection automatique du meilleur candidat"),
    ] = None,
    add_unknown: Annotated[
        Optional[bool],
        typer.Option(
            "--add-unknown/--no-add-unknown",
            help="Creer un episode sans donnees fournisseur",
        ),
    ] = None,
    enable_3d: Annotated[
        bool, typer.Option("--enable-3d", help="Scan 3D (sans effet sur les series)")
    ] = False,
    max_concurrent: Annotated[
        Optional[int],
        typer.Option("--max-concurrent", "-j", min=1, help="Series traitees simultanement"),
    ] = None,
) -> None:
    """Scanne une bibliotheque de series TV."""
    defaults = container.config().scan_config()
    config = ScanConfig(
        auto_add=defaults.auto_add if auto_add is None else auto_add,
        add_unknown=defaults.add_unknown if add_unknown is None else add_unknown,
        enable_3d_scan=enable_3d or defaults.enable_3d_scan,
        max_concurrent_scans=max_concurrent or defaults.max_concurrent_scans,
    )

    scraper = container.scraper_service()
    try:
        report = await scraper.start_scan(MediaType.TVS, library_id, config)
    except SeriesyncError as e:
        _fail(e)

    table = Table(title=f"Bibliotheque {library_id}")
    table.add_column("Dossier")
    table.add_column("Etat")
    table.add_column("Statut")
    table.add_column("Episodes", justify="right")
    table.add_column("Ignores", justify="right")
    for outcome in report.outcomes:
        style = _STATUS_STYLES[outcome.status]
        table.add_row(
            outcome.folder,
            outcome.state.value,
            f"[{style}]{outcome.status.value}[/{style}]",
            str(outcome.episodes_created),
            str(outcome.files_skipped),
        )
    console.print(table)
    console.print(
        f"{report.succeeded} succes, {report.failed} echecs, {report.skipped} ignores"
    )


@async_command
@with_container()
async def results(
    container,
    show_id: Annotated[int, typer.Argument(help="ID de la serie")],
) -> None:
    """Affiche les candidats en attente de selection pour une serie."""
    scraper = container.scraper_service()
    candidates = scraper.pending_results(MediaType.TVS, show_id)
    if not candidates:
        console.print(f"Aucun candidat en attente pour la serie {show_id}")
        return

    table = Table(title=f"Candidats pour la serie {show_id}")
    table.add_column("#", justify="right")
    table.add_column("Titre")
    table.add_column("Annee", justify="right")
    table.add_column("Fournisseur")
    table.add_column("ID")
    for index, candidate in enumerate(candidates):
        table.add_row(
            str(index),
            candidate.title,
            str(candidate.premiere_year or ""),
            candidate.provider_name,
            candidate.provider_id,
        )
    console.print(table)


@async_command
@with_container()
async def select(
    container,
    show_id: Annotated[int, typer.Argument(help="ID de la serie")],
    index: Annotated[int, typer.Argument(help="Index du candidat (voir results)")],
) -> None:
    """Applique un candidat a une serie et supprime le lot en attente."""
    scraper = container.scraper_service()
    try:
        candidate = scraper.select_scraper_result(MediaType.TVS, show_id, index)
    except SeriesyncError as e:
        _fail(e)
    console.print(
        f"[green]Serie {show_id} liee a {candidate.title}[/green] "
        f"({candidate.provider_name}:{candidate.provider_id})"
    )


@async_command
@with_container()
async def providers(container) -> None:
    """Liste les fournisseurs enregistres et ceux actives pour les series."""
    registered = container.provider_registry().names()
    enabled, _ = container.provider_config_repository().list_enabled(MediaType.TVS)

    table = Table(title="Fournisseurs")
    table.add_column("Nom")
    table.add_column("Enregistre")
    table.add_column("Priorite (tvs)", justify="right")
    for name in sorted(set(registered) | set(enabled)):
        priority = str(enabled.index(name)) if name in enabled else "-"
        table.add_row(name, "oui" if name in registered else "non", priority)
    console.print(table)
