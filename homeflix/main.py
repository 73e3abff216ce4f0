"""
Point d'entrée CLI de Homeflix.

Initialise le container DI, configure le logging et fournit les commandes CLI.
"""

import asyncio
from pathlib import Path
from typing import Annotated, Optional

import typer
from loguru import logger
from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from . import __version__
from .config import Settings
from .container import Container
from .core.exceptions import ScanConfigurationError, ScanFailedError
from .logging_config import configure_logging
from .services.reconciler import FileOutcome, ScanReport

app = typer.Typer(
    name="homeflix",
    help="Catalogue et streaming de médiathèque personnelle",
)
container = Container()
console = Console()


def get_config() -> Settings:
    """Récupère les paramètres de l'application depuis le container DI."""
    return container.config()


def display_report(report: ScanReport) -> None:
    """Affiche le bilan d'un scan sous forme de tableau."""
    table = Table(title="Bilan du scan")
    table.add_column("Fichiers", style="cyan")
    table.add_column("Nombre", justify="right")
    table.add_row("Découverts", str(report.discovered))
    table.add_row("Catalogués", f"[green]{report.processed}[/green]")
    table.add_row("Déjà présents", str(report.skipped))
    table.add_row("En échec", f"[red]{report.failed}[/red]" if report.failed else "0")
    console.print(table)

    for root, errors in report.root_errors.items():
        for error in errors:
            console.print(f"[yellow]Répertoire {root} : {error}[/yellow]")
    for filepath, error in report.failures.items():
        console.print(f"[red]{Path(filepath).name}[/red] : {error}")


async def _scan_async() -> ScanReport:
    container.database.init()
    try:
        with container.session() as session:
            service = container.reconciliation_service(
                media_repo=container.media_repository(session=session),
                series_repo=container.series_repository(session=session),
            )
            with Progress(
                SpinnerColumn(),
                TextColumn("[progress.description]{task.description}"),
                TextColumn("{task.completed} fichiers"),
                console=console,
            ) as progress:
                task = progress.add_task("[cyan]Scan...", total=None)

                def on_progress(filepath: str, outcome: FileOutcome) -> None:
                    progress.update(task, description=f"[cyan]{Path(filepath).name[:40]}")
                    progress.advance(task)

                report = await service.scan(on_progress=on_progress)
                progress.update(task, description="[green]Terminé")
            return report
    finally:
        await container.tmdb_client().close()
        await container.image_downloader().close()
        container.api_cache().close()


@app.command()
def scan() -> None:
    """Scanne la médiathèque et catalogue les nouveaux fichiers."""
    try:
        report = asyncio.run(_scan_async())
    except ScanConfigurationError as e:
        console.print(f"[red]Configuration invalide : {e}[/red]")
        raise typer.Exit(code=1)
    except ScanFailedError as e:
        console.print(f"[red]{e}[/red]")
        if e.report is not None:
            display_report(e.report)
        raise typer.Exit(code=1)

    display_report(report)
    console.print(report.summary())


@app.command()
def serve(
    host: Annotated[Optional[str], typer.Option(help="Adresse d'écoute")] = None,
    port: Annotated[Optional[int], typer.Option(help="Port d'écoute")] = None,
    reload: Annotated[bool, typer.Option(help="Rechargement automatique")] = False,
) -> None:
    """Lance le serveur API Homeflix."""
    import uvicorn

    config = get_config()
    host = host or config.host
    port = port or config.port
    typer.echo(f"Démarrage du serveur sur {host}:{port}")
    uvicorn.run("homeflix.web.app:app", host=host, port=port, reload=reload)


@app.command()
def info() -> None:
    """Affiche la configuration actuelle."""
    config = get_config()
    logger.info("Configuration Homeflix")
    typer.echo(f"Médiathèque : {config.media_base_path}")
    typer.echo(f"Films : {config.movies_root}")
    typer.echo(f"Séries : {config.series_root}")
    typer.echo(f"Extensions : {', '.join(sorted(config.extensions))}")
    typer.echo(f"Base de données : {config.database_url}")
    typer.echo(f"Images : {config.assets_dir}")
    typer.echo(f"API TMDB : {'activée' if config.tmdb_enabled else 'désactivée'}")
    typer.echo(f"Langue TMDB : {config.tmdb_language}")
    typer.echo(f"Scans parallèles : {config.scan_concurrency}")
    typer.echo(f"Niveau de log : {config.log_level}")


@app.command()
def version() -> None:
    """Affiche les informations de version."""
    typer.echo(f"Homeflix v{__version__}")


def main() -> None:
    """Point d'entrée de l'application."""
    # Charge la configuration et configure le logging
    settings = container.config()
    configure_logging(settings)

    logger.info("Démarrage de Homeflix", version=__version__)

    # Lance la CLI
    app()


if __name__ == "__main__":
    main()
