"""HOA Scout CLI application using Typer.

Operational commands for the HOA Scout backend: schema creation, seeding
profiles, running enrichment or analysis for a single HOA and serving the
API.
"""

import asyncio
import json
from pathlib import Path
from typing import Any, Optional

import typer
import uvicorn
from rich.console import Console
from rich.table import Table

from hoa_scout.application.commands import AnalyzeHOACommand, EnrichHOACommand
from hoa_scout.application.services import HOAEvidenceGatherer
from hoa_scout.domain.hoa.value_objects import EnrichmentFreshnessPolicy
from hoa_scout.domain.shared.exceptions import DomainException
from hoa_scout.infrastructure.cache import InMemoryReportCache
from hoa_scout.infrastructure.integration.analysis import AnthropicHOAAnalyzer
from hoa_scout.infrastructure.integration.search import PerplexitySearchProvider
from hoa_scout.infrastructure.persistence.sqlalchemy.init_db import (
    create_engine_for_url,
    create_session_maker,
    create_tables,
    drop_tables,
    seed_profiles,
)
from hoa_scout.infrastructure.persistence.sqlalchemy.repositories import (
    SQLAlchemyRepositoryFactory,
)
from hoa_scout_config.settings import get_settings

app = typer.Typer(
    name="hoa-scout",
    help="HOA Scout - homeowners association research CLI",
    no_args_is_help=True,
)
console = Console()


def _load_seed_file(path: Path) -> list[dict[str, Any]]:
    data = json.loads(path.read_text(encoding="utf-8"))
    if isinstance(data, dict):
        data = data.get("hoa_profiles", [])
    if not isinstance(data, list):
        msg = "Seed file must contain a list of HOA profiles"
        raise typer.BadParameter(msg)
    return data


async def _init_db(reset: bool) -> None:
    engine = create_engine_for_url(get_settings().database_url)
    try:
        if reset:
            await drop_tables(engine)
        await create_tables(engine)
    finally:
        await engine.dispose()


async def _seed(records: list[dict[str, Any]]) -> int:
    engine = create_engine_for_url(get_settings().database_url)
    try:
        await create_tables(engine)
        async with create_session_maker(engine)() as session:
            return await seed_profiles(session, records)
    finally:
        await engine.dispose()


async def _enrich(hoa_id: str, force: bool):
    settings = get_settings()
    engine = create_engine_for_url(settings.database_url)
    provider = PerplexitySearchProvider.from_settings(settings)
    try:
        async with create_session_maker(engine)() as session:
            command = EnrichHOACommand.from_factory(
                SQLAlchemyRepositoryFactory(session),
                search_provider=provider,
                report_cache=InMemoryReportCache(),
                freshness_policy=EnrichmentFreshnessPolicy.from_days(
                    settings.enrichment_freshness_days,
                ),
            )
            return await command.execute(hoa_id, force=force)
    finally:
        await provider.close()
        await engine.dispose()


async def _analyze(hoa_id: str):
    settings = get_settings()
    engine = create_engine_for_url(settings.database_url)
    analyzer = AnthropicHOAAnalyzer.from_settings(settings)
    provider = PerplexitySearchProvider.from_settings(settings)
    gatherer = None
    if settings.analysis_gather_evidence and provider.configured:
        gatherer = HOAEvidenceGatherer(
            search_provider=provider,
            research_provider=provider,
        )
    try:
        async with create_session_maker(engine)() as session:
            command = AnalyzeHOACommand.from_factory(
                SQLAlchemyRepositoryFactory(session),
                analyzer=analyzer,
                report_cache=InMemoryReportCache(),
                evidence_gatherer=gatherer,
            )
            return await command.execute(hoa_id)
    finally:
        await provider.close()
        await engine.dispose()


@app.command("init-db")
def init_db(
    reset: bool = typer.Option(
        False,
        "--reset",
        help="Drop all tables first (deletes every HOA profile)",
    ),
) -> None:
    """Create missing database tables, optionally dropping them first."""
    if reset:
        typer.confirm("Drop all HOA Scout tables?", abort=True)
    asyncio.run(_init_db(reset))
    console.print("[green]Database schema is up to date[/green]")


@app.command("seed")
def seed(
    path: Path = typer.Argument(
        ...,
        exists=True,
        dir_okay=False,
        readable=True,
        help="JSON file with a list of hoa_profiles records",
    ),
) -> None:
    """Insert or update HOA profiles from a JSON file."""
    records = _load_seed_file(path)
    count = asyncio.run(_seed(records))
    console.print(f"[green]Seeded {count} HOA profiles[/green]")


@app.command("enrich")
def enrich(
    hoa_id: str = typer.Argument(..., help="HOA profile id"),
    force: bool = typer.Option(False, "--force", help="Ignore fresh enrichment"),
) -> None:
    """Run web search enrichment for one HOA and print the result."""
    outcome = asyncio.run(_enrich(hoa_id, force))

    if not outcome.success:
        console.print(f"[red]Enrichment failed:[/red] {outcome.error}")
        raise typer.Exit(code=1)

    table = Table(title=f"Enrichment for {hoa_id}")
    table.add_column("Field", style="cyan")
    table.add_column("Value")
    table.add_row("Cached", str(outcome.cached))
    table.add_row("Found", str(outcome.found))
    for key, value in (outcome.data or {}).items():
        if isinstance(value, (dict, list)):
            value = json.dumps(value)
        table.add_row(key, str(value))
    console.print(table)


@app.command("analyze")
def analyze(hoa_id: str = typer.Argument(..., help="HOA profile id")) -> None:
    """Analyze one HOA synchronously and store the scores."""
    try:
        result = asyncio.run(_analyze(hoa_id))
    except DomainException as e:
        console.print(f"[red]Analysis failed:[/red] {e.message}")
        raise typer.Exit(code=1) from None

    console.print(
        f"[green]Overall score {result.overall_score:.1f}[/green] "
        f"(completeness {result.data_completeness}%, analyzer {result.analyzer})"
    )


@app.command("serve")
def serve(
    host: Optional[str] = typer.Option(None, help="Bind address (default: API_HOST)"),
    port: Optional[int] = typer.Option(None, help="Port (default: API_PORT)"),
    reload: bool = typer.Option(False, "--reload", help="Reload on code changes"),
) -> None:
    """Run the HTTP API with uvicorn."""
    settings = get_settings()
    uvicorn.run(
        "hoa_scout.presentation.api.app:app",
        host=host or settings.api_host,
        port=port or settings.api_port,
        reload=reload,
    )


def cli() -> None:
    """Entry point for the CLI application."""
    app()


if __name__ == "__main__":
    cli()
