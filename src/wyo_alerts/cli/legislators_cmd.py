"""CLI commands for the legislator roster."""

import asyncio
from pathlib import Path
from typing import Annotated

import typer
from loguru import logger

legislators_app = typer.Typer()


@legislators_app.command("import")
def import_roster(
    roster_file: Annotated[
        Path | None,
        typer.Option("--file", help="JSON roster to import instead of the bundled one", exists=True, dir_okay=False),
    ] = None,
) -> None:
    """Replace all legislators with the bundled (or given) roster."""
    asyncio.run(_import_impl(roster_file))


async def _import_impl(roster_file: Path | None) -> None:
    """Async implementation of the import command."""
    import json

    from wyo_alerts.core.config import get_settings
    from wyo_alerts.core.database import dispose_engine, get_session_factory, init_engine
    from wyo_alerts.core.errors import LegislatorImportError
    from wyo_alerts.services.legislator_service import import_legislators

    settings = get_settings()
    init_engine(settings.database_url, echo=False, schema=settings.database_schema)

    try:
        roster = json.loads(roster_file.read_text(encoding="utf-8")) if roster_file else None
        factory = get_session_factory()
        async with factory() as session:
            count = await import_legislators(session, roster)
        typer.echo(f"Imported {count} legislators")
    except LegislatorImportError as e:
        logger.error(str(e))
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1) from e
    finally:
        await dispose_engine()
