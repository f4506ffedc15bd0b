"""Typer CLI root application with serve command."""

import typer

from wyo_alerts.core.config import get_settings
from wyo_alerts.core.logging import setup_logging

app = typer.Typer(name="wyo-alerts", help="Wyoming district lookup and vote alerts CLI")


@app.callback()
def _main_callback() -> None:
    """Initialize logging for all CLI commands."""
    settings = get_settings()
    setup_logging(settings.log_level, log_dir=settings.log_dir)


@app.command()
def serve(
    reload: bool = typer.Option(False, "--reload", help="Enable auto-reload for development"),
    host: str = typer.Option("0.0.0.0", "--host", help="Bind host"),  # noqa: S104
    port: int = typer.Option(8000, "--port", help="Bind port"),
) -> None:
    """Start the API server."""
    import uvicorn

    uvicorn.run(
        "wyo_alerts.main:create_app",
        factory=True,
        host=host,
        port=port,
        reload=reload,
    )


def _register_subcommands() -> None:
    """Register all CLI subcommand groups."""
    from wyo_alerts.cli.db_cmd import db_app
    from wyo_alerts.cli.districts_cmd import districts_app
    from wyo_alerts.cli.legislators_cmd import legislators_app

    app.add_typer(db_app, name="db", help="Database migration commands")
    app.add_typer(legislators_app, name="legislators", help="Legislator roster commands")
    app.add_typer(districts_app, name="districts", help="District lookup commands")


_register_subcommands()
