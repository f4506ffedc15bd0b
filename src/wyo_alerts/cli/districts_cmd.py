"""CLI commands for district lookup."""

from typing import Annotated

import typer

districts_app = typer.Typer()


@districts_app.command("lookup")
def lookup(
    zip_code: Annotated[str | None, typer.Option("--zip", help="Five-digit Wyoming ZIP code")] = None,
    address: Annotated[str | None, typer.Option("--address", help="Free-text Wyoming address")] = None,
) -> None:
    """Resolve an address or ZIP to districts and print the result as JSON."""
    from wyo_alerts.core.config import get_settings
    from wyo_alerts.lib.districts import load_directory
    from wyo_alerts.schemas.district import DistrictLookupResponse
    from wyo_alerts.services.district_service import lookup_districts

    settings = get_settings()
    directory = load_directory(settings.district_data_path)
    try:
        resolution = lookup_districts(directory, address=address, zip_code=zip_code)
    except ValueError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1) from e

    typer.echo(DistrictLookupResponse.from_resolution(resolution).model_dump_json(indent=2))
