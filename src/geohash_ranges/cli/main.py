"""
Geohash Ranges CLI - Main Application

This is the main entry point for the geohash-ranges command-line interface.
"""

import logging
from enum import Enum
from pathlib import Path

import typer
from click import Context
from dotenv import load_dotenv
from typer.core import TyperGroup

from geohash_ranges.api.core.constants import DEFAULT_NAMESPACE
from geohash_ranges.api.core.exceptions import GeoRangeError
from geohash_ranges.api.precision import cell_width_km, find_bits_precision
from geohash_ranges.api.radial import (
    RadialRangeParams,
    hash_ranges,
    radial_range,
    validate_params,
)
from geohash_ranges.api.tuple_layer import Subspace
from geohash_ranges.cli.commands import index
from geohash_ranges.cli.utils.output import console, print_error, print_json, print_ranges_table, print_success
from geohash_ranges.cli.utils.state import state


class OutputFormat(str, Enum):
    PRETTY = "pretty"
    JSON = "json"


class SortedCommandsGroup(TyperGroup):
    """Custom Typer group that sorts commands alphabetically within each help panel."""

    def list_commands(self, ctx: Context) -> list[str]:
        """Return commands sorted alphabetically."""
        commands = super().list_commands(ctx)
        return sorted(commands)


# Create main app
app = typer.Typer(
    name="geohash-ranges",
    help="Geohash radius queries over sorted key-value stores",
    add_completion=False,
    rich_markup_mode="rich",
    cls=SortedCommandsGroup,
)

app.add_typer(index.app, name="index", help="Store and query points in the SQLite key store")


@app.callback()
def main(
    db: Path | None = typer.Option(
        None,
        "--db",
        help="Key store database file",
        envvar="GEOHASH_RANGES_DB_PATH",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose output",
        envvar="GEOHASH_RANGES_VERBOSE",
    ),
) -> None:
    """
    Geohash Ranges CLI

    Turn radius searches into key ranges for sorted key-value stores.

    [bold green]Examples:[/bold green]

        geohash-ranges ranges --radius 50 --lat 40.0 --lon -75.0
        geohash-ranges precision --radius 100
        geohash-ranges index query --radius 10 --lat 39.95 --lon -75.16

    [bold blue]Environment Variables:[/bold blue]

        GEOHASH_RANGES_BITS      - Precision of stored keys
        GEOHASH_RANGES_NAMESPACE - Key namespace
        GEOHASH_RANGES_DB_PATH   - Key store database file
    """
    load_dotenv()

    state["db_path"] = db
    state["verbose"] = verbose

    if verbose:
        logging.basicConfig(level=logging.DEBUG)
        console.print("[dim]Verbose mode enabled[/dim]")


@app.command("ranges", rich_help_panel="Query")
def show_ranges(
    radius: float = typer.Option(..., "--radius", "-r", help="Search radius in kilometers"),
    lat: float = typer.Option(..., "--lat", help="Latitude of the search center"),
    lon: float = typer.Option(..., "--lon", help="Longitude of the search center"),
    bits: int = typer.Option(64, "--bits", "-b", help="Precision of stored keys", envvar="GEOHASH_RANGES_BITS"),
    namespace: str = typer.Option(
        DEFAULT_NAMESPACE,
        "--namespace",
        "-n",
        help="Key namespace (tuple-encoded prefix, empty for none)",
        envvar="GEOHASH_RANGES_NAMESPACE",
    ),
    format_output: OutputFormat = typer.Option(OutputFormat.PRETTY, "--format", "-f", help="Output format"),
) -> None:
    """
    Show the key ranges to scan for a radius search.

    Example:
        geohash-ranges ranges --radius 50 --lat 40.0 --lon -75.0
        geohash-ranges ranges -r 5 --lat 51.5 --lon -0.12 --namespace places --format json
    """
    prefix = Subspace((namespace,)).key() if namespace else b""
    params = RadialRangeParams(
        radius=radius, latitude=lat, longitude=lon, bits_of_precision=bits, namespace=prefix
    ).with_defaults()

    try:
        code_ranges = hash_ranges(params)
        key_ranges = radial_range(params)
    except GeoRangeError as e:
        print_error(f"Failed to build ranges: {e}")
        raise typer.Exit(code=1) from e

    if format_output is OutputFormat.JSON:
        print_json(
            {
                "radius_km": radius,
                "latitude": lat,
                "longitude": lon,
                "bits_of_precision": params.bits_of_precision,
                "search_bits": min(find_bits_precision(radius), params.bits_of_precision),
                "ranges": [
                    {"min": r.min, "max": r.max, "begin": k.begin.hex(), "end": k.end.hex()}
                    for r, k in zip(code_ranges, key_ranges, strict=True)
                ],
            }
        )
    else:
        print_ranges_table(
            key_ranges,
            code_ranges,
            title=f"Key ranges within {radius:g} km of {params.center}",
        )


@app.command("precision", rich_help_panel="Query")
def show_precision(
    radius: float = typer.Option(..., "--radius", "-r", help="Search radius in kilometers"),
) -> None:
    """
    Show the cell precision selected for a radius.

    Example:
        geohash-ranges precision --radius 100
    """
    bits = find_bits_precision(radius)
    console.print(f"[bold]{bits}[/bold] bits (cell width [cyan]{cell_width_km(bits):.3f} km[/cyan])")


@app.command("within", rich_help_panel="Query")
def check_within(
    code: int = typer.Argument(..., help="Cell code to test"),
    radius: float = typer.Option(..., "--radius", "-r", help="Search radius in kilometers"),
    lat: float = typer.Option(..., "--lat", help="Latitude of the search center"),
    lon: float = typer.Option(..., "--lon", help="Longitude of the search center"),
    bits: int = typer.Option(
        64, "--bits", "-b", help="Precision of the code (0 means 64)", envvar="GEOHASH_RANGES_BITS"
    ),
) -> None:
    """
    Check whether a cell code lies within a radius (exit code 1 if not).

    Example:
        geohash-ranges within 26056 --bits 16 --radius 200 --lat 40.0 --lon -75.0
    """
    params = RadialRangeParams(radius=radius, latitude=lat, longitude=lon, bits_of_precision=bits).with_defaults()
    try:
        validate_params(params)
    except GeoRangeError as e:
        print_error(f"Invalid query: {e}")
        raise typer.Exit(code=2) from e

    if not 0 <= code < 1 << params.bits_of_precision:
        print_error(f"Invalid query: code {code} does not fit in {params.bits_of_precision} bits")
        raise typer.Exit(code=2)

    if params.within_radius(code):
        print_success(f"{code} is within {radius:g} km of {params.center}")
    else:
        console.print(f"[yellow]{code} is not within {radius:g} km of {params.center}[/yellow]")
        raise typer.Exit(code=1)


@app.command(rich_help_panel="Utilities")
def version() -> None:
    """Show the CLI version."""
    from geohash_ranges.cli import __version__

    console.print(f"[bold]Geohash Ranges CLI[/bold] version [cyan]{__version__}[/cyan]")


if __name__ == "__main__":
    app()
