"""
Index Commands

Commands for storing points in the SQLite key store and running radius
queries against it.
"""

import typer
from rich.table import Table

from geohash_ranges.api.core.exceptions import GeoRangeError
from geohash_ranges.cli.utils.output import console, print_error, print_info, print_success
from geohash_ranges.cli.utils.state import open_index


app = typer.Typer(help="Key store commands")


@app.command("add", rich_help_panel="Write")
def add_point(
    item_id: str = typer.Argument(..., help="Identifier of the point"),
    lat: float = typer.Option(..., "--lat", help="Latitude in degrees"),
    lon: float = typer.Option(..., "--lon", help="Longitude in degrees"),
    value: str | None = typer.Option(None, "--value", help="Payload stored with the point"),
) -> None:
    """
    Store a point.

    Example:
        geohash-ranges index add liberty-bell --lat 39.9496 --lon -75.1503
    """
    try:
        with open_index() as geo_index:
            key = geo_index.put(item_id, lat, lon, value)
    except GeoRangeError as e:
        print_error(f"Failed to store {item_id}: {e}")
        raise typer.Exit(code=1) from e

    print_success(f"Stored {item_id} under key {key.hex()}")


@app.command("remove", rich_help_panel="Write")
def remove_point(
    item_id: str = typer.Argument(..., help="Identifier of the point"),
    lat: float = typer.Option(..., "--lat", help="Latitude the point was stored at"),
    lon: float = typer.Option(..., "--lon", help="Longitude the point was stored at"),
) -> None:
    """
    Remove a stored point.

    Example:
        geohash-ranges index remove liberty-bell --lat 39.9496 --lon -75.1503
    """
    try:
        with open_index() as geo_index:
            removed = geo_index.delete(item_id, lat, lon)
    except GeoRangeError as e:
        print_error(f"Failed to remove {item_id}: {e}")
        raise typer.Exit(code=1) from e

    if removed:
        print_success(f"Removed {item_id}")
    else:
        print_info(f"No point {item_id} at {lat}, {lon}")


@app.command("query", rich_help_panel="Read")
def query_points(
    radius: float = typer.Option(..., "--radius", "-r", help="Search radius in kilometers"),
    lat: float = typer.Option(..., "--lat", help="Latitude of the search center"),
    lon: float = typer.Option(..., "--lon", help="Longitude of the search center"),
    approximate: bool = typer.Option(
        False, "--approximate", help="Skip the exact distance filter and show every scanned point"
    ),
) -> None:
    """
    Find stored points within a radius.

    Example:
        geohash-ranges index query --radius 10 --lat 39.95 --lon -75.16
    """
    try:
        with open_index() as geo_index:
            records = geo_index.query_radius(radius, lat, lon, exact=not approximate)
    except GeoRangeError as e:
        print_error(f"Query failed: {e}")
        raise typer.Exit(code=1) from e

    if not records:
        print_info(f"No points within {radius:g} km")
        return

    table = Table(title=f"Points within {radius:g} km", show_header=True, header_style="bold magenta")
    table.add_column("ID", style="cyan")
    table.add_column("Latitude", justify="right")
    table.add_column("Longitude", justify="right")
    table.add_column("Value", style="green")
    for record in records:
        table.add_row(record.item_id, f"{record.latitude:.6f}", f"{record.longitude:.6f}", record.value or "")
    console.print(table)


@app.command("count", rich_help_panel="Read")
def count_points() -> None:
    """Show the number of stored points."""
    try:
        with open_index() as geo_index:
            total = geo_index.count()
    except GeoRangeError as e:
        print_error(f"Count failed: {e}")
        raise typer.Exit(code=1) from e

    console.print(f"[bold]{total}[/bold] points")
