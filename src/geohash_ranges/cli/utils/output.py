"""
CLI Output Utilities

Rich console formatting utilities for CLI output.
"""

from __future__ import annotations

import json
from collections.abc import Sequence
from typing import Any

from rich.console import Console
from rich.table import Table

from geohash_ranges.api.core.types import HashRange, KeyRange


console = Console()

# Detect if we can safely use unicode symbols
_use_unicode = console.is_terminal and not console.legacy_windows


def print_success(message: str) -> None:
    """Print success message in green."""
    console.print(f"[green]✓[/green] {message}")


def print_error(message: str) -> None:
    """Print error message in red."""
    console.print(f"[red]✗[/red] {message}", style="red")


def print_info(message: str) -> None:
    """Print info message in blue."""
    info_icon = "ℹ" if _use_unicode else "i"
    console.print(f"[blue]{info_icon}[/blue] {message}")


def print_json(data: dict[str, Any]) -> None:
    """Print data as JSON."""
    console.print_json(json.dumps(data))


def print_ranges_table(key_ranges: Sequence[KeyRange], hash_ranges: Sequence[HashRange], title: str) -> None:
    """
    Print key ranges next to the code ranges they were built from.

    Args:
        key_ranges: Encoded scan boundaries
        hash_ranges: Integer code ranges, same order as key_ranges
        title: Table title
    """
    table = Table(title=title, show_header=True, header_style="bold magenta")
    table.add_column("#", style="dim", justify="right")
    table.add_column("Min code", style="cyan")
    table.add_column("Max code", style="cyan")
    table.add_column("Begin key", style="green")
    table.add_column("End key", style="green")

    for index, (key_range, hash_range) in enumerate(zip(key_ranges, hash_ranges, strict=True), start=1):
        table.add_row(
            str(index),
            f"{hash_range.min:#018x}",
            f"{hash_range.max:#018x}",
            key_range.begin.hex(),
            key_range.end.hex(),
        )

    console.print(table)
