"""
Global CLI state.

Holds the options given to the root command so subcommands can read them.
"""

from pathlib import Path

from geohash_ranges.api.core.config import RangeConfig
from geohash_ranges.api.store import GeoIndex


state: dict[str, Path | bool | None] = {
    "db_path": None,
    "verbose": False,
}


def open_index() -> GeoIndex:
    """
    Open the key store selected by --db or the environment.

    Returns:
        GeoIndex for the configured database, namespace and precision
    """
    config = RangeConfig.from_env()
    db_path = state.get("db_path")
    if isinstance(db_path, Path):
        config.db_path = db_path
    return GeoIndex.from_config(config)
