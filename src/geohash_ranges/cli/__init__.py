"""Command-line interface for geohash range queries."""

from geohash_ranges import __version__


__all__ = ["__version__"]
