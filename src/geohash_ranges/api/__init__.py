"""
Geohash Ranges API - Query Logic Layer

This package contains the range-building logic for geohash radius queries,
separated from CLI presentation concerns.

The API is organized into modules:
- precision: Radius to bit precision selection
- ranges: Cell enumeration, range expansion and merging
- radial: Radius query entry points and membership test
- backends: Pluggable spatial and key codecs
- tuple_layer: Ordering-preserving key encoding
- store: SQLite-backed sorted key store
- core: Core types, constants, configuration and exceptions
"""

# Activate deal contracts for runtime validation
import deal


deal.activate()

__all__ = [
    # Package is organized into modules - import directly from them:
    # from geohash_ranges.api.radial import ...
    # from geohash_ranges.api.store import ...
    # etc.
]
