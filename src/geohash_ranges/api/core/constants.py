"""
Geodetic and Encoding Constants

Constants used throughout the geohash ranges API for calculations.
"""

import math
from typing import Final


__all__ = [
    "DEFAULT_BITS_OF_PRECISION",
    "DEFAULT_NAMESPACE",
    "EARTH_RADIUS_KM",
    "EQUATORIAL_RADIUS_KM",
    "MAX_BITS",
    "MAX_LATITUDE",
    "MAX_LONGITUDE",
    "MERCATOR_MAX_KM",
    "MIN_BITS",
    "UINT64_MASK",
]


# Geodetic constants
EQUATORIAL_RADIUS_KM: Final[float] = 6378.137
"""WGS-84 equatorial radius in kilometers."""

MERCATOR_MAX_KM: Final[float] = math.pi * EQUATORIAL_RADIUS_KM
"""Half of the equatorial circumference (~20037.5 km)."""

EARTH_RADIUS_KM: Final[float] = 6372.797560856
"""Mean Earth radius used for haversine distances."""

MAX_LATITUDE: Final[float] = 90.0
MAX_LONGITUDE: Final[float] = 180.0

# Encoding constants
MIN_BITS: Final[int] = 2
"""Coarsest usable precision (one latitude bit, one longitude bit)."""

MAX_BITS: Final[int] = 64
"""Finest precision; codes are stored as unsigned 64-bit integers."""

DEFAULT_BITS_OF_PRECISION: Final[int] = MAX_BITS

UINT64_MASK: Final[int] = (1 << 64) - 1

DEFAULT_NAMESPACE: Final[str] = "geo"
"""Subspace name that stored keys and printed key ranges share by default."""
