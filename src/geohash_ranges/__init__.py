"""
Geohash Ranges

Radius queries over sorted key-value stores whose keys embed an integer
geohash. A query for everything within R km of a point becomes a handful of
contiguous key ranges; scanned keys can then be filtered exactly with a
great-circle membership test.

Example:
    >>> from geohash_ranges import RadialRangeParams, radial_range
    >>> params = RadialRangeParams(radius=50.0, latitude=40.0, longitude=-75.0)
    >>> for key_range in radial_range(params):
    ...     print(key_range)
"""

from geohash_ranges.api.backends import GeohashIntCodec, KeyCodec, SpatialCodec, TupleKeyCodec

# Exceptions
from geohash_ranges.api.core.exceptions import (
    GeoRangeError,
    InvalidCoordinateError,
    InvalidPrecisionError,
    InvalidRadiusError,
    KeyDecodeError,
    KeyIndexError,
    KeyTypeError,
)

# Type definitions
from geohash_ranges.api.core.types import HashRange, KeyRange, Point
from geohash_ranges.api.precision import find_bits_precision
from geohash_ranges.api.radial import RadialRangeParams, hash_ranges, radial_range, within_radius
from geohash_ranges.api.ranges import expand_cells, find_cells, merge_ranges
from geohash_ranges.api.tuple_layer import Subspace, pack, unpack, unpack_uint


__version__ = "0.1.0"

__all__ = [
    "GeoRangeError",
    "GeohashIntCodec",
    "HashRange",
    "InvalidCoordinateError",
    "InvalidPrecisionError",
    "InvalidRadiusError",
    "KeyCodec",
    "KeyDecodeError",
    "KeyIndexError",
    "KeyRange",
    "KeyTypeError",
    "Point",
    "RadialRangeParams",
    "SpatialCodec",
    "Subspace",
    "TupleKeyCodec",
    "expand_cells",
    "find_bits_precision",
    "find_cells",
    "hash_ranges",
    "merge_ranges",
    "pack",
    "radial_range",
    "unpack",
    "unpack_uint",
    "within_radius",
]
