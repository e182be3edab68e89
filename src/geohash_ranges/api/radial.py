"""
Radius queries over geohash-encoded keys.

Turns "everything within R km of (lat, lon)" into a few key ranges that a
sorted key-value store can scan, and provides the membership test used to
discard the false positives those scans return.

The algorithm is derived from the "Search" section of
https://web.archive.org/web/20180526044934/https://github.com/yinqiwen/ardb/wiki/Spatial-Index#search
and adds sorting of ranges, merging of overlapping ranges, and handling of
the bit-shift overflow that occurs at the last cell of a precision.

Geohash cells are rectangles, so a scan over the returned ranges may include
points outside the circle. Filter scanned codes with ``within_radius`` when
exact results matter.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, replace

import deal

from geohash_ranges.api.backends import DEFAULT_KEY_CODEC, DEFAULT_SPATIAL_CODEC, KeyCodec, SpatialCodec
from geohash_ranges.api.core.constants import (
    DEFAULT_BITS_OF_PRECISION,
    MAX_BITS,
    MAX_LATITUDE,
    MAX_LONGITUDE,
    MIN_BITS,
)
from geohash_ranges.api.core.exceptions import InvalidCoordinateError, InvalidPrecisionError, InvalidRadiusError
from geohash_ranges.api.core.types import HashRange, KeyRange, Point
from geohash_ranges.api.geohash_utils import haversine_km
from geohash_ranges.api.precision import find_bits_precision
from geohash_ranges.api.ranges import expand_cells, find_cells, merge_ranges


__all__ = [
    "RadialRangeParams",
    "hash_ranges",
    "radial_range",
    "validate_params",
    "within_radius",
]


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RadialRangeParams:
    """
    Arguments for a radius query.

    Attributes:
        radius: Search radius in kilometers
        latitude: Latitude of the search center in degrees (-90 to +90)
        longitude: Longitude of the search center in degrees (-180 to +180)
        bits_of_precision: Precision at which stored keys are encoded (0 means 64)
        namespace: Prefix prepended to every key bound (None means empty)
    """

    radius: float
    latitude: float
    longitude: float
    bits_of_precision: int = DEFAULT_BITS_OF_PRECISION
    namespace: bytes | None = b""

    def with_defaults(self) -> RadialRangeParams:
        """Return a copy with zero bits and a missing namespace replaced by their defaults."""
        return replace(
            self,
            bits_of_precision=self.bits_of_precision or DEFAULT_BITS_OF_PRECISION,
            namespace=self.namespace if self.namespace is not None else b"",
        )

    @property
    def center(self) -> Point:
        return Point(latitude=self.latitude, longitude=self.longitude)

    def within_radius(self, code: int, codec: SpatialCodec = DEFAULT_SPATIAL_CODEC) -> bool:
        """
        Check whether a stored code lies within the query radius.

        The code is decoded at ``bits_of_precision``. Running this for every
        scanned key costs extra CPU but removes the points that fall in the
        corners of the scanned cells.
        """
        params = self.with_defaults()
        return within_radius(code, params.bits_of_precision, params.center, params.radius, codec)


@deal.raises(InvalidCoordinateError, InvalidRadiusError, InvalidPrecisionError)
def validate_params(params: RadialRangeParams) -> None:
    """
    Reject queries that cannot produce meaningful ranges.

    A zero or negative radius is accepted (it selects the finest precision and
    matches nothing in within_radius). NaN radii, coordinates outside their
    valid ranges, and unusable precisions are rejected.

    Raises:
        InvalidRadiusError: If the radius is NaN
        InvalidCoordinateError: If latitude or longitude is out of range
        InvalidPrecisionError: If bits_of_precision is odd or outside 2-64
    """
    if math.isnan(params.radius):
        raise InvalidRadiusError("Radius must be a number, got NaN")
    if not -MAX_LATITUDE <= params.latitude <= MAX_LATITUDE:
        raise InvalidCoordinateError(f"Latitude must be between -90 and +90 degrees, got {params.latitude}")
    if not -MAX_LONGITUDE <= params.longitude <= MAX_LONGITUDE:
        raise InvalidCoordinateError(f"Longitude must be between -180 and +180 degrees, got {params.longitude}")
    bits = params.bits_of_precision
    if bits % 2 or not MIN_BITS <= bits <= MAX_BITS:
        raise InvalidPrecisionError(f"Bits of precision must be an even number between 2 and 64, got {bits}")


def hash_ranges(params: RadialRangeParams, codec: SpatialCodec = DEFAULT_SPATIAL_CODEC) -> list[HashRange]:
    """
    Compute the merged ranges of full-precision codes covering a radius query.

    Args:
        params: Query arguments
        codec: Spatial code used to encode stored points

    Returns:
        Sorted, disjoint ranges (at most 9, empty only if every cell overflowed)

    Raises:
        InvalidRadiusError, InvalidCoordinateError, InvalidPrecisionError: See validate_params
    """
    params = params.with_defaults()
    validate_params(params)

    full_bits = params.bits_of_precision
    range_bits = min(find_bits_precision(params.radius), full_bits)
    logger.debug(f"Radius {params.radius}km at {params.center}: searching {range_bits}-bit cells")

    cells = find_cells(params.center, range_bits, codec)
    return merge_ranges(expand_cells(cells, range_bits, full_bits))


def radial_range(
    params: RadialRangeParams,
    codec: SpatialCodec = DEFAULT_SPATIAL_CODEC,
    key_codec: KeyCodec = DEFAULT_KEY_CODEC,
) -> list[KeyRange]:
    """
    Build the key ranges to scan for a radius query.

    Suitable for queries of up to roughly 5,000 km; larger radii fall back to
    the coarsest cells and cover most of the keyspace.

    Args:
        params: Query arguments
        codec: Spatial code used to encode stored points
        key_codec: Encoder turning a namespace and an integer bound into a key

    Returns:
        Key ranges sorted by begin key, each to be scanned as [begin, end)

    Example:
        >>> ranges = radial_range(RadialRangeParams(radius=50.0, latitude=40.0, longitude=-75.0))
        >>> len(ranges) >= 1
        True
    """
    params = params.with_defaults()
    namespace = params.namespace or b""
    return [
        KeyRange(
            begin=key_codec.encode_key(namespace, hash_range.min),
            end=key_codec.encode_key(namespace, hash_range.max),
        )
        for hash_range in hash_ranges(params, codec)
    ]


@deal.pre(
    lambda code, bits, *args, **kwargs: 1 <= bits <= MAX_BITS and 0 <= code < 1 << bits,
    message="Code must fit in bits, bits must be 1-64",
)
def within_radius(
    code: int,
    bits: int,
    query: Point,
    radius_km: float,
    codec: SpatialCodec = DEFAULT_SPATIAL_CODEC,
) -> bool:
    """
    Check whether a cell code lies strictly within a radius of a point.

    Args:
        code: Cell code in [0, 2**bits)
        bits: Precision of the code
        query: Search center
        radius_km: Search radius in kilometers

    Returns:
        True if the great-circle distance from the decoded cell center to the
        query is less than radius_km (a point exactly at the radius is excluded)
    """
    latitude, longitude = codec.decode(code, bits)
    distance_km = haversine_km(query.latitude, query.longitude, latitude, longitude)
    return distance_km < radius_km
