"""
Integer geohash utilities for spatial indexing.

Geohash interleaves quantized longitude and latitude bits into a single code.
Codes that share a prefix are geographically close, and every cell at a coarse
precision owns one contiguous block of codes at a finer precision, which is
what makes range scans over sorted keys possible.

The codes here are unsigned integers of up to 64 bits rather than base32
strings. The most significant bit is a longitude bit, so for an even number of
bits a cell has the same number of latitude and longitude bits.

Reference: https://en.wikipedia.org/wiki/Geohash
"""

from __future__ import annotations

import math

import deal

from geohash_ranges.api.core.constants import EARTH_RADIUS_KM, MAX_BITS, MAX_LATITUDE, MAX_LONGITUDE


__all__ = [
    "bounding_box_int",
    "decode_int",
    "encode_int",
    "haversine_km",
    "neighbors_int",
]


_QUANTIZE_SCALE = float(1 << 32)
_QUANTIZE_MAX = (1 << 32) - 1


def _spread(value: int) -> int:
    """Spread the low 32 bits of value into the even bit positions of a 64-bit int."""
    value &= 0xFFFFFFFF
    value = (value | (value << 16)) & 0x0000FFFF0000FFFF
    value = (value | (value << 8)) & 0x00FF00FF00FF00FF
    value = (value | (value << 4)) & 0x0F0F0F0F0F0F0F0F
    value = (value | (value << 2)) & 0x3333333333333333
    value = (value | (value << 1)) & 0x5555555555555555
    return value


def _squash(value: int) -> int:
    """Inverse of _spread: gather the even bit positions into a 32-bit int."""
    value &= 0x5555555555555555
    value = (value | (value >> 1)) & 0x3333333333333333
    value = (value | (value >> 2)) & 0x0F0F0F0F0F0F0F0F
    value = (value | (value >> 4)) & 0x00FF00FF00FF00FF
    value = (value | (value >> 8)) & 0x0000FFFF0000FFFF
    value = (value | (value >> 16)) & 0x00000000FFFFFFFF
    return value


def _quantize(value: float, limit: float) -> int:
    # Clamp coordinates to valid ranges
    value = max(-limit, min(limit, value))
    scaled = int((value + limit) / (2.0 * limit) * _QUANTIZE_SCALE)
    return min(scaled, _QUANTIZE_MAX)


def _wrap_longitude(longitude: float) -> float:
    if -MAX_LONGITUDE <= longitude <= MAX_LONGITUDE:
        return longitude
    return ((longitude + MAX_LONGITUDE) % 360.0) - MAX_LONGITUDE


@deal.pre(lambda latitude, longitude, bits=MAX_BITS: 1 <= bits <= MAX_BITS, message="Bits must be 1-64")
def encode_int(latitude: float, longitude: float, bits: int = MAX_BITS) -> int:
    """
    Encode latitude and longitude into an integer geohash.

    Args:
        latitude: Latitude in degrees (-90 to 90, clamped)
        longitude: Longitude in degrees (-180 to 180, clamped)
        bits: Number of bits in the code (1-64, default: 64)
              Every 2 bits halve the cell size along each axis

    Returns:
        Cell code in [0, 2**bits)

    Example:
        >>> encode_int(90.0, 180.0, 4)
        15
    """
    lat_int = _quantize(latitude, MAX_LATITUDE)
    lon_int = _quantize(longitude, MAX_LONGITUDE)

    # Longitude takes the odd positions, so it owns the most significant bit
    full = _spread(lat_int) | (_spread(lon_int) << 1)
    return full >> (MAX_BITS - bits)


@deal.pre(lambda code, bits: 1 <= bits <= MAX_BITS, message="Bits must be 1-64")
def bounding_box_int(code: int, bits: int) -> tuple[float, float, float, float]:
    """
    Get the bounding box of a cell.

    Args:
        code: Cell code
        bits: Precision of the code

    Returns:
        Tuple of (lat_min, lat_max, lon_min, lon_max)
    """
    full = code << (MAX_BITS - bits)
    lat_int = _squash(full)
    lon_int = _squash(full >> 1)

    lat_bits = bits // 2
    lon_bits = bits - lat_bits
    lat_err = math.ldexp(2.0 * MAX_LATITUDE, -lat_bits)
    lon_err = math.ldexp(2.0 * MAX_LONGITUDE, -lon_bits)

    lat_min = lat_int / _QUANTIZE_SCALE * (2.0 * MAX_LATITUDE) - MAX_LATITUDE
    lon_min = lon_int / _QUANTIZE_SCALE * (2.0 * MAX_LONGITUDE) - MAX_LONGITUDE

    return lat_min, lat_min + lat_err, lon_min, lon_min + lon_err


def decode_int(code: int, bits: int) -> tuple[float, float]:
    """
    Decode a cell code into the center point of its cell.

    Args:
        code: Cell code
        bits: Precision of the code

    Returns:
        Tuple of (latitude, longitude)
    """
    lat_min, lat_max, lon_min, lon_max = bounding_box_int(code, bits)
    return (lat_min + lat_max) / 2.0, (lon_min + lon_max) / 2.0


def neighbors_int(code: int, bits: int) -> list[int]:
    """
    Get the 8 neighboring cells (north, south, east, west, and diagonals).

    Longitude wraps around the date line. Latitude is clamped at the poles,
    so cells in the top or bottom row return themselves (or their east/west
    neighbors) in place of the missing row.

    Args:
        code: Cell code
        bits: Precision of the code

    Returns:
        List of 8 cell codes ordered N, NE, E, SE, S, SW, W, NW
    """
    lat_min, lat_max, lon_min, lon_max = bounding_box_int(code, bits)
    lat = (lat_min + lat_max) / 2.0
    lon = (lon_min + lon_max) / 2.0
    dlat = lat_max - lat_min
    dlon = lon_max - lon_min

    offsets = [(1, 0), (1, 1), (0, 1), (-1, 1), (-1, 0), (-1, -1), (0, -1), (1, -1)]
    return [
        encode_int(lat + lat_step * dlat, _wrap_longitude(lon + lon_step * dlon), bits)
        for lat_step, lon_step in offsets
    ]


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """
    Calculate great-circle distance between two points using the Haversine formula.

    Returns distance in kilometers.
    """
    lat1_rad = math.radians(lat1)
    lat2_rad = math.radians(lat2)
    dlat = math.radians(lat2 - lat1)
    dlon = math.radians(lon2 - lon1)

    a = math.sin(dlat / 2) ** 2 + math.cos(lat1_rad) * math.cos(lat2_rad) * math.sin(dlon / 2) ** 2
    # Rounding can push a just past 1.0 for antipodal points
    a = min(1.0, max(0.0, a))
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))

    return EARTH_RADIUS_KM * c
