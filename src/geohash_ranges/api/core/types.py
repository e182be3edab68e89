"""
Type definitions for geohash range queries.

This module contains the dataclasses shared by the range builder,
the membership test, and the key store.
"""

from __future__ import annotations

from dataclasses import dataclass


__all__ = [
    "HashRange",
    "KeyRange",
    "Point",
]


@dataclass(frozen=True)
class Point:
    """
    A geographic point on Earth.

    Attributes:
        latitude: Latitude in degrees (-90 to +90, positive=North, negative=South)
        longitude: Longitude in degrees (-180 to +180, positive=East, negative=West)
    """

    latitude: float
    longitude: float

    def __str__(self) -> str:
        lat_dir = "N" if self.latitude >= 0 else "S"
        lon_dir = "E" if self.longitude >= 0 else "W"
        return f"{abs(self.latitude):.4f}°{lat_dir}, {abs(self.longitude):.4f}°{lon_dir}"


@dataclass(frozen=True, order=True)
class HashRange:
    """
    Half-open interval ``[min, max)`` of full-precision cell codes.

    Attributes:
        min: First code covered by the range
        max: First code past the end of the range
    """

    min: int
    max: int

    def __contains__(self, code: object) -> bool:
        return isinstance(code, int) and self.min <= code < self.max

    def __str__(self) -> str:
        return f"[{self.min:#018x}, {self.max:#018x})"


@dataclass(frozen=True)
class KeyRange:
    """
    Scan boundaries for a sorted key-value store.

    Attributes:
        begin: First key of the range (inclusive)
        end: End key of the range (exclusive)
    """

    begin: bytes
    end: bytes

    def __contains__(self, key: object) -> bool:
        return isinstance(key, bytes) and self.begin <= key < self.end

    def __str__(self) -> str:
        return f"[{self.begin.hex()}, {self.end.hex()})"
