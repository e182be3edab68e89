"""
Pluggable spatial and key codecs.

Range building only needs a few operations from its collaborators: encoding
a point to a cell, decoding a cell back to a point, listing a cell's
neighbors, and turning an integer bound into a store key. They are declared
as protocols so alternate space-filling codes or key-value backends can be
substituted without touching the range logic.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from geohash_ranges.api.geohash_utils import decode_int, encode_int, neighbors_int
from geohash_ranges.api.tuple_layer import pack


__all__ = [
    "DEFAULT_KEY_CODEC",
    "DEFAULT_SPATIAL_CODEC",
    "GeohashIntCodec",
    "KeyCodec",
    "SpatialCodec",
    "TupleKeyCodec",
]


@runtime_checkable
class SpatialCodec(Protocol):
    """Protocol for integer space-filling codes."""

    def encode(self, latitude: float, longitude: float, bits: int) -> int: ...

    def decode(self, code: int, bits: int) -> tuple[float, float]: ...

    def neighbors(self, code: int, bits: int) -> list[int]: ...


@runtime_checkable
class KeyCodec(Protocol):
    """Protocol for ordering-preserving key encoders."""

    def encode_key(self, namespace: bytes, value: int) -> bytes: ...


class GeohashIntCodec:
    """Interleaved integer geohash (longitude in the most significant bit)."""

    def encode(self, latitude: float, longitude: float, bits: int) -> int:
        return encode_int(latitude, longitude, bits)

    def decode(self, code: int, bits: int) -> tuple[float, float]:
        return decode_int(code, bits)

    def neighbors(self, code: int, bits: int) -> list[int]:
        return neighbors_int(code, bits)


class TupleKeyCodec:
    """
    Keys made of a raw namespace prefix followed by a tuple-encoded integer.

    For a fixed namespace the byte order of the keys matches the numeric
    order of the integers, which is all a range scan needs.
    """

    def encode_key(self, namespace: bytes, value: int) -> bytes:
        return namespace + pack((value,))


DEFAULT_SPATIAL_CODEC = GeohashIntCodec()
DEFAULT_KEY_CODEC = TupleKeyCodec()
