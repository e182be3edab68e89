"""
Ordering-preserving tuple keys for sorted key-value stores.

Thin adapters over the FoundationDB tuple layer (``fdb.tuple``), so keys
written here are byte-identical to keys written by FoundationDB clients. The
tuple layer packs tuples into byte strings whose bytewise order matches the
order of the tuples, which is what keeps unsigned 64-bit geohash codes sorted.

Only the pure-Python parts of the ``foundationdb`` package are used; the FDB
client library is not needed.
"""

from __future__ import annotations

import logging
import struct
from typing import Any

import fdb.tuple  # type: ignore[import-untyped]
from fdb.subspace_impl import Subspace as FdbSubspace  # type: ignore[import-untyped]
from returns.pipeline import is_successful
from returns.result import Failure, Result, Success

from geohash_ranges.api.core.constants import UINT64_MASK
from geohash_ranges.api.core.exceptions import KeyDecodeError, KeyEncodeError, KeyIndexError, KeyTypeError
from geohash_ranges.api.core.types import KeyRange


__all__ = [
    "Subspace",
    "pack",
    "unpack",
    "unpack_uint",
]


logger = logging.getLogger(__name__)


def pack(items: tuple[Any, ...]) -> bytes:
    """
    Pack a tuple into an ordering-preserving byte string.

    Args:
        items: Tuple of values the FoundationDB tuple layer supports
               (None, bytes, str, int, float, bool, nested tuples, ...)

    Returns:
        Encoded key

    Raises:
        KeyEncodeError: If an element cannot be encoded

    Example:
        >>> pack(("geo", 1))
        b'\\x02geo\\x00\\x15\\x01'
    """
    try:
        return fdb.tuple.pack(items)
    except ValueError as e:
        raise KeyEncodeError(f"Failed to pack {items!r}: {e}") from e


def unpack(key: bytes) -> Result[tuple[Any, ...], str]:
    """
    Unpack a byte string produced by pack().

    Args:
        key: Encoded key

    Returns:
        Success with the decoded tuple or Failure with error message
    """
    try:
        return Success(fdb.tuple.unpack(key))
    except (ValueError, IndexError, struct.error) as e:
        return Failure(f"Failed to unpack key {key.hex()}: {e}")


def unpack_uint(key: bytes, index: int) -> int:
    """
    Parse an unsigned 64-bit integer element from a key.

    A negative index is treated as relative to the end of the unpacked key.
    Negative integers are reinterpreted as their two's complement uint64 value.

    Args:
        key: Tuple-encoded key
        index: Element position (negative counts from the end)

    Returns:
        The integer at that position

    Raises:
        KeyDecodeError: If the key cannot be unpacked
        KeyIndexError: If the index is out of range of the unpacked key
        KeyTypeError: If the element is not an integer
    """
    result = unpack(key)
    if not is_successful(result):
        raise KeyDecodeError(result.failure())
    items = result.unwrap()

    if index < 0:
        index += len(items)
    if index < 0:
        raise KeyIndexError(f"index {index} is out of range: less than the first index of the parsed key")
    if index >= len(items):
        raise KeyIndexError(f"index {index} is out of range: greater than the final index of the parsed key")

    value = items[index]
    if not isinstance(value, int) or isinstance(value, bool):
        raise KeyTypeError(f"element {index} is not an integer: {type(value).__name__}")
    return value & UINT64_MASK


class Subspace(FdbSubspace):
    """
    A key prefix that keeps one application's keys together.

    Same prefix and key layout as ``fdb.Subspace``; unpack() returns a Result
    and range() returns a KeyRange.

    Example:
        >>> places = Subspace(("places",))
        >>> key = places.pack((42, "cafe"))
        >>> places.unpack(key).unwrap()
        (42, 'cafe')
    """

    def __init__(self, prefix: tuple[Any, ...] = (), raw_prefix: bytes = b"") -> None:
        super().__init__(prefix, raw_prefix)

    def unpack(self, key: bytes) -> Result[tuple[Any, ...], str]:  # type: ignore[override]
        if not self.contains(key):
            return Failure(f"Key {key.hex()} is not in subspace {self.key().hex()}")
        return unpack(key[len(self.key()) :])

    def range(self, items: tuple[Any, ...] = ()) -> KeyRange:  # type: ignore[override]
        """Return the key range covering every key nested under items."""
        bounds = super().range(items)
        return KeyRange(begin=bounds.start, end=bounds.stop)

    def subspace(self, items: tuple[Any, ...]) -> Subspace:
        return Subspace(raw_prefix=self.pack(items))

    def __getitem__(self, name: Any) -> Subspace:
        return self.subspace((name,))
