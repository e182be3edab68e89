"""
Cell enumeration, range expansion, and range merging.

A coarse cell at ``bits`` precision owns the contiguous block of
full-precision codes that share its prefix. Expanding the query cell and its
neighbors into those blocks, then merging the blocks, yields the key ranges a
sorted store has to scan.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

import deal

from geohash_ranges.api.backends import DEFAULT_SPATIAL_CODEC, SpatialCodec
from geohash_ranges.api.core.constants import MAX_BITS, MIN_BITS, UINT64_MASK
from geohash_ranges.api.core.types import HashRange, Point


__all__ = [
    "expand_cells",
    "find_cells",
    "is_sorted_disjoint",
    "merge_ranges",
]


logger = logging.getLogger(__name__)


def is_sorted_disjoint(ranges: Sequence[HashRange]) -> bool:
    """Check that ranges are ascending, non-empty, and neither overlap nor touch."""
    if any(r.min >= r.max for r in ranges):
        return False
    return all(a.max < b.min for a, b in zip(ranges, ranges[1:]))


def find_cells(point: Point, bits: int, codec: SpatialCodec = DEFAULT_SPATIAL_CODEC) -> list[int]:
    """
    Get the query cell and its neighbors at a precision.

    Args:
        point: Search center
        bits: Precision of the cells
        codec: Spatial code used for encoding and neighbor lookup

    Returns:
        Up to 9 distinct cell codes, query cell first. Near the poles and the
        date line neighbors can collapse onto each other, so fewer may be
        returned.
    """
    center = codec.encode(point.latitude, point.longitude, bits)
    cells = [center, *codec.neighbors(center, bits)]

    # Remove duplicates
    return list(dict.fromkeys(cells))


@deal.pre(
    lambda cells, bits, full_bits: MIN_BITS <= bits <= full_bits <= MAX_BITS,
    message="Cell bits must be between 2 and full_bits, full_bits at most 64",
)
def expand_cells(cells: Iterable[int], bits: int, full_bits: int) -> list[HashRange]:
    """
    Expand coarse cells into ranges of full-precision codes.

    Bounds follow unsigned 64-bit arithmetic. When the upper bound of the last
    cell at a precision overflows and wraps, min > max and that range is
    dropped rather than clamped.

    Args:
        cells: Cell codes at ``bits`` precision (duplicates allowed)
        bits: Precision of the cells
        full_bits: Precision of stored codes

    Returns:
        One HashRange per surviving cell, in no particular order
    """
    shift = full_bits - bits
    ranges: list[HashRange] = []
    for cell in cells:
        lower = (cell << shift) & UINT64_MASK
        upper = ((cell + 1) << shift) & UINT64_MASK
        if lower > upper:
            logger.debug(f"Dropping cell {cell:#x} at {bits} bits: range bound overflowed 64 bits")
            continue
        ranges.append(HashRange(min=lower, max=upper))
    return ranges


@deal.post(lambda result: is_sorted_disjoint(result), message="Merged ranges must be sorted and disjoint")
def merge_ranges(ranges: Iterable[HashRange]) -> list[HashRange]:
    """
    Merge ranges into the minimal sorted set of disjoint ranges.

    Adjacent ranges (``a.max == b.min``) are fused, duplicates and nested
    ranges are absorbed, and overlapping ranges are joined. Ranges that cover
    nothing (min >= max) are skipped. The input is not modified.

    Args:
        ranges: Ranges in any order

    Returns:
        Ranges sorted by min; empty input gives an empty list

    Example:
        >>> merge_ranges([HashRange(4, 8), HashRange(0, 4), HashRange(0, 4)])
        [HashRange(min=0, max=8)]
    """
    ordered = sorted((r for r in ranges if r.min < r.max), key=lambda r: r.min)
    if not ordered:
        return []

    merged: list[HashRange] = []
    current = ordered[0]
    for following in ordered[1:]:
        if following.min <= current.max:
            if following.max > current.max:
                current = HashRange(min=current.min, max=following.max)
            continue
        merged.append(current)
        current = following
    merged.append(current)

    logger.debug(f"Merged {len(ordered)} ranges into {len(merged)}")
    return merged
