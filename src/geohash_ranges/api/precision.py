"""
Precision selection for radius searches.

Picks the bit precision whose cell width still covers a search radius, so a
search needs only the query cell and its 8 neighbors.
"""

from __future__ import annotations

from typing import Final

import deal

from geohash_ranges.api.core.constants import MAX_BITS, MERCATOR_MAX_KM, MIN_BITS


__all__ = [
    "BITS_TO_DISTANCE_KM",
    "cell_width_km",
    "find_bits_precision",
]


_FIRST_TABULATED_BITS: Final[int] = 4


def _build_bits_to_distance() -> tuple[float, ...]:
    widths: list[float] = []
    width = MERCATOR_MAX_KM
    # Each additional 2 bits adds one latitude and one longitude bit, halving the cell
    for _ in range(_FIRST_TABULATED_BITS, MAX_BITS + 1, 2):
        width /= 2.0
        widths.append(width)
    return tuple(widths)


BITS_TO_DISTANCE_KM: Final[tuple[float, ...]] = _build_bits_to_distance()
"""Cell width in km, index i holds the width at 2*i + 4 bits (4 bits: ~10018.75 km)."""


@deal.pre(lambda bits: MIN_BITS <= bits <= MAX_BITS and bits % 2 == 0, message="Bits must be even and 2-64")
def cell_width_km(bits: int) -> float:
    """
    Get the tabulated cell width for a bit precision.

    Args:
        bits: Even bit precision (2-64)

    Returns:
        Cell width in kilometers (2 bits spans the full 20037.5 km)
    """
    if bits < _FIRST_TABULATED_BITS:
        return MERCATOR_MAX_KM
    return BITS_TO_DISTANCE_KM[(bits - _FIRST_TABULATED_BITS) // 2]


@deal.post(lambda result: MIN_BITS <= result <= MAX_BITS and result % 2 == 0, message="Bits must be even and 2-64")
def find_bits_precision(radius_km: float) -> int:
    """
    Get the finest geohash precision whose cell width still covers a radius.

    Scans from the finest precision toward the coarsest and returns the first
    precision whose cell width is still >= radius_km, i.e. the largest bit
    count whose cell can contain a circle of that radius.

    Args:
        radius_km: Search radius in kilometers

    Returns:
        Even bit precision (2-64). A radius wider than every tabulated cell
        yields 2, a radius <= 0 yields 64.

    Example:
        >>> find_bits_precision(100.0)
        16
    """
    for index in range(len(BITS_TO_DISTANCE_KM) - 1, -1, -1):
        if BITS_TO_DISTANCE_KM[index] >= radius_km:
            return index * 2 + _FIRST_TABULATED_BITS
    return MIN_BITS
