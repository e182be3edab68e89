"""Core subpackage for shared types, constants, configuration, and exceptions."""

from geohash_ranges.api.core.config import RangeConfig
from geohash_ranges.api.core.types import HashRange, KeyRange, Point


__all__ = [
    "HashRange",
    "KeyRange",
    "Point",
    "RangeConfig",
]
