"""
Custom exception classes for geohash range queries.

This module defines specific exceptions for the errors that can occur while
building range queries, decoding stored keys, and operating the key store.
"""

from __future__ import annotations


__all__ = [
    # Configuration exceptions
    "ConfigurationError",
    # Base exception
    "GeoRangeError",
    "InvalidConfigurationError",
    # Query exceptions
    "InvalidCoordinateError",
    "InvalidPrecisionError",
    "InvalidRadiusError",
    # Key codec exceptions
    "KeyCodecError",
    "KeyDecodeError",
    "KeyEncodeError",
    "KeyIndexError",
    "KeyTypeError",
    # Store exceptions
    "StoreError",
    "StoreNotFoundError",
]


class GeoRangeError(Exception):
    """
    Base exception for all geohash range errors.

    All custom exceptions in this library inherit from this base class,
    making it easy to catch all range-query related errors.
    """

    pass


# ============================================================================
# Query Exceptions
# ============================================================================


class InvalidCoordinateError(GeoRangeError):
    """
    Raised when coordinates are out of valid range.

    This occurs when a query uses:
    - Latitude outside -90 to +90 degrees
    - Longitude outside -180 to +180 degrees
    - NaN or infinite values
    """

    pass


class InvalidRadiusError(GeoRangeError):
    """Raised when a search radius is NaN."""

    pass


class InvalidPrecisionError(GeoRangeError):
    """
    Raised when a bit precision is not usable.

    Precisions must be even and lie between 2 and 64 bits, since every
    cell code interleaves the same number of latitude and longitude bits.
    """

    pass


# ============================================================================
# Key Codec Exceptions
# ============================================================================


class KeyCodecError(GeoRangeError):
    """Base exception for tuple-encoded key errors."""

    pass


class KeyEncodeError(KeyCodecError):
    """Raised when a value cannot be packed into a key."""

    pass


class KeyDecodeError(KeyCodecError):
    """Raised when a stored key cannot be unpacked."""

    pass


class KeyIndexError(KeyCodecError):
    """Raised when an element index is out of range of the unpacked key."""

    pass


class KeyTypeError(KeyCodecError):
    """Raised when the element at an index is not an integer."""

    pass


# ============================================================================
# Store Exceptions
# ============================================================================


class StoreError(GeoRangeError):
    """Base exception for key store errors."""

    pass


class StoreNotFoundError(StoreError):
    """Raised when the key store database file doesn't exist."""

    pass


# ============================================================================
# Configuration Exceptions
# ============================================================================


class ConfigurationError(GeoRangeError):
    """Base exception for configuration errors."""

    pass


class InvalidConfigurationError(ConfigurationError):
    """Raised when configuration is invalid."""

    pass
