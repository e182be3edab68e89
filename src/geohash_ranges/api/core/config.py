"""
Runtime configuration.

Settings can be passed explicitly or read from ``GEOHASH_RANGES_*``
environment variables (a ``.env`` file is honoured by the CLI).
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

from geohash_ranges.api.core.constants import DEFAULT_BITS_OF_PRECISION, DEFAULT_NAMESPACE, MAX_BITS, MIN_BITS
from geohash_ranges.api.core.exceptions import InvalidConfigurationError


__all__ = ["ENV_PREFIX", "RangeConfig", "default_db_path"]


logger = logging.getLogger(__name__)

ENV_PREFIX = "GEOHASH_RANGES_"

_TRUE_VALUES = ("true", "1", "yes", "on")


def default_db_path() -> Path:
    """Get path to the key store file in the user config directory."""
    return Path.home() / ".config" / "geohash-ranges" / "index.db"


@dataclass
class RangeConfig:
    """
    Configuration for range queries and the key store.

    Attributes:
        bits_of_precision: Precision at which stored keys are encoded (even, 2-64)
        namespace: Key prefix element for the key store subspace (empty for no prefix)
        db_path: Path to the SQLite key store
        verbose: Enable debug logging
    """

    bits_of_precision: int = DEFAULT_BITS_OF_PRECISION
    namespace: str = DEFAULT_NAMESPACE
    db_path: Path = field(default_factory=default_db_path)
    verbose: bool = False

    def __post_init__(self) -> None:
        bits = self.bits_of_precision
        if bits % 2 or not MIN_BITS <= bits <= MAX_BITS:
            raise InvalidConfigurationError(
                f"bits_of_precision must be an even number between {MIN_BITS} and {MAX_BITS}, got {bits}"
            )
        self.db_path = Path(self.db_path).expanduser()

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> RangeConfig:
        """
        Build a configuration from environment variables.

        Recognised variables:
            GEOHASH_RANGES_BITS      - bit precision of stored keys
            GEOHASH_RANGES_NAMESPACE - key store namespace
            GEOHASH_RANGES_DB_PATH   - key store database file
            GEOHASH_RANGES_VERBOSE   - "true"/"1"/"yes" to enable debug logging

        Args:
            environ: Mapping to read from (default: os.environ)

        Raises:
            InvalidConfigurationError: If a variable cannot be parsed
        """
        env = os.environ if environ is None else environ
        kwargs: dict[str, object] = {}

        bits = env.get(f"{ENV_PREFIX}BITS")
        if bits:
            try:
                kwargs["bits_of_precision"] = int(bits)
            except ValueError as e:
                raise InvalidConfigurationError(f"{ENV_PREFIX}BITS must be an integer, got {bits!r}") from e

        namespace = env.get(f"{ENV_PREFIX}NAMESPACE")
        if namespace is not None:
            kwargs["namespace"] = namespace

        db_path = env.get(f"{ENV_PREFIX}DB_PATH")
        if db_path:
            kwargs["db_path"] = Path(db_path)

        verbose = env.get(f"{ENV_PREFIX}VERBOSE")
        if verbose is not None:
            kwargs["verbose"] = verbose.strip().lower() in _TRUE_VALUES

        config = cls(**kwargs)  # type: ignore[arg-type]
        logger.debug(f"Loaded configuration from environment: {config}")
        return config
