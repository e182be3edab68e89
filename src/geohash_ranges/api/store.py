"""
SQLite-backed Geospatial Key Store

Stores points under tuple-encoded keys of the form ``(namespace, code, id)``
and answers radius queries by scanning the key ranges from radial_range().

SQLite compares BLOB primary keys bytewise, so the ``geo_keys`` table behaves
like the sorted keyspace of a key-value store and every key range becomes a
single index range scan.

Uses SQLAlchemy ORM for type-safe database operations.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path

from sqlalchemy import Float, LargeBinary, String, Text, create_engine, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import DeclarativeBase, Mapped, Session, mapped_column, sessionmaker

from geohash_ranges.api.backends import DEFAULT_SPATIAL_CODEC, SpatialCodec
from geohash_ranges.api.core.config import RangeConfig, default_db_path
from geohash_ranges.api.core.constants import DEFAULT_BITS_OF_PRECISION, DEFAULT_NAMESPACE
from geohash_ranges.api.core.exceptions import StoreError, StoreNotFoundError
from geohash_ranges.api.core.types import KeyRange
from geohash_ranges.api.radial import RadialRangeParams, radial_range, validate_params
from geohash_ranges.api.tuple_layer import Subspace, unpack_uint


__all__ = [
    "Base",
    "GeoIndex",
    "GeoKeyModel",
    "GeoRecord",
]


logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """Base class for all database models."""

    pass


class GeoKeyModel(Base):
    """
    SQLAlchemy model for geohash-keyed points.

    The primary key is the tuple-encoded ``(namespace, code, item_id)`` key;
    coordinates are kept alongside for display.
    """

    __tablename__ = "geo_keys"

    key: Mapped[bytes] = mapped_column(LargeBinary, primary_key=True)
    item_id: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    latitude: Mapped[float] = mapped_column(Float, nullable=False)
    longitude: Mapped[float] = mapped_column(Float, nullable=False)
    value: Mapped[str | None] = mapped_column(Text, nullable=True)


@dataclass(frozen=True)
class GeoRecord:
    """A point read back from the store."""

    key: bytes
    code: int
    item_id: str
    latitude: float
    longitude: float
    value: str | None = None


class GeoIndex:
    """
    Radius-searchable point index on top of a sorted SQLite keyspace.

    Example:
        >>> index = GeoIndex("/tmp/places.db")
        >>> key = index.put("liberty-bell", 39.9496, -75.1503)
        >>> [r.item_id for r in index.query_radius(10.0, 39.95, -75.16)]
        ['liberty-bell']
        >>> index.close()
    """

    def __init__(
        self,
        db_path: Path | str | None = None,
        namespace: str = DEFAULT_NAMESPACE,
        bits_of_precision: int = DEFAULT_BITS_OF_PRECISION,
        codec: SpatialCodec = DEFAULT_SPATIAL_CODEC,
        create: bool = True,
    ) -> None:
        """
        Open (and optionally create) a key store.

        Args:
            db_path: Path to database file (default: ~/.config/geohash-ranges/index.db)
            namespace: Subspace name the keys are stored under
            bits_of_precision: Precision at which points are encoded
            codec: Spatial code used to encode points

        Raises:
            StoreNotFoundError: If create is False and the file doesn't exist
        """
        if db_path is None:
            db_path = default_db_path()
        self.db_path = Path(db_path)
        if not create and not self.db_path.exists():
            raise StoreNotFoundError(f"Key store not found: {self.db_path}")
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

        self.subspace = Subspace((namespace,)) if namespace else Subspace()
        self.bits_of_precision = bits_of_precision
        self.codec = codec

        self._engine = create_engine(
            f"sqlite:///{self.db_path}",
            connect_args={"check_same_thread": False},
            echo=False,
        )
        self._Session = sessionmaker(bind=self._engine, expire_on_commit=False)
        Base.metadata.create_all(self._engine)
        logger.debug(f"Opened key store {self.db_path} with subspace {self.subspace!r}")

    @classmethod
    def from_config(cls, config: RangeConfig) -> GeoIndex:
        return cls(
            db_path=config.db_path,
            namespace=config.namespace,
            bits_of_precision=config.bits_of_precision,
        )

    @contextmanager
    def _get_session(self) -> Iterator[Session]:
        """Yield a session that commits on success and rolls back on error."""
        session = self._Session()
        try:
            yield session
            session.commit()
        except SQLAlchemyError as e:
            session.rollback()
            logger.error(f"Key store operation failed: {e}", exc_info=True)
            raise StoreError(f"Key store operation failed: {e}") from e
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def _record(self, row: GeoKeyModel) -> GeoRecord:
        return GeoRecord(
            key=row.key,
            code=unpack_uint(row.key, -2),
            item_id=row.item_id,
            latitude=row.latitude,
            longitude=row.longitude,
            value=row.value,
        )

    def key_for(self, item_id: str, latitude: float, longitude: float) -> bytes:
        """Build the store key of a point."""
        code = self.codec.encode(latitude, longitude, self.bits_of_precision)
        return self.subspace.pack((code, item_id))

    def put(self, item_id: str, latitude: float, longitude: float, value: str | None = None) -> bytes:
        """
        Store a point, replacing any previous entry at the same key.

        Raises:
            InvalidCoordinateError: If latitude or longitude is out of range
            StoreError: If the write fails
        """
        validate_params(RadialRangeParams(0.0, latitude, longitude, self.bits_of_precision))
        key = self.key_for(item_id, latitude, longitude)
        with self._get_session() as session:
            session.merge(
                GeoKeyModel(key=key, item_id=item_id, latitude=latitude, longitude=longitude, value=value)
            )
        logger.debug(f"Stored {item_id!r} under key {key.hex()}")
        return key

    def delete(self, item_id: str, latitude: float, longitude: float) -> bool:
        """Remove a point. Returns True if a row was deleted."""
        key = self.key_for(item_id, latitude, longitude)
        with self._get_session() as session:
            row = session.get(GeoKeyModel, key)
            if row is None:
                return False
            session.delete(row)
        return True

    def scan(self, key_ranges: Iterable[KeyRange]) -> list[GeoRecord]:
        """
        Read every record whose key lies in one of the ranges.

        Args:
            key_ranges: Ranges scanned as [begin, end)

        Returns:
            Records in key order within each range
        """
        records: list[GeoRecord] = []
        with self._get_session() as session:
            for key_range in key_ranges:
                query = (
                    select(GeoKeyModel)
                    .where(GeoKeyModel.key >= key_range.begin, GeoKeyModel.key < key_range.end)
                    .order_by(GeoKeyModel.key)
                )
                records.extend(self._record(row) for row in session.execute(query).scalars())
        return records

    def query_radius(self, radius: float, latitude: float, longitude: float, exact: bool = True) -> list[GeoRecord]:
        """
        Find stored points within a radius.

        Args:
            radius: Search radius in kilometers
            latitude: Latitude of the search center
            longitude: Longitude of the search center
            exact: Drop scanned points outside the circle (default: True)

        Returns:
            Matching records in key order
        """
        params = RadialRangeParams(
            radius=radius,
            latitude=latitude,
            longitude=longitude,
            bits_of_precision=self.bits_of_precision,
            namespace=self.subspace.key(),
        )
        candidates = self.scan(radial_range(params, codec=self.codec))
        if not exact:
            return candidates

        matches = [record for record in candidates if params.within_radius(record.code, self.codec)]
        logger.debug(f"Radius query scanned {len(candidates)} keys, {len(matches)} within {radius}km")
        return matches

    def count(self) -> int:
        with self._get_session() as session:
            return int(session.execute(select(func.count()).select_from(GeoKeyModel)).scalar_one())

    def close(self) -> None:
        """Close database connection."""
        self._engine.dispose()

    def __enter__(self) -> GeoIndex:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
