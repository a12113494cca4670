"""
SQLite Flight-Network Store.

Persists the dataset into three indexed tables and answers lookups
with SQL. Queries are blocking, so each one runs in a worker thread
via asyncio.to_thread; a lock serialises access to the single shared
connection.
"""

from __future__ import annotations

import asyncio
import logging
import sqlite3
import threading
from pathlib import Path
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Sequence, Tuple, Union

import pandas as pd

from src.route_map.exceptions import StoreError
from src.route_map.ports.flight_network_store import FlightNetworkStore
from src.route_map.schemas.network import Airport, Route

if TYPE_CHECKING:
    from src.route_map.adapters.data_providers.openflights_provider import (
        OpenFlightsDataset,
    )

logger = logging.getLogger(__name__)

IN_MEMORY_DB = ":memory:"

_AIRPORT_COLUMNS = "code, airport_name, city, country, lat, lng"
_ROUTE_COLUMNS = "airline_code, source_code, dest_code, stops"

_INDEX_STATEMENTS = (
    "CREATE INDEX IF NOT EXISTS idx_airports_city ON airports (city)",
    "CREATE UNIQUE INDEX IF NOT EXISTS idx_airports_code ON airports (code)",
    "CREATE INDEX IF NOT EXISTS idx_routes_source ON routes (source_code)",
    "CREATE INDEX IF NOT EXISTS idx_routes_pair ON routes (source_code, dest_code)",
)


def _airports_from_df(df: pd.DataFrame) -> List[Airport]:
    return [
        Airport(
            code=row.code,
            name=row.airport_name,
            city=row.city,
            country=row.country if isinstance(row.country, str) else "",
            lat=float(row.lat),
            lng=float(row.lng),
        )
        for row in df.itertuples(index=False)
    ]


def _routes_from_df(df: pd.DataFrame) -> List[Route]:
    return [
        Route(
            airline_code=row.airline_code,
            source_code=row.source_code,
            dest_code=row.dest_code,
            stops=int(row.stops),
        )
        for row in df.itertuples(index=False)
    ]


class SqliteFlightNetworkStore(FlightNetworkStore):
    """
    Flight-network store backed by a SQLite database.

    Attributes:
        _db_path: Database file, or ":memory:".
        _conn: SQLite connection (lazy initialized).
        _lock: Serialises use of the connection across worker threads.
    """

    def __init__(self, db_path: Union[str, Path] = IN_MEMORY_DB) -> None:
        """
        Initialize the SQLite store.

        Args:
            db_path: Path to the database file. Defaults to a private
                in-memory database.
        """
        self._db_path = str(db_path)
        self._conn: Optional[sqlite3.Connection] = None
        self._lock = threading.Lock()

    def _get_connection(self) -> sqlite3.Connection:
        """Get or create database connection."""
        if self._conn is None:
            self._conn = sqlite3.connect(self._db_path, check_same_thread=False)
        return self._conn

    @property
    def name(self) -> str:
        """Human-readable store name."""
        return "SQLite"

    def populate(self, dataset: OpenFlightsDataset) -> None:
        """
        Replace the stored tables with the given dataset.

        Args:
            dataset: Validated OpenFlights dataset.

        Raises:
            StoreError: If the tables cannot be written.
        """
        with self._lock:
            conn = self._get_connection()
            try:
                dataset.airports_df.to_sql("airports", conn, if_exists="replace", index=False)
                dataset.airlines_df.to_sql("airlines", conn, if_exists="replace", index=False)
                dataset.routes_df.to_sql("routes", conn, if_exists="replace", index=False)
                for statement in _INDEX_STATEMENTS:
                    conn.execute(statement)
                conn.commit()
            except sqlite3.Error as e:
                conn.rollback()
                raise StoreError("populate", str(e)) from e

        logger.info(
            "Populated %s with %d airports, %d airlines, %d routes",
            self._db_path,
            len(dataset.airports_df),
            len(dataset.airlines_df),
            len(dataset.routes_df),
        )

    def summarise_records(self) -> Dict[str, int]:
        """
        Number of records per table.

        Raises:
            StoreError: If the tables do not exist or cannot be read.
        """
        counts: Dict[str, int] = {}
        with self._lock:
            conn = self._get_connection()
            for table in ("airports", "airlines", "routes"):
                try:
                    (count,) = conn.execute(f"SELECT COUNT(*) FROM {table}").fetchone()
                except sqlite3.Error as e:
                    raise StoreError("summarise_records", str(e)) from e
                counts[table] = int(count)
        return counts

    def _query_df(self, operation: str, query: str, params: Sequence[Any]) -> pd.DataFrame:
        """Run one query under the connection lock, translating failures."""
        logger.debug("Executing %s: %s with params: %s", operation, query, params)
        with self._lock:
            try:
                return pd.read_sql(query, self._get_connection(), params=list(params))
            except (sqlite3.Error, pd.errors.DatabaseError) as e:
                raise StoreError(operation, str(e)) from e

    async def _query(self, operation: str, query: str, *params: Any) -> pd.DataFrame:
        return await asyncio.to_thread(self._query_df, operation, query, params)

    async def find_airports(self, city: str) -> List[Airport]:
        df = await self._query(
            "find_airports",
            f"SELECT {_AIRPORT_COLUMNS} FROM airports WHERE city = ?",
            city,
        )
        return _airports_from_df(df)

    async def find_airport_by_code(self, code: str) -> List[Airport]:
        df = await self._query(
            "find_airport_by_code",
            f"SELECT {_AIRPORT_COLUMNS} FROM airports WHERE code = ?",
            code,
        )
        return _airports_from_df(df)

    async def find_departure_routes(self, airport_code: str) -> List[Route]:
        df = await self._query(
            "find_departure_routes",
            f"SELECT {_ROUTE_COLUMNS} FROM routes WHERE source_code = ?",
            airport_code,
        )
        return _routes_from_df(df)

    async def find_airport_routes(self, src_code: str, dst_code: str) -> List[Route]:
        df = await self._query(
            "find_airport_routes",
            f"SELECT {_ROUTE_COLUMNS} FROM routes WHERE source_code = ? AND dest_code = ?",
            src_code,
            dst_code,
        )
        return _routes_from_df(df)

    async def find_cities_connected_by_route(self, route: Route) -> Tuple[str, str]:
        df = await self._query(
            "find_cities_connected_by_route",
            """
            SELECT src.city AS source_city, dst.city AS dest_city
            FROM airports src, airports dst
            WHERE src.code = ? AND dst.code = ?
            """,
            route.source_code,
            route.dest_code,
        )
        if df.empty:
            raise StoreError(
                "find_cities_connected_by_route",
                f"unknown airport in route {route.source_code}->{route.dest_code}",
            )
        row = df.iloc[0]
        return str(row["source_city"]), str(row["dest_city"])

    def close(self) -> None:
        """Close database connection."""
        with self._lock:
            if self._conn is not None:
                self._conn.close()
                self._conn = None
                logger.debug("Database connection closed")

    async def __aenter__(self) -> "SqliteFlightNetworkStore":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
