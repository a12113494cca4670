"""
FindItineraries Use Case - Public API for itinerary search.

This module provides the main entry point for the route map.
It acts as a Facade/Factory, handling dataset loading and store
initialization and providing a clean interface for consumers.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Dict, List, Optional, Union

from src.route_map.adapters.data_providers.openflights_provider import (
    DEFAULT_DATA_DIR,
    OpenFlightsDataProvider,
)
from src.route_map.adapters.repositories.in_memory_store import (
    InMemoryFlightNetworkStore,
)
from src.route_map.adapters.repositories.sqlite_store import SqliteFlightNetworkStore
from src.route_map.ports.flight_network_store import FlightNetworkStore
from src.route_map.schemas.itinerary import AirportLink, ConnectedRoutes
from src.route_map.schemas.network import Route
from src.route_map.schemas.search_config import SearchConfig
from src.route_map.services.route_search_service import RouteSearchService

logger = logging.getLogger(__name__)


class FindItineraries:
    """
    Public API for finding itineraries between cities.

    Example usage:
        >>> async with FindItineraries(data_dir="data/openflights") as finder:
        ...     direct = await finder.direct_routes("Warsaw", "Barcelona")
        ...     chained = await finder.indirect_routes("Warsaw", "Barcelona", 2)

    Attributes:
        _store: Flight-network store being queried.
        _service: Underlying RouteSearchService.
    """

    def __init__(
        self,
        data_dir: Optional[Union[str, Path]] = None,
        db_path: Optional[Union[str, Path]] = None,
        store: Optional[FlightNetworkStore] = None,
        config: Optional[SearchConfig] = None,
    ) -> None:
        """
        Initialize the finder with optional custom dependencies.

        Args:
            data_dir: OpenFlights directory. Defaults to data/openflights.
                Ignored when a store is given.
            db_path: If set, the dataset is written to this SQLite file
                and queried from there; otherwise it is indexed in memory.
            store: Custom store. If None, one is built from the dataset.
            config: Search settings. If None, uses defaults.

        Raises:
            DatasetNotFoundError: If a dataset file is missing.
            StoreError: If the SQLite store cannot be populated.
        """
        if store is not None:
            self._store = store
        else:
            provider = OpenFlightsDataProvider(data_dir or DEFAULT_DATA_DIR)
            dataset = provider.load()
            if db_path is not None:
                sqlite_store = SqliteFlightNetworkStore(db_path)
                sqlite_store.populate(dataset)
                self._store = sqlite_store
            else:
                self._store = InMemoryFlightNetworkStore.from_dataset(dataset)

        self._service = RouteSearchService(store=self._store, config=config)

        logger.info("FindItineraries initialized with %s store", self._store.name)

    @property
    def service(self) -> RouteSearchService:
        return self._service

    @property
    def store_name(self) -> str:
        """Get the name of the store being queried."""
        return self._store.name

    async def direct_routes(
        self,
        origin: str,
        destination: str,
        timeout: Optional[float] = None,
    ) -> List[Route]:
        """
        Find all direct routes between two cities.

        Args:
            origin: Departure city.
            destination: Arrival city.
            timeout: Deadline in seconds for the whole search.

        Raises:
            asyncio.TimeoutError: If the deadline passes.
            StoreError: If a lookup fails.
        """
        return await asyncio.wait_for(
            self._service.find_city_routes(origin, destination), timeout
        )

    async def direct_links(
        self,
        origin: str,
        destination: str,
        timeout: Optional[float] = None,
    ) -> List[AirportLink]:
        """Find direct routes collapsed into one link per airport pair."""
        return await asyncio.wait_for(
            self._service.find_city_links(origin, destination), timeout
        )

    async def indirect_routes(
        self,
        origin: str,
        destination: str,
        max_connections: int,
        timeout: Optional[float] = None,
    ) -> List[ConnectedRoutes]:
        """
        Find all itineraries of at most max_connections links.

        Args:
            origin: Departure city.
            destination: Final destination city.
            max_connections: Link budget per itinerary.
            timeout: Deadline in seconds for the whole search.

        Raises:
            asyncio.TimeoutError: If the deadline passes.
            StoreError: If a lookup fails.
        """
        return await asyncio.wait_for(
            self._service.find_city_indirect_routes(origin, destination, max_connections),
            timeout,
        )

    def summary(self) -> Dict[str, int]:
        """Record counts of the underlying store, when it reports them."""
        summarise = getattr(self._store, "summarise_records", None)
        if summarise is None:
            return {}
        return summarise()

    def close(self) -> None:
        """Release store resources (database connections)."""
        if hasattr(self._store, "close"):
            self._store.close()
        logger.info("FindItineraries shutdown complete")

    async def __aenter__(self) -> "FindItineraries":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Async context manager exit with cleanup."""
        self.close()
