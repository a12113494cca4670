"""
Flight-Network Store port interface.

Defines the abstract read contract the route-search engine depends on.
Implementations handle the specifics of the backing store (in-memory
indices, SQL, ...).
"""

from abc import ABC, abstractmethod
from typing import List, Tuple

from src.route_map.schemas.network import Airport, Route


class FlightNetworkStore(ABC):
    """
    Abstract, read-only interface to airports and routes.

    All lookups are coroutines. A lookup that matches nothing returns
    an empty list; a lookup that cannot complete raises StoreError.

    Implementations:
    - InMemoryFlightNetworkStore: dict indices over a loaded dataset
    - SqliteFlightNetworkStore: SQLite tables queried in worker threads
    """

    @abstractmethod
    async def find_airports(self, city: str) -> List[Airport]:
        """
        Return the airports located in the named city.

        Args:
            city: City name, matched exactly.

        Returns:
            Matching airports, possibly empty.

        Raises:
            StoreError: If the lookup cannot complete.
        """
        ...

    @abstractmethod
    async def find_airport_by_code(self, code: str) -> List[Airport]:
        """
        Return the airport with the given code.

        Returns:
            Normally zero or one airport.
        """
        ...

    @abstractmethod
    async def find_departure_routes(self, airport_code: str) -> List[Route]:
        """Return every route departing the given airport."""
        ...

    @abstractmethod
    async def find_airport_routes(self, src_code: str, dst_code: str) -> List[Route]:
        """Return the direct routes from src_code to dst_code."""
        ...

    @abstractmethod
    async def find_cities_connected_by_route(self, route: Route) -> Tuple[str, str]:
        """
        Return the (source city, destination city) pair of a route.

        Raises:
            StoreError: If either endpoint airport is not in the store.
        """
        ...

    @property
    @abstractmethod
    def name(self) -> str:
        """
        Human-readable name of this store.

        Returns:
            Store identifier (e.g., "In-Memory", "SQLite").
        """
        ...
