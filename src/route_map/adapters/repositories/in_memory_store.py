"""
In-memory Flight-Network Store.

Builds dictionary indices once from loaded records so every lookup
is a single dict access. The indices are never mutated after
construction, so concurrent searches can share one store.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import TYPE_CHECKING, Dict, Iterable, List, Optional, Tuple

from src.route_map.exceptions import StoreError
from src.route_map.ports.flight_network_store import FlightNetworkStore
from src.route_map.schemas.network import Airline, Airport, Route

if TYPE_CHECKING:
    from src.route_map.adapters.data_providers.openflights_provider import (
        OpenFlightsDataset,
    )

logger = logging.getLogger(__name__)


class InMemoryFlightNetworkStore(FlightNetworkStore):
    """
    Flight-network store backed by in-process indices.

    Attributes:
        _airports_by_code: Airport code -> airport.
        _airports_by_city: City name -> airports in that city.
        _departures: Airport code -> routes departing it.
        _routes_by_pair: (source, dest) -> routes between them.
        _airlines: Airline code -> airline.
    """

    def __init__(
        self,
        airports: Iterable[Airport],
        routes: Iterable[Route],
        airlines: Iterable[Airline] = (),
    ) -> None:
        """
        Index the given records.

        Args:
            airports: Airport records; the first record wins on duplicate codes.
            routes: Route records.
            airlines: Airline records (display labels).
        """
        self._airports_by_code: Dict[str, Airport] = {}
        airports_by_city: Dict[str, List[Airport]] = defaultdict(list)
        for airport in airports:
            if airport.code in self._airports_by_code:
                continue
            self._airports_by_code[airport.code] = airport
            airports_by_city[airport.city].append(airport)
        self._airports_by_city = dict(airports_by_city)

        departures: Dict[str, List[Route]] = defaultdict(list)
        routes_by_pair: Dict[Tuple[str, str], List[Route]] = defaultdict(list)
        route_count = 0
        for route in routes:
            departures[route.source_code].append(route)
            routes_by_pair[(route.source_code, route.dest_code)].append(route)
            route_count += 1
        self._departures = dict(departures)
        self._routes_by_pair = dict(routes_by_pair)
        self._route_count = route_count

        self._airlines: Dict[str, Airline] = {}
        for airline in airlines:
            self._airlines.setdefault(airline.code, airline)

        logger.debug(
            "In-memory store indexed %d airports, %d routes, %d airlines",
            len(self._airports_by_code),
            self._route_count,
            len(self._airlines),
        )

    @classmethod
    def from_dataset(cls, dataset: OpenFlightsDataset) -> "InMemoryFlightNetworkStore":
        """Build a store from a loaded OpenFlights dataset."""
        return cls(
            airports=dataset.airports(),
            routes=dataset.routes(),
            airlines=dataset.airlines(),
        )

    @property
    def name(self) -> str:
        """Human-readable store name."""
        return "In-Memory"

    async def find_airports(self, city: str) -> List[Airport]:
        return list(self._airports_by_city.get(city, ()))

    async def find_airport_by_code(self, code: str) -> List[Airport]:
        airport = self._airports_by_code.get(code)
        return [airport] if airport is not None else []

    async def find_departure_routes(self, airport_code: str) -> List[Route]:
        return list(self._departures.get(airport_code, ()))

    async def find_airport_routes(self, src_code: str, dst_code: str) -> List[Route]:
        return list(self._routes_by_pair.get((src_code, dst_code), ()))

    async def find_cities_connected_by_route(self, route: Route) -> Tuple[str, str]:
        source = self._airports_by_code.get(route.source_code)
        dest = self._airports_by_code.get(route.dest_code)
        if source is None or dest is None:
            raise StoreError(
                "find_cities_connected_by_route",
                f"unknown airport in route {route.source_code}->{route.dest_code}",
            )
        return source.city, dest.city

    def get_airline(self, code: str) -> Optional[Airline]:
        """Look up an airline label by code."""
        return self._airlines.get(code)

    def summarise_records(self) -> Dict[str, int]:
        """Number of records per table."""
        return {
            "airports": len(self._airports_by_code),
            "airlines": len(self._airlines),
            "routes": self._route_count,
        }
