"""
Route Search Service - Direct and indirect itinerary search.

Coordinates lookups against a FlightNetworkStore:
- Direct routes between every airport pair of two cities
- Recursive, depth-bounded expansion of multi-hop itineraries

Every recursion level issues its store lookups concurrently and waits
for all of them before combining results (fan-out, then fan-in). The
first lookup failure propagates to the caller; nothing is retried or
memoized, so the same (airport, skip set, depth) state reached through
different paths is recomputed each time.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections import defaultdict
from enum import Enum
from itertools import chain
from statistics import fmean
from typing import TYPE_CHECKING, Dict, FrozenSet, Iterable, List, Optional, Sequence, Tuple

from src.route_map.geo import airport_distance
from src.route_map.schemas.itinerary import AirportLink, ConnectedRoutes
from src.route_map.schemas.network import Airport, Route
from src.route_map.schemas.search_config import ReferenceDistancePolicy, SearchConfig

if TYPE_CHECKING:
    from src.route_map.ports.flight_network_store import FlightNetworkStore

logger = logging.getLogger(__name__)


class BranchOutcome(Enum):
    """Terminal state of one candidate hop during the indirect search."""

    ARRIVED = "arrived"
    PRUNED_CYCLE = "pruned_cycle"
    PRUNED_DISTANCE = "pruned_distance"
    PRUNED_DEPTH_EXHAUSTED = "pruned_depth_exhausted"
    PRUNED_UNRESOLVED_AIRPORT = "pruned_unresolved_airport"


def _concat(results: Iterable[Sequence]) -> list:
    """Fan-in: concatenate the results of concurrently resolved branches."""
    return list(chain.from_iterable(results))


def group_routes_by_destination(routes: Iterable[Route]) -> Dict[str, List[str]]:
    """
    Collapse routes into airline codes per destination airport.

    Args:
        routes: Routes departing one airport.

    Returns:
        Dict mapping destination airport code to the codes of the
        airlines flying there, in route order.
    """
    by_destination: Dict[str, List[str]] = defaultdict(list)
    for route in routes:
        by_destination[route.dest_code].append(route.airline_code)
    return dict(by_destination)


def reference_distance(
    sources: Sequence[Airport],
    destinations: Sequence[Airport],
    policy: ReferenceDistancePolicy = ReferenceDistancePolicy.FIRST_MATCH,
) -> float:
    """
    Pick the straight distance bounding every branch of a search.

    FIRST_MATCH uses the first airport of each city, so when a city
    has several airports far apart the bound may suit some pairs
    poorly. The other policies consider every pair.

    Args:
        sources: Airports of the source city (non-empty).
        destinations: Airports of the destination city (non-empty).
        policy: Selection policy.

    Returns:
        Reference distance in meters.
    """
    if not sources or not destinations:
        raise ValueError("Reference distance needs at least one airport per city")

    if policy is ReferenceDistancePolicy.FIRST_MATCH:
        return airport_distance(sources[0], destinations[0])

    distances = [airport_distance(src, dst) for src in sources for dst in destinations]
    if policy is ReferenceDistancePolicy.MIN:
        return min(distances)
    if policy is ReferenceDistancePolicy.MAX:
        return max(distances)
    return fmean(distances)


class RouteSearchService:
    """
    Domain service for finding itineraries between cities.

    Stateless apart from its collaborators; one instance can serve
    concurrent searches. All per-branch state (remaining connections,
    skip set, reference distance) travels down the recursion as
    arguments.

    Attributes:
        _store: Read-only flight-network store.
        _config: Pruning settings.
    """

    def __init__(
        self,
        store: FlightNetworkStore,
        config: Optional[SearchConfig] = None,
    ) -> None:
        """
        Initialize the route search service.

        Args:
            store: Flight-network store to query.
            config: Search settings. If None, uses defaults.
        """
        self._store = store
        self._config = config or SearchConfig()

    @property
    def config(self) -> SearchConfig:
        """Get the pruning settings in use."""
        return self._config

    @property
    def store_name(self) -> str:
        """Get name of the underlying store."""
        return self._store.name

    # ------------------------------------------------------------------
    # Direct routes
    # ------------------------------------------------------------------

    async def find_city_routes(self, city_src: str, city_dest: str) -> List[Route]:
        """
        Find all direct routes between two cities.

        Queries every (source airport, destination airport) pair
        concurrently.

        Args:
            city_src: Departure city.
            city_dest: Arrival city.

        Returns:
            Routes in no particular order; empty if either city has no
            airports.

        Raises:
            StoreError: If any lookup fails.
        """
        start_time = time.perf_counter()
        sources, dests = await self._find_source_and_destination_airports(
            city_src, city_dest
        )

        # OPTIMIZE: one `WHERE src IN (...) AND dst IN (...)` query would do
        results = await asyncio.gather(
            *(
                self._store.find_airport_routes(src.code, dst.code)
                for src in sources
                for dst in dests
            )
        )
        routes = _concat(results)

        logger.info(
            "Direct search %s -> %s completed: %d routes in %.3fms",
            city_src,
            city_dest,
            len(routes),
            (time.perf_counter() - start_time) * 1000,
        )
        return routes

    async def find_airport_routes(
        self,
        src_airport: Airport,
        dest_airports: Sequence[Airport],
    ) -> List[Route]:
        """
        Find all routes from one airport to any of the given airports.

        Args:
            src_airport: Departure airport.
            dest_airports: Candidate arrival airports.

        Returns:
            Routes in no particular order.
        """
        results = await asyncio.gather(
            *(
                self._store.find_airport_routes(src_airport.code, dst.code)
                for dst in dest_airports
            )
        )
        return _concat(results)

    async def find_city_links(self, city_src: str, city_dest: str) -> List[AirportLink]:
        """
        Find direct routes between two cities, collapsed per airport pair.

        Returns:
            One AirportLink per connected (source, destination) airport
            pair, carrying every airline flying it.
        """
        sources, dests = await self._find_source_and_destination_airports(
            city_src, city_dest
        )
        per_source = await asyncio.gather(
            *(self.find_airport_routes(src, dests) for src in sources)
        )

        dests_by_code = {airport.code: airport for airport in dests}
        links: List[AirportLink] = []
        for src, routes in zip(sources, per_source):
            for dest_code, airlines in group_routes_by_destination(routes).items():
                links.append(AirportLink.create(src, dests_by_code[dest_code], airlines))
        return links

    async def get_dest_city_of_route(self, route: Route) -> str:
        """Find the city where the given route arrives."""
        _, dest_city = await self._store.find_cities_connected_by_route(route)
        return dest_city

    # ------------------------------------------------------------------
    # Indirect routes
    # ------------------------------------------------------------------

    async def find_city_indirect_routes(
        self,
        city_src: str,
        city_dest: str,
        max_connections: int,
    ) -> List[ConnectedRoutes]:
        """
        Find all chained itineraries connecting two cities.

        Every source airport is expanded concurrently. The reference
        straight distance is chosen once per search according to
        the configured ReferenceDistancePolicy.

        Args:
            city_src: Departure city.
            city_dest: Final destination city.
            max_connections: Maximum number of links per itinerary;
                zero or negative yields no itineraries.

        Returns:
            Itineraries in no particular order.

        Raises:
            StoreError: If any lookup fails.
        """
        if max_connections <= 0:
            return []

        start_time = time.perf_counter()
        sources, dests = await self._find_source_and_destination_airports(
            city_src, city_dest
        )
        if not sources or not dests:
            logger.info(
                "No airports for %s (%d) or %s (%d), skipping indirect search",
                city_src,
                len(sources),
                city_dest,
                len(dests),
            )
            return []

        straight_distance = reference_distance(
            sources, dests, self._config.reference_policy
        )
        logger.debug(
            "Reference distance %s -> %s: %.0fm (%s)",
            city_src,
            city_dest,
            straight_distance,
            self._config.reference_policy.value,
        )

        results = await asyncio.gather(
            *(
                self.find_indirect_routes_from_airport(
                    src_airport,
                    city_dest,
                    max_connections,
                    straight_distance,
                )
                for src_airport in sources
            )
        )
        itineraries = _concat(results)

        logger.info(
            "Indirect search %s -> %s (max %d connections) completed: "
            "%d itineraries in %.3fms",
            city_src,
            city_dest,
            max_connections,
            len(itineraries),
            (time.perf_counter() - start_time) * 1000,
        )
        return itineraries

    async def find_indirect_routes_from_airport(
        self,
        src_airport: Airport,
        city_final_dest: str,
        max_connections: int,
        straight_distance: float,
        skip_cities: FrozenSet[str] = frozenset(),
    ) -> List[ConnectedRoutes]:
        """
        Find itineraries starting at an airport and ending in a city.

        Args:
            src_airport: Airport to depart from.
            city_final_dest: City the itineraries must end in.
            max_connections: Remaining link budget.
            straight_distance: Reference distance bounding each link (meters).
            skip_cities: Cities already departed from on this itinerary.

        Returns:
            Itineraries of at most max_connections links.
        """
        if max_connections <= 0:
            logger.debug(
                "%s at %s: no connections left",
                BranchOutcome.PRUNED_DEPTH_EXHAUSTED.value,
                src_airport.code,
            )
            return []

        departures = await self._store.find_departure_routes(src_airport.code)
        by_destination = group_routes_by_destination(departures)

        results = await asyncio.gather(
            *(
                self._expand_link(
                    src_airport,
                    dest_code,
                    airlines,
                    city_final_dest,
                    skip_cities,
                    max_connections,
                    straight_distance,
                )
                for dest_code, airlines in by_destination.items()
            )
        )
        return _concat(results)

    async def _expand_link(
        self,
        src_airport: Airport,
        dest_code: str,
        airlines: List[str],
        city_final_dest: str,
        skip_cities: FrozenSet[str],
        max_connections: int,
        straight_distance: float,
    ) -> List[ConnectedRoutes]:
        """Evaluate one candidate hop and expand further from where it lands."""
        dest_airports = await self._store.find_airport_by_code(dest_code)
        if not dest_airports:
            self._log_outcome(BranchOutcome.PRUNED_UNRESOLVED_AIRPORT, src_airport.code, dest_code)
            return []

        dest_airport = dest_airports[0]
        link = AirportLink.create(src_airport, dest_airport, airlines)

        # Arriving ends the itinerary even when connections remain
        if dest_airport.city == city_final_dest:
            self._log_outcome(BranchOutcome.ARRIVED, src_airport.code, dest_code)
            return [ConnectedRoutes((link,))]

        if dest_airport.city in skip_cities:
            self._log_outcome(BranchOutcome.PRUNED_CYCLE, src_airport.code, dest_code)
            return []

        if link.distance * self._config.distance_slack > straight_distance:
            self._log_outcome(BranchOutcome.PRUNED_DISTANCE, src_airport.code, dest_code)
            return []

        next_routes = await self.find_indirect_routes_from_airport(
            dest_airport,
            city_final_dest,
            max_connections - 1,
            straight_distance,
            skip_cities | {src_airport.city},
        )
        return [routes.prepend_link(link) for routes in next_routes]

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    async def _find_source_and_destination_airports(
        self,
        city_src: str,
        city_dest: str,
    ) -> Tuple[List[Airport], List[Airport]]:
        sources, dests = await asyncio.gather(
            self._store.find_airports(city_src),
            self._store.find_airports(city_dest),
        )
        return sources, dests

    @staticmethod
    def _log_outcome(outcome: BranchOutcome, src_code: str, dest_code: str) -> None:
        logger.debug("%s: %s -> %s", outcome.value, src_code, dest_code)
