"""
Itinerary value types built during a route search.

An AirportLink collapses every route between one ordered airport pair
into a single edge. ConnectedRoutes chains links into an itinerary.
Both are immutable and only live for the duration of a search.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import FrozenSet, Iterable, List, Tuple

from src.route_map.geo import airport_distance
from src.route_map.schemas.network import Airport


@dataclass(frozen=True)
class AirportLink:
    """
    Direct link between two airports and its operating airlines.

    Attributes:
        source_airport: Departure airport.
        dest_airport: Arrival airport.
        airlines: Codes of the airlines operating this link (non-empty).
        distance: Great-circle distance between the airports, in meters.
    """

    source_airport: Airport
    dest_airport: Airport
    airlines: FrozenSet[str]
    distance: float = field(init=False, compare=False)

    def __post_init__(self) -> None:
        """Validate airlines and compute the link distance once."""
        if not isinstance(self.airlines, frozenset):
            object.__setattr__(self, "airlines", frozenset(self.airlines))
        if not self.airlines:
            raise ValueError(
                f"Link {self.source_airport.code}->{self.dest_airport.code} "
                "must have at least one airline"
            )
        object.__setattr__(
            self,
            "distance",
            airport_distance(self.source_airport, self.dest_airport),
        )

    @classmethod
    def create(
        cls,
        source_airport: Airport,
        dest_airport: Airport,
        airlines: Iterable[str],
    ) -> "AirportLink":
        """Build a link, merging duplicate airline codes."""
        return cls(
            source_airport=source_airport,
            dest_airport=dest_airport,
            airlines=frozenset(airlines),
        )


@dataclass(frozen=True)
class ConnectedRoutes:
    """
    Ordered itinerary of airport links.

    Every link departs from the airport where the previous link
    arrived. Instances are never mutated; prepending or concatenating
    returns a new itinerary.

    Attributes:
        routes: Links in travel order.
    """

    routes: Tuple[AirportLink, ...] = ()

    def __post_init__(self) -> None:
        """Check path continuity."""
        if not isinstance(self.routes, tuple):
            object.__setattr__(self, "routes", tuple(self.routes))
        for previous, following in zip(self.routes, self.routes[1:]):
            if previous.dest_airport != following.source_airport:
                raise ValueError(
                    f"Broken itinerary: {previous.dest_airport.code} "
                    f"does not connect to {following.source_airport.code}"
                )

    def __len__(self) -> int:
        return len(self.routes)

    def __add__(self, other: "ConnectedRoutes") -> "ConnectedRoutes":
        """Concatenate two itineraries."""
        return ConnectedRoutes(self.routes + other.routes)

    def prepend_link(self, link: AirportLink) -> "ConnectedRoutes":
        """Return a new itinerary starting with the given link."""
        return ConnectedRoutes((link,) + self.routes)

    @property
    def num_hops(self) -> int:
        """Number of flight segments."""
        return len(self.routes)

    @property
    def total_distance(self) -> float:
        """Aggregate travelling distance of all links, in meters."""
        return sum(link.distance for link in self.routes)

    @property
    def displacement(self) -> float:
        """Straight distance from the first departure to the last arrival, in meters."""
        if not self.routes:
            return 0.0
        return airport_distance(self.origin, self.destination)

    @property
    def origin(self) -> Airport:
        """First departure airport."""
        if not self.routes:
            raise ValueError("Itinerary has no links")
        return self.routes[0].source_airport

    @property
    def destination(self) -> Airport:
        """Final arrival airport."""
        if not self.routes:
            raise ValueError("Itinerary has no links")
        return self.routes[-1].dest_airport

    @property
    def airport_codes(self) -> List[str]:
        """Ordered airport codes along the itinerary."""
        if not self.routes:
            return []
        return [self.origin.code] + [link.dest_airport.code for link in self.routes]

    @property
    def cities(self) -> List[str]:
        """Ordered cities along the itinerary."""
        if not self.routes:
            return []
        return [self.origin.city] + [link.dest_airport.city for link in self.routes]
