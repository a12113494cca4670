"""
Flight network reference records.

Airports, airlines and routes are loaded once per process and are
read-only for the duration of any search.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Airport:
    """
    Immutable airport record.

    Attributes:
        code: Unique airport code (IATA), the lookup key.
        name: Airport name.
        city: City served by the airport.
        country: Country name.
        lat: Latitude in decimal degrees.
        lng: Longitude in decimal degrees.
    """

    code: str
    name: str
    city: str
    country: str
    lat: float
    lng: float

    @property
    def label(self) -> str:
        """Display label, e.g. 'London (LHR)'."""
        return f"{self.city} ({self.code})"


@dataclass(frozen=True)
class Airline:
    """Airline record, used only as a display label."""

    airline_id: int
    code: str
    name: str
    country: Optional[str] = None


@dataclass(frozen=True)
class Route:
    """
    Directed route operated by one airline.

    Several routes may share the same (source, dest) pair with
    different airlines.

    Attributes:
        airline_code: Operating airline code.
        source_code: Departure airport code.
        dest_code: Arrival airport code.
        stops: Number of stops (0 for a direct flight).
    """

    airline_code: str
    source_code: str
    dest_code: str
    stops: int = 0
