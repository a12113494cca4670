"""
Schema definitions for the route map.

Immutable dataclasses for network records and itineraries, and
Pandera-validated DataFrames for the loaded dataset.
"""

from .dataset import (
    AirlineDataFrame,
    AirlineSchema,
    AirportDataFrame,
    AirportSchema,
    RouteDataFrame,
    RouteSchema,
)
from .itinerary import AirportLink, ConnectedRoutes
from .network import Airline, Airport, Route
from .search_config import ReferenceDistancePolicy, SearchConfig

__all__ = [
    # Network records
    "Airport",
    "Airline",
    "Route",
    # Itineraries
    "AirportLink",
    "ConnectedRoutes",
    # Dataset schemas
    "AirportSchema",
    "AirlineSchema",
    "RouteSchema",
    "AirportDataFrame",
    "AirlineDataFrame",
    "RouteDataFrame",
    # Search settings
    "ReferenceDistancePolicy",
    "SearchConfig",
]
