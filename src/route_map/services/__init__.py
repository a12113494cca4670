"""
Domain services for the route map.

Services orchestrate the interaction between ports (flight-network
stores) and domain logic (pruning, itinerary assembly).
"""

from src.route_map.services.route_search_service import (
    BranchOutcome,
    RouteSearchService,
    group_routes_by_destination,
    reference_distance,
)

__all__ = [
    "BranchOutcome",
    "RouteSearchService",
    "group_routes_by_destination",
    "reference_distance",
]
