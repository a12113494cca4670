"""
Application layer for the route map.

This layer provides the public API for the itinerary search. It acts
as a facade, handling dependency initialization and providing a simple
interface for consumers.
"""

from src.route_map.application.find_itineraries import FindItineraries

__all__ = ["FindItineraries"]
