"""
Port interfaces for the route map.

Ports define the abstract interfaces that the search engine uses to
communicate with external systems. This follows the Ports and Adapters
(Hexagonal) architecture pattern.
"""

from src.route_map.ports.flight_network_store import FlightNetworkStore

__all__ = [
    "FlightNetworkStore",
]
