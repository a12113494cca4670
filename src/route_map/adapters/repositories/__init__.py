"""
Flight-network store adapters.
"""

from src.route_map.adapters.repositories.in_memory_store import (
    InMemoryFlightNetworkStore,
)
from src.route_map.adapters.repositories.sqlite_store import (
    SqliteFlightNetworkStore,
)

__all__ = [
    "InMemoryFlightNetworkStore",
    "SqliteFlightNetworkStore",
]
