"""
Great-circle distance between coordinates.

Distances are in meters, computed with the haversine formula on a
sphere of fixed (mean Earth) radius.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from haversine import Unit, haversine

if TYPE_CHECKING:
    from src.route_map.schemas.network import Airport


def distance(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    """
    Great-circle distance between two points, in meters.

    Symmetric, and zero when both points coincide.

    Args:
        lat1, lng1: First point in decimal degrees.
        lat2, lng2: Second point in decimal degrees.

    Returns:
        Distance in meters.

    Example:
        >>> round(distance(0.0, 0.0, 1.0, 0.0) / 1000)
        111
    """
    if lat1 == lat2 and lng1 == lng2:
        return 0.0
    return haversine((lat1, lng1), (lat2, lng2), unit=Unit.METERS)


def airport_distance(source: Airport, destination: Airport) -> float:
    """Straight distance between two airports, in meters."""
    return distance(source.lat, source.lng, destination.lat, destination.lng)
