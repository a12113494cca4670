"""
Text rendering of search results.
"""

from typing import Iterable, List

from src.route_map.schemas.itinerary import AirportLink, ConnectedRoutes

LINK_INDENT = "   "


def format_link(link: AirportLink, prefix: str = "") -> str:
    """
    Render one link, e.g. 'Warsaw (WAW) → Paris (CDG) ✈ via: AF,LO'.

    Airlines are listed in sorted order.
    """
    airlines = ",".join(sorted(link.airlines))
    return (
        f"{prefix}{link.source_airport.label} → {link.dest_airport.label}"
        f" ✈ via: {airlines}"
    )


def format_connected_routes(itinerary: ConnectedRoutes) -> List[str]:
    """
    Render an itinerary as a header line followed by one line per link.

    Returns an empty list for an empty itinerary.
    """
    if not itinerary.routes:
        return []

    chain = " → ".join(
        [link.source_airport.label for link in itinerary.routes]
        + [itinerary.destination.label]
    )
    lines = [f"[{itinerary.num_hops} hops] {chain}"]
    lines.extend(format_link(link, LINK_INDENT) for link in itinerary.routes)
    return lines


def format_summary(counts: dict) -> List[str]:
    """Render per-table record counts."""
    return [f"{table}: {count}" for table, count in counts.items()]


def sort_itineraries(itineraries: Iterable[ConnectedRoutes]) -> List[ConnectedRoutes]:
    """Order itineraries for display: fewest hops, then shortest total distance."""
    return sorted(itineraries, key=lambda r: (r.num_hops, r.total_distance))
