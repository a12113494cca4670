"""
Shared fixtures for route map tests.

Provides two small flight networks:
- a three-airport line A -> B -> C along the meridian
- a European network with multi-airport cities, cycles, a long-haul
  detour and a route to an unknown airport code
"""

from pathlib import Path
from typing import List

import pytest

from src.route_map.adapters.repositories.in_memory_store import (
    InMemoryFlightNetworkStore,
)
from src.route_map.schemas.network import Airline, Airport, Route
from src.route_map.services.route_search_service import RouteSearchService


@pytest.fixture
def anyio_backend():
    """Use only asyncio backend (trio not installed)."""
    return "asyncio"


# =============================================================================
# LINE NETWORK: A(0,0) -> B(1,0) -> C(2,0), ~111 km per degree
# =============================================================================


@pytest.fixture
def line_airports() -> List[Airport]:
    return [
        Airport("AAA", "Alpha Intl", "CityA", "Testland", 0.0, 0.0),
        Airport("BBB", "Bravo Intl", "CityB", "Testland", 1.0, 0.0),
        Airport("CCC", "Charlie Intl", "CityC", "Testland", 2.0, 0.0),
    ]


@pytest.fixture
def line_routes() -> List[Route]:
    return [
        Route("X1", "AAA", "BBB"),
        Route("X2", "BBB", "CCC"),
    ]


@pytest.fixture
def line_store(line_airports, line_routes) -> InMemoryFlightNetworkStore:
    return InMemoryFlightNetworkStore(airports=line_airports, routes=line_routes)


@pytest.fixture
def line_service(line_store) -> RouteSearchService:
    return RouteSearchService(store=line_store)


# =============================================================================
# EUROPEAN NETWORK
# =============================================================================


@pytest.fixture
def europe_airports() -> List[Airport]:
    return [
        Airport("WAW", "Chopin", "Warsaw", "Poland", 52.1657, 20.9671),
        Airport("WMI", "Modlin", "Warsaw", "Poland", 52.4511, 20.6518),
        Airport("KRK", "Balice", "Krakow", "Poland", 50.0777, 19.7848),
        Airport("BER", "Brandenburg", "Berlin", "Germany", 52.3667, 13.5033),
        Airport("PRG", "Vaclav Havel", "Prague", "Czech Republic", 50.1008, 14.2600),
        Airport("VIE", "Schwechat", "Vienna", "Austria", 48.1103, 16.5697),
        Airport("MUC", "Franz Josef Strauss", "Munich", "Germany", 48.3538, 11.7861),
        Airport("FRA", "Frankfurt Main", "Frankfurt", "Germany", 50.0333, 8.5706),
        Airport("CDG", "Charles de Gaulle", "Paris", "France", 49.0097, 2.5479),
        Airport("ORY", "Orly", "Paris", "France", 48.7262, 2.3652),
        Airport("BCN", "El Prat", "Barcelona", "Spain", 41.2971, 2.0785),
        Airport("MAD", "Barajas", "Madrid", "Spain", 40.4719, -3.5626),
        Airport("LHR", "Heathrow", "London", "United Kingdom", 51.4700, -0.4543),
        Airport("JFK", "John F Kennedy", "New York", "United States", 40.6413, -73.7781),
    ]


@pytest.fixture
def europe_routes() -> List[Route]:
    return [
        # Warsaw departures
        Route("LO", "WAW", "BCN"),
        Route("FR", "WMI", "BCN"),
        Route("LO", "WAW", "BER"),
        Route("LH", "WAW", "BER"),
        Route("LO", "WAW", "PRG"),
        Route("LO", "WAW", "VIE"),
        Route("LO", "WAW", "FRA"),
        Route("LH", "WAW", "MUC"),
        Route("LO", "WAW", "KRK"),
        Route("LO", "WAW", "JFK"),
        Route("FR", "WMI", "XXX"),
        # Central Europe
        Route("OK", "PRG", "BER"),
        Route("EW", "BER", "PRG"),
        Route("EW", "BER", "BCN"),
        Route("VY", "BER", "BCN"),
        Route("OK", "PRG", "BCN"),
        Route("OS", "VIE", "BCN"),
        Route("OS", "VIE", "MUC"),
        Route("LH", "MUC", "BCN"),
        Route("LH", "MUC", "FRA"),
        Route("LH", "FRA", "BCN"),
        Route("LH", "FRA", "CDG"),
        Route("AF", "CDG", "BCN"),
        Route("AF", "ORY", "BCN"),
        Route("LO", "KRK", "WAW"),
        Route("FR", "KRK", "BCN"),
        # Backtracking and long-haul
        Route("LO", "BER", "WAW"),
        Route("BA", "LHR", "BCN"),
        Route("BA", "FRA", "LHR"),
        Route("AA", "JFK", "MAD"),
        Route("IB", "MAD", "BCN"),
    ]


@pytest.fixture
def europe_airlines() -> List[Airline]:
    return [
        Airline(1, "LO", "LOT Polish Airlines", "Poland"),
        Airline(2, "LH", "Lufthansa", "Germany"),
        Airline(3, "FR", "Ryanair", "Ireland"),
    ]


@pytest.fixture
def europe_store(
    europe_airports, europe_routes, europe_airlines
) -> InMemoryFlightNetworkStore:
    return InMemoryFlightNetworkStore(
        airports=europe_airports,
        routes=europe_routes,
        airlines=europe_airlines,
    )


@pytest.fixture
def europe_service(europe_store) -> RouteSearchService:
    return RouteSearchService(store=europe_store)


# =============================================================================
# OPENFLIGHTS FILES
# =============================================================================

AIRPORTS_DAT = """\
1,"Alpha Intl","CityA","Testland","AAA","TAAA",0.0,0.0,10,0,"U","UTC","airport","OurAirports"
2,"Bravo Intl","CityB","Testland","BBB","TBBB",1.0,0.0,10,0,"U","UTC","airport","OurAirports"
3,"Charlie Intl","CityC","Testland","CCC","TCCC",2.0,0.0,10,0,"U","UTC","airport","OurAirports"
4,"Alpha Heliport","CityA","Testland",\\N,"TAAH",0.1,0.1,10,0,"U","UTC","heliport","OurAirports"
5,"Alpha Duplicate","Elsewhere","Testland","AAA","TAAB",5.0,5.0,10,0,"U","UTC","airport","OurAirports"
6,\\N,"CityD",\\N,"DDD",\\N,3.0,0.0,10,0,"U","UTC","airport","OurAirports"
"""

AIRLINES_DAT = """\
1,"Xray One",\\N,"X1","XAA","XRAY","Testland","Y"
2,"Xray Two",\\N,"X2","XAB","XRAYTWO",\\N,"Y"
3,"No Code Air",\\N,\\N,"NCA",\\N,"Testland","N"
"""

ROUTES_DAT = """\
X1,1,AAA,1,BBB,2,,0,320
X2,2,BBB,2,CCC,3,Y,0,320
X1,1,AAA,1,\\N,\\N,,0,320
X2,2,CCC,3,DDD,6,,,738
"""


@pytest.fixture
def openflights_dir(tmp_path) -> Path:
    """Directory with small airports.dat, airlines.dat and routes.dat files.

    Contains one airport without an IATA code, one duplicate code, one
    airline without a code and one route without a destination.
    """
    data_dir = tmp_path / "openflights"
    data_dir.mkdir()
    (data_dir / "airports.dat").write_text(AIRPORTS_DAT, encoding="utf-8")
    (data_dir / "airlines.dat").write_text(AIRLINES_DAT, encoding="utf-8")
    (data_dir / "routes.dat").write_text(ROUTES_DAT, encoding="utf-8")
    return data_dir
