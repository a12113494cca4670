"""
OpenFlights dataset schemas using Pandera.

Defines the contract for reference data flowing from the dataset
loader into the flight-network stores. Validation happens at the
loader boundary only, not per lookup.
"""

from typing import Optional

import pandera as pa
from pandera.typing import DataFrame, Series


class AirportSchema(pa.DataFrameModel):
    """Airports keyed by IATA code."""

    code: Series[str] = pa.Field(
        nullable=False,
        unique=True,
        str_length={"min_value": 3, "max_value": 3},
        description="Airport IATA code (e.g., 'WAW')",
    )
    airport_name: Series[str] = pa.Field(
        nullable=False,
        description="Airport name",
    )
    city: Series[str] = pa.Field(
        nullable=False,
        description="City served by the airport",
    )
    country: Series[str] = pa.Field(
        nullable=True,
        description="Country name",
    )
    lat: Series[float] = pa.Field(
        ge=-90,
        le=90,
        description="Latitude in decimal degrees",
    )
    lng: Series[float] = pa.Field(
        ge=-180,
        le=180,
        description="Longitude in decimal degrees",
    )

    class Config:
        strict = False
        coerce = True
        name = "AirportSchema"


class AirlineSchema(pa.DataFrameModel):
    """Airlines, used as display labels only."""

    airline_id: Series[int] = pa.Field(
        description="OpenFlights airline identifier",
    )
    code: Series[str] = pa.Field(
        nullable=False,
        description="Airline IATA code",
    )
    airline_name: Series[str] = pa.Field(
        nullable=False,
        description="Airline name",
    )
    country: Optional[Series[str]] = pa.Field(
        nullable=True,
        description="Country of registration",
    )

    class Config:
        strict = False
        coerce = True
        name = "AirlineSchema"


class RouteSchema(pa.DataFrameModel):
    """Directed routes; one row per (airline, source, dest)."""

    airline_code: Series[str] = pa.Field(
        nullable=False,
        description="Operating airline code",
    )
    source_code: Series[str] = pa.Field(
        nullable=False,
        description="Departure airport code",
    )
    dest_code: Series[str] = pa.Field(
        nullable=False,
        description="Arrival airport code",
    )
    stops: Series[int] = pa.Field(
        ge=0,
        description="Number of stops",
    )

    class Config:
        strict = False
        coerce = True
        name = "RouteSchema"


AirportDataFrame = DataFrame[AirportSchema]
AirlineDataFrame = DataFrame[AirlineSchema]
RouteDataFrame = DataFrame[RouteSchema]
