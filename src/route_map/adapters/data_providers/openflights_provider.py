"""
OpenFlights Data Provider - CSV to DataFrame adapter.

Reads the headerless OpenFlights files (airports.dat, airlines.dat,
routes.dat) and transforms them into schema-validated DataFrames.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Union

import pandas as pd

from src.route_map.exceptions import DatasetError, DatasetNotFoundError
from src.route_map.schemas.dataset import (
    AirlineDataFrame,
    AirlineSchema,
    AirportDataFrame,
    AirportSchema,
    RouteDataFrame,
    RouteSchema,
)
from src.route_map.schemas.network import Airline, Airport, Route

logger = logging.getLogger(__name__)

DEFAULT_DATA_DIR = "data/openflights"
AIRPORTS_FILE = "airports.dat"
AIRLINES_FILE = "airlines.dat"
ROUTES_FILE = "routes.dat"

# OpenFlights marks missing values with \N
NA_VALUES = ["\\N", ""]

# Raw column position -> schema column
AIRPORT_COLUMNS: Dict[int, str] = {
    1: "airport_name",
    2: "city",
    3: "country",
    4: "code",
    6: "lat",
    7: "lng",
}
AIRLINE_COLUMNS: Dict[int, str] = {
    0: "airline_id",
    1: "airline_name",
    3: "code",
    6: "country",
}
ROUTE_COLUMNS: Dict[int, str] = {
    0: "airline_code",
    2: "source_code",
    4: "dest_code",
    7: "stops",
}


@dataclass(frozen=True)
class OpenFlightsDataset:
    """
    Validated airports, airlines and routes frames.

    Attributes:
        airports_df: Frame validated against AirportSchema.
        airlines_df: Frame validated against AirlineSchema.
        routes_df: Frame validated against RouteSchema.
    """

    airports_df: AirportDataFrame
    airlines_df: AirlineDataFrame
    routes_df: RouteDataFrame

    def airports(self) -> List[Airport]:
        """Airport records in file order."""
        return [
            Airport(
                code=row.code,
                name=row.airport_name,
                city=row.city,
                country=row.country if isinstance(row.country, str) else "",
                lat=float(row.lat),
                lng=float(row.lng),
            )
            for row in self.airports_df.itertuples(index=False)
        ]

    def airlines(self) -> List[Airline]:
        """Airline records in file order."""
        return [
            Airline(
                airline_id=int(row.airline_id),
                code=row.code,
                name=row.airline_name,
                country=row.country if isinstance(row.country, str) else None,
            )
            for row in self.airlines_df.itertuples(index=False)
        ]

    def routes(self) -> List[Route]:
        """Route records in file order."""
        return [
            Route(
                airline_code=row.airline_code,
                source_code=row.source_code,
                dest_code=row.dest_code,
                stops=int(row.stops),
            )
            for row in self.routes_df.itertuples(index=False)
        ]

    @property
    def record_counts(self) -> Dict[str, int]:
        """Number of records per table."""
        return {
            "airports": len(self.airports_df),
            "airlines": len(self.airlines_df),
            "routes": len(self.routes_df),
        }


def read_openflights_file(path: Path, columns: Dict[int, str]) -> pd.DataFrame:
    """
    Read one headerless OpenFlights file, keeping the mapped columns.

    Args:
        path: File to read.
        columns: Mapping of raw column position to output column name.

    Returns:
        DataFrame with the renamed columns, in mapping order.

    Raises:
        DatasetNotFoundError: If the file does not exist.
        DatasetError: If the file lacks one of the mapped columns.
    """
    if not path.exists():
        raise DatasetNotFoundError(path)

    # keep_default_na=False: city names such as "Nan" stay strings
    df = pd.read_csv(
        path,
        header=None,
        dtype=str,
        keep_default_na=False,
        na_values=NA_VALUES,
    )

    missing = [position for position in columns if position >= df.shape[1]]
    if missing:
        raise DatasetError(
            f"{path.name} has {df.shape[1]} columns, expected column(s) {missing}"
        )

    result = df[list(columns)].copy()
    result.columns = list(columns.values())
    return result


class OpenFlightsDataProvider:
    """
    Data provider for the OpenFlights dataset.

    Each getter reads its file, drops rows without a usable key and
    validates the result against its schema.

    Attributes:
        data_dir: Directory holding the three .dat files.
    """

    def __init__(self, data_dir: Union[str, Path] = DEFAULT_DATA_DIR) -> None:
        """
        Initialize the OpenFlights data provider.

        Args:
            data_dir: Directory containing airports.dat, airlines.dat
                and routes.dat.
        """
        self._data_dir = Path(data_dir)

    @property
    def data_dir(self) -> Path:
        return self._data_dir

    @property
    def name(self) -> str:
        """Human-readable provider name."""
        return "OpenFlights CSV"

    @property
    def is_available(self) -> bool:
        """Check if all dataset files exist."""
        return all(
            (self._data_dir / filename).exists()
            for filename in (AIRPORTS_FILE, AIRLINES_FILE, ROUTES_FILE)
        )

    def get_airports_df(self) -> AirportDataFrame:
        """
        Load airports keyed by IATA code.

        Airports without an IATA code or coordinates are dropped, and
        duplicate codes keep their first occurrence.

        Returns:
            DataFrame validated against AirportSchema.
        """
        df = read_openflights_file(self._data_dir / AIRPORTS_FILE, AIRPORT_COLUMNS)
        df = df.dropna(subset=["code", "city", "lat", "lng"])
        df["airport_name"] = df["airport_name"].fillna(df["code"])
        df = df.drop_duplicates(subset="code", keep="first").reset_index(drop=True)

        validated = AirportSchema.validate(df)
        logger.info("Loaded %d airports from %s", len(validated), self._data_dir)
        return validated

    def get_airlines_df(self) -> AirlineDataFrame:
        """
        Load airlines that carry an IATA code.

        Returns:
            DataFrame validated against AirlineSchema.
        """
        df = read_openflights_file(self._data_dir / AIRLINES_FILE, AIRLINE_COLUMNS)
        df = df.dropna(subset=["airline_id", "code", "airline_name"]).reset_index(drop=True)

        validated = AirlineSchema.validate(df)
        logger.info("Loaded %d airlines from %s", len(validated), self._data_dir)
        return validated

    def get_routes_df(self) -> RouteDataFrame:
        """
        Load routes.

        Routes missing an endpoint or airline are dropped; a missing
        stop count is read as a direct flight.

        Returns:
            DataFrame validated against RouteSchema.
        """
        df = read_openflights_file(self._data_dir / ROUTES_FILE, ROUTE_COLUMNS)
        df = df.dropna(subset=["airline_code", "source_code", "dest_code"])
        df["stops"] = df["stops"].fillna("0")
        df = df.reset_index(drop=True)

        validated = RouteSchema.validate(df)
        logger.info("Loaded %d routes from %s", len(validated), self._data_dir)
        return validated

    def load(self) -> OpenFlightsDataset:
        """Load and validate all three files."""
        return OpenFlightsDataset(
            airports_df=self.get_airports_df(),
            airlines_df=self.get_airlines_df(),
            routes_df=self.get_routes_df(),
        )
