"""
Configuration module for the route map.

This module handles loading environment variables and provides
centralized settings for the dataset location, the store backend
and the search deadline.
"""

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from dotenv import load_dotenv

from src.route_map.adapters.data_providers.openflights_provider import DEFAULT_DATA_DIR

ENV_DATA_DIR = "ROUTE_MAP_DATA_DIR"
ENV_DB_PATH = "ROUTE_MAP_DB_PATH"
ENV_SEARCH_TIMEOUT = "ROUTE_MAP_SEARCH_TIMEOUT"
ENV_REFERENCE_POLICY = "ROUTE_MAP_REFERENCE_POLICY"


@dataclass(frozen=True)
class Settings:
    """
    Process-wide settings.

    Attributes:
        data_dir: Directory holding the OpenFlights .dat files.
        db_path: SQLite file to populate and query. None keeps the
            dataset in an in-memory store.
        search_timeout: Deadline in seconds for one search, or None.
        reference_policy: Reference distance policy name.
    """

    data_dir: str = DEFAULT_DATA_DIR
    db_path: Optional[str] = None
    search_timeout: Optional[float] = None
    reference_policy: str = "first"

    def __post_init__(self) -> None:
        """Validate settings after initialization."""
        if self.search_timeout is not None and self.search_timeout <= 0:
            raise ValueError(
                f"search_timeout must be > 0, got {self.search_timeout}"
            )

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """
        Build settings from environment variables.

        Reads a .env file first when no explicit mapping is given.

        Args:
            environ: Variables to read. Defaults to os.environ.

        Returns:
            Validated Settings instance.
        """
        if environ is None:
            load_dotenv()
            environ = os.environ

        timeout = environ.get(ENV_SEARCH_TIMEOUT)
        return cls(
            data_dir=environ.get(ENV_DATA_DIR) or DEFAULT_DATA_DIR,
            db_path=environ.get(ENV_DB_PATH) or None,
            search_timeout=float(timeout) if timeout else None,
            reference_policy=environ.get(ENV_REFERENCE_POLICY) or "first",
        )
