"""
Data provider adapters for loading the flight network dataset.
"""

from src.route_map.adapters.data_providers.openflights_provider import (
    OpenFlightsDataProvider,
    OpenFlightsDataset,
)

__all__ = ["OpenFlightsDataProvider", "OpenFlightsDataset"]
