"""
Data Processing Module for Columbus ZIP Coverage.

This module turns the availability ledger into the two artifacts the
exporters read: the availability table and the ZIP boundary GeoJSON.
"""

from .availability import AvailabilityTable, build_availability, extract_availability
from .boundary_fetcher import (
    BoundaryFetcher,
    BoundaryFetchResult,
    chunk_zip_codes,
    export_boundaries,
    write_geojson,
)

__all__ = [
    "AvailabilityTable",
    "build_availability",
    "extract_availability",
    "BoundaryFetcher",
    "BoundaryFetchResult",
    "chunk_zip_codes",
    "export_boundaries",
    "write_geojson",
]
