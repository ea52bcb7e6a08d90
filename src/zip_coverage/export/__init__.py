"""
Export module for Columbus ZIP coverage deliverables.

Provides the availability paint model and selection state, and the
exporters built on them:
- Interactive HTML maps with per-brand ZIP layers
- PDF reports per brand with a map snapshot
- CSV files of the availability table
"""

from .brands import BrandCatalog, BrandMeta, slugify
from .csv_exporter import CSVExporter
from .map_generator import MapGenerator, generate_map, load_geojson
from .paint import (
    NEUTRAL_STYLE,
    ZipOutcome,
    ZipPartition,
    lookup,
    partition_for_brand,
    style_for_outcome,
    style_for_zip,
)
from .pdf_report import BrandReportPDF, PDFReportExporter
from .selection import (
    AppVariant,
    PaintAction,
    SelectionState,
    Transition,
    UnsupportedLocationError,
    initial_state,
    search_location,
    select_brand,
    toggle_filter_brand,
    visible_brands,
)
from .snapshot import render_brand_snapshot

__all__ = [
    "BrandCatalog",
    "BrandMeta",
    "slugify",
    "CSVExporter",
    "MapGenerator",
    "generate_map",
    "load_geojson",
    "NEUTRAL_STYLE",
    "ZipOutcome",
    "ZipPartition",
    "lookup",
    "partition_for_brand",
    "style_for_outcome",
    "style_for_zip",
    "BrandReportPDF",
    "PDFReportExporter",
    "AppVariant",
    "PaintAction",
    "SelectionState",
    "Transition",
    "UnsupportedLocationError",
    "initial_state",
    "search_location",
    "select_brand",
    "toggle_filter_brand",
    "visible_brands",
    "render_brand_snapshot",
]
