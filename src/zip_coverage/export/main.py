"""
Main script to generate the Columbus coverage deliverables.

Loads the availability table and ZIP boundaries, and generates:
- Interactive HTML map (optionally with one brand selected)
- Per-brand PDF report with a map snapshot
- Per-brand and combined CSV files
"""

import argparse
import json
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

from ..acquisition.models import Brand
from ..processing.availability import DEFAULT_AVAILABILITY_PATH, AvailabilityTable
from ..processing.boundary_fetcher import DEFAULT_GEOJSON_PATH
from .brands import BrandCatalog
from .csv_exporter import CSVExporter
from .map_generator import MapGenerator, load_geojson
from .paint import outcome_counts
from .pdf_report import PDFReportExporter
from .selection import (
    AppVariant,
    initial_state,
    search_location,
    select_brand,
    toggle_filter_brand,
)
from .snapshot import render_brand_snapshot

logger = logging.getLogger(__name__)

DEFAULT_DELIVERABLES_DIR = Path("deliverables")


def main(argv: Optional[list[str]] = None) -> int:
    """Generate all coverage deliverables."""
    parser = argparse.ArgumentParser(description="Generate Columbus coverage deliverables")
    parser.add_argument("--availability", type=Path, default=DEFAULT_AVAILABILITY_PATH)
    parser.add_argument("--geojson", type=Path, default=DEFAULT_GEOJSON_PATH)
    parser.add_argument("--output-dir", type=Path, default=DEFAULT_DELIVERABLES_DIR)
    parser.add_argument("--brand", choices=Brand.codes(), help="brand selected on the map")
    parser.add_argument(
        "--filter",
        dest="filter_brands",
        action="append",
        choices=Brand.codes(),
        help="enable the brand filter panel with these brands (repeatable)",
    )
    parser.add_argument("--no-drawer", action="store_true", help="hide the brand panel")
    parser.add_argument("--no-pdf", action="store_true", help="skip PDF reports")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    print("\n" + "=" * 60)
    print("COLUMBUS ZIP COVERAGE - DELIVERABLE GENERATION")
    print("=" * 60 + "\n")

    start_time = datetime.now()
    output_dir = args.output_dir
    output_dir.mkdir(parents=True, exist_ok=True)

    # Step 1: Load artifacts
    print("Step 1: Loading availability and ZIP boundaries...")
    print("-" * 40)

    try:
        table = AvailabilityTable.load(args.availability)
        geojson = load_geojson(args.geojson)
    except (OSError, json.JSONDecodeError) as e:
        logger.error(f"Could not load input artifacts: {e}")
        return 1

    print(f"  {len(table.all_zip_codes())} ZIP codes with availability")
    print(f"  {len(geojson.get('features', []))} ZIP polygons")

    variant = AppVariant(
        brand_filter_panel=bool(args.filter_brands),
        brand_drawer=not args.no_drawer,
        pdf_export=not args.no_pdf,
    )
    catalog = BrandCatalog()

    state = search_location(initial_state(), "columbus")
    filter_codes = list(dict.fromkeys(args.filter_brands or []))
    if variant.brand_filter_panel and args.brand and args.brand not in filter_codes:
        logger.info(f"Adding selected brand {args.brand} to the brand filter")
        filter_codes.append(args.brand)
    for code in filter_codes:
        state = toggle_filter_brand(state, Brand(code)).state
    if args.brand:
        state = select_brand(state, Brand(args.brand), variant).state

    # Step 2: Interactive map
    print("\nStep 2: Generating interactive HTML map...")
    print("-" * 40)

    map_path = MapGenerator(output_dir, catalog=catalog, variant=variant).generate(
        geojson, table, state
    )
    print(f"  [OK] Interactive map: {map_path}")

    # Step 3: Per-brand reports
    print("\nStep 3: Generating brand reports...")
    print("-" * 40)

    csv_exporter = CSVExporter(output_dir)
    csv_path = csv_exporter.export_table(table)
    print(f"  [OK] Availability CSV: {csv_path}")

    pdf_exporter = PDFReportExporter(output_dir, catalog=catalog) if variant.pdf_export else None

    for meta in catalog:
        counts = outcome_counts(table, meta.brand)
        brand_csv = csv_exporter.export_brand(table, meta.brand)
        print(
            f"  {meta.name}: {counts['available']} available, "
            f"{counts['unavailable']} unavailable"
        )
        print(f"    [OK] CSV: {brand_csv}")

        if pdf_exporter is not None:
            snapshot = render_brand_snapshot(
                geojson,
                table,
                meta.brand,
                output_dir / "snapshots" / f"{meta.brand.value}.png",
            )
            pdf_path = pdf_exporter.export(table, meta.brand, map_image=snapshot)
            print(f"    [OK] PDF: {pdf_path}")

    elapsed = datetime.now() - start_time
    print("\n" + "=" * 60)
    print("DELIVERABLE GENERATION COMPLETE")
    print("=" * 60)
    print(f"\nGenerated files in: {output_dir}")
    print(f"Total time: {elapsed.total_seconds():.1f} seconds")
    return 0


if __name__ == "__main__":
    sys.exit(main())
