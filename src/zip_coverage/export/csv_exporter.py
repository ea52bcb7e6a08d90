"""
CSV Exporter for availability reports.

Writes the availability table as a flat brand/zip/status table, and a
brand's report partition as two side-by-side columns.
"""

import logging
from pathlib import Path

import pandas as pd

from ..acquisition.models import Brand
from ..processing.availability import AvailabilityTable
from .paint import partition_for_brand

logger = logging.getLogger(__name__)


class CSVExporter:
    """Export availability data to CSV format."""

    def __init__(self, output_dir: Path | str = "deliverables"):
        """
        Initialize the CSV exporter.

        Args:
            output_dir: Directory for output files
        """
        self.output_dir = Path(output_dir)
        self.output_dir.mkdir(parents=True, exist_ok=True)

    def export_table(
        self,
        table: AvailabilityTable,
        filename: str = "columbus_availability.csv",
    ) -> Path:
        """
        Export every (brand, zip, status) row.

        Rows are ordered by brand catalog order, then numeric ZIP.

        Returns:
            Path to the generated CSV file
        """
        output_path = self.output_dir / filename
        logger.info(f"Generating availability CSV: {output_path}")

        df = self.table_to_dataframe(table)
        df.to_csv(output_path, index=False)

        logger.info(f"Availability CSV saved: {output_path} ({len(df)} records)")
        return output_path

    def export_brand(
        self,
        table: AvailabilityTable,
        brand: Brand,
        filename: str | None = None,
    ) -> Path:
        """
        Export one brand's available and unavailable ZIPs as two columns.

        Returns:
            Path to the generated CSV file
        """
        brand = Brand(brand)
        output_path = self.output_dir / (filename or f"{brand.value}_zip_report.csv")
        logger.info(f"Generating brand CSV: {output_path}")

        df = self.partition_to_dataframe(table, brand)
        df.to_csv(output_path, index=False)

        logger.info(f"Brand CSV saved: {output_path} ({len(df)} rows)")
        return output_path

    @staticmethod
    def table_to_dataframe(table: AvailabilityTable) -> pd.DataFrame:
        rows = [
            {"brand": code, "zip": zip_code, "status": status}
            for code, zips in table.entries.items()
            for zip_code, status in zips.items()
        ]
        df = pd.DataFrame(rows, columns=["brand", "zip", "status"])
        if df.empty:
            return df

        brand_order = {code: i for i, code in enumerate(Brand.codes())}
        df["_brand_order"] = df["brand"].map(brand_order)
        df["_zip_order"] = df["zip"].astype(int)
        df = df.sort_values(["_brand_order", "_zip_order"], kind="stable")
        return df.drop(columns=["_brand_order", "_zip_order"]).reset_index(drop=True)

    @staticmethod
    def partition_to_dataframe(table: AvailabilityTable, brand: Brand) -> pd.DataFrame:
        partition = partition_for_brand(table, brand)
        return pd.DataFrame(
            {
                "available": pd.Series(partition.available, dtype="object"),
                "unavailable": pd.Series(partition.unavailable, dtype="object"),
            }
        )
