"""
PDF report for one brand's ZIP availability.

One A4 page (more when the lists run long): brand logo and name, an
optional map snapshot, then the available and unavailable ZIP codes in
two side-by-side columns.
"""

import logging
from pathlib import Path
from typing import Optional

from fpdf import FPDF

from ..processing.availability import AvailabilityTable
from .brands import BrandCatalog, BrandMeta
from .paint import ZipPartition, partition_for_brand

logger = logging.getLogger(__name__)

# Layout in points
MARGIN = 40
HEADER_Y = 46
LOGO_SIZE = 32
MAP_HEIGHT = 270
GUTTER = 24
LINE_HEIGHT = 14
MIN_LIST_SPACE = 120


class BrandReportPDF(FPDF):
    """A4 portrait document laid out in points."""

    def __init__(self):
        super().__init__(orientation="P", unit="pt", format="A4")
        self.set_auto_page_break(auto=False)
        self.set_margins(MARGIN, MARGIN, MARGIN)

    @property
    def column_width(self) -> float:
        return (self.w - MARGIN * 2 - GUTTER) / 2

    @property
    def right_column_x(self) -> float:
        return MARGIN + self.column_width + GUTTER

    def draw_header(self, meta: BrandMeta) -> float:
        """Logo and brand name, then a divider. Returns the next y."""
        y = HEADER_Y
        text_x = MARGIN

        if not meta.icon.exists():
            logger.warning(f"Logo not found for {meta.name}: {meta.icon}")
        else:
            try:
                self.image(
                    str(meta.icon), x=MARGIN, y=y - 26, w=LOGO_SIZE, h=LOGO_SIZE
                )
                text_x += 44
            except (OSError, ValueError) as e:
                logger.warning(f"Logo unreadable for {meta.name}: {meta.icon} ({e})")

        self.set_font("helvetica", "B", 16)
        self.text(text_x, y, meta.name)
        y += 18

        self.set_draw_color(210)
        self.line(MARGIN, y, self.w - MARGIN, y)
        return y + 16

    def draw_map(self, image_path: Optional[Path], y: float) -> float:
        if image_path is None or not Path(image_path).exists():
            return y + 8
        self.image(str(image_path), x=MARGIN, y=y, w=self.w - MARGIN * 2, h=MAP_HEIGHT)
        return y + MAP_HEIGHT + 18

    def draw_column_headers(self, y: float) -> float:
        """AVAILABLE / UNAVAILABLE headings with rules. Returns first row y."""
        self.set_font("helvetica", "B", 12)
        self.text(MARGIN, y, "AVAILABLE")
        self.text(self.right_column_x, y, "UNAVAILABLE")

        line_y = y + 10
        self.set_draw_color(230)
        self.line(MARGIN, line_y, MARGIN + self.column_width, line_y)
        self.line(
            self.right_column_x,
            line_y,
            self.right_column_x + self.column_width,
            line_y,
        )

        self.set_font("helvetica", "", 11)
        return line_y + 18

    def draw_columns(self, partition: ZipPartition, y: float) -> None:
        """
        Write both ZIP lists row by row, breaking pages together.

        Column headers are repeated at the top of every continuation page.
        """
        if y > self.h - MARGIN - MIN_LIST_SPACE:
            self.add_page()
            y = MARGIN

        row_y = self.draw_column_headers(y)
        available = partition.available
        unavailable = partition.unavailable

        for row in range(partition.rows):
            if row_y > self.h - MARGIN:
                self.add_page()
                row_y = self.draw_column_headers(MARGIN)
            if row < len(available):
                self.text(MARGIN, row_y, str(available[row]))
            if row < len(unavailable):
                self.text(self.right_column_x, row_y, str(unavailable[row]))
            row_y += LINE_HEIGHT


class PDFReportExporter:
    """Export per-brand availability reports as PDF."""

    def __init__(
        self,
        output_dir: Path | str = "deliverables",
        catalog: Optional[BrandCatalog] = None,
    ):
        """
        Initialize the PDF exporter.

        Args:
            output_dir: Directory for output files
            catalog: Brand display metadata
        """
        self.output_dir = Path(output_dir)
        self.output_dir.mkdir(parents=True, exist_ok=True)
        self.catalog = catalog or BrandCatalog()

    def build(
        self,
        table: AvailabilityTable,
        brand,
        map_image: Optional[Path] = None,
    ) -> BrandReportPDF:
        """Lay out the report document without saving it."""
        meta = self.catalog.get(brand)
        partition = partition_for_brand(table, meta.brand)

        pdf = BrandReportPDF()
        pdf.add_page()
        y = pdf.draw_header(meta)
        y = pdf.draw_map(map_image, y)
        pdf.draw_columns(partition, y)
        return pdf

    def export(
        self,
        table: AvailabilityTable,
        brand,
        map_image: Optional[Path] = None,
        filename: Optional[str] = None,
    ) -> Path:
        """
        Write the PDF report for ``brand``.

        Args:
            table: Availability table
            brand: Brand to report on
            map_image: Optional PNG snapshot placed above the lists
            filename: Output filename; ``<brand-slug>-columbus-report.pdf`` by default

        Returns:
            Path to the generated PDF
        """
        meta = self.catalog.get(brand)
        output_path = self.output_dir / (filename or meta.report_filename)
        logger.info(f"Generating PDF report: {output_path}")

        pdf = self.build(table, brand, map_image)
        pdf.output(str(output_path))

        logger.info(f"PDF report saved: {output_path} ({pdf.page_no()} pages)")
        return output_path
