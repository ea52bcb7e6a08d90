"""
Static map snapshot for printed reports.

Renders the ZIP polygons painted for one brand to a PNG, using the same
colors as the interactive map.
"""

import logging
from pathlib import Path
from typing import Any

import geopandas as gpd
import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt  # noqa: E402
from matplotlib.patches import Patch  # noqa: E402

from ..acquisition.models import Brand  # noqa: E402
from ..processing.availability import AvailabilityTable  # noqa: E402
from .paint import (  # noqa: E402
    AVAILABLE_FILL,
    OUTLINE_COLOR,
    UNAVAILABLE_FILL,
    ZipOutcome,
    lookup,
)

logger = logging.getLogger(__name__)

OUTCOME_FILLS = {
    ZipOutcome.AVAILABLE: AVAILABLE_FILL,
    ZipOutcome.UNAVAILABLE: UNAVAILABLE_FILL,
}


def features_to_geodataframe(geojson: dict[str, Any]) -> gpd.GeoDataFrame:
    """ZIP boundary FeatureCollection as a GeoDataFrame in EPSG:4326."""
    features = geojson.get("features") or []
    if not features:
        return gpd.GeoDataFrame({"zip": []}, geometry=[], crs="EPSG:4326")
    return gpd.GeoDataFrame.from_features(features, crs="EPSG:4326")


def render_brand_snapshot(
    geojson: dict[str, Any],
    table: AvailabilityTable,
    brand: Brand,
    output_path: Path | str,
    width_in: float = 8.0,
    height_in: float = 4.5,
    dpi: int = 150,
) -> Path:
    """
    Render ZIP polygons painted for ``brand`` to a PNG file.

    Args:
        geojson: ZIP boundary FeatureCollection
        table: Availability table
        brand: Brand whose availability colors the polygons
        output_path: Destination PNG
        width_in: Figure width in inches
        height_in: Figure height in inches
        dpi: Output resolution

    Returns:
        Path to the PNG
    """
    brand = Brand(brand)
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    gdf = features_to_geodataframe(geojson)

    fig, ax = plt.subplots(figsize=(width_in, height_in))
    try:
        if len(gdf):
            gdf["outcome"] = [lookup(table, brand, z).value for z in gdf["zip"]]
            gdf.plot(ax=ax, facecolor="none", edgecolor=OUTLINE_COLOR, linewidth=0.5)
            for outcome, color in OUTCOME_FILLS.items():
                subset = gdf[gdf["outcome"] == outcome.value]
                if len(subset):
                    subset.plot(
                        ax=ax,
                        color=color,
                        alpha=0.6,
                        edgecolor="#535353",
                        linewidth=0.5,
                    )
        else:
            logger.warning("No ZIP polygons for snapshot of %s", brand.value)

        ax.set_axis_off()
        ax.legend(
            handles=[
                Patch(facecolor=AVAILABLE_FILL, label="Available"),
                Patch(facecolor=UNAVAILABLE_FILL, label="Unavailable"),
            ],
            loc="lower right",
            fontsize=8,
        )
        fig.savefig(output_path, dpi=dpi, bbox_inches="tight", facecolor="white")
    finally:
        plt.close(fig)

    logger.info("Snapshot saved: %s", output_path)
    return output_path
