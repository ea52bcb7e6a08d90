"""
Interactive Map Generator for ZIP availability.

Generates HTML maps using Folium with one ZIP polygon layer per brand,
painted green/red from the availability table, plus a neutral outline
layer for when no brand is selected.
"""

import json
import logging
from pathlib import Path
from typing import Any, Optional

import folium

from ..acquisition.models import Brand
from ..processing.availability import AvailabilityTable
from .brands import BrandCatalog
from .paint import (
    AVAILABLE_FILL,
    NEUTRAL_STYLE,
    UNAVAILABLE_FILL,
    highlight_style,
    outcome_counts,
    style_for_zip,
)
from .selection import (
    COLUMBUS_CENTER,
    AppVariant,
    SelectionState,
    initial_state,
    visible_brands,
)

logger = logging.getLogger(__name__)

NEUTRAL_LAYER_NAME = "ZIP boundaries"


def load_geojson(path: Path | str) -> dict[str, Any]:
    """Load the ZIP boundary FeatureCollection."""
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


class MapGenerator:
    """Generate interactive HTML maps of brand availability by ZIP."""

    def __init__(
        self,
        output_dir: Path | str = "deliverables",
        catalog: Optional[BrandCatalog] = None,
        variant: Optional[AppVariant] = None,
    ):
        """
        Initialize the map generator.

        Args:
            output_dir: Directory for output files
            catalog: Brand display metadata
            variant: Which optional affordances the map offers
        """
        self.output_dir = Path(output_dir)
        self.output_dir.mkdir(parents=True, exist_ok=True)
        self.catalog = catalog or BrandCatalog()
        self.variant = variant or AppVariant()

    def build(
        self,
        geojson: dict[str, Any],
        table: AvailabilityTable,
        state: Optional[SelectionState] = None,
    ) -> folium.Map:
        """
        Build the folium map for a selection state.

        Args:
            geojson: ZIP boundary FeatureCollection
            table: Availability table
            state: Current selection; nothing selected by default

        Returns:
            The folium.Map, not yet saved
        """
        state = state or initial_state()

        m = folium.Map(
            location=state.viewport.center,
            zoom_start=state.viewport.zoom,
            tiles="OpenStreetMap",
        )

        brands = visible_brands(state, self.variant)
        painted = state.active_brand in brands

        neutral = folium.FeatureGroup(name=NEUTRAL_LAYER_NAME, show=not painted)
        self._add_zip_layer(neutral, geojson, lambda zip_code: dict(NEUTRAL_STYLE))
        neutral.add_to(m)

        for brand in brands:
            meta = self.catalog.get(brand)
            brand_state = SelectionState(active_brand=brand)
            group = folium.FeatureGroup(
                name=meta.name, show=state.active_brand == brand
            )
            self._add_zip_layer(
                group,
                geojson,
                lambda zip_code, s=brand_state: style_for_zip(table, s, zip_code),
            )
            group.add_to(m)

        if state.city_pin:
            folium.Marker(
                location=COLUMBUS_CENTER,
                tooltip=folium.Tooltip(
                    "COLUMBUS", permanent=True, direction="bottom"
                ),
            ).add_to(m)

        if self.variant.brand_drawer and painted:
            self._add_drawer(m, table, state.active_brand)

        self._add_legend(m)

        if self.variant.brand_filter_panel:
            folium.LayerControl(collapsed=False).add_to(m)

        return m

    def generate(
        self,
        geojson: dict[str, Any],
        table: AvailabilityTable,
        state: Optional[SelectionState] = None,
        filename: str = "columbus_coverage_map.html",
    ) -> Path:
        """
        Generate and save the interactive HTML map.

        Returns:
            Path to the generated HTML file
        """
        output_path = self.output_dir / filename
        logger.info(f"Generating interactive map: {output_path}")

        m = self.build(geojson, table, state)
        m.save(str(output_path))

        logger.info(
            f"Map saved: {output_path} ({len(geojson.get('features', []))} ZIP polygons)"
        )
        return output_path

    def _add_zip_layer(self, parent, geojson: dict[str, Any], style_of) -> None:
        """Add every ZIP polygon to ``parent`` styled by ``style_of(zip)``."""
        if not geojson.get("features"):
            logger.warning("No ZIP polygons to draw")
            return

        def style_function(feature):
            return style_of(feature["properties"].get("zip", ""))

        folium.GeoJson(
            geojson,
            style_function=style_function,
            highlight_function=lambda feature: highlight_style(
                style_function(feature)
            ),
            tooltip=folium.GeoJsonTooltip(
                fields=["zip"], aliases=["ZIP:"], sticky=True
            ),
        ).add_to(parent)

    def _add_drawer(
        self, m: folium.Map, table: AvailabilityTable, brand: Brand
    ) -> None:
        """Add a side panel naming the active brand and its ZIP counts."""
        meta = self.catalog.get(brand)
        counts = outcome_counts(table, brand)
        drawer_html = f"""
        <div style="
            position: fixed;
            top: 20px;
            right: 20px;
            z-index: 1000;
            background-color: white;
            padding: 12px 16px;
            border-radius: 8px;
            box-shadow: 0 12px 30px rgba(0,0,0,0.35);
            font-family: Arial, sans-serif;
            font-size: 13px;
        ">
            <div style="font-weight: bold; font-size: 16px; margin-bottom: 6px;">{meta.name}</div>
            <div>Available ZIPs: {counts['available']}</div>
            <div>Unavailable ZIPs: {counts['unavailable']}</div>
        </div>
        """
        m.get_root().html.add_child(folium.Element(drawer_html))

    def _add_legend(self, m: folium.Map) -> None:
        """Add a legend to the map."""
        legend_html = f"""
        <div style="
            position: fixed;
            bottom: 50px;
            left: 50px;
            z-index: 1000;
            background-color: white;
            padding: 10px;
            border: 2px solid gray;
            border-radius: 5px;
            font-family: Arial, sans-serif;
            font-size: 12px;
        ">
            <div style="font-weight: bold; margin-bottom: 5px;">Availability</div>
            <div><span style="background-color: {AVAILABLE_FILL}; padding: 2px 8px; border-radius: 3px;">&nbsp;</span> Available</div>
            <div style="margin-top: 3px;"><span style="background-color: {UNAVAILABLE_FILL}; padding: 2px 8px; border-radius: 3px;">&nbsp;</span> Unavailable</div>
            <div style="margin-top: 3px;"><span style="border: 1px solid #888; padding: 1px 7px; border-radius: 3px;">&nbsp;</span> No data</div>
        </div>
        """
        m.get_root().html.add_child(folium.Element(legend_html))


def generate_map(
    geojson: dict[str, Any],
    table: AvailabilityTable,
    output_dir: Path | str = "deliverables",
    state: Optional[SelectionState] = None,
    variant: Optional[AppVariant] = None,
    filename: str = "columbus_coverage_map.html",
) -> Path:
    """
    Convenience function to generate an interactive map.

    Returns:
        Path to generated HTML file
    """
    generator = MapGenerator(output_dir, variant=variant)
    return generator.generate(geojson, table, state, filename)
