"""
Census TIGERweb client for ZIP Code Tabulation Area boundaries.

This module provides the TigerWebZctaClient for fetching ZCTA polygons
for a list of ZIP codes from the TIGERweb ArcGIS REST service. Features
are returned as GeoJSON with their properties reduced to the ZIP code.

TIGERweb services: https://tigerweb.geo.census.gov/arcgis/rest/services/
"""

import logging
from typing import Any, Optional, Sequence

import httpx

from .base_client import AsyncGISClient
from .exceptions import InvalidResponseError
from .models import TIGERWEB_ZCTA_CONFIG, GISClientConfig

logger = logging.getLogger(__name__)


def build_where_clause(zip_field: str, zip_codes: Sequence[str]) -> str:
    """
    Build a ZIP membership filter for an ArcGIS query.

    >>> build_where_clause("ZCTA5", ["43201", "43085"])
    "ZCTA5 IN ('43201','43085')"
    """
    if not zip_codes:
        raise ValueError("At least one ZIP code is required")
    quoted = ",".join(f"'{z}'" for z in zip_codes)
    return f"{zip_field} IN ({quoted})"


def normalize_feature(feature: dict[str, Any], zip_field: str) -> dict[str, Any]:
    """
    Reduce a feature's properties to its ZIP code.

    The geometry and every other top-level member are kept as returned.
    """
    properties = feature.get("properties")
    raw = properties.get(zip_field) if isinstance(properties, dict) else None
    zip_code = "" if raw is None else str(raw).strip()

    normalized = dict(feature)
    normalized["properties"] = {"zip": zip_code}
    return normalized


class TigerWebZctaClient(AsyncGISClient):
    """
    Client for fetching ZCTA boundary polygons from Census TIGERweb.

    Usage:
        async with TigerWebZctaClient() as client:
            features = await client.fetch_zip_features(["43201", "43085"])

    Attributes:
        config: GISClientConfig with TIGERweb specific settings.
    """

    def __init__(
        self,
        config: Optional[GISClientConfig] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        """
        Initialize the TIGERweb client.

        Args:
            config: Optional GISClientConfig. If not provided, uses
                    TIGERWEB_ZCTA_CONFIG defaults.
            transport: Optional httpx transport, used to stub the network.
        """
        super().__init__(config or TIGERWEB_ZCTA_CONFIG, transport=transport)

    def get_layer_url(self) -> str:
        return f"{self.config.base_url}/{self.config.layer.layer_id}/query"

    def build_query_params(self, zip_codes: Sequence[str]) -> dict[str, str]:
        """Query parameters requesting GeoJSON geometry for the ZIP codes."""
        zip_field = self.config.layer.zip_field
        return {
            "where": build_where_clause(zip_field, zip_codes),
            "outFields": zip_field,
            "returnGeometry": "true",
            "outSR": str(self.config.layer.out_sr),
            "f": "geojson",
        }

    async def fetch_zip_features(
        self, zip_codes: Sequence[str]
    ) -> list[dict[str, Any]]:
        """
        Fetch boundary features for one batch of ZIP codes.

        Args:
            zip_codes: ZIP codes to request in a single query.

        Returns:
            Normalized GeoJSON features carrying only a ``zip`` property.

        Raises:
            ServiceStatusError: If the service answers with a non-success status.
            InvalidResponseError: If the body is not a FeatureCollection
                of feature objects.
        """
        url = self.get_layer_url()
        data = await self.get_json(url, params=self.build_query_params(zip_codes))

        if data.get("type") != "FeatureCollection":
            raise InvalidResponseError(
                "Unexpected TIGERweb response (not FeatureCollection)",
                response_text=str(data),
            )

        raw_features = data.get("features") or []
        if not isinstance(raw_features, list) or not all(
            isinstance(feature, dict) for feature in raw_features
        ):
            raise InvalidResponseError(
                "Unexpected TIGERweb response (features is not a list of objects)",
                response_text=str(data),
            )

        zip_field = self.config.layer.zip_field
        features = [normalize_feature(feature, zip_field) for feature in raw_features]

        logger.debug(
            "Fetched %d features for %d ZIP codes",
            len(features),
            len(zip_codes),
        )
        return features
