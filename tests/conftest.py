from __future__ import annotations

from typing import Any

import pytest

from zip_coverage.processing.availability import AvailabilityTable, extract_availability

from .geo_helpers import square

EXAMPLE_LEDGER = (
    "43201: Columbus\n"
    "HWC - Available\n"
    "MSE - Unavailable\n"
    "43085: Worthington\n"
    "HWC - Unavailable\n"
)


@pytest.fixture
def ledger_text() -> str:
    return EXAMPLE_LEDGER


@pytest.fixture
def table() -> AvailabilityTable:
    return extract_availability(EXAMPLE_LEDGER)


@pytest.fixture
def zip_geojson() -> dict[str, Any]:
    return {
        "type": "FeatureCollection",
        "features": [
            square("43201", -83.01, 39.98),
            square("43085", -83.03, 40.08),
            square("43123", -83.08, 39.87),
        ],
    }
