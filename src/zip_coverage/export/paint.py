"""
Availability query and paint model.

Pure functions deciding how a ZIP polygon is drawn for the selected
brand, and how a brand's ZIPs split into report columns. Style dicts use
Leaflet path option names, which folium passes through unchanged.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Optional, Union

from ..acquisition.models import AvailabilityStatus, Brand
from ..processing.availability import AvailabilityTable

if TYPE_CHECKING:
    from .selection import SelectionState

OUTLINE_COLOR = "#888"
PAINTED_OUTLINE_COLOR = "#535353"
AVAILABLE_FILL = "#4caf50"
UNAVAILABLE_FILL = "#e53935"
FILL_OPACITY = 0.35


class ZipOutcome(str, Enum):
    """Result of looking up one ZIP for one brand."""

    AVAILABLE = "available"
    UNAVAILABLE = "unavailable"
    UNKNOWN = "unknown"


NEUTRAL_STYLE = {"color": OUTLINE_COLOR, "weight": 1, "fillOpacity": 0}

OUTCOME_STYLES = {
    ZipOutcome.AVAILABLE: {
        "color": PAINTED_OUTLINE_COLOR,
        "fillColor": AVAILABLE_FILL,
        "fillOpacity": FILL_OPACITY,
        "weight": 1,
    },
    ZipOutcome.UNAVAILABLE: {
        "color": PAINTED_OUTLINE_COLOR,
        "fillColor": UNAVAILABLE_FILL,
        "fillOpacity": FILL_OPACITY,
        "weight": 1,
    },
    ZipOutcome.UNKNOWN: NEUTRAL_STYLE,
}


def lookup(
    table: AvailabilityTable, brand: Union[Brand, str, None], zip_code: str
) -> ZipOutcome:
    """Availability of ``zip_code`` for ``brand``; UNKNOWN when unrecorded."""
    status = table.status_for(brand, zip_code)
    if status is None:
        return ZipOutcome.UNKNOWN
    return ZipOutcome(status.value)


def style_for_outcome(outcome: ZipOutcome) -> dict:
    return dict(OUTCOME_STYLES[outcome])


def highlight_style(style: dict) -> dict:
    """Hover variant of a style."""
    return {**style, "weight": 2}


def style_for_zip(
    table: AvailabilityTable, state: "SelectionState", zip_code: str
) -> dict:
    """Style for a ZIP polygon under the current selection."""
    return style_for_outcome(lookup(table, state.active_brand, zip_code))


@dataclass
class ZipPartition:
    """A brand's ZIPs split by status, each list in numeric order."""

    available: list[str] = field(default_factory=list)
    unavailable: list[str] = field(default_factory=list)

    @property
    def rows(self) -> int:
        return max(len(self.available), len(self.unavailable))


def partition_for_brand(
    table: AvailabilityTable, brand: Union[Brand, str, None]
) -> ZipPartition:
    """
    Split a brand's recorded ZIPs into available and unavailable lists.

    Both lists are sorted by the ZIP's integer value. A brand with no
    entries gives two empty lists.
    """
    partition = ZipPartition()
    if brand is None:
        return partition

    for zip_code, status in table.zips_for(brand).items():
        if status == AvailabilityStatus.AVAILABLE.value:
            partition.available.append(zip_code)
        elif status == AvailabilityStatus.UNAVAILABLE.value:
            partition.unavailable.append(zip_code)

    partition.available.sort(key=int)
    partition.unavailable.sort(key=int)
    return partition


def outcome_counts(table: AvailabilityTable, brand: Optional[Brand]) -> dict[str, int]:
    partition = partition_for_brand(table, brand)
    return {
        ZipOutcome.AVAILABLE.value: len(partition.available),
        ZipOutcome.UNAVAILABLE.value: len(partition.unavailable),
    }
