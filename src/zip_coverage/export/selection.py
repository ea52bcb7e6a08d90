"""
Selection state for the coverage map.

The state is an immutable snapshot. Every user action is a function
from the current snapshot to a new one; the caller holds the single
reference and swaps it wholesale.

Brand selection is a toggle:

    no brand  --select X-->  X active  (repaint all ZIPs)
    Y active  --select X-->  X active  (repaint all ZIPs)
    X active  --select X-->  no brand  (reset all ZIPs to neutral)
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from ..acquisition.models import Brand

COLUMBUS_CENTER = (39.9612, -82.9988)
OVERVIEW_ZOOM = 7
CITY_ZOOM = 11

SUPPORTED_LOCATION = "columbus"


class UnsupportedLocationError(ValueError):
    """Raised when a location search names anything but Columbus."""


class AppVariant(BaseModel):
    """Optional map affordances, replacing separate application builds."""

    brand_filter_panel: bool = Field(
        default=False,
        description="Let the user pick which brands are offered",
    )
    brand_drawer: bool = Field(
        default=True,
        description="Show a detail panel for the active brand",
    )
    pdf_export: bool = Field(
        default=True,
        description="Offer per-brand PDF reports",
    )


@dataclass(frozen=True)
class Viewport:
    center: tuple[float, float] = COLUMBUS_CENTER
    zoom: int = OVERVIEW_ZOOM


@dataclass(frozen=True)
class SelectionState:
    """Snapshot of what the user has selected."""

    active_brand: Optional[Brand] = None
    filter_brands: frozenset = field(default_factory=frozenset)
    viewport: Viewport = field(default_factory=Viewport)
    city_pin: bool = False


class PaintAction(str, Enum):
    """What the map must do after a transition."""

    REPAINT = "repaint"
    RESET = "reset"
    NONE = "none"


@dataclass(frozen=True)
class Transition:
    state: SelectionState
    action: PaintAction


def initial_state() -> SelectionState:
    return SelectionState()


def select_brand(
    state: SelectionState,
    brand: Brand,
    variant: Optional[AppVariant] = None,
) -> Transition:
    """
    Toggle ``brand`` as the active brand.

    With a ``variant``, only brands in ``visible_brands`` can be picked;
    any other brand leaves the state unchanged.
    """
    brand = Brand(brand)
    if variant is not None and brand not in visible_brands(state, variant):
        return Transition(state, PaintAction.NONE)
    if state.active_brand == brand:
        return Transition(replace(state, active_brand=None), PaintAction.RESET)
    return Transition(replace(state, active_brand=brand), PaintAction.REPAINT)


def toggle_filter_brand(state: SelectionState, brand: Brand) -> Transition:
    """
    Add or remove a brand from the filter panel selection.

    Removing the active brand also deactivates it.
    """
    brand = Brand(brand)
    if brand in state.filter_brands:
        filters = state.filter_brands - {brand}
        if state.active_brand == brand:
            return Transition(
                replace(state, filter_brands=filters, active_brand=None),
                PaintAction.RESET,
            )
        return Transition(replace(state, filter_brands=filters), PaintAction.NONE)
    return Transition(
        replace(state, filter_brands=state.filter_brands | {brand}),
        PaintAction.NONE,
    )


def visible_brands(state: SelectionState, variant: AppVariant) -> list[Brand]:
    """Brands offered for selection, in catalog order."""
    if variant.brand_filter_panel:
        return [b for b in Brand if b in state.filter_brands]
    return list(Brand)


def parse_location(raw: Optional[str]) -> str:
    value = (raw or "").strip().lower()
    if value.startswith(SUPPORTED_LOCATION):
        return SUPPORTED_LOCATION
    return value


def should_suggest(raw: Optional[str]) -> bool:
    """Whether the location autocomplete should offer Columbus."""
    value = (raw or "").strip().lower()
    return len(value) >= 3 and value.startswith("col")


def search_location(state: SelectionState, raw: Optional[str]) -> SelectionState:
    """
    Zoom to the searched city and drop the city pin.

    Raises:
        UnsupportedLocationError: For any location other than Columbus.
    """
    location = parse_location(raw)
    if location != SUPPORTED_LOCATION:
        raise UnsupportedLocationError("Demo only supports 'columbus'")
    return replace(
        state,
        viewport=Viewport(center=COLUMBUS_CENTER, zoom=CITY_ZOOM),
        city_pin=True,
    )
