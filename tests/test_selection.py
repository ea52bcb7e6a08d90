from __future__ import annotations

from dataclasses import FrozenInstanceError

import pytest

from zip_coverage.acquisition import Brand
from zip_coverage.export.selection import (
    CITY_ZOOM,
    COLUMBUS_CENTER,
    OVERVIEW_ZOOM,
    AppVariant,
    PaintAction,
    UnsupportedLocationError,
    initial_state,
    parse_location,
    search_location,
    select_brand,
    should_suggest,
    toggle_filter_brand,
    visible_brands,
)


def test_initial_state() -> None:
    state = initial_state()

    assert state.active_brand is None
    assert state.filter_brands == frozenset()
    assert state.viewport.center == COLUMBUS_CENTER
    assert state.viewport.zoom == OVERVIEW_ZOOM
    assert not state.city_pin


def test_select_from_nothing_repaints() -> None:
    transition = select_brand(initial_state(), Brand.HWC)

    assert transition.state.active_brand is Brand.HWC
    assert transition.action is PaintAction.REPAINT


def test_select_other_brand_repaints() -> None:
    state = select_brand(initial_state(), Brand.HWC).state

    transition = select_brand(state, Brand.TCA)

    assert transition.state.active_brand is Brand.TCA
    assert transition.action is PaintAction.REPAINT


def test_select_active_brand_resets() -> None:
    state = select_brand(initial_state(), Brand.MSE).state

    transition = select_brand(state, Brand.MSE)

    assert transition.state.active_brand is None
    assert transition.action is PaintAction.RESET


def test_transitions_do_not_mutate() -> None:
    state = initial_state()
    select_brand(state, Brand.HWC)

    assert state.active_brand is None
    with pytest.raises(FrozenInstanceError):
        state.active_brand = Brand.HWC  # type: ignore[misc]


def test_filter_toggle_and_visible_brands() -> None:
    variant = AppVariant(brand_filter_panel=True)
    state = toggle_filter_brand(initial_state(), Brand.TCA).state
    state = toggle_filter_brand(state, Brand.HWC).state

    assert visible_brands(state, variant) == [Brand.HWC, Brand.TCA]
    assert visible_brands(state, AppVariant()) == list(Brand)


def test_removing_active_brand_from_filter_resets() -> None:
    state = toggle_filter_brand(initial_state(), Brand.MSQ).state
    state = select_brand(state, Brand.MSQ).state

    transition = toggle_filter_brand(state, Brand.MSQ)

    assert transition.state.active_brand is None
    assert transition.state.filter_brands == frozenset()
    assert transition.action is PaintAction.RESET


def test_filter_panel_only_selects_offered_brands() -> None:
    variant = AppVariant(brand_filter_panel=True)
    state = toggle_filter_brand(initial_state(), Brand.TCA).state

    ignored = select_brand(state, Brand.HWC, variant)
    picked = select_brand(state, Brand.TCA, variant)

    assert ignored.state == state
    assert ignored.action is PaintAction.NONE
    assert picked.state.active_brand is Brand.TCA
    assert picked.action is PaintAction.REPAINT


def test_without_filter_panel_every_brand_selects() -> None:
    transition = select_brand(initial_state(), Brand.HWC, AppVariant())

    assert transition.state.active_brand is Brand.HWC


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("Columbus", "columbus"),
        ("  columbus, ohio ", "columbus"),
        ("Columbus OH", "columbus"),
        ("Dayton", "dayton"),
        ("", ""),
        (None, ""),
    ],
)
def test_parse_location(raw, expected) -> None:
    assert parse_location(raw) == expected


def test_search_columbus_zooms_and_pins() -> None:
    state = search_location(initial_state(), "Columbus, Ohio")

    assert state.viewport.zoom == CITY_ZOOM
    assert state.city_pin


def test_search_other_city_rejected() -> None:
    with pytest.raises(UnsupportedLocationError):
        search_location(initial_state(), "Cleveland")


def test_should_suggest() -> None:
    assert should_suggest("Col")
    assert not should_suggest("co")
    assert not should_suggest("Dayton")
