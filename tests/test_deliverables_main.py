from __future__ import annotations

import json
from pathlib import Path

import pytest

from zip_coverage.export.main import main
from zip_coverage.processing.availability import AvailabilityTable


@pytest.fixture
def artifacts(tmp_path: Path, monkeypatch, zip_geojson, table: AvailabilityTable):
    monkeypatch.chdir(tmp_path)
    availability = tmp_path / "availability.json"
    table.write(availability)
    geojson = tmp_path / "zips.geojson"
    geojson.write_text(json.dumps(zip_geojson), encoding="utf-8")
    return availability, geojson


def test_generates_every_deliverable(tmp_path: Path, artifacts) -> None:
    availability, geojson = artifacts
    out = tmp_path / "deliverables"

    code = main(
        [
            "--availability", str(availability),
            "--geojson", str(geojson),
            "--output-dir", str(out),
            "--brand", "hwc",
        ]
    )

    assert code == 0
    assert (out / "columbus_coverage_map.html").exists()
    assert (out / "columbus_availability.csv").exists()
    assert (out / "snapshots" / "tca.png").exists()
    assert (out / "homewatch-caregivers-columbus-report.pdf").exists()
    assert (out / "msq_zip_report.csv").exists()


def test_no_pdf_skips_reports(tmp_path: Path, artifacts) -> None:
    availability, geojson = artifacts
    out = tmp_path / "deliverables"

    code = main(
        [
            "--availability", str(availability),
            "--geojson", str(geojson),
            "--output-dir", str(out),
            "--no-pdf",
        ]
    )

    assert code == 0
    assert not list(out.glob("*.pdf"))
    assert not (out / "snapshots").exists()


def test_missing_geojson_fails(tmp_path: Path, artifacts) -> None:
    availability, _ = artifacts

    code = main(
        [
            "--availability", str(availability),
            "--geojson", str(tmp_path / "missing.geojson"),
            "--output-dir", str(tmp_path / "deliverables"),
        ]
    )

    assert code == 1


def _map_html(out: Path) -> str:
    return (out / "columbus_coverage_map.html").read_text(encoding="utf-8")


def test_selected_brand_joins_filter(tmp_path: Path, artifacts) -> None:
    availability, geojson = artifacts
    out = tmp_path / "deliverables"

    code = main(
        [
            "--availability", str(availability),
            "--geojson", str(geojson),
            "--output-dir", str(out),
            "--no-pdf",
            "--filter", "tca",
            "--brand", "hwc",
        ]
    )

    html = _map_html(out)
    assert code == 0
    assert "Homewatch CareGivers" in html
    assert "Available ZIPs: 1" in html


def test_repeated_filter_keeps_brand(tmp_path: Path, artifacts) -> None:
    availability, geojson = artifacts
    out = tmp_path / "deliverables"

    code = main(
        [
            "--availability", str(availability),
            "--geojson", str(geojson),
            "--output-dir", str(out),
            "--no-pdf",
            "--filter", "mse",
            "--filter", "mse",
        ]
    )

    html = _map_html(out)
    assert code == 0
    assert "Mister Sparky Electric" in html
    assert "The Cleaning Authority" not in html
