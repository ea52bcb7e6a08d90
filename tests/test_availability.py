from __future__ import annotations

import json

import pytest

from zip_coverage.acquisition import AvailabilityStatus, Brand, MalformedLedgerEntryError
from zip_coverage.processing.availability import (
    AvailabilityTable,
    build_availability,
    extract_availability,
    main,
)


def test_example_ledger_table(ledger_text: str) -> None:
    table = extract_availability(ledger_text)

    assert table.to_dict() == {
        "hwc": {"43201": "available", "43085": "unavailable"},
        "mse": {"43201": "unavailable"},
        "msq": {},
        "tca": {},
    }


def test_later_status_wins() -> None:
    text = "43201:\nHWC - Available\nHWC - Unavailable\n"

    table = extract_availability(text)

    assert table.status_for(Brand.HWC, "43201") is AvailabilityStatus.UNAVAILABLE


def test_repeated_header_reopens_section() -> None:
    text = "43201:\nHWC - Available\n43085:\n43201:\nHWC - Unavailable\n"

    table = extract_availability(text)

    assert table.zips_for("hwc") == {"43201": "unavailable"}


def test_status_before_header_never_recorded() -> None:
    table = extract_availability("TCA - Available\n43201:\nMSQ - Available\n")

    assert table.zips_for(Brand.TCA) == {}
    assert table.zips_for(Brand.MSQ) == {"43201": "available"}


def test_strict_extraction_raises() -> None:
    with pytest.raises(MalformedLedgerEntryError):
        extract_availability("43201:\nABC - Available\n", strict=True)


def test_rerun_is_byte_identical(ledger_text: str) -> None:
    assert extract_availability(ledger_text).to_json() == extract_availability(
        ledger_text
    ).to_json()


def test_from_dict_fills_missing_brands_and_drops_unknown() -> None:
    table = AvailabilityTable.from_dict({"hwc": {"43201": "available"}, "zzz": {}})

    assert set(table.entries) == {"hwc", "mse", "msq", "tca"}
    assert table.status_for("hwc", "43201") is AvailabilityStatus.AVAILABLE
    assert table.status_for("mse", "43201") is None
    assert table.status_for(None, "43201") is None


def test_build_availability_writes_artifact(tmp_path, ledger_text: str) -> None:
    ledger = tmp_path / "refined.txt"
    ledger.write_text(ledger_text, encoding="utf-8")
    output = tmp_path / "data" / "availability.json"

    build_availability(ledger, output)

    written = json.loads(output.read_text(encoding="utf-8"))
    assert written["hwc"] == {"43201": "available", "43085": "unavailable"}
    assert list(written) == ["hwc", "mse", "msq", "tca"]
    assert AvailabilityTable.load(output).to_dict() == written


def test_main_missing_ledger_writes_nothing(tmp_path) -> None:
    output = tmp_path / "availability.json"

    code = main(["--ledger", str(tmp_path / "missing.txt"), "--output", str(output)])

    assert code == 1
    assert not output.exists()


def test_main_strict_violation_writes_nothing(tmp_path) -> None:
    ledger = tmp_path / "refined.txt"
    ledger.write_text("43201:\nHWC - Availble\n", encoding="utf-8")
    output = tmp_path / "availability.json"

    code = main(["--ledger", str(ledger), "--output", str(output), "--strict"])

    assert code == 1
    assert not output.exists()


def test_main_non_utf8_ledger_writes_nothing(tmp_path) -> None:
    ledger = tmp_path / "refined.txt"
    ledger.write_bytes(b"43201:\n\xffHWC - Available\n")
    output = tmp_path / "availability.json"

    assert main(["--ledger", str(ledger), "--output", str(output)]) == 1
    assert not output.exists()


def test_main_success(tmp_path, ledger_text: str) -> None:
    ledger = tmp_path / "refined.txt"
    ledger.write_text(ledger_text, encoding="utf-8")
    output = tmp_path / "availability.json"

    assert main(["--ledger", str(ledger), "--output", str(output)]) == 0
    assert output.exists()
