"""
Availability extraction: ledger text to the brand/ZIP availability table.

The extractor replays the ledger scanner's events into an
AvailabilityTable and persists it as the availability JSON artifact
consumed by the map and report exporters.

Command line:
    zip-coverage-availability --ledger exporter/refined.txt \
        --output data/availability.json
"""

import argparse
import json
import logging
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional, Union

from ..acquisition.exceptions import AcquisitionError
from ..acquisition.ledger import BrandStatus, LedgerScanner, read_ledger
from ..acquisition.models import AvailabilityStatus, Brand

logger = logging.getLogger(__name__)

# Default paths relative to project root
DEFAULT_LEDGER_PATH = Path("exporter/refined.txt")
DEFAULT_AVAILABILITY_PATH = Path("data/availability.json")


def _empty_entries() -> dict[str, dict[str, str]]:
    return {code: {} for code in Brand.codes()}


@dataclass
class AvailabilityTable:
    """
    Brand code to ZIP code to status mapping.

    Every brand code is always present, possibly with no ZIPs. Recording
    the same (brand, zip) twice keeps the later status.
    """

    entries: dict[str, dict[str, str]] = field(default_factory=_empty_entries)

    def record(
        self,
        brand: Union[Brand, str],
        zip_code: str,
        status: Union[AvailabilityStatus, str],
    ) -> None:
        brand_code = Brand(brand).value
        self.entries[brand_code][zip_code] = AvailabilityStatus(status).value

    def status_for(
        self, brand: Union[Brand, str, None], zip_code: str
    ) -> Optional[AvailabilityStatus]:
        """Recorded status for a pair, or None when nothing was recorded."""
        if brand is None:
            return None
        brand_code = brand.value if isinstance(brand, Brand) else str(brand)
        raw = self.entries.get(brand_code, {}).get(zip_code)
        if raw is None:
            return None
        try:
            return AvailabilityStatus(raw)
        except ValueError:
            return None

    def zips_for(self, brand: Union[Brand, str]) -> dict[str, str]:
        brand_code = brand.value if isinstance(brand, Brand) else str(brand)
        return dict(self.entries.get(brand_code, {}))

    def all_zip_codes(self) -> set[str]:
        return {z for zips in self.entries.values() for z in zips}

    def to_dict(self) -> dict[str, dict[str, str]]:
        return {code: dict(zips) for code, zips in self.entries.items()}

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=2)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "AvailabilityTable":
        """
        Build a table from a decoded availability artifact.

        Brand keys outside the fixed set are ignored; missing brands come
        back empty.
        """
        entries = _empty_entries()
        for code in entries:
            zips = data.get(code) or {}
            entries[code] = {str(z): str(s) for z, s in zips.items()}
        return cls(entries=entries)

    @classmethod
    def load(cls, path: Union[Path, str]) -> "AvailabilityTable":
        with open(path, "r", encoding="utf-8") as f:
            return cls.from_dict(json.load(f))

    def write(self, path: Union[Path, str]) -> Path:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.to_json(), encoding="utf-8")
        return path


def extract_availability(text: str, strict: bool = False) -> AvailabilityTable:
    """
    Parse ledger text into an AvailabilityTable.

    Args:
        text: Raw ledger text.
        strict: Reject droppable status lines instead of ignoring them.

    Returns:
        The populated table.

    Raises:
        MalformedLedgerEntryError: In strict mode only.
    """
    table = AvailabilityTable()
    for event in LedgerScanner(strict=strict).scan_events(text):
        if isinstance(event, BrandStatus) and event.zip_code is not None:
            table.record(event.brand, event.zip_code, event.status)
    return table


def build_availability(
    ledger_path: Union[Path, str] = DEFAULT_LEDGER_PATH,
    output_path: Union[Path, str] = DEFAULT_AVAILABILITY_PATH,
    strict: bool = False,
) -> AvailabilityTable:
    """
    Read the ledger, extract the table, and write the availability artifact.

    Nothing is written unless the whole ledger was scanned.

    Raises:
        LedgerNotFoundError: If the ledger file does not exist.
        MalformedLedgerEntryError: In strict mode only.
    """
    text = read_ledger(ledger_path)
    table = extract_availability(text, strict=strict)
    table.write(output_path)

    counts = ", ".join(
        f"{code}={len(zips)}" for code, zips in table.entries.items()
    )
    logger.info("Wrote %s (%s)", output_path, counts)
    return table


def main(argv: Optional[list[str]] = None) -> int:
    """Generate the availability artifact from the ledger."""
    parser = argparse.ArgumentParser(
        description="Build availability.json from the availability ledger"
    )
    parser.add_argument("--ledger", type=Path, default=DEFAULT_LEDGER_PATH)
    parser.add_argument("--output", type=Path, default=DEFAULT_AVAILABILITY_PATH)
    parser.add_argument(
        "--strict",
        action="store_true",
        help="reject unrecognized brand lines instead of skipping them",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    try:
        build_availability(args.ledger, args.output, strict=args.strict)
    except AcquisitionError as e:
        logger.error("%s", e)
        return 1

    logger.info("availability.json generated successfully.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
