"""
Reader and scanner for the ZIP availability ledger.

The ledger is a hand-curated text file. A ZIP header line opens a
section and the brand status lines that follow belong to it:

    43201: Columbus
    HWC - Available
    MSE - Unavailable
    43085: Worthington
    HWC - Unavailable

Scanning is a two-state machine. Outside any section brand lines have
nowhere to go and are dropped; a header moves the scanner inside the
section for that ZIP until the next header.
"""

import logging
import re
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Iterator, Optional, Union

from .exceptions import (
    LedgerNotFoundError,
    LedgerReadError,
    MalformedLedgerEntryError,
)
from .models import AvailabilityStatus, Brand

logger = logging.getLogger(__name__)

ZIP_HEADER_RE = re.compile(r"^(\d{5}):")
BRAND_STATUS_RE = re.compile(
    r"^(HWC|MSE|MSQ|TCA)\s*-\s*(Available|Unavailable)",
    re.IGNORECASE,
)
# Anything shaped like "<CODE> - <WORD>", recognized or not
STATUS_SHAPED_RE = re.compile(r"^([A-Za-z]{2,6})\s*-\s*([A-Za-z]+)\b")


class ScanState(str, Enum):
    """Position of the scanner relative to ZIP sections."""

    OUTSIDE_ZIP = "outside_zip"
    INSIDE_ZIP = "inside_zip"


@dataclass(frozen=True)
class ZipHeader:
    """A ZIP section header."""

    line_number: int
    zip_code: str


@dataclass(frozen=True)
class BrandStatus:
    """A recognized brand status line, with the section it fell in."""

    line_number: int
    brand: Brand
    status: AvailabilityStatus
    zip_code: Optional[str]


LedgerEvent = Union[ZipHeader, BrandStatus]


def read_ledger(path: Union[Path, str]) -> str:
    """
    Read the ledger text.

    Raises:
        LedgerNotFoundError: If the file does not exist.
        LedgerReadError: If the path is not a readable UTF-8 file.
    """
    path = Path(path)
    if not path.exists():
        raise LedgerNotFoundError(f"Ledger not found: {path}", path=str(path))
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise LedgerReadError(
            f"Could not read ledger: {path}", path=str(path), cause=e
        ) from e
    logger.debug("Read %d characters from %s", len(text), path)
    return text


def split_lines(text: str) -> list[str]:
    """Split ledger text into lines regardless of line terminator."""
    return text.replace("\r\n", "\n").replace("\r", "\n").split("\n")


class LedgerScanner:
    """
    Deterministic line scanner over ledger text.

    Usage:
        scanner = LedgerScanner()
        for event in scanner.scan_events(text):
            ...

    In strict mode, status-shaped lines that would be dropped raise
    MalformedLedgerEntryError instead: unknown brand codes, unknown
    statuses, and brand lines appearing before the first ZIP header.

    Attributes:
        strict: Whether droppable status lines are rejected.
        state: Current ScanState.
        current_zip: ZIP of the open section, if any.
    """

    def __init__(self, strict: bool = False) -> None:
        self.strict = strict
        self.state = ScanState.OUTSIDE_ZIP
        self.current_zip: Optional[str] = None

    def reset(self) -> None:
        self.state = ScanState.OUTSIDE_ZIP
        self.current_zip = None

    def feed(self, line: str, line_number: int) -> Optional[LedgerEvent]:
        """
        Advance the scanner by one line.

        Args:
            line: Raw line text; surrounding whitespace is ignored.
            line_number: 1-based position of the line in the ledger.

        Returns:
            A ZipHeader, a BrandStatus recorded inside a section, or None
            for lines that carry nothing.
        """
        trimmed = line.strip()

        header = ZIP_HEADER_RE.match(trimmed)
        if header:
            self.state = ScanState.INSIDE_ZIP
            self.current_zip = header.group(1)
            return ZipHeader(line_number=line_number, zip_code=self.current_zip)

        match = BRAND_STATUS_RE.match(trimmed)
        if match is None:
            if self.strict and STATUS_SHAPED_RE.match(trimmed):
                raise MalformedLedgerEntryError(
                    "Unrecognized brand code or status",
                    line_number=line_number,
                    line=trimmed,
                )
            return None

        if self.state is ScanState.OUTSIDE_ZIP:
            if self.strict:
                raise MalformedLedgerEntryError(
                    "Brand status before any ZIP header",
                    line_number=line_number,
                    line=trimmed,
                )
            logger.debug("Dropping line %d outside any ZIP section", line_number)
            return None

        return BrandStatus(
            line_number=line_number,
            brand=Brand(match.group(1).lower()),
            status=AvailabilityStatus(match.group(2).lower()),
            zip_code=self.current_zip,
        )

    def scan_events(self, text: str) -> Iterator[LedgerEvent]:
        """Yield the header and status events of a whole ledger."""
        self.reset()
        for line_number, line in enumerate(split_lines(text), start=1):
            event = self.feed(line, line_number)
            if event is not None:
                yield event


def zip_codes(text: str) -> list[str]:
    """
    Unique ZIP codes named by section headers, sorted ascending.

    Status lines are irrelevant here, so this never raises on malformed
    entries.
    """
    found = {
        event.zip_code
        for event in LedgerScanner().scan_events(text)
        if isinstance(event, ZipHeader)
    }
    return sorted(found)
