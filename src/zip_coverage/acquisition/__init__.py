"""
Data Acquisition Module for Columbus ZIP Coverage.

This module reads the hand-curated availability ledger and fetches
ZIP code boundary polygons from the Census TIGERweb REST service.

Primary Usage:
    from zip_coverage.acquisition import LedgerScanner, read_ledger

    text = read_ledger("exporter/refined.txt")
    events = list(LedgerScanner().scan_events(text))

Boundary Client:
    async with TigerWebZctaClient() as client:
        features = await client.fetch_zip_features(["43201", "43085"])
"""

from .exceptions import (
    AcquisitionError,
    ConnectionError,
    InvalidResponseError,
    LedgerNotFoundError,
    LedgerReadError,
    MalformedLedgerEntryError,
    NotFoundError,
    ServerError,
    ServiceStatusError,
    TimeoutError,
)
from .ledger import (
    BrandStatus,
    LedgerScanner,
    ScanState,
    ZipHeader,
    read_ledger,
    zip_codes,
)
from .models import (
    TIGERWEB_ZCTA_CONFIG,
    AvailabilityStatus,
    BatchConfig,
    Brand,
    ConnectionLimits,
    GISClientConfig,
    LayerConfig,
    RateLimitConfig,
    TimeoutConfig,
)
from .tigerweb_client import TigerWebZctaClient

__all__ = [
    # Exceptions
    "AcquisitionError",
    "ConnectionError",
    "InvalidResponseError",
    "LedgerNotFoundError",
    "LedgerReadError",
    "MalformedLedgerEntryError",
    "NotFoundError",
    "ServerError",
    "ServiceStatusError",
    "TimeoutError",
    # Ledger
    "BrandStatus",
    "LedgerScanner",
    "ScanState",
    "ZipHeader",
    "read_ledger",
    "zip_codes",
    # Models
    "AvailabilityStatus",
    "BatchConfig",
    "Brand",
    "ConnectionLimits",
    "GISClientConfig",
    "LayerConfig",
    "RateLimitConfig",
    "TimeoutConfig",
    # Pre-configured
    "TIGERWEB_ZCTA_CONFIG",
    # Client
    "TigerWebZctaClient",
]
