"""
Boundary fetching: ledger ZIP codes to a ZIP polygon FeatureCollection.

ZIP codes named by the ledger headers are requested from TIGERweb in
fixed-size batches, one batch at a time. The first failing batch aborts
the run and nothing is written. ZIPs the service has no polygon for are
reported but do not fail the run.

Command line:
    zip-coverage-boundaries --ledger exporter/refined.txt \
        --output data/columbus-zips.geojson
"""

import argparse
import asyncio
import json
import logging
import os
import sys
import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional, Sequence, Union

from pydantic import ValidationError

from ..acquisition.exceptions import AcquisitionError
from ..acquisition.ledger import read_ledger, zip_codes
from ..acquisition.models import TIGERWEB_ZCTA_CONFIG, BatchConfig, GISClientConfig
from ..acquisition.tigerweb_client import TigerWebZctaClient

logger = logging.getLogger(__name__)

DEFAULT_LEDGER_PATH = Path("exporter/refined.txt")
DEFAULT_GEOJSON_PATH = Path("data/columbus-zips.geojson")


def batch_config_arg(value: str) -> BatchConfig:
    """argparse type for --batch-size, validated by BatchConfig."""
    try:
        return BatchConfig(batch_size=int(value))
    except (ValueError, ValidationError) as e:
        raise argparse.ArgumentTypeError(f"invalid batch size: {value!r}") from e


def chunk_zip_codes(zips: Sequence[str], size: int) -> list[list[str]]:
    """Split ZIP codes into consecutive batches of at most ``size``."""
    if size < 1:
        raise ValueError("Batch size must be at least 1")
    return [list(zips[i : i + size]) for i in range(0, len(zips), size)]


@dataclass
class BoundaryFetchResult:
    """Features gathered across all batches plus ZIP bookkeeping."""

    requested: list[str]
    features: list[dict[str, Any]] = field(default_factory=list)
    returned: set[str] = field(default_factory=set)

    @property
    def missing(self) -> list[str]:
        """Requested ZIPs with no returned feature, in requested order."""
        return [z for z in self.requested if z not in self.returned]

    def add_features(self, features: list[dict[str, Any]]) -> None:
        for feature in features:
            self.features.append(feature)
            zip_code = feature.get("properties", {}).get("zip")
            if zip_code:
                self.returned.add(zip_code)

    def to_geojson(self) -> dict[str, Any]:
        return {"type": "FeatureCollection", "features": self.features}


class BoundaryFetcher:
    """
    Fetch ZIP boundary polygons in serial batches.

    Usage:
        async with TigerWebZctaClient() as client:
            fetcher = BoundaryFetcher(client)
            result = await fetcher.fetch(["43085", "43201"])

    Attributes:
        client: An open TigerWebZctaClient.
        batch_size: ZIP codes per query, from the client's BatchConfig.
    """

    def __init__(
        self, client: TigerWebZctaClient, batch_size: Optional[int] = None
    ) -> None:
        self.client = client
        self.batch_size = batch_size or client.config.batch.batch_size

    async def fetch(self, zips: Sequence[str]) -> BoundaryFetchResult:
        """
        Fetch features for every ZIP code, batch after batch.

        Raises:
            AcquisitionError: From the first batch that fails.
        """
        result = BoundaryFetchResult(requested=list(zips))
        batches = chunk_zip_codes(result.requested, self.batch_size)

        for number, batch in enumerate(batches, start=1):
            logger.info(
                "Fetching batch %d/%d (%d zips)", number, len(batches), len(batch)
            )
            features = await self.client.fetch_zip_features(batch)
            result.add_features(features)

        return result


def write_geojson(result: BoundaryFetchResult, path: Union[Path, str]) -> Path:
    """
    Write the FeatureCollection atomically.

    The document goes to a temporary file next to the target and is then
    renamed over it, so readers never see a half-written artifact.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    fd, tmp_name = tempfile.mkstemp(
        dir=path.parent, prefix=f".{path.name}.", suffix=".tmp"
    )
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(result.to_geojson(), f, indent=2)
        os.replace(tmp_name, path)
    except BaseException:
        os.unlink(tmp_name)
        raise
    return path


async def export_boundaries(
    ledger_path: Union[Path, str] = DEFAULT_LEDGER_PATH,
    output_path: Union[Path, str] = DEFAULT_GEOJSON_PATH,
    config: Optional[GISClientConfig] = None,
    client: Optional[TigerWebZctaClient] = None,
) -> BoundaryFetchResult:
    """
    Fetch polygons for every ledger ZIP and write the GeoJSON artifact.

    Args:
        ledger_path: Availability ledger to read ZIP headers from.
        output_path: Destination of the FeatureCollection.
        config: Client configuration; TIGERWEB_ZCTA_CONFIG by default.
        client: Pre-built client (not yet entered), mainly for tests.

    Returns:
        The fetch result, including missing ZIPs.

    Raises:
        LedgerNotFoundError: If the ledger file does not exist.
        AcquisitionError: If any batch fails; nothing is written then.
    """
    zips = zip_codes(read_ledger(ledger_path))
    logger.info("Found %d zip codes in %s", len(zips), ledger_path)

    client = client or TigerWebZctaClient(config or TIGERWEB_ZCTA_CONFIG)
    async with client:
        result = await BoundaryFetcher(client).fetch(zips)

    write_geojson(result, output_path)
    logger.info("Saved %s with %d polygons", output_path, len(result.features))

    if result.missing:
        logger.warning(
            "These zips were not returned by TIGERweb (no ZCTA match): %s",
            ", ".join(result.missing),
        )

    return result


def main(argv: Optional[list[str]] = None) -> int:
    """Fetch ZIP boundaries for the ledger and save them as GeoJSON."""
    parser = argparse.ArgumentParser(
        description="Export ZCTA boundary polygons for the ledger ZIP codes"
    )
    parser.add_argument("--ledger", type=Path, default=DEFAULT_LEDGER_PATH)
    parser.add_argument("--output", type=Path, default=DEFAULT_GEOJSON_PATH)
    parser.add_argument(
        "--batch-size",
        dest="batch",
        type=batch_config_arg,
        default=TIGERWEB_ZCTA_CONFIG.batch,
        help="ZIP codes per TIGERweb query",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    config = TIGERWEB_ZCTA_CONFIG.model_copy(update={"batch": args.batch})

    try:
        asyncio.run(export_boundaries(args.ledger, args.output, config=config))
    except AcquisitionError as e:
        logger.error("%s", e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
