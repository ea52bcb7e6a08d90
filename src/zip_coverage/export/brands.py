"""
Brand catalog: display names and icons for the tracked brands.

Metadata is read from config/brands.yaml. When the file is missing the
built-in defaults below are used, so a fresh checkout still renders.
"""

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

import yaml

from ..acquisition.models import Brand

logger = logging.getLogger(__name__)

DEFAULT_BRANDS = {
    "hwc": {"name": "Homewatch CareGivers", "icon": "assets/HWC.svg"},
    "mse": {"name": "Mister Sparky Electric", "icon": "assets/MSE.svg"},
    "msq": {"name": "Mosquito Squad", "icon": "assets/MSQ.svg"},
    "tca": {"name": "The Cleaning Authority", "icon": "assets/TCA.svg"},
}


def slugify(name: str) -> str:
    """Lower-case, dash-separated form of a display name."""
    slug = re.sub(r"[^a-z0-9]+", "-", name.lower())
    return slug.strip("-")


@dataclass(frozen=True)
class BrandMeta:
    """Display metadata for one brand."""

    brand: Brand
    name: str
    icon: Path

    @property
    def slug(self) -> str:
        return slugify(self.name)

    @property
    def report_filename(self) -> str:
        return f"{self.slug}-columbus-report.pdf"


class BrandCatalog:
    """
    Brand metadata lookup.

    Usage:
        catalog = BrandCatalog()
        meta = catalog.get(Brand.HWC)

    Attributes:
        config_path: Path of the YAML file that was looked up.
        project_root: Directory icon paths are resolved against.
    """

    def __init__(
        self,
        config_path: Optional[Path] = None,
        project_root: Optional[Path] = None,
    ) -> None:
        """
        Initialize the catalog.

        Args:
            config_path: Path to brands.yaml. Auto-detected if not provided.
            project_root: Root for config lookup and relative icon paths.
        """
        self.project_root = project_root or Path.cwd()
        self.config_path = config_path or self.project_root / "config" / "brands.yaml"
        self._brands = self._build(self._load_config())

    def _load_config(self) -> dict[str, Any]:
        """Load brand configuration from YAML file."""
        if not self.config_path.exists():
            logger.info("Brand config not found at %s, using defaults", self.config_path)
            return {"brands": DEFAULT_BRANDS}

        with open(self.config_path, "r", encoding="utf-8") as f:
            config = yaml.safe_load(f) or {}

        logger.info("Loaded brand config from %s", self.config_path)
        return config

    def _build(self, config: dict[str, Any]) -> dict[Brand, BrandMeta]:
        configured = config.get("brands") or {}
        brands = {}
        for brand in Brand:
            entry = {**DEFAULT_BRANDS[brand.value], **(configured.get(brand.value) or {})}
            icon = Path(entry["icon"])
            if not icon.is_absolute():
                icon = self.project_root / icon
            brands[brand] = BrandMeta(brand=brand, name=entry["name"], icon=icon)
        return brands

    def get(self, brand: Brand) -> BrandMeta:
        return self._brands[Brand(brand)]

    def __iter__(self):
        return iter(self._brands.values())
