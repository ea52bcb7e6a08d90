"""
Pydantic models for ledger and boundary acquisition.

This module defines the domain enums shared by every stage (brands and
availability statuses) and the configuration models for the boundary
service client: timeouts, connection limits, request pacing, batching,
and the layer being queried.
"""

from enum import Enum

from pydantic import BaseModel, Field, field_validator


class Brand(str, Enum):
    """Service brands tracked in the availability ledger."""

    HWC = "hwc"
    MSE = "mse"
    MSQ = "msq"
    TCA = "tca"

    @classmethod
    def codes(cls) -> list[str]:
        """Return the lower-case brand codes in catalog order."""
        return [brand.value for brand in cls]


class AvailabilityStatus(str, Enum):
    """Recorded availability of a brand within one ZIP code."""

    AVAILABLE = "available"
    UNAVAILABLE = "unavailable"


class TimeoutConfig(BaseModel):
    """Configuration for HTTP request timeouts."""

    connect: float = Field(
        default=10.0,
        gt=0,
        le=60.0,
        description="Timeout for establishing connection in seconds",
    )
    read: float = Field(
        default=60.0,
        gt=0,
        le=300.0,
        description="Timeout for reading response in seconds",
    )
    write: float = Field(
        default=10.0,
        gt=0,
        le=60.0,
        description="Timeout for writing request in seconds",
    )
    pool: float = Field(
        default=30.0,
        gt=0,
        le=60.0,
        description="Timeout for acquiring connection from pool in seconds",
    )


class ConnectionLimits(BaseModel):
    """Configuration for HTTP connection pool limits."""

    max_connections: int = Field(
        default=4,
        gt=0,
        le=100,
        description="Maximum total connections",
    )
    max_keepalive_connections: int = Field(
        default=2,
        gt=0,
        le=50,
        description="Maximum keepalive connections",
    )
    keepalive_expiry: float = Field(
        default=30.0,
        gt=0,
        le=300.0,
        description="Keepalive connection expiry in seconds",
    )


class RateLimitConfig(BaseModel):
    """Pacing between consecutive requests to the boundary service."""

    min_request_interval: float = Field(
        default=0.25,
        ge=0,
        le=10.0,
        description="Minimum interval between requests in seconds",
    )


class BatchConfig(BaseModel):
    """Configuration for splitting ZIP codes into query batches."""

    batch_size: int = Field(
        default=25,
        ge=1,
        le=500,
        description="Maximum number of ZIP codes per boundary query",
    )


class LayerConfig(BaseModel):
    """Configuration for the ZIP boundary layer being queried."""

    layer_id: int = Field(..., ge=0, description="Layer ID in the map service")
    name: str = Field(..., min_length=1, description="Human-readable layer name")
    zip_field: str = Field(
        default="ZCTA5",
        min_length=1,
        description="Attribute holding the ZIP code",
    )
    out_sr: int = Field(
        default=4326,
        description="Spatial reference for returned geometry",
    )

    @field_validator("zip_field")
    @classmethod
    def validate_zip_field(cls, v: str) -> str:
        """Ensure the field name is safe to embed in a where clause."""
        if not v.replace("_", "").isalnum():
            raise ValueError("zip_field must be alphanumeric")
        return v


class GISClientConfig(BaseModel):
    """
    Complete configuration for the boundary service client.

    Aggregates all configuration options for timeouts, pacing, batching,
    and connection management.
    """

    base_url: str = Field(
        ...,
        min_length=1,
        description="Base URL of the map service",
    )
    layer: LayerConfig = Field(..., description="Layer holding ZIP boundaries")
    timeout: TimeoutConfig = Field(
        default_factory=TimeoutConfig,
        description="Timeout configuration",
    )
    limits: ConnectionLimits = Field(
        default_factory=ConnectionLimits,
        description="Connection pool limits",
    )
    rate_limit: RateLimitConfig = Field(
        default_factory=RateLimitConfig,
        description="Request pacing configuration",
    )
    batch: BatchConfig = Field(
        default_factory=BatchConfig,
        description="Batching configuration",
    )
    user_agent: str = Field(
        default="ColumbusZipCoverage/1.0",
        description="User-Agent header for requests",
    )


# Census TIGERweb ZIP Code Tabulation Areas
TIGERWEB_ZCTA_CONFIG = GISClientConfig(
    base_url=(
        "https://tigerweb.geo.census.gov/arcgis/rest/services/"
        "TIGERweb/PUMA_TAD_TAZ_UGA_ZCTA/MapServer"
    ),
    layer=LayerConfig(layer_id=7, name="ZCTA5", zip_field="ZCTA5", out_sr=4326),
    timeout=TimeoutConfig(
        connect=10.0,
        read=60.0,
        write=10.0,
        pool=30.0,
    ),
    limits=ConnectionLimits(
        max_connections=4,
        max_keepalive_connections=2,
        keepalive_expiry=30.0,
    ),
    rate_limit=RateLimitConfig(min_request_interval=0.25),
    batch=BatchConfig(batch_size=25),
)
