"""Pydantic run-summary model for a region-building batch.

The summary is the audit record of a run: how many sites went in, which
regions came out empty (a sign of a misplaced site or a clip distance
too short to reach the river) and which sites failed validation.
"""

from __future__ import annotations

from datetime import UTC, datetime

from pydantic import BaseModel, Field

SCHEMA_VERSION = "region-summary-v1"


class RegionSummary(BaseModel):
    """Measurements of a single region.

    Attributes:
        region_id: Source site name.
        region_type: ``"upstream-segment"`` or ``"point-buffer"``.
        area: Polygon area in CRS units squared.
        area_hectares: Polygon area in hectares.
        source_length: Length of the trimmed river line.
        empty: Whether the geometry is empty.
        error: Failure message, empty on success.
    """

    region_id: str
    region_type: str
    area: float = 0.0
    area_hectares: float = 0.0
    source_length: float = 0.0
    empty: bool = False
    error: str = ""


class RunSummary(BaseModel):
    """Top-level summary of one ``build_regions`` batch."""

    schema_version: str = Field(default=SCHEMA_VERSION, alias="$schema")
    timestamp: str = Field(default_factory=lambda: datetime.now(UTC).isoformat())
    crs: str = ""
    clip_distance: float = 0.0
    buffer_fraction: float = 0.0
    site_count: int = 0
    segment_count: int = 0
    point_count: int = 0
    empty_segment_count: int = 0
    failed_count: int = 0
    status: str = "completed"
    regions: list[RegionSummary] = Field(default_factory=list)

    model_config = {"populate_by_name": True}

    def to_dict(self) -> dict[str, object]:
        """Serialise with the ``$schema`` alias."""
        return self.model_dump(by_alias=True)
