"""Shared constants: single source of truth.

Centralises default distances, region type labels and the environment
variable names read by ``RegionConfig``.
"""

from __future__ import annotations

# ---------------------------------------------------------------------------
# Region defaults
# ---------------------------------------------------------------------------

DEFAULT_CLIP_DISTANCE_M: float = 10_000.0
"""Default radius (metres) around a site within which the river is kept."""

DEFAULT_BUFFER_FRACTION: float = 0.1
"""Default corridor half-width as a fraction of the clip distance."""

SQ_METRES_PER_HECTARE: float = 10_000.0

WGS84: str = "EPSG:4326"

# ---------------------------------------------------------------------------
# Region type labels
# ---------------------------------------------------------------------------

UPSTREAM_SEGMENT: str = "upstream-segment"
POINT_BUFFER: str = "point-buffer"

# ---------------------------------------------------------------------------
# Environment variables read by RegionConfig.from_env()
# ---------------------------------------------------------------------------

ENV_CLIP_DISTANCE_M = "CLIP_DISTANCE_M"
ENV_BUFFER_FRACTION = "BUFFER_FRACTION"
ENV_WORK_CRS = "WORK_CRS"
ENV_ISOLATE_FAILURES = "ISOLATE_FAILURES"
ENV_SITE_NAME_FIELD = "SITE_NAME_FIELD"
ENV_SITE_TIME_FIELD = "SITE_TIME_FIELD"
