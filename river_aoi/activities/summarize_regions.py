"""Run summary for a batch of built regions.

Zero-length and zero-area results are meaningful: they usually mean a
site sits off the river line or the clip distance is too short.  This
activity counts them and logs each one so the analyst can inspect it.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from river_aoi.models.region import Region
from river_aoi.models.summary import RegionSummary, RunSummary

logger = logging.getLogger("river_aoi.activities.summarize_regions")


def summarize_region(region: Region) -> RegionSummary:
    return RegionSummary(
        region_id=region.region_id,
        region_type=region.region_type.value,
        area=region.area,
        area_hectares=region.area_ha,
        source_length=region.source_length,
        empty=region.is_empty,
        error=region.error,
    )


def summarize_regions(
    segments: Sequence[Region],
    points: Sequence[Region],
    *,
    clip_distance: float,
    buffer_fraction: float,
    timestamp: str = "",
) -> RunSummary:
    """Build a ``RunSummary`` from the two region lists of one batch.

    Args:
        segments: ``upstream-segment`` regions, one per site.
        points: ``point-buffer`` regions, one per site.
        clip_distance: Clip distance used for the batch.
        buffer_fraction: Buffer fraction used for the batch.
        timestamp: ISO 8601 processing timestamp; defaults to now (UTC).

    Returns:
        The summary.  ``status`` is ``"completed"`` when every site
        produced a non-empty segment, ``"partial"`` otherwise.
    """
    failed_ids = {region.region_id for region in (*segments, *points) if region.failed}
    empty_segments = [region for region in segments if region.is_empty and not region.failed]

    for region in empty_segments:
        logger.warning(
            "Segment region is empty | site=%s | source_length=%.1f",
            region.region_id,
            region.source_length,
        )
    for region in segments:
        if region.failed:
            logger.warning("Site failed | site=%s | error=%s", region.region_id, region.error)

    crs = next((region.crs for region in (*segments, *points) if region.crs), "")
    status = "completed" if not failed_ids and not empty_segments else "partial"

    fields: dict[str, object] = {}
    if timestamp:
        fields["timestamp"] = timestamp

    summary = RunSummary(
        crs=crs,
        clip_distance=float(clip_distance),
        buffer_fraction=float(buffer_fraction),
        site_count=len(segments),
        segment_count=len(segments),
        point_count=len(points),
        empty_segment_count=len(empty_segments),
        failed_count=len(failed_ids),
        status=status,
        regions=[summarize_region(region) for region in (*segments, *points)],
        **fields,
    )
    logger.info(
        "Run summary | status=%s | sites=%d | empty_segments=%d | failed=%d | crs=%s",
        summary.status,
        summary.site_count,
        summary.empty_segment_count,
        summary.failed_count,
        summary.crs,
    )
    return summary
