"""Region building for a batch of sites.

For every site, two regions of interest are produced:

- ``upstream-segment``: the river reach returned by ``clip_upstream``,
  buffered into a corridor of half-width ``clip_distance * buffer_fraction``.
- ``point-buffer``: a disk of radius ``clip_distance`` around the site.

Both output lists match the input order and length.  A site whose river
trim is empty still yields an (empty) segment region so the gap shows up
in the run summary instead of silently disappearing.

Failure policy:
    By default the first ``RegionError`` aborts the batch.  With
    ``isolate_failures=True`` the failing site gets an empty segment
    region carrying the error message, and the batch goes on.  Its point
    disk is still built when the site itself is valid (a bad direction or
    network only affects the segment); otherwise the point region is an
    empty placeholder too.
    Invalid batch-wide parameters (distance, fraction) always abort.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from fractions import Fraction
from typing import TYPE_CHECKING

from river_aoi.activities.clip_upstream import clip_upstream, validate_distance
from river_aoi.core.exceptions import RegionError, ValidationError
from river_aoi.models.direction import Direction
from river_aoi.models.region import Region, RegionType

if TYPE_CHECKING:
    from river_aoi.models.network import LineNetwork
    from river_aoi.models.site import Site

logger = logging.getLogger("river_aoi.activities.build_regions")

STAGE = "build_regions"


def build_regions(
    sites: Sequence[Site],
    network: LineNetwork,
    clip_distance: float,
    buffer_fraction: float | Fraction,
    directions: Mapping[str, Direction | str],
    *,
    isolate_failures: bool = False,
) -> tuple[list[Region], list[Region]]:
    """Build segment and point-buffer regions for every site.

    Args:
        sites: Sites in a projected CRS shared with ``network``.
        network: River network, read-only and shared by every site.
        clip_distance: Radius for both the river trim and the point buffer.
        buffer_fraction: Corridor half-width as a fraction of ``clip_distance``.
        directions: Site name -> side of the site to keep.
        isolate_failures: Record per-site errors instead of raising.

    Returns:
        ``(segment_regions, point_regions)``, each with one entry per site
        in input order.

    Raises:
        ValidationError: For invalid ``clip_distance`` / ``buffer_fraction``,
            or (without ``isolate_failures``) any per-site validation error.
    """
    clip_distance = validate_distance(clip_distance, "clip_distance")
    fraction = validate_distance(buffer_fraction, "buffer_fraction")
    segment_buffer = clip_distance * fraction

    pairs = [
        _build_site_regions(
            site,
            network,
            clip_distance,
            segment_buffer,
            directions,
            isolate_failures=isolate_failures,
        )
        for site in sites
    ]
    segments = [segment for segment, _ in pairs]
    points = [point for _, point in pairs]

    logger.info(
        "Regions built | sites=%d | clip_distance=%.1f | segment_buffer=%.1f | "
        "empty_segments=%d | failed=%d",
        len(sites),
        clip_distance,
        segment_buffer,
        sum(1 for segment in segments if segment.is_empty and not segment.failed),
        sum(1 for segment in segments if segment.failed),
    )
    return segments, points


def _build_site_regions(
    site: Site,
    network: LineNetwork,
    clip_distance: float,
    segment_buffer: float,
    directions: Mapping[str, Direction | str],
    *,
    isolate_failures: bool,
) -> tuple[Region, Region]:
    try:
        return build_site_regions(site, network, clip_distance, segment_buffer, directions)
    except RegionError as exc:
        if not isolate_failures:
            raise
        logger.warning(
            "Site failed, continuing batch | site=%s | code=%s | error=%s",
            site.name,
            exc.code,
            exc.message,
        )
        return _failed_regions(site, clip_distance, segment_buffer, exc)


def build_site_regions(
    site: Site,
    network: LineNetwork,
    clip_distance: float,
    segment_buffer: float,
    directions: Mapping[str, Direction | str],
) -> tuple[Region, Region]:
    """Build the ``(segment, point)`` region pair for a single site.

    Raises:
        ValidationError: If the site has no direction assigned, or any
            ``clip_upstream`` validation fails.
    """
    if site.name not in directions:
        msg = f"Site '{site.name}': no direction assigned"
        raise ValidationError(msg, stage=STAGE, code="DIRECTION_MISSING", site_id=site.name)

    trimmed = clip_upstream(site, network, clip_distance, directions[site.name])
    attributes = site_attributes(site)

    segment = Region(
        region_id=site.name,
        region_type=RegionType.UPSTREAM_SEGMENT,
        geometry=trimmed.geometry.buffer(segment_buffer),
        crs=site.crs,
        buffer_distance=segment_buffer,
        source_length=trimmed.length,
        attributes=attributes,
    )
    point = Region(
        region_id=site.name,
        region_type=RegionType.POINT_BUFFER,
        geometry=site.geometry.buffer(clip_distance),
        crs=site.crs,
        buffer_distance=clip_distance,
        attributes=dict(attributes),
    )

    if segment.is_empty:
        logger.warning(
            "Empty upstream segment | site=%s | clip_distance=%.1f | "
            "check site position and direction",
            site.name,
            clip_distance,
        )
    logger.info(
        "Site regions | site=%s | segment_length=%.1f | segment_area=%.2f ha | "
        "point_area=%.2f ha",
        site.name,
        segment.source_length,
        segment.area_ha,
        point.area_ha,
    )
    return segment, point


def site_attributes(site: Site) -> dict[str, str]:
    """Flat attributes a site passes on to its regions."""
    attributes = dict(site.metadata)
    if site.start_time:
        attributes["start_time"] = site.start_time
    return attributes


def _failed_regions(
    site: Site,
    clip_distance: float,
    segment_buffer: float,
    exc: RegionError,
) -> tuple[Region, Region]:
    """Placeholder segment for a failed site, plus its point disk when the site is sound."""
    from shapely.geometry import Polygon

    attributes = site_attributes(site)
    segment = Region(
        region_id=site.name,
        region_type=RegionType.UPSTREAM_SEGMENT,
        geometry=Polygon(),
        crs=site.crs,
        buffer_distance=segment_buffer,
        attributes=attributes,
        error=exc.message,
    )

    try:
        site.validate()
    except ValidationError as site_exc:
        point_geometry, point_error = Polygon(), site_exc.message
    else:
        point_geometry, point_error = site.geometry.buffer(clip_distance), ""

    point = Region(
        region_id=site.name,
        region_type=RegionType.POINT_BUFFER,
        geometry=point_geometry,
        crs=site.crs,
        buffer_distance=clip_distance,
        attributes=dict(attributes),
        error=point_error,
    )
    return segment, point
