"""River segment clipping around a site.

Keeps the part of a river network that lies within a radius of a site
and on one side (WEST or EAST) of the site's x-coordinate: for a dam,
the reach flooded by or feeding its reservoir.

Steps:
1. Buffer the site into a disk of radius ``distance``.
2. Intersect the network with the disk.  No intersection is a valid
   outcome and returns an empty network.
3. Take the bounding box of the local network and cut it at the site's
   x-coordinate on the side given by ``direction``.
4. Crop the local network to that box.

Distances are in CRS units; the CRS must be projected.
"""

from __future__ import annotations

import logging
import math

from river_aoi.core.exceptions import CRSMismatchError, CRSValidationError, ValidationError
from river_aoi.models.bbox import BoundingBox
from river_aoi.models.direction import Direction
from river_aoi.models.network import LineNetwork
from river_aoi.models.site import Site
from river_aoi.utils.crs import is_projected, same_crs

logger = logging.getLogger("river_aoi.activities.clip_upstream")

STAGE = "clip_upstream"


def clip_upstream(
    site: Site,
    network: LineNetwork,
    distance: float,
    direction: Direction | str,
) -> LineNetwork:
    """Trim ``network`` to the reach within ``distance`` of ``site`` on one side.

    Args:
        site: Reference site; must share ``network``'s CRS.
        network: River lines; disconnected parts are all considered.
        distance: Radius in CRS units, > 0.
        direction: ``Direction.WEST`` / ``Direction.EAST`` or their names.

    Returns:
        The trimmed network, in the same CRS.  Empty when the river does
        not come within ``distance`` of the site, or when no part of the
        local river lies on the requested side.

    Raises:
        DirectionError: If ``direction`` is not WEST or EAST.
        ValidationError: If ``distance`` is not a positive finite number
            or the site is malformed.
        CRSMismatchError: If site and network CRSs differ.
        CRSValidationError: If the CRS is geographic or unknown.
        GeometryValidationError: If the network holds malformed lines.
    """
    resolved = Direction.parse(direction, site_id=site.name)
    validate_clip_inputs(site, network, distance)

    disk = site.geometry.buffer(distance)
    local = LineNetwork.from_lines(
        [network.geometry.intersection(disk)], crs=network.crs, name=network.name
    )
    if local.is_empty:
        logger.info(
            "River out of reach | site=%s | network=%s | distance=%.1f",
            site.name,
            network.name,
            distance,
        )
        return local

    trimmed_box = resolved.trim(local.bounds, site.x)
    if trimmed_box.is_degenerate:
        logger.info(
            "No river on requested side | site=%s | direction=%s | x=%.3f | "
            "local_x_range=[%.3f, %.3f]",
            site.name,
            resolved.name,
            site.x,
            local.bounds.xmin,
            local.bounds.xmax,
        )
        return LineNetwork.empty(network.crs, network.name)

    result = crop_to_box(local, trimmed_box, pad_y=distance)
    logger.debug(
        "Network clipped | site=%s | direction=%s | distance=%.1f | length=%.1f",
        site.name,
        resolved.name,
        distance,
        result.length,
    )
    return result


def crop_to_box(network: LineNetwork, bbox: BoundingBox, *, pad_y: float = 0.0) -> LineNetwork:
    """Keep the line parts of ``network`` inside ``bbox``.

    ``pad_y`` grows the box vertically.  A network whose bbox has zero
    height (a straight east-west line) lies on the box edge, and an
    unpadded zero-height rectangle has no interior to intersect with.
    """
    clipped = network.geometry.intersection(bbox.to_polygon(pad_y=pad_y))
    return LineNetwork.from_lines([clipped], crs=network.crs, name=network.name)


def validate_clip_inputs(site: Site, network: LineNetwork, distance: float) -> None:
    """Validate everything ``clip_upstream`` needs before touching geometry.

    Raises:
        ValidationError: Bad distance or site coordinates.
        CRSMismatchError: Site and network CRSs differ.
        CRSValidationError: CRS is geographic or unknown.
        GeometryValidationError: Malformed network.
    """
    site.validate()
    validate_distance(distance, "distance", site_id=site.name)

    try:
        matching = same_crs(site.crs, network.crs)
        projected = is_projected(site.crs)
    except CRSValidationError as exc:
        msg = f"Site '{site.name}': {exc.message}"
        raise CRSValidationError(msg, stage=STAGE, site_id=site.name) from exc
    if not matching:
        msg = (
            f"Site '{site.name}': CRS {site.crs} does not match network "
            f"'{network.name}' CRS {network.crs}"
        )
        raise CRSMismatchError(msg, stage=STAGE, site_id=site.name)

    if not projected:
        msg = (
            f"Site '{site.name}': CRS {site.crs} is geographic; reproject to a "
            "metric CRS before clipping"
        )
        raise CRSValidationError(msg, stage=STAGE, site_id=site.name)

    network.validate(site_id=site.name)


def validate_distance(value: float, label: str, *, site_id: str = "") -> float:
    """Return ``value`` as a float if it is finite and > 0.

    Raises:
        ValidationError: Otherwise, naming ``label`` and the site.
    """
    prefix = f"Site '{site_id}': " if site_id else ""
    if isinstance(value, bool):
        msg = f"{prefix}{label} must be a number, got: {value!r}"
        raise ValidationError(msg, stage=STAGE, site_id=site_id)
    try:
        number = float(value)
    except (TypeError, ValueError) as exc:
        msg = f"{prefix}{label} must be a number, got: {value!r}"
        raise ValidationError(msg, stage=STAGE, site_id=site_id) from exc
    if not math.isfinite(number) or number <= 0:
        msg = f"{prefix}{label} must be a positive finite number, got: {value!r}"
        raise ValidationError(msg, stage=STAGE, site_id=site_id)
    return number
