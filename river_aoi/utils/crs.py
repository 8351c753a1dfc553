"""CRS helpers built on pyproj.

Buffers and radii are expressed in metres, so every computation runs in
a projected CRS.  Inputs in a geographic CRS are reprojected to the UTM
zone of the river network  --  never buffered in degrees.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import TYPE_CHECKING

from river_aoi.core.constants import WGS84
from river_aoi.core.exceptions import CRSValidationError

if TYPE_CHECKING:
    from pyproj import CRS
    from shapely.geometry.base import BaseGeometry

    from river_aoi.models.network import LineNetwork
    from river_aoi.models.site import Site

logger = logging.getLogger("river_aoi.utils.crs")


@lru_cache(maxsize=64)
def parse_crs(crs: str) -> CRS:
    """Parse any ``pyproj``-readable CRS string.

    Raises:
        CRSValidationError: If the string is empty or not a known CRS.
    """
    from pyproj import CRS
    from pyproj.exceptions import CRSError

    if not crs:
        msg = "CRS is empty"
        raise CRSValidationError(msg)
    try:
        return CRS.from_user_input(crs)
    except CRSError as exc:
        msg = f"Unrecognised CRS {crs!r}: {exc}"
        raise CRSValidationError(msg) from exc


def is_projected(crs: str) -> bool:
    """Whether ``crs`` is a projected (planar) CRS."""
    return bool(parse_crs(crs).is_projected)


def same_crs(a: str, b: str) -> bool:
    """Whether two CRS strings describe the same CRS.

    ``"EPSG:32722"`` and its WKT form compare equal.
    """
    if a == b:
        return True
    return parse_crs(a) == parse_crs(b)


def utm_crs_for(lon: float, lat: float) -> str:
    """Determine the UTM CRS for a given WGS 84 coordinate.

    Returns an EPSG code like ``"EPSG:32622"`` (UTM zone 22N) or
    ``"EPSG:32722"`` (UTM zone 22S).
    """
    # UTM zone number: 1-based, 6° wide, starting at -180°
    zone_number = int((lon + 180) / 6) + 1
    zone_number = max(1, min(60, zone_number))

    if lat >= 0:
        return f"EPSG:{32600 + zone_number}"
    return f"EPSG:{32700 + zone_number}"


def reproject_geometry(geom: BaseGeometry, src_crs: str, dst_crs: str) -> BaseGeometry:
    """Transform a shapely geometry between two CRSs.

    Returns the input unchanged when both CRSs are the same.
    """
    if same_crs(src_crs, dst_crs):
        return geom

    import shapely
    from pyproj import Transformer

    transformer = Transformer.from_crs(
        parse_crs(src_crs), parse_crs(dst_crs), always_xy=True
    )
    return shapely.transform(geom, transformer.transform, interleaved=False)


def reproject_site(site: Site, dst_crs: str) -> Site:
    """Return a copy of ``site`` with coordinates in ``dst_crs``."""
    from dataclasses import replace

    point = reproject_geometry(site.geometry, site.crs, dst_crs)
    return replace(site, x=point.x, y=point.y, crs=dst_crs)


def reproject_network(network: LineNetwork, dst_crs: str) -> LineNetwork:
    """Return a copy of ``network`` with geometry in ``dst_crs``."""
    from dataclasses import replace

    geometry = reproject_geometry(network.geometry, network.crs, dst_crs)
    return replace(network, geometry=geometry, crs=dst_crs)


def choose_work_crs(network: LineNetwork, override: str = "") -> str:
    """Pick the projected CRS that region building runs in.

    Order of preference: an explicit ``override``, the network's own CRS
    if it is already projected, and finally the UTM zone containing the
    network's centroid.

    Raises:
        CRSValidationError: If ``override`` is geographic, or the network
            is empty and its own CRS is geographic.
    """
    if override:
        if not is_projected(override):
            msg = f"Working CRS {override} is not projected"
            raise CRSValidationError(msg)
        return override

    if is_projected(network.crs):
        return network.crs

    if network.is_empty:
        msg = f"Cannot derive a UTM zone from an empty network in {network.crs}"
        raise CRSValidationError(msg)

    centroid = reproject_geometry(network.geometry.centroid, network.crs, WGS84)
    work_crs = utm_crs_for(centroid.x, centroid.y)
    logger.info(
        "Working CRS selected | network=%s | source_crs=%s | work_crs=%s",
        network.name,
        network.crs,
        work_crs,
    )
    return work_crs
