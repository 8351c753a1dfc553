"""Fiona-based loaders for sites and river networks.

Reads any OGR vector source (GeoPackage, Shapefile, GeoJSON, ...).
Point features become ``Site`` objects; LineString / MultiLineString
features are merged into a single ``LineNetwork``.  Individual features
that cannot be used are logged and skipped; an unreadable source or one
with no usable features raises ``LoadError``.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from river_aoi.core.exceptions import PermanentError
from river_aoi.models.network import LINE_TYPES, LineNetwork
from river_aoi.models.site import Site

logger = logging.getLogger("river_aoi.activities.load_inputs")


class LoadError(PermanentError):
    """Raised when a vector source cannot be read or holds nothing usable."""

    default_stage = "load_inputs"
    default_code = "LOAD_FAILED"


def load_sites(
    path: str | Path,
    *,
    name_field: str = "name",
    time_field: str = "",
    layer: str | None = None,
) -> list[Site]:
    """Read point sites from a vector file.

    Args:
        path: Vector file path.
        name_field: Property holding the site identifier.
        time_field: Property holding the start time; ignored when empty.
        layer: Layer name for multi-layer sources (GeoPackage).

    Returns:
        Sites in file order.  Every other non-null property is kept as
        string metadata.

    Raises:
        LoadError: If the file cannot be opened, has no CRS, or holds
            no usable point feature.
    """
    sites: list[Site] = []
    with _open(path, layer) as collection:
        crs = _extract_crs(collection, path)
        for idx, record in enumerate(collection):
            site = _record_to_site(record, idx, crs, path, name_field, time_field)
            if site is not None:
                sites.append(site)

    if not sites:
        msg = f"No point features with a '{name_field}' value in {path}"
        raise LoadError(msg)

    logger.info("Sites loaded | path=%s | count=%d | crs=%s", path, len(sites), crs)
    return sites


def load_network(
    path: str | Path,
    *,
    layer: str | None = None,
    name: str = "",
) -> LineNetwork:
    """Read every line feature of a vector file into one network.

    Raises:
        LoadError: If the file cannot be opened, has no CRS, or holds
            no line feature.
    """
    from shapely.geometry import shape

    lines = []
    with _open(path, layer) as collection:
        crs = _extract_crs(collection, path)
        for idx, record in enumerate(collection):
            geom = record.get("geometry")
            if geom is None:
                continue
            geom_type = geom.get("type", "")
            if geom_type not in LINE_TYPES:
                logger.warning(
                    "Skipping non-line feature %d (%s) in %s", idx, geom_type, path
                )
                continue
            lines.append(shape(geom))

    if not lines:
        msg = f"No LineString or MultiLineString features in {path}"
        raise LoadError(msg)

    network = LineNetwork.from_lines(lines, crs=crs, name=name or Path(path).stem)
    logger.info(
        "Network loaded | path=%s | features=%d | parts=%d | length=%.1f | crs=%s",
        path,
        len(lines),
        len(network.parts),
        network.length,
        crs,
    )
    return network


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _open(path: str | Path, layer: str | None) -> Any:
    import fiona
    from fiona.errors import FionaError

    try:
        return fiona.open(str(path), layer=layer)
    except (FionaError, OSError) as exc:
        msg = f"Cannot open vector source {path}: {exc}"
        raise LoadError(msg) from exc


def _extract_crs(collection: Any, path: str | Path) -> str:
    """CRS of a fiona collection as ``EPSG:<code>`` or WKT.

    Raises:
        LoadError: If the source has no CRS.
    """
    crs = getattr(collection, "crs", None)
    if not crs:
        msg = f"Vector source {path} has no CRS"
        raise LoadError(msg)

    epsg = getattr(crs, "to_epsg", lambda: None)()
    if epsg is not None:
        return f"EPSG:{epsg}"
    return str(collection.crs_wkt)


def _record_to_site(
    record: Any,
    feature_index: int,
    crs: str,
    path: str | Path,
    name_field: str,
    time_field: str,
) -> Site | None:
    geom = record.get("geometry")
    props = dict(record.get("properties", {}) or {})

    if geom is None or geom.get("type") != "Point":
        logger.warning("Skipping non-point feature %d in %s", feature_index, path)
        return None

    name = str(props.pop(name_field, "") or "")
    if not name:
        logger.warning(
            "Skipping feature %d in %s: empty '%s'", feature_index, path, name_field
        )
        return None

    start_time = str(props.pop(time_field, "") or "") if time_field else ""
    x, y = geom["coordinates"][:2]
    return Site(
        name=name,
        x=float(x),
        y=float(y),
        crs=crs,
        start_time=start_time,
        metadata={str(k): str(v) for k, v in props.items() if v is not None},
    )
