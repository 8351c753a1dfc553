"""Shared pytest fixtures for the river AOI test suite."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from shapely.geometry import LineString, MultiLineString

from river_aoi.models.network import LineNetwork
from river_aoi.models.site import Site

# UTM zone 22S: covers the lower Xingu (Belo Monte).
PROJECTED_CRS = "EPSG:32722"
GEOGRAPHIC_CRS = "EPSG:4326"


# ---------------------------------------------------------------------------
# In-memory geometry fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def origin_site() -> Site:
    """A site at the origin of a projected CRS."""
    return Site(name="Dam A", x=0.0, y=0.0, crs=PROJECTED_CRS, start_time="2011-06-01")


@pytest.fixture()
def far_site() -> Site:
    """A site nowhere near the river fixtures."""
    return Site(name="Dam Far", x=100.0, y=100.0, crs=PROJECTED_CRS)


@pytest.fixture()
def straight_river() -> LineNetwork:
    """Horizontal river from (-10, 0) to (10, 0)."""
    return LineNetwork(
        geometry=LineString([(-10, 0), (10, 0)]),
        crs=PROJECTED_CRS,
        name="Straight",
    )


@pytest.fixture()
def braided_river() -> LineNetwork:
    """Two disconnected horizontal channels at y=1 and y=-1."""
    return LineNetwork(
        geometry=MultiLineString([[(-10, 1), (10, 1)], [(-10, -1), (10, -1)]]),
        crs=PROJECTED_CRS,
        name="Braided",
    )


# ---------------------------------------------------------------------------
# Vector file fixtures
# ---------------------------------------------------------------------------


def _named_crs(crs: str) -> dict[str, object]:
    code = crs.split(":")[1]
    return {"type": "name", "properties": {"name": f"urn:ogc:def:crs:EPSG::{code}"}}


def write_geojson(path: Path, features: list[dict[str, object]], crs: str) -> Path:
    """Write a GeoJSON FeatureCollection with a named CRS member."""
    collection = {
        "type": "FeatureCollection",
        "crs": _named_crs(crs),
        "features": features,
    }
    path.write_text(json.dumps(collection), encoding="utf-8")
    return path


@pytest.fixture()
def geojson_writer():
    """Return the GeoJSON writer helper for tests that build their own files."""
    return write_geojson


@pytest.fixture()
def sites_file(tmp_path: Path) -> Path:
    """Two dams plus one line feature that the site loader must skip."""
    features = [
        {
            "type": "Feature",
            "properties": {"name": "Dam A", "start": "2011-06-01", "operator": "Norte"},
            "geometry": {"type": "Point", "coordinates": [0.0, 0.0]},
        },
        {
            "type": "Feature",
            "properties": {"name": "Dam B", "start": "2016-02-15", "operator": "Sul"},
            "geometry": {"type": "Point", "coordinates": [5000.0, 0.0]},
        },
        {
            "type": "Feature",
            "properties": {"name": "not a site", "start": None, "operator": None},
            "geometry": {"type": "LineString", "coordinates": [[0.0, 0.0], [1.0, 1.0]]},
        },
    ]
    return write_geojson(tmp_path / "sites.geojson", features, PROJECTED_CRS)


@pytest.fixture()
def river_file(tmp_path: Path) -> Path:
    """Straight river along y=0 stored as two touching features."""
    features = [
        {
            "type": "Feature",
            "properties": {"reach": 1},
            "geometry": {
                "type": "LineString",
                "coordinates": [[-20000.0, 0.0], [2500.0, 0.0]],
            },
        },
        {
            "type": "Feature",
            "properties": {"reach": 2},
            "geometry": {
                "type": "LineString",
                "coordinates": [[2500.0, 0.0], [20000.0, 0.0]],
            },
        },
    ]
    return write_geojson(tmp_path / "xingu.geojson", features, PROJECTED_CRS)
