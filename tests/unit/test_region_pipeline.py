"""Tests for the end-to-end region pipeline."""

from __future__ import annotations

import pytest
from shapely.geometry import LineString

from river_aoi.activities.load_inputs import LoadError
from river_aoi.core.config import RegionConfig
from river_aoi.core.exceptions import DirectionError
from river_aoi.models.network import LineNetwork
from river_aoi.models.region import RegionType
from river_aoi.models.site import Site
from river_aoi.orchestrators.region_pipeline import (
    build_from_inputs,
    prepare_inputs,
    run_region_pipeline,
)


class TestRunRegionPipeline:
    """Files on disk through to regions and summary."""

    def test_projected_inputs(self, sites_file, river_file) -> None:
        config = RegionConfig(clip_distance_m=2000.0, buffer_fraction=0.1)
        result = run_region_pipeline(
            sites_file, river_file, {"Dam A": "west", "Dam B": "east"}, config
        )

        assert result["work_crs"] == "EPSG:32722"
        assert [region.region_id for region in result["segments"]] == ["Dam A", "Dam B"]
        assert all(
            region.region_type is RegionType.UPSTREAM_SEGMENT for region in result["segments"]
        )
        assert result["segments"][0].source_length == pytest.approx(2000.0, rel=1e-6)
        assert result["segments"][1].source_length == pytest.approx(2000.0, rel=1e-6)
        assert result["summary"].status == "completed"

    def test_time_field_from_config(self, sites_file, river_file) -> None:
        config = RegionConfig(clip_distance_m=2000.0, site_time_field="start")
        result = run_region_pipeline(
            sites_file, river_file, {"Dam A": "west", "Dam B": "east"}, config
        )
        assert result["points"][0].attributes["start_time"] == "2011-06-01"

    def test_default_config_aborts_on_bad_direction(self, sites_file, river_file) -> None:
        config = RegionConfig(clip_distance_m=2000.0)
        with pytest.raises(DirectionError, match="Dam B"):
            run_region_pipeline(sites_file, river_file, {"Dam A": "west", "Dam B": "x"}, config)

    def test_isolated_failure(self, sites_file, river_file) -> None:
        config = RegionConfig(clip_distance_m=2000.0, isolate_failures=True)
        result = run_region_pipeline(sites_file, river_file, {"Dam A": "west"}, config)
        assert result["segments"][1].failed
        assert result["summary"].failed_count == 1
        assert result["summary"].status == "partial"

    def test_config_from_env_when_omitted(self, sites_file, river_file, monkeypatch) -> None:
        monkeypatch.setenv("CLIP_DISTANCE_M", "1000")
        monkeypatch.setenv("BUFFER_FRACTION", "0.2")
        result = run_region_pipeline(sites_file, river_file, {"Dam A": "west", "Dam B": "east"})
        assert result["summary"].clip_distance == 1000.0
        assert result["segments"][0].buffer_distance == pytest.approx(200.0)

    def test_missing_input(self, tmp_path, river_file) -> None:
        with pytest.raises(LoadError):
            run_region_pipeline(tmp_path / "nope.geojson", river_file, {}, RegionConfig())


class TestGeographicInputs:
    """Inputs in WGS 84 are projected to UTM before buffering."""

    def test_projected_to_utm(self) -> None:
        site = Site(name="Belo Monte", x=-51.775, y=-3.125, crs="EPSG:4326")
        network = LineNetwork(
            geometry=LineString([(-52.0, -3.125), (-51.5, -3.125)]),
            crs="EPSG:4326",
            name="Xingu",
        )
        config = RegionConfig(clip_distance_m=10_000.0, buffer_fraction=0.1)
        result = build_from_inputs([site], network, {"Belo Monte": "west"}, config)

        assert result["work_crs"] == "EPSG:32722"
        segment = result["segments"][0]
        assert segment.crs == "EPSG:32722"
        # The projected parallel is close to straight, so the trimmed reach is ~10 km
        assert segment.source_length == pytest.approx(10_000.0, rel=1e-2)
        assert result["points"][0].area == pytest.approx(3.14159e8, rel=1e-2)

    def test_prepare_inputs(self) -> None:
        site = Site(name="A", x=-51.775, y=-3.125, crs="EPSG:4326")
        network = LineNetwork(
            geometry=LineString([(-52.0, -3.125), (-51.5, -3.125)]), crs="EPSG:4326"
        )
        sites, projected = prepare_inputs([site], network, "EPSG:32722")
        assert sites[0].crs == "EPSG:32722"
        assert projected.crs == "EPSG:32722"
