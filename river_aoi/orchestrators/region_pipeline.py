"""End-to-end region pipeline.

Phases
------
1. **Load**: read sites and the river network with fiona.
2. **Project**: pick a metric working CRS and reproject both inputs.
3. **Build**: ``build_regions`` over every site.
4. **Summarise**: counts, empty segments and failures.

The pipeline stops at regions: fetching rasters for them, computing
indicators and persisting results belong to downstream tools that
consume ``Region.__geo_interface__``.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import TypedDict

from river_aoi.activities.build_regions import build_regions
from river_aoi.activities.load_inputs import load_network, load_sites
from river_aoi.activities.summarize_regions import summarize_regions
from river_aoi.core.config import RegionConfig
from river_aoi.models.direction import Direction
from river_aoi.models.network import LineNetwork
from river_aoi.models.region import Region
from river_aoi.models.site import Site
from river_aoi.models.summary import RunSummary
from river_aoi.utils.crs import choose_work_crs, reproject_network, reproject_site

logger = logging.getLogger("river_aoi.orchestrators.region_pipeline")


class RegionPipelineResult(TypedDict):
    """Output contract of ``run_region_pipeline``."""

    work_crs: str
    segments: list[Region]
    points: list[Region]
    summary: RunSummary


def prepare_inputs(
    sites: Sequence[Site],
    network: LineNetwork,
    work_crs: str,
) -> tuple[list[Site], LineNetwork]:
    """Reproject sites and network into ``work_crs``."""
    projected_sites = [reproject_site(site, work_crs) for site in sites]
    projected_network = reproject_network(network, work_crs)
    return projected_sites, projected_network


def build_from_inputs(
    sites: Sequence[Site],
    network: LineNetwork,
    directions: Mapping[str, Direction | str],
    config: RegionConfig,
) -> RegionPipelineResult:
    """Run the project, build and summarise phases on in-memory inputs."""
    work_crs = choose_work_crs(network, override=config.work_crs)
    projected_sites, projected_network = prepare_inputs(sites, network, work_crs)

    start = time.perf_counter()
    segments, points = build_regions(
        projected_sites,
        projected_network,
        config.clip_distance_m,
        config.buffer_fraction,
        directions,
        isolate_failures=config.isolate_failures,
    )
    logger.info(
        "Build phase complete | sites=%d | duration=%.3f s",
        len(projected_sites),
        time.perf_counter() - start,
    )

    summary = summarize_regions(
        segments,
        points,
        clip_distance=config.clip_distance_m,
        buffer_fraction=config.buffer_fraction,
    )
    return RegionPipelineResult(
        work_crs=work_crs,
        segments=segments,
        points=points,
        summary=summary,
    )


def run_region_pipeline(
    sites_path: str | Path,
    network_path: str | Path,
    directions: Mapping[str, Direction | str],
    config: RegionConfig | None = None,
    *,
    sites_layer: str | None = None,
    network_layer: str | None = None,
) -> RegionPipelineResult:
    """Load inputs from disk and build regions for every site.

    Args:
        sites_path: Vector file with point sites.
        network_path: Vector file with river lines.
        directions: Site name -> side of the site to keep.
        config: Run configuration; ``RegionConfig.from_env()`` when omitted.
        sites_layer: Layer within ``sites_path`` (GeoPackage).
        network_layer: Layer within ``network_path`` (GeoPackage).

    Raises:
        LoadError: If an input cannot be read.
        ConfigValidationError: If the environment configuration is invalid.
        ValidationError: On per-site errors unless ``isolate_failures``.
    """
    config = config or RegionConfig.from_env()

    start = time.perf_counter()
    sites = load_sites(
        sites_path,
        name_field=config.site_name_field,
        time_field=config.site_time_field,
        layer=sites_layer,
    )
    network = load_network(network_path, layer=network_layer)
    logger.info(
        "Load phase complete | sites=%d | network=%s | duration=%.3f s",
        len(sites),
        network.name,
        time.perf_counter() - start,
    )

    return build_from_inputs(sites, network, directions, config)
