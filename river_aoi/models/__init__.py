"""Data models.

Defines the data structures used throughout region building:
- Site: Labelled point with CRS and optional start time
- LineNetwork: River (multi-)polyline with CRS
- BoundingBox: Intermediate clipping rectangle
- Direction: Side of a site to keep (WEST / EAST)
- Region: Polygon area of interest tied to a site
- RunSummary: Pydantic audit record of a batch
"""

from river_aoi.models.bbox import BoundingBox
from river_aoi.models.direction import Direction
from river_aoi.models.network import LineNetwork
from river_aoi.models.region import Region, RegionType
from river_aoi.models.site import Site

__all__ = [
    "BoundingBox",
    "Direction",
    "LineNetwork",
    "Region",
    "RegionType",
    "Site",
]
