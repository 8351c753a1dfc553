"""Data model for a river line network.

A LineNetwork wraps a shapely ``LineString`` or ``MultiLineString`` plus
its CRS.  It may hold disconnected pieces (a main stem and tributaries
that were cut by the data source) and may be empty, which is how the
clipper reports "no river here".
"""

from __future__ import annotations

import math
from collections.abc import Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from river_aoi.core.exceptions import GeometryValidationError
from river_aoi.models.bbox import BoundingBox

if TYPE_CHECKING:
    from shapely.geometry import LineString, MultiLineString
    from shapely.geometry.base import BaseGeometry

LINE_TYPES = ("LineString", "MultiLineString")


@dataclass(frozen=True, slots=True)
class LineNetwork:
    """A (multi-)polyline in a single CRS.

    Attributes:
        geometry: ``LineString`` or ``MultiLineString``; may be empty.
        crs: Coordinate reference system, any string pyproj accepts.
        name: Label of the real-world feature (e.g. ``"Xingu"``).
    """

    geometry: LineString | MultiLineString
    crs: str
    name: str = ""

    @classmethod
    def empty(cls, crs: str, name: str = "") -> LineNetwork:
        from shapely.geometry import LineString

        return cls(geometry=LineString(), crs=crs, name=name)

    @classmethod
    def from_lines(
        cls,
        lines: Iterable[BaseGeometry],
        crs: str,
        name: str = "",
    ) -> LineNetwork:
        """Build a network from line geometries, merging parts that share endpoints.

        Non-line geometries (points left over from an intersection, for
        example) are dropped.
        """
        parts = [part for geom in lines for part in line_parts(geom)]
        if not parts:
            return cls.empty(crs, name)

        from shapely.geometry import MultiLineString
        from shapely.ops import linemerge

        merged = linemerge(MultiLineString(parts)) if len(parts) > 1 else parts[0]
        return cls(geometry=merged, crs=crs, name=name)

    @property
    def is_empty(self) -> bool:
        return bool(self.geometry.is_empty)

    @property
    def length(self) -> float:
        return float(self.geometry.length)

    @property
    def bounds(self) -> BoundingBox:
        """Bounding box of the network.

        Raises:
            ValueError: If the network is empty.
        """
        return BoundingBox.from_geometry(self.geometry)

    @property
    def parts(self) -> list[LineString]:
        return line_parts(self.geometry)

    def validate(self, *, site_id: str = "") -> None:
        """Reject geometry the clipper cannot trust.

        Every part must be a finite, non-zero-length, simple (non
        self-crossing) line.  Separate parts may touch or cross each other.

        Raises:
            GeometryValidationError: On any malformed part.
        """
        label = f"Network '{self.name}'" if self.name else "Network"
        if site_id:
            label = f"Site '{site_id}': {label.lower()}"

        geom_type = self.geometry.geom_type
        if geom_type not in LINE_TYPES:
            msg = f"{label} must be LineString or MultiLineString, got {geom_type}"
            raise GeometryValidationError(msg, stage="validate_network", site_id=site_id)

        for index, part in enumerate(self.parts):
            if not all(math.isfinite(c) for xy in part.coords for c in xy):
                msg = f"{label} has non-finite coordinates at index {index}"
                raise GeometryValidationError(msg, stage="validate_network", site_id=site_id)
            if part.length == 0:
                msg = f"{label} has a zero-length part at index {index}"
                raise GeometryValidationError(msg, stage="validate_network", site_id=site_id)
            if not part.is_simple:
                msg = f"{label} has a self-intersecting part at index {index}"
                raise GeometryValidationError(msg, stage="validate_network", site_id=site_id)


def line_parts(geom: BaseGeometry) -> list[LineString]:
    """Flatten a geometry into its non-empty ``LineString`` parts."""
    if geom.is_empty:
        return []
    geom_type = geom.geom_type
    if geom_type == "LineString":
        return [geom]  # type: ignore[list-item]
    if geom_type in ("MultiLineString", "GeometryCollection"):
        return [part for sub in geom.geoms for part in line_parts(sub)]  # type: ignore[attr-defined]
    return []
