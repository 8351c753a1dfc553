"""Axis-aligned bounding box used as an intermediate clipping region."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from shapely.geometry import Polygon
    from shapely.geometry.base import BaseGeometry


@dataclass(frozen=True, slots=True)
class BoundingBox:
    """Rectangle ``(xmin, xmax, ymin, ymax)`` in the CRS of its source geometry.

    Field order follows the x-range / y-range convention used when
    trimming a network; ``as_bounds()`` converts to shapely's
    ``(minx, miny, maxx, maxy)``.
    """

    xmin: float
    xmax: float
    ymin: float
    ymax: float

    @classmethod
    def from_geometry(cls, geom: BaseGeometry) -> BoundingBox:
        """Bounding box of a non-empty shapely geometry.

        Raises:
            ValueError: If ``geom`` is empty.
        """
        if geom.is_empty:
            msg = "Cannot compute the bounding box of an empty geometry"
            raise ValueError(msg)
        minx, miny, maxx, maxy = geom.bounds
        return cls(xmin=minx, xmax=maxx, ymin=miny, ymax=maxy)

    @property
    def width(self) -> float:
        return self.xmax - self.xmin

    @property
    def height(self) -> float:
        return self.ymax - self.ymin

    @property
    def is_degenerate(self) -> bool:
        """True when the x-range is empty or collapsed to a line."""
        return self.width <= 0

    def with_x_range(self, xmin: float, xmax: float) -> BoundingBox:
        """Copy of this box with the x-range replaced and the y-range kept."""
        return replace(self, xmin=xmin, xmax=xmax)

    def as_bounds(self) -> tuple[float, float, float, float]:
        return (self.xmin, self.ymin, self.xmax, self.ymax)

    def to_polygon(self, pad_y: float = 0.0) -> Polygon:
        """Rectangle polygon, optionally grown by ``pad_y`` above and below."""
        from shapely.geometry import box

        return box(self.xmin, self.ymin - pad_y, self.xmax, self.ymax + pad_y)
