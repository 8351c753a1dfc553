"""Side of a site on which the river network is kept."""

from __future__ import annotations

import enum
from typing import TYPE_CHECKING

from river_aoi.core.exceptions import DirectionError

if TYPE_CHECKING:
    from river_aoi.models.bbox import BoundingBox


class Direction(enum.Enum):
    """Which side of the site's x-coordinate to retain.

    For a dam on a river flowing east, the upstream reach lies to the
    WEST of the dam; the mapping from upstream/downstream to a compass
    side is a property of each site, not of the enum.
    """

    WEST = "west"
    EAST = "east"

    @classmethod
    def parse(cls, value: Direction | str, *, site_id: str = "") -> Direction:
        """Coerce a ``Direction`` or a case-insensitive name into a ``Direction``.

        Raises:
            DirectionError: If ``value`` is not WEST or EAST.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        prefix = f"Site '{site_id}': " if site_id else ""
        msg = f"{prefix}direction must be WEST or EAST, got: {value!r}"
        raise DirectionError(msg, stage="clip_upstream", site_id=site_id)

    def trim(self, bbox: BoundingBox, x: float) -> BoundingBox:
        """Cut ``bbox`` at ``x``, keeping the side this direction points to."""
        if self is Direction.WEST:
            return bbox.with_x_range(bbox.xmin, x)
        return bbox.with_x_range(x, bbox.xmax)
