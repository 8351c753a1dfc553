"""Data model for a region of interest built around a site.

A Region is the polygon handed to indicator calculation: either the
buffered river segment next to a site (``upstream-segment``) or a plain
radial buffer around the site (``point-buffer``).  Its identifier,
geometry and flat attributes are the whole contract with downstream
consumers, exposed through ``__geo_interface__``.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from river_aoi.core.constants import POINT_BUFFER, SQ_METRES_PER_HECTARE, UPSTREAM_SEGMENT
from river_aoi.core.exceptions import ContractError

if TYPE_CHECKING:
    from shapely.geometry import MultiPolygon, Polygon


class RegionType(enum.Enum):
    """Origin of a region's geometry."""

    UPSTREAM_SEGMENT = UPSTREAM_SEGMENT
    POINT_BUFFER = POINT_BUFFER


@dataclass(frozen=True, slots=True)
class Region:
    """A polygon area of interest tied to a source site.

    Attributes:
        region_id: Name of the source site.
        region_type: ``RegionType.UPSTREAM_SEGMENT`` or ``RegionType.POINT_BUFFER``.
        geometry: ``Polygon`` or ``MultiPolygon``; empty when the river
            did not reach the site or the site failed.
        crs: CRS of ``geometry``.
        buffer_distance: Buffer radius applied, in CRS units.
        source_length: Length of the trimmed river line (segment regions only).
        attributes: Flat attributes copied from the site.
        error: Failure message when this region stands in for a failed site.
    """

    region_id: str
    region_type: RegionType
    geometry: Polygon | MultiPolygon
    crs: str
    buffer_distance: float = 0.0
    source_length: float = 0.0
    attributes: dict[str, str] = field(default_factory=dict)
    error: str = ""

    @property
    def is_empty(self) -> bool:
        return bool(self.geometry.is_empty)

    @property
    def area(self) -> float:
        return float(self.geometry.area)

    @property
    def area_ha(self) -> float:
        """Area in hectares, assuming a metric CRS."""
        return self.area / SQ_METRES_PER_HECTARE

    @property
    def failed(self) -> bool:
        return bool(self.error)

    @property
    def __geo_interface__(self) -> dict[str, Any]:
        """GeoJSON Feature with the region id and flat properties."""
        from shapely.geometry import mapping

        properties: dict[str, Any] = {
            "region_type": self.region_type.value,
            "crs": self.crs,
            "buffer_distance": self.buffer_distance,
            "source_length": self.source_length,
            "error": self.error,
        }
        properties.update(self.attributes)
        return {
            "type": "Feature",
            "id": self.region_id,
            "geometry": mapping(self.geometry),
            "properties": properties,
        }

    def to_dict(self) -> dict[str, object]:
        from shapely.geometry import mapping

        return {
            "region_id": self.region_id,
            "region_type": self.region_type.value,
            "geometry": mapping(self.geometry),
            "crs": self.crs,
            "buffer_distance": self.buffer_distance,
            "source_length": self.source_length,
            "attributes": dict(self.attributes),
            "error": self.error,
        }

    @classmethod
    def from_dict(cls, data: dict[str, object]) -> Region:
        """Deserialise from a dict produced by ``to_dict``.

        Raises:
            ContractError: If the region type or geometry is missing or unknown.
            TypeError: If ``attributes`` is not a dict.
        """
        from shapely.geometry import shape

        region_id = str(data.get("region_id", ""))
        try:
            region_type = RegionType(data.get("region_type"))
        except ValueError as exc:
            msg = f"Unknown region_type {data.get('region_type')!r}"
            raise ContractError(msg, stage="region_from_dict", site_id=region_id) from exc

        geometry_raw = data.get("geometry")
        if not isinstance(geometry_raw, dict):
            msg = f"geometry must be a GeoJSON mapping, got {type(geometry_raw).__name__}"
            raise ContractError(msg, stage="region_from_dict", site_id=region_id)

        attributes_raw = data.get("attributes", {})
        if not isinstance(attributes_raw, dict):
            msg = f"attributes must be a dict, got {type(attributes_raw).__name__}"
            raise TypeError(msg)

        return cls(
            region_id=region_id,
            region_type=region_type,
            geometry=shape(geometry_raw),  # type: ignore[arg-type]
            crs=str(data.get("crs", "")),
            buffer_distance=float(data.get("buffer_distance", 0.0)),  # type: ignore[arg-type]
            source_length=float(data.get("source_length", 0.0)),  # type: ignore[arg-type]
            attributes={str(k): str(v) for k, v in attributes_raw.items()},
            error=str(data.get("error", "")),
        )
