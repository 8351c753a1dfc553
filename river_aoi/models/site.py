"""Data model for a point site on a river network.

A Site is a named location (a dam, a gauge, an intake) with an optional
event start time (e.g. the date a reservoir began filling).  It is the
input to region building, together with a ``LineNetwork``.
"""

from __future__ import annotations

import math
import numbers
from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING

from river_aoi.core.exceptions import ContractError, ValidationError

if TYPE_CHECKING:
    from shapely.geometry import Point


@dataclass(frozen=True, slots=True)
class Site:
    """A labelled point in a given CRS.

    Attributes:
        name: Site identifier (e.g. ``"Belo Monte"``); links regions back
            to their source.
        x: Easting / longitude in ``crs`` units.
        y: Northing / latitude in ``crs`` units.
        crs: Coordinate reference system, any string pyproj accepts.
        start_time: Optional ISO 8601 event start time, ``""`` when unknown.
        metadata: Flat key-value attributes carried through to regions.
    """

    name: str
    x: float
    y: float
    crs: str
    start_time: str = ""
    metadata: dict[str, str] = field(default_factory=dict)

    @property
    def geometry(self) -> Point:
        from shapely.geometry import Point

        return Point(self.x, self.y)

    @property
    def started_at(self) -> datetime | None:
        """``start_time`` parsed as a datetime, or ``None`` if absent or unparseable."""
        if not self.start_time:
            return None
        try:
            return datetime.fromisoformat(self.start_time)
        except ValueError:
            return None

    def validate(self) -> None:
        """Check the identifier and coordinates.

        Raises:
            ValidationError: If the name is empty or a coordinate is not a finite number.
        """
        if not self.name:
            msg = "Site name must not be empty"
            raise ValidationError(msg, stage="validate_site")
        for value in (self.x, self.y):
            if isinstance(value, bool) or not isinstance(value, numbers.Real):
                msg = (
                    f"Site '{self.name}': coordinates must be numbers, "
                    f"got ({self.x!r}, {self.y!r})"
                )
                raise ValidationError(msg, stage="validate_site", site_id=self.name)
        if not (math.isfinite(self.x) and math.isfinite(self.y)):
            msg = f"Site '{self.name}': coordinates must be finite, got ({self.x}, {self.y})"
            raise ValidationError(msg, stage="validate_site", site_id=self.name)

    def to_dict(self) -> dict[str, object]:
        return {
            "name": self.name,
            "x": self.x,
            "y": self.y,
            "crs": self.crs,
            "start_time": self.start_time,
            "metadata": dict(self.metadata),
        }

    @classmethod
    def from_dict(cls, data: dict[str, object]) -> Site:
        """Deserialise from a plain dict.

        Raises:
            ContractError: If ``name``, ``x``, ``y`` or ``crs`` is missing.
            TypeError: If field values have unexpected types.
        """
        missing = [key for key in ("name", "x", "y", "crs") if key not in data]
        if missing:
            msg = f"Site payload missing required field(s): {', '.join(missing)}"
            raise ContractError(msg, stage="site_from_dict", site_id=str(data.get("name", "")))

        metadata_raw = data.get("metadata", {})
        if not isinstance(metadata_raw, dict):
            msg = f"metadata must be a dict, got {type(metadata_raw).__name__}"
            raise TypeError(msg)

        return cls(
            name=str(data["name"]),
            x=float(data["x"]),  # type: ignore[arg-type]
            y=float(data["y"]),  # type: ignore[arg-type]
            crs=str(data["crs"]),
            start_time=str(data.get("start_time", "") or ""),
            metadata={str(k): str(v) for k, v in metadata_raw.items()},
        )
