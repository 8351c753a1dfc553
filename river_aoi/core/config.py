"""Region-building configuration loaded from environment variables.

All values have defaults suitable for dam-scale analyses (10 km radius,
corridor half-width of 10 % of the radius, working CRS picked from the
network's UTM zone).

Fail-fast validation:
    ``from_env()`` raises ``ConfigValidationError`` if any value is out
    of its valid range, so bad configuration is caught before any
    geometry is loaded.
"""

from __future__ import annotations

import math
import os
from dataclasses import dataclass

from river_aoi.core.constants import (
    DEFAULT_BUFFER_FRACTION,
    DEFAULT_CLIP_DISTANCE_M,
    ENV_BUFFER_FRACTION,
    ENV_CLIP_DISTANCE_M,
    ENV_ISOLATE_FAILURES,
    ENV_SITE_NAME_FIELD,
    ENV_SITE_TIME_FIELD,
    ENV_WORK_CRS,
)
from river_aoi.core.exceptions import ValidationError

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES = frozenset({"0", "false", "no", "off", ""})


class ConfigValidationError(ValidationError):
    """Raised when configuration values are out of valid range.

    Attributes:
        key: The configuration key that failed validation.
        value: The invalid value.
    """

    default_stage = "config"
    default_code = "CONFIG_VALIDATION_FAILED"

    def __init__(self, key: str, value: object, message: str) -> None:
        self.key = key
        self.value = value
        super().__init__(f"Invalid configuration {key}={value!r}: {message}")


@dataclass(frozen=True, slots=True)
class RegionConfig:
    """Immutable region-building configuration.

    Attributes:
        clip_distance_m: Radius around each site within which the river
            network is kept, and the radius of the point buffer.
        buffer_fraction: Corridor half-width as a fraction of
            ``clip_distance_m``.
        work_crs: Projected CRS to compute in. Empty selects the UTM
            zone of the river network.
        isolate_failures: Record per-site failures instead of aborting
            the whole batch.
        site_name_field: Attribute holding the site identifier.
        site_time_field: Attribute holding the site's start time (optional).
    """

    clip_distance_m: float = DEFAULT_CLIP_DISTANCE_M
    buffer_fraction: float = DEFAULT_BUFFER_FRACTION
    work_crs: str = ""
    isolate_failures: bool = False
    site_name_field: str = "name"
    site_time_field: str = ""

    @property
    def buffer_distance_m(self) -> float:
        """Corridor half-width in metres."""
        return self.clip_distance_m * self.buffer_fraction

    @classmethod
    def from_env(cls) -> RegionConfig:
        """Load and validate configuration from environment variables.

        Raises:
            ConfigValidationError: If a value is out of range or a
                boolean flag is not recognised.
            ValueError: If a numeric environment variable cannot be
                parsed (e.g. ``CLIP_DISTANCE_M=abc``).
        """
        config = cls(
            clip_distance_m=float(
                os.getenv(ENV_CLIP_DISTANCE_M, str(DEFAULT_CLIP_DISTANCE_M))
            ),
            buffer_fraction=float(
                os.getenv(ENV_BUFFER_FRACTION, str(DEFAULT_BUFFER_FRACTION))
            ),
            work_crs=os.getenv(ENV_WORK_CRS, ""),
            isolate_failures=_parse_bool(
                ENV_ISOLATE_FAILURES, os.getenv(ENV_ISOLATE_FAILURES, "false")
            ),
            site_name_field=os.getenv(ENV_SITE_NAME_FIELD, "name"),
            site_time_field=os.getenv(ENV_SITE_TIME_FIELD, ""),
        )
        _validate(config)
        return config


def _parse_bool(key: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ConfigValidationError(key, raw, "must be true or false")


def _validate(config: RegionConfig) -> None:
    """Validate configuration ranges.  Raises ``ConfigValidationError``."""
    if not math.isfinite(config.clip_distance_m) or config.clip_distance_m <= 0:
        raise ConfigValidationError(
            ENV_CLIP_DISTANCE_M,
            config.clip_distance_m,
            "must be > 0 (metres)",
        )

    if not math.isfinite(config.buffer_fraction) or config.buffer_fraction <= 0:
        raise ConfigValidationError(
            ENV_BUFFER_FRACTION,
            config.buffer_fraction,
            "must be > 0",
        )

    if not config.site_name_field:
        raise ConfigValidationError(
            ENV_SITE_NAME_FIELD,
            config.site_name_field,
            "must not be empty",
        )

    if config.work_crs:
        from river_aoi.core.exceptions import CRSValidationError
        from river_aoi.utils.crs import is_projected

        try:
            projected = is_projected(config.work_crs)
        except CRSValidationError as exc:
            raise ConfigValidationError(ENV_WORK_CRS, config.work_crs, exc.message) from exc
        if not projected:
            raise ConfigValidationError(
                ENV_WORK_CRS,
                config.work_crs,
                "must be a projected CRS with metric units",
            )
