"""Unified region-building exception taxonomy.

Every domain exception inherits from ``RegionError`` and carries
structured context fields (stage, code, offending site) so that a batch
run can report failures consistently.

Taxonomy categories
-------------------
- ``ValidationError``  : input/contract violations on a single call.
- ``PermanentError``   : unrecoverable failures (unreadable sources).
- ``ContractError``    : payload drift when rebuilding models from dicts.

Every exception exposes ``to_error_dict()`` for a stable structured
error payload suitable for logging and run summaries.
"""

from __future__ import annotations


class RegionError(Exception):
    """Base exception for all region-building errors.

    Attributes:
        message: Human-readable error description.
        stage: Stage where the error occurred
            (e.g. ``"clip_upstream"``, ``"load_inputs"``).
        code: Machine-readable error code (e.g. ``"DIRECTION_INVALID"``).
        site_id: Identifier of the site being processed, if any.
    """

    #: Default stage for subclasses (override via class attribute or kwarg).
    default_stage: str = ""
    #: Default code for subclasses (override via class attribute or kwarg).
    default_code: str = ""

    def __init__(
        self,
        message: str = "",
        *,
        stage: str = "",
        code: str = "",
        site_id: str = "",
    ) -> None:
        self.message = message
        self.stage = stage or self.default_stage
        self.code = code or self.default_code
        self.site_id = site_id
        super().__init__(message)

    @property
    def category(self) -> str:
        """Return the error category based on concrete class."""
        if isinstance(self, ContractError):
            return "contract"
        if isinstance(self, ValidationError):
            return "validation"
        return "permanent"

    def to_error_dict(self) -> dict[str, object]:
        """Return a structured error payload with stable keys."""
        return {
            "category": self.category,
            "code": self.code,
            "stage": self.stage,
            "message": self.message,
            "site_id": self.site_id,
        }


# ---------------------------------------------------------------------------
# Category base classes
# ---------------------------------------------------------------------------


class ValidationError(RegionError):
    """Input or domain-model validation failure."""

    default_code = "VALIDATION_FAILED"


class PermanentError(RegionError):
    """Unrecoverable failure outside the caller's inputs."""


class ContractError(RegionError):
    """Payload or schema drift when rebuilding a model from a dict."""

    default_code = "CONTRACT_VIOLATION"


# ---------------------------------------------------------------------------
# Validation errors
# ---------------------------------------------------------------------------


class DirectionError(ValidationError):
    """Raised when a direction is not one of the supported variants."""

    default_code = "DIRECTION_INVALID"


class CRSMismatchError(ValidationError):
    """Raised when geometries in one computation use different CRSs."""

    default_code = "CRS_MISMATCH"


class CRSValidationError(ValidationError):
    """Raised when a CRS is unknown or unsuitable for metric buffering."""

    default_code = "CRS_INVALID"


class GeometryValidationError(ValidationError):
    """Raised for malformed geometry: zero-length or self-intersecting lines."""

    default_code = "GEOMETRY_INVALID"
