"""Tests for the unified exception taxonomy.

Validates:
- RegionError hierarchy and structured attributes
- Category classification (validation, permanent, contract)
- ``to_error_dict()`` produces stable payload keys
- All module exceptions are RegionError subclasses
"""

from __future__ import annotations

from typing import ClassVar

from river_aoi.activities.load_inputs import LoadError
from river_aoi.core.config import ConfigValidationError
from river_aoi.core.exceptions import (
    ContractError,
    CRSMismatchError,
    CRSValidationError,
    DirectionError,
    GeometryValidationError,
    PermanentError,
    RegionError,
    ValidationError,
)


class TestRegionErrorBase:
    """RegionError base class behavior."""

    def test_default_attributes(self) -> None:
        err = RegionError("boom")
        assert err.message == "boom"
        assert err.stage == ""
        assert err.code == ""
        assert err.site_id == ""

    def test_custom_attributes(self) -> None:
        err = RegionError("fail", stage="clip_upstream", code="X", site_id="Dam A")
        assert err.stage == "clip_upstream"
        assert err.code == "X"
        assert err.site_id == "Dam A"

    def test_str_is_message(self) -> None:
        assert str(RegionError("human-readable error")) == "human-readable error"

    def test_to_error_dict_keys(self) -> None:
        err = RegionError("x", stage="s", code="C", site_id="id")
        d = err.to_error_dict()
        assert set(d.keys()) == {"category", "code", "stage", "message", "site_id"}
        assert d["message"] == "x"
        assert d["site_id"] == "id"
        assert d["category"] == "permanent"


class TestCategoryBases:
    """Category base classes report their category."""

    def test_validation(self) -> None:
        assert ValidationError("bad input").category == "validation"

    def test_permanent(self) -> None:
        assert PermanentError("gone").category == "permanent"

    def test_contract(self) -> None:
        assert ContractError("schema drift").category == "contract"

    def test_validation_subclasses(self) -> None:
        for cls in (DirectionError, CRSMismatchError, CRSValidationError, GeometryValidationError):
            assert cls("x").category == "validation"


class TestAllExceptionsAreRegionError:
    """Every custom exception inherits from RegionError."""

    EXCEPTION_CLASSES: ClassVar[list[type[RegionError]]] = [
        ValidationError,
        PermanentError,
        ContractError,
        DirectionError,
        CRSMismatchError,
        CRSValidationError,
        GeometryValidationError,
        ConfigValidationError,
        LoadError,
    ]

    def test_all_subclass_region_error(self) -> None:
        for cls in self.EXCEPTION_CLASSES:
            assert issubclass(cls, RegionError), f"{cls.__name__} is not a RegionError"


class TestDefaultCodes:
    """Concrete exceptions carry a default code."""

    def test_direction_error(self) -> None:
        assert DirectionError("x").code == "DIRECTION_INVALID"

    def test_crs_errors(self) -> None:
        assert CRSMismatchError("x").code == "CRS_MISMATCH"
        assert CRSValidationError("x").code == "CRS_INVALID"

    def test_geometry_error(self) -> None:
        assert GeometryValidationError("x").code == "GEOMETRY_INVALID"

    def test_config_validation_error(self) -> None:
        err = ConfigValidationError("CLIP_DISTANCE_M", -1, "must be > 0")
        assert err.stage == "config"
        assert err.code == "CONFIG_VALIDATION_FAILED"
        assert err.key == "CLIP_DISTANCE_M"
        assert "CLIP_DISTANCE_M=-1" in err.message
