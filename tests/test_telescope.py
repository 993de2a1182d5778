"""Tests for the simulated telescope controller."""

from __future__ import annotations

from typing import Any

import pytest

from astroportal.catalog import CatalogStore
from astroportal.errors import InvalidQueryError, ObjectNotFoundError
from astroportal.telescope import TelescopeController


@pytest.fixture
def controller(catalog: CatalogStore) -> TelescopeController:
    return TelescopeController(catalog)


class TestInitialState:
    def test_points_at_first_catalog_entry(self, controller: TelescopeController) -> None:
        status = controller.status()
        assert status["target"] == "M31 - Andromeda Galaxy"
        assert status["ra"] == "00h 42m 44s"
        assert status["dec"] == "+41° 16′ 09″"
        assert status["fov"] == "1.2° × 0.8°"
        assert status["az"] == 127.5
        assert status["el"] == 35.2
        assert status["trackingActive"] is True

    def test_imaging_defaults(self, controller: TelescopeController) -> None:
        status = controller.status()
        assert status["exposure"] == 30.0
        assert status["filter"] == "Luminance"
        assert status["binning"] == "1x1"
        assert status["gain"] == 100.0
        assert status["roi"] is None

    def test_scope_dict_has_no_tracking_flag(self, controller: TelescopeController) -> None:
        assert "trackingActive" not in controller.state.to_dict()


class TestConfigure:
    def test_partial_update(self, controller: TelescopeController) -> None:
        state = controller.configure({"exposure": "45", "gain": 150})
        assert state.exposure_seconds == 45.0
        assert state.gain == 150.0
        assert state.filter == "Luminance"
        assert state.binning == "1x1"

    def test_replaces_record(self, controller: TelescopeController) -> None:
        before = controller.state
        after = controller.configure({"filter": "Ha", "binning": "2x2"})
        assert after is controller.state
        assert after is not before
        assert before.filter == "Luminance"
        assert (after.filter, after.binning) == ("Ha", "2x2")

    def test_tracking_toggle(self, controller: TelescopeController) -> None:
        controller.configure({"tracking": False})
        assert controller.status()["trackingActive"] is False
        controller.configure({"tracking": 1})
        assert controller.status()["trackingActive"] is True

    def test_roi(self, controller: TelescopeController) -> None:
        roi = {"x": 10, "y": 20, "w": 640, "h": 480}
        assert controller.configure({"roi": roi}).region_of_interest == roi

    @pytest.mark.parametrize("roi", [{}, []])
    def test_empty_roi_container_is_stored(self, controller: TelescopeController, roi: Any) -> None:
        assert controller.configure({"roi": roi}).region_of_interest == roi

    def test_empty_values_ignored(self, controller: TelescopeController) -> None:
        before = controller.state
        controller.configure({"filter": "", "binning": None, "roi": None, "exposure": None})
        assert controller.state == before

    @pytest.mark.parametrize(
        "settings",
        [
            {"exposure": "long"},
            {"gain": [1]},
            {"exposure": True},
            {"exposure": "nan"},
            {"gain": "inf"},
            {"exposure": float("-inf")},
        ],
    )
    def test_bad_numbers(self, controller: TelescopeController, settings: dict) -> None:
        before = controller.state
        with pytest.raises(InvalidQueryError):
            controller.configure(settings)
        assert controller.state is before


class TestPointAt:
    def test_new_target(self, controller: TelescopeController) -> None:
        controller.configure({"exposure": 120, "tracking": False})
        state = controller.point_at("M42")
        assert state.target_name == "M42 - Orion Nebula"
        assert state.ra == "05h 35m 17s"
        assert state.dec == "-05° 23′ 28″"
        assert state.field_of_view == "1.0° × 0.7°"
        assert state.tracking_active is True
        assert state.exposure_seconds == 120.0

    def test_unknown_target_leaves_state(self, controller: TelescopeController) -> None:
        before = controller.state
        with pytest.raises(ObjectNotFoundError):
            controller.point_at("M99")
        assert controller.state is before
