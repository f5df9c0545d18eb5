"""Tests for the tiling schemes and the profile-name factory.

Covers: tile counts per level, position-to-tile mapping (including edge
clamping and out-of-extent positions), tile extents, and factory lookup.
"""

from __future__ import annotations

import math
import unittest

import pytest

from tms_imagery.models.geometry import MAX_VALUE, Cartographic, Extent, TileXY
from tms_imagery.tiling.base import TilingScheme
from tms_imagery.tiling.factory import (
    _SCHEME_REGISTRY,
    default_tiling_scheme,
    get_tiling_scheme,
    list_tiling_schemes,
    register_tiling_scheme,
)
from tms_imagery.tiling.geographic import GeographicTilingScheme
from tms_imagery.tiling.web_mercator import WebMercatorTilingScheme

# ---------------------------------------------------------------------------
# ABC enforcement
# ---------------------------------------------------------------------------


class TestABCEnforcement(unittest.TestCase):
    """TilingScheme cannot be instantiated directly."""

    def test_cannot_instantiate_abc(self) -> None:
        with self.assertRaises(TypeError):
            TilingScheme(1, 1)  # type: ignore[abstract]

    def test_incomplete_subclass_raises(self) -> None:
        class _Partial(TilingScheme):
            @property
            def extent(self) -> Extent:
                return MAX_VALUE

        with self.assertRaises(TypeError):
            _Partial(1, 1)  # type: ignore[abstract]


# ---------------------------------------------------------------------------
# Geographic
# ---------------------------------------------------------------------------


class TestGeographicTilingScheme(unittest.TestCase):
    def setUp(self) -> None:
        self.scheme = GeographicTilingScheme()

    def test_extent_is_whole_globe(self) -> None:
        assert self.scheme.extent == MAX_VALUE

    def test_tile_counts(self) -> None:
        assert self.scheme.number_of_x_tiles_at_level(0) == 2
        assert self.scheme.number_of_y_tiles_at_level(0) == 1
        assert self.scheme.number_of_x_tiles_at_level(3) == 16
        assert self.scheme.number_of_y_tiles_at_level(3) == 8

    def test_position_to_tile(self) -> None:
        position = Cartographic.from_degrees(50.0, 30.0)
        assert self.scheme.position_to_tile_xy(position, 0) == TileXY(1, 0)
        assert self.scheme.position_to_tile_xy(position, 1) == TileXY(2, 0)
        assert self.scheme.position_to_tile_xy(position, 2) == TileXY(5, 1)

    def test_rows_count_from_north(self) -> None:
        south = Cartographic.from_degrees(-100.0, -45.0)
        assert self.scheme.position_to_tile_xy(south, 1) == TileXY(0, 1)

    def test_far_edges_clamp_to_last_tile(self) -> None:
        corner = Cartographic(math.pi, -math.pi / 2)
        assert self.scheme.position_to_tile_xy(corner, 2) == TileXY(7, 3)

    def test_outside_extent_returns_none(self) -> None:
        scheme = GeographicTilingScheme(extent=Extent.from_degrees(0.0, 0.0, 10.0, 10.0))
        assert scheme.position_to_tile_xy(Cartographic.from_degrees(20.0, 5.0), 0) is None

    def test_tile_extent(self) -> None:
        assert self.scheme.tile_xy_to_extent(0, 0, 0) == Extent(-math.pi, -math.pi / 2, 0.0, math.pi / 2)
        extent = self.scheme.tile_xy_to_extent(3, 1, 1)
        assert extent.to_degrees() == pytest.approx((90.0, -90.0, 180.0, 0.0))


# ---------------------------------------------------------------------------
# Web mercator
# ---------------------------------------------------------------------------


class TestWebMercatorTilingScheme(unittest.TestCase):
    def setUp(self) -> None:
        self.scheme = WebMercatorTilingScheme()

    def test_extent(self) -> None:
        west, south, east, north = self.scheme.extent.to_degrees()
        assert west == pytest.approx(-180.0)
        assert east == pytest.approx(180.0)
        assert north == pytest.approx(85.0511287798, abs=1e-6)
        assert south == pytest.approx(-85.0511287798, abs=1e-6)

    def test_tile_counts(self) -> None:
        assert self.scheme.number_of_x_tiles_at_level(0) == 1
        assert self.scheme.number_of_y_tiles_at_level(0) == 1
        assert self.scheme.number_of_y_tiles_at_level(4) == 16

    def test_quadrants_at_level_one(self) -> None:
        assert self.scheme.position_to_tile_xy(Cartographic.from_degrees(10.0, 10.0), 1) == TileXY(1, 0)
        assert self.scheme.position_to_tile_xy(Cartographic.from_degrees(-10.0, -10.0), 1) == TileXY(0, 1)

    def test_rows_are_mercator_spaced(self) -> None:
        # Equal-angle rows would put 60 N in the top row; mercator rows
        # stretch toward the poles, so it lands in the second.
        assert self.scheme.position_to_tile_xy(Cartographic.from_degrees(0.5, 60.0), 2) == TileXY(2, 1)

    def test_polar_position_is_outside(self) -> None:
        assert self.scheme.position_to_tile_xy(Cartographic.from_degrees(0.0, 89.0), 0) is None

    def test_northeast_corner_clamps(self) -> None:
        assert self.scheme.position_to_tile_xy(self.scheme.extent.northeast, 2) == TileXY(3, 0)

    def test_project_round_trip(self) -> None:
        position = Cartographic.from_degrees(12.5, 41.9)
        x, y = self.scheme.project(position)
        back = self.scheme.unproject(x, y)
        assert back.longitude == pytest.approx(position.longitude)
        assert back.latitude == pytest.approx(position.latitude)

    def test_tile_extent_at_level_zero_is_scheme_extent(self) -> None:
        extent = self.scheme.tile_xy_to_extent(0, 0, 0)
        assert extent.to_degrees() == pytest.approx(self.scheme.extent.to_degrees())

    def test_tile_extent_northwest_quadrant(self) -> None:
        west, south, east, north = self.scheme.tile_xy_to_extent(0, 0, 1).to_degrees()
        assert (west, east) == pytest.approx((-180.0, 0.0), abs=1e-9)
        assert south == pytest.approx(0.0, abs=1e-9)
        assert north == pytest.approx(85.0511287798, abs=1e-6)


# ---------------------------------------------------------------------------
# Factory
# ---------------------------------------------------------------------------


class TestTilingSchemeFactory:
    def test_geodetic_profile(self) -> None:
        assert isinstance(get_tiling_scheme("geodetic"), GeographicTilingScheme)

    @pytest.mark.parametrize("profile", ["mercator", "global-mercator", "raster", "", None])
    def test_everything_else_is_web_mercator(self, profile: str | None) -> None:
        assert isinstance(get_tiling_scheme(profile), WebMercatorTilingScheme)

    def test_default_is_web_mercator(self) -> None:
        assert isinstance(default_tiling_scheme(), WebMercatorTilingScheme)

    def test_new_instance_per_call(self) -> None:
        assert get_tiling_scheme("geodetic") is not get_tiling_scheme("geodetic")

    def test_list_includes_builtins(self) -> None:
        profiles = list_tiling_schemes()
        assert {"geodetic", "mercator", "global-mercator"} <= set(profiles)
        assert profiles == sorted(profiles)

    def test_register_custom_profile(self) -> None:
        quarter = Extent.from_degrees(0.0, 0.0, 90.0, 90.0)
        register_tiling_scheme("test-quarter", lambda: GeographicTilingScheme(extent=quarter))
        try:
            scheme = get_tiling_scheme("test-quarter")
            assert scheme.extent == quarter
            assert "test-quarter" in list_tiling_schemes()
        finally:
            _SCHEME_REGISTRY.pop("test-quarter", None)
        assert "test-quarter" not in list_tiling_schemes()

    def test_register_empty_name_rejected(self) -> None:
        with pytest.raises(ValueError, match="non-empty"):
            register_tiling_scheme("", GeographicTilingScheme)
