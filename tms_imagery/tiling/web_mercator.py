"""Spherical-mercator (EPSG:3857) tiling scheme.

Level 0 is a single square tile covering the world between roughly
±85.05° latitude.  Positions are projected with ``pyproj`` and tiled in
projected metres, so rows are evenly spaced in mercator space rather
than in latitude.
"""

from __future__ import annotations

import math

from pyproj import Transformer

from tms_imagery.core.constants import WGS84_SEMIMAJOR_AXIS_M
from tms_imagery.models.geometry import Cartographic, Extent, TileXY
from tms_imagery.tiling.base import TilingScheme, clamp_tile_index

_GEOGRAPHIC_CRS = "EPSG:4326"
_WEB_MERCATOR_CRS = "EPSG:3857"


class WebMercatorTilingScheme(TilingScheme):
    """Web-mercator tiling of the whole globe."""

    def __init__(self, level_zero_tiles_x: int = 1, level_zero_tiles_y: int = 1) -> None:
        super().__init__(level_zero_tiles_x, level_zero_tiles_y)
        self._to_mercator = Transformer.from_crs(_GEOGRAPHIC_CRS, _WEB_MERCATOR_CRS, always_xy=True)
        self._to_geographic = Transformer.from_crs(_WEB_MERCATOR_CRS, _GEOGRAPHIC_CRS, always_xy=True)

        half_circumference = WGS84_SEMIMAJOR_AXIS_M * math.pi
        self._southwest_m = (-half_circumference, -half_circumference)
        self._northeast_m = (half_circumference, half_circumference)
        self._extent = Extent.from_corners(
            self.unproject(*self._southwest_m),
            self.unproject(*self._northeast_m),
        )

    @property
    def extent(self) -> Extent:
        return self._extent

    def project(self, position: Cartographic) -> tuple[float, float]:
        """Return *position* as ``(x, y)`` web-mercator metres."""
        return self._to_mercator.transform(
            math.degrees(position.longitude), math.degrees(position.latitude)
        )

    def unproject(self, x: float, y: float) -> Cartographic:
        """Return the geographic position of web-mercator metres ``(x, y)``."""
        lon_deg, lat_deg = self._to_geographic.transform(x, y)
        return Cartographic.from_degrees(lon_deg, lat_deg)

    def position_to_tile_xy(self, position: Cartographic, level: int) -> TileXY | None:
        if not self._extent.contains(position):
            return None

        x_tiles = self.number_of_x_tiles_at_level(level)
        y_tiles = self.number_of_y_tiles_at_level(level)
        x_tile_width = (self._northeast_m[0] - self._southwest_m[0]) / x_tiles
        y_tile_height = (self._northeast_m[1] - self._southwest_m[1]) / y_tiles

        x_m, y_m = self.project(position)
        x = int((x_m - self._southwest_m[0]) / x_tile_width)
        y = int((self._northeast_m[1] - y_m) / y_tile_height)
        return TileXY(clamp_tile_index(x, x_tiles), clamp_tile_index(y, y_tiles))

    def tile_xy_to_extent(self, x: int, y: int, level: int) -> Extent:
        x_tile_width = (self._northeast_m[0] - self._southwest_m[0]) / self.number_of_x_tiles_at_level(level)
        y_tile_height = (self._northeast_m[1] - self._southwest_m[1]) / self.number_of_y_tiles_at_level(level)
        west_m = self._southwest_m[0] + x * x_tile_width
        north_m = self._northeast_m[1] - y * y_tile_height
        return Extent.from_corners(
            self.unproject(west_m, north_m - y_tile_height),
            self.unproject(west_m + x_tile_width, north_m),
        )
