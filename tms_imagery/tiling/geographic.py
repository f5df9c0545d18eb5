"""Geodetic (equirectangular) tiling scheme.

Longitude and latitude map linearly to columns and rows.  Level 0 is two
square tiles covering the western and eastern hemispheres, which is the
layout gdal2tiles writes for its ``geodetic`` profile.
"""

from __future__ import annotations

import math

from tms_imagery.models.geometry import MAX_VALUE, Cartographic, Extent, TileXY
from tms_imagery.tiling.base import TilingScheme, clamp_tile_index


class GeographicTilingScheme(TilingScheme):
    """Equirectangular tiling over an extent (the whole globe by default)."""

    def __init__(
        self,
        extent: Extent = MAX_VALUE,
        level_zero_tiles_x: int = 2,
        level_zero_tiles_y: int = 1,
    ) -> None:
        super().__init__(level_zero_tiles_x, level_zero_tiles_y)
        self._extent = extent

    @property
    def extent(self) -> Extent:
        return self._extent

    def position_to_tile_xy(self, position: Cartographic, level: int) -> TileXY | None:
        extent = self._extent
        if not extent.contains(position):
            return None

        x_tiles = self.number_of_x_tiles_at_level(level)
        y_tiles = self.number_of_y_tiles_at_level(level)

        longitude = position.longitude
        if extent.east < extent.west:
            longitude += 2.0 * math.pi

        x_tile_width = extent.width / x_tiles
        y_tile_height = extent.height / y_tiles
        x = int((longitude - extent.west) / x_tile_width)
        y = int((extent.north - position.latitude) / y_tile_height)
        return TileXY(clamp_tile_index(x, x_tiles), clamp_tile_index(y, y_tiles))

    def tile_xy_to_extent(self, x: int, y: int, level: int) -> Extent:
        extent = self._extent
        x_tile_width = extent.width / self.number_of_x_tiles_at_level(level)
        y_tile_height = extent.height / self.number_of_y_tiles_at_level(level)
        west = extent.west + x * x_tile_width
        north = extent.north - y * y_tile_height
        return Extent(west, north - y_tile_height, west + x_tile_width, north)
