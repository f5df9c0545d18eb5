"""TilingScheme abstract base class.

A tiling scheme maps geographic positions to ``(x, y, level)`` tile
coordinates.  Rows are numbered from the north edge (``y == 0`` is the
northernmost row); TMS pyramids number them from the south, which the
provider reconciles when it builds tile URLs.

Each concrete scheme (``WebMercatorTilingScheme``, ``GeographicTilingScheme``)
implements the projection-specific parts; tile counts per level are shared.
"""

from __future__ import annotations

import abc
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from tms_imagery.models.geometry import Cartographic, Extent, TileXY


class TilingScheme(abc.ABC):
    """Abstract base class for tiling schemes.

    Level ``n`` has ``level_zero_tiles_x * 2**n`` columns and
    ``level_zero_tiles_y * 2**n`` rows.
    """

    def __init__(self, level_zero_tiles_x: int, level_zero_tiles_y: int) -> None:
        self._level_zero_tiles_x = level_zero_tiles_x
        self._level_zero_tiles_y = level_zero_tiles_y

    def number_of_x_tiles_at_level(self, level: int) -> int:
        """Return the number of tile columns at *level*."""
        return self._level_zero_tiles_x << level

    def number_of_y_tiles_at_level(self, level: int) -> int:
        """Return the number of tile rows at *level*."""
        return self._level_zero_tiles_y << level

    # ------------------------------------------------------------------
    # Abstract methods, implemented by every scheme
    # ------------------------------------------------------------------

    @property
    @abc.abstractmethod
    def extent(self) -> Extent:
        """The geographic extent, in radians, covered by this scheme."""

    @abc.abstractmethod
    def position_to_tile_xy(self, position: Cartographic, level: int) -> TileXY | None:
        """Return the tile containing *position* at *level*.

        Positions on the east or south edge of the scheme belong to the
        last column or row.

        Returns:
            The tile coordinate, or ``None`` if *position* lies outside
            ``extent``.
        """

    @abc.abstractmethod
    def tile_xy_to_extent(self, x: int, y: int, level: int) -> Extent:
        """Return the geographic extent of tile ``(x, y)`` at *level*."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


def clamp_tile_index(index: int, count: int) -> int:
    """Pull an index computed on the far edge of the scheme back into range."""
    return count - 1 if index >= count else index
