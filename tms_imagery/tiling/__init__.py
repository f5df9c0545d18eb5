"""Tiling schemes.

- TilingScheme: Abstract base class mapping positions to tile coordinates
- WebMercatorTilingScheme: EPSG:3857, one tile at level 0 (default)
- GeographicTilingScheme: Equirectangular, two tiles at level 0

The scheme for a descriptor is selected by its profile name through
``get_tiling_scheme``.
"""

from tms_imagery.tiling.base import TilingScheme
from tms_imagery.tiling.factory import (
    default_tiling_scheme,
    get_tiling_scheme,
    list_tiling_schemes,
    register_tiling_scheme,
)
from tms_imagery.tiling.geographic import GeographicTilingScheme
from tms_imagery.tiling.web_mercator import WebMercatorTilingScheme

__all__ = [
    "GeographicTilingScheme",
    "TilingScheme",
    "WebMercatorTilingScheme",
    "default_tiling_scheme",
    "get_tiling_scheme",
    "list_tiling_schemes",
    "register_tiling_scheme",
]
