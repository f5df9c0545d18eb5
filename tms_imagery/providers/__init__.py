"""Imagery providers.

- ImageryProvider: Abstract base class the rendering engine consumes
- TileMapServiceImageryProvider: TMS pyramids described by ``tilemapresource.xml``
- ImageLoader / HttpImageLoader: Tile image download
- Proxy / DefaultProxy: Tile URL rewriting
"""

from tms_imagery.providers.base import (
    ImageryProvider,
    ProviderDownloadError,
    ProviderError,
)
from tms_imagery.providers.loading import RETRY_LATER, HttpImageLoader, ImageLoader
from tms_imagery.providers.proxy import DefaultProxy, Proxy
from tms_imagery.providers.tile_map_service import (
    ResolvedConfig,
    TileMapServiceImageryProvider,
    build_image_url,
)

__all__ = [
    "RETRY_LATER",
    "DefaultProxy",
    "HttpImageLoader",
    "ImageLoader",
    "ImageryProvider",
    "ProviderDownloadError",
    "ProviderError",
    "Proxy",
    "ResolvedConfig",
    "TileMapServiceImageryProvider",
    "build_image_url",
]
