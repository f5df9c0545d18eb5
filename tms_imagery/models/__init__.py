"""Data models.

- geometry: Cartographic positions, extents and tile coordinates
- credit: Attribution shown alongside imagery
- descriptor: Parsed ``tilemapresource.xml``
- options: Caller-supplied provider configuration
"""

from tms_imagery.models.credit import Credit
from tms_imagery.models.descriptor import (
    BoundingBox,
    TileFormat,
    TileMapDescriptor,
    TileSetEntry,
)
from tms_imagery.models.geometry import MAX_VALUE, Cartographic, Extent, TileXY
from tms_imagery.models.options import OptionsValidationError, ProviderOptions

__all__ = [
    "MAX_VALUE",
    "BoundingBox",
    "Cartographic",
    "Credit",
    "Extent",
    "OptionsValidationError",
    "ProviderOptions",
    "TileFormat",
    "TileMapDescriptor",
    "TileSetEntry",
    "TileXY",
]
