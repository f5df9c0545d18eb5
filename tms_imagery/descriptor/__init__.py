"""TMS descriptor (``tilemapresource.xml``) parsing and retrieval.

- parse_tile_map_resource: lxml parser producing a ``TileMapDescriptor``
- DescriptorSource: protocol for asynchronous descriptor retrieval
- HttpDescriptorSource: httpx-backed implementation
"""

from tms_imagery.descriptor.parser import DescriptorParseError, parse_tile_map_resource
from tms_imagery.descriptor.source import (
    DescriptorFetchError,
    DescriptorSource,
    HttpDescriptorSource,
)

__all__ = [
    "DescriptorFetchError",
    "DescriptorParseError",
    "DescriptorSource",
    "HttpDescriptorSource",
    "parse_tile_map_resource",
]
