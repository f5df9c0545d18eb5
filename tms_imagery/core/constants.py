"""Shared constants: single source of truth.

Centralises the descriptor filename, the fallback defaults applied when
the descriptor cannot be loaded, and the tiling constants shared by the
tiling schemes.
"""

from __future__ import annotations

# ---------------------------------------------------------------------------
# Descriptor
# ---------------------------------------------------------------------------

DESCRIPTOR_FILENAME: str = "tilemapresource.xml"
"""Name of the TMS descriptor published at the root of a tile pyramid."""

GEODETIC_PROFILE: str = "geodetic"
"""``TileSets@profile`` value that selects the geographic tiling scheme."""

MERCATOR_PROFILE: str = "mercator"
"""gdal2tiles profile name for spherical-mercator pyramids."""

GLOBAL_MERCATOR_PROFILE: str = "global-mercator"
"""TMS 1.0.0 profile name for spherical-mercator pyramids."""

# ---------------------------------------------------------------------------
# Fallback defaults (descriptor unavailable)
# ---------------------------------------------------------------------------

DEFAULT_FILE_EXTENSION: str = "png"
DEFAULT_TILE_WIDTH: int = 256
DEFAULT_TILE_HEIGHT: int = 256
DEFAULT_MINIMUM_LEVEL: int = 0
DEFAULT_MAXIMUM_LEVEL: int = 18

# ---------------------------------------------------------------------------
# Minimum-level heuristic
# ---------------------------------------------------------------------------

MAX_TILES_AT_MINIMUM_LEVEL: int = 4
"""Above this many tiles at the minimum level, the minimum level is reset to 0."""

# ---------------------------------------------------------------------------
# Ellipsoid
# ---------------------------------------------------------------------------

WGS84_SEMIMAJOR_AXIS_M: float = 6_378_137.0
"""WGS 84 semi-major axis in metres (spherical-mercator radius)."""
