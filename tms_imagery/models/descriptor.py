"""Typed model of a TMS ``tilemapresource.xml`` document.

Only the elements the provider consumes are modelled, plus the few
neighbouring fields (title, SRS, origin, per-level href) that are cheap
to keep and useful in logs.

Bounding-box attributes are stored verbatim in degrees.  Descriptors
written by gdal2tiles put latitudes in the ``x`` attributes and
longitudes in the ``y`` attributes; the provider accounts for that when
building an extent, so the model does not reinterpret them.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class TileFormat:
    """``<TileFormat>``: image encoding and pixel size of every tile."""

    extension: str
    width: int
    height: int
    mime_type: str = ""


@dataclass(frozen=True, slots=True)
class TileSetEntry:
    """One ``<TileSet>`` (zoom level) of the pyramid."""

    order: int
    href: str = ""
    units_per_pixel: float = 0.0


@dataclass(frozen=True, slots=True)
class BoundingBox:
    """``<BoundingBox>`` attributes, in degrees, exactly as published."""

    minx: float
    miny: float
    maxx: float
    maxy: float


@dataclass(frozen=True, slots=True)
class TileMapDescriptor:
    """Parsed ``<TileMap>`` document.

    Attributes:
        tile_format: The ``<TileFormat>`` record.
        tile_sets: ``<TileSet>`` entries in document order.
        bounding_box: The ``<BoundingBox>`` record.
        profile: ``TileSets@profile`` (empty when absent).
        title: ``<Title>`` text.
        srs: ``<SRS>`` text.
        origin: ``<Origin>`` as ``(x, y)``, if published.
    """

    tile_format: TileFormat
    tile_sets: list[TileSetEntry]
    bounding_box: BoundingBox
    profile: str = ""
    title: str = ""
    srs: str = ""
    origin: tuple[float, float] | None = None

    @property
    def minimum_order(self) -> int:
        """``order`` of the first ``<TileSet>``."""
        return self.tile_sets[0].order

    @property
    def maximum_order(self) -> int:
        """``order`` of the last ``<TileSet>``."""
        return self.tile_sets[-1].order
