"""Shared pytest fixtures for the TMS imagery test suite."""

from __future__ import annotations

from pathlib import Path

import pytest

from tms_imagery.descriptor.parser import parse_tile_map_resource
from tms_imagery.models.descriptor import TileMapDescriptor

# ---------------------------------------------------------------------------
# Path fixtures
# ---------------------------------------------------------------------------

TESTS_DIR = Path(__file__).parent
DATA_DIR = TESTS_DIR / "data"


@pytest.fixture()
def data_dir() -> Path:
    """Return the path to the test data directory."""
    return DATA_DIR


@pytest.fixture()
def mercator_xml(data_dir: Path) -> bytes:
    """gdal2tiles mercator descriptor: levels 0-4, extent -120..-60 E, 20..40 N."""
    return (data_dir / "mercator_tilemapresource.xml").read_bytes()


@pytest.fixture()
def geodetic_xml(data_dir: Path) -> bytes:
    """gdal2tiles geodetic descriptor: levels 1-3, jpg 512 px, east edge past 180."""
    return (data_dir / "geodetic_tilemapresource.xml").read_bytes()


@pytest.fixture()
def mercator_descriptor(mercator_xml: bytes) -> TileMapDescriptor:
    return parse_tile_map_resource(mercator_xml)


@pytest.fixture()
def geodetic_descriptor(geodetic_xml: bytes) -> TileMapDescriptor:
    return parse_tile_map_resource(geodetic_xml)


# ---------------------------------------------------------------------------
# Collaborator doubles
# ---------------------------------------------------------------------------


class StaticDescriptorSource:
    """Descriptor source returning a fixed descriptor or raising a fixed error."""

    def __init__(
        self,
        descriptor: TileMapDescriptor | None = None,
        error: Exception | None = None,
    ) -> None:
        self.descriptor = descriptor
        self.error = error
        self.calls: list[str] = []

    async def fetch(self, url: str) -> TileMapDescriptor:
        self.calls.append(url)
        if self.error is not None:
            raise self.error
        assert self.descriptor is not None
        return self.descriptor


class RecordingImageLoader:
    """Image loader that records requested URLs and returns a fixed result."""

    def __init__(self, result: object = None) -> None:
        self.result = result
        self.calls: list[tuple[object, str]] = []

    def load_image(self, provider: object, url: str) -> object:
        self.calls.append((provider, url))
        return self.result


def make_descriptor_xml(
    *,
    profile: str = "mercator",
    orders: tuple[int, ...] = (0, 1, 2),
    bbox: tuple[float, float, float, float] = (20.0, -120.0, 40.0, -60.0),
    extension: str = "png",
    width: int = 256,
    height: int = 256,
) -> bytes:
    """Build a gdal2tiles-style descriptor.

    *bbox* is ``(minx, miny, maxx, maxy)`` as written to the document,
    i.e. ``(south, west, north, east)`` in degrees.
    """
    minx, miny, maxx, maxy = bbox
    tile_sets = "\n".join(f'    <TileSet href="{o}" order="{o}"/>' for o in orders)
    return (
        '<?xml version="1.0" encoding="utf-8"?>\n'
        '<TileMap version="1.0.0" tilemapservice="http://tms.osgeo.org/1.0.0">\n'
        "  <Title>generated</Title>\n"
        f'  <BoundingBox minx="{minx}" miny="{miny}" maxx="{maxx}" maxy="{maxy}"/>\n'
        f'  <TileFormat width="{width}" height="{height}" extension="{extension}"/>\n'
        f'  <TileSets profile="{profile}">\n{tile_sets}\n  </TileSets>\n'
        "</TileMap>\n"
    ).encode()


@pytest.fixture()
def descriptor_source_cls() -> type[StaticDescriptorSource]:
    """The ``StaticDescriptorSource`` double, for tests that build several."""
    return StaticDescriptorSource


@pytest.fixture()
def image_loader() -> RecordingImageLoader:
    return RecordingImageLoader()


@pytest.fixture()
def descriptor_xml_factory():  # noqa: ANN201
    """Return ``make_descriptor_xml``."""
    return make_descriptor_xml
