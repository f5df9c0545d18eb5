"""lxml-based parser for TMS ``tilemapresource.xml`` documents.

Elements are matched by local name so that namespaced documents parse
the same as the plain ones gdal2tiles and MapTiler emit.  Only the first
``TileFormat``, ``TileSets`` and ``BoundingBox`` elements are read;
``TileSet`` entries are kept in document order.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from lxml import etree

from tms_imagery.core.exceptions import PermanentError
from tms_imagery.models.descriptor import (
    BoundingBox,
    TileFormat,
    TileMapDescriptor,
    TileSetEntry,
)

if TYPE_CHECKING:
    from collections.abc import Iterator

    from lxml.etree import _Element

logger = logging.getLogger(__name__)


class DescriptorParseError(PermanentError):
    """The descriptor is not well-formed XML or lacks a required element."""

    default_stage = "descriptor"
    default_code = "DESCRIPTOR_PARSE_FAILED"


def parse_tile_map_resource(content: bytes) -> TileMapDescriptor:
    """Parse a ``tilemapresource.xml`` document.

    Args:
        content: Raw document bytes.

    Returns:
        The parsed ``TileMapDescriptor``.

    Raises:
        DescriptorParseError: If the XML is malformed, a required element
            (``TileFormat``, ``TileSet``, ``BoundingBox``) is missing, or
            a numeric attribute cannot be parsed or is out of range
            (negative ``order``, non-positive tile ``width``/``height``).
    """
    parser = etree.XMLParser(resolve_entities=False, no_network=True, huge_tree=False)
    try:
        root: _Element = etree.fromstring(content, parser=parser)
    except etree.XMLSyntaxError as exc:
        msg = f"Descriptor is not well-formed XML: {exc}"
        raise DescriptorParseError(msg) from exc

    tile_format_elem = _require(root, "TileFormat")
    tile_format = TileFormat(
        extension=tile_format_elem.get("extension", ""),
        width=_int_attr(tile_format_elem, "width", minimum=1),
        height=_int_attr(tile_format_elem, "height", minimum=1),
        mime_type=tile_format_elem.get("mime-type", ""),
    )

    tile_sets = [
        TileSetEntry(
            order=_int_attr(elem, "order", minimum=0),
            href=elem.get("href", ""),
            units_per_pixel=_float_attr(elem, "units-per-pixel", default=0.0),
        )
        for elem in _iter_local(root, "TileSet")
    ]
    if not tile_sets:
        msg = "Descriptor has no <TileSet> entries"
        raise DescriptorParseError(msg)

    bbox_elem = _require(root, "BoundingBox")
    bounding_box = BoundingBox(
        minx=_float_attr(bbox_elem, "minx"),
        miny=_float_attr(bbox_elem, "miny"),
        maxx=_float_attr(bbox_elem, "maxx"),
        maxy=_float_attr(bbox_elem, "maxy"),
    )

    tile_sets_elem = _first(root, "TileSets")
    profile = tile_sets_elem.get("profile", "") if tile_sets_elem is not None else ""

    origin_elem = _first(root, "Origin")
    origin = None
    if origin_elem is not None:
        origin = (_float_attr(origin_elem, "x"), _float_attr(origin_elem, "y"))

    descriptor = TileMapDescriptor(
        tile_format=tile_format,
        tile_sets=tile_sets,
        bounding_box=bounding_box,
        profile=profile,
        title=_text(root, "Title"),
        srs=_text(root, "SRS"),
        origin=origin,
    )
    logger.debug(
        "Parsed descriptor | title=%s | profile=%s | levels=%d..%d | format=%s",
        descriptor.title,
        descriptor.profile,
        descriptor.minimum_order,
        descriptor.maximum_order,
        tile_format.extension,
    )
    return descriptor


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _iter_local(root: _Element, name: str) -> Iterator[_Element]:
    """Yield descendants (and *root* itself) whose local name is *name*."""
    for elem in root.iter():
        if isinstance(elem.tag, str) and etree.QName(elem).localname == name:
            yield elem


def _first(root: _Element, name: str) -> _Element | None:
    return next(_iter_local(root, name), None)


def _require(root: _Element, name: str) -> _Element:
    elem = _first(root, name)
    if elem is None:
        msg = f"Descriptor has no <{name}> element"
        raise DescriptorParseError(msg)
    return elem


def _text(root: _Element, name: str) -> str:
    elem = _first(root, name)
    if elem is None:
        return ""
    return (elem.text or "").strip()


def _int_attr(elem: _Element, attr: str, *, minimum: int | None = None) -> int:
    raw = elem.get(attr)
    try:
        value = int(raw)  # type: ignore[arg-type]
    except (TypeError, ValueError) as exc:
        msg = f"<{etree.QName(elem).localname}> attribute {attr}={raw!r} is not an integer"
        raise DescriptorParseError(msg) from exc
    if minimum is not None and value < minimum:
        msg = f"<{etree.QName(elem).localname}> attribute {attr}={value} must be >= {minimum}"
        raise DescriptorParseError(msg)
    return value


def _float_attr(elem: _Element, attr: str, *, default: float | None = None) -> float:
    raw = elem.get(attr)
    if raw is None and default is not None:
        return default
    try:
        return float(raw)  # type: ignore[arg-type]
    except (TypeError, ValueError) as exc:
        msg = f"<{etree.QName(elem).localname}> attribute {attr}={raw!r} is not a number"
        raise DescriptorParseError(msg) from exc
