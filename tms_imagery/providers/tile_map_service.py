"""Tile Map Service imagery provider.

Serves tiles laid out the way MapTiler and gdal2tiles write them:
``{url}{level}/{x}/{y}.{extension}`` with rows numbered from the south.

On construction the provider fetches ``{url}tilemapresource.xml`` once.
Values found there fill every option the caller left unset:

- ``TileFormat`` gives the file extension and tile size.
- The first and last ``TileSet`` give the minimum and maximum level.
- ``BoundingBox`` gives the extent.
- ``TileSets@profile`` picks the tiling scheme (``geodetic`` selects the
  geographic scheme, anything else web mercator).

The extent is then clamped to the tiling scheme, and the minimum level is
reset to 0 when the extent would span more than four tiles at it.  If the
descriptor cannot be loaded, fixed defaults are used instead and the
failure is reported on ``error_event``.  Either way the provider becomes
ready exactly once.

Example::

    provider = TileMapServiceImageryProvider(
        url="https://tiles.example.com/cesium_logo",
        maximum_level=4,
        extent=Extent.from_degrees(-120.0, 20.0, -60.0, 40.0),
    )
    await provider.when_ready()
    image = await provider.request_image(0, 0, 0)
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from tms_imagery.core.constants import (
    DEFAULT_FILE_EXTENSION,
    DEFAULT_MAXIMUM_LEVEL,
    DEFAULT_MINIMUM_LEVEL,
    DEFAULT_TILE_HEIGHT,
    DEFAULT_TILE_WIDTH,
    DESCRIPTOR_FILENAME,
    MAX_TILES_AT_MINIMUM_LEVEL,
)
from tms_imagery.core.exceptions import DeveloperError
from tms_imagery.descriptor.source import HttpDescriptorSource
from tms_imagery.models.credit import Credit
from tms_imagery.models.geometry import Cartographic, Extent
from tms_imagery.models.options import ProviderOptions
from tms_imagery.providers.base import ImageryProvider
from tms_imagery.providers.loading import HttpImageLoader
from tms_imagery.tiling.factory import default_tiling_scheme, get_tiling_scheme
from tms_imagery.utils.events import Event, TileProviderError

if TYPE_CHECKING:
    from collections.abc import Awaitable, Mapping

    from tms_imagery.descriptor.source import DescriptorSource
    from tms_imagery.models.descriptor import TileMapDescriptor
    from tms_imagery.providers.loading import ImageLoader
    from tms_imagery.providers.proxy import Proxy
    from tms_imagery.tiling.base import TilingScheme

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Resolved configuration and provider state
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class ResolvedConfig:
    """Configuration of a ready provider.  Never changes once published.

    Attributes:
        file_extension: Tile file extension without the dot.
        tile_width: Tile width in pixels.
        tile_height: Tile height in pixels.
        minimum_level: Lowest level to request.
        maximum_level: Highest level to request.
        tiling_scheme: Scheme the tile coordinates refer to.
        extent: Imagery extent, clamped to ``tiling_scheme.extent``.
        descriptor: The descriptor the values came from, ``None`` on fallback.
    """

    file_extension: str
    tile_width: int
    tile_height: int
    minimum_level: int
    maximum_level: int
    tiling_scheme: TilingScheme
    extent: Extent
    descriptor: TileMapDescriptor | None = None


@dataclass(frozen=True, slots=True)
class _Pending:
    pass


@dataclass(frozen=True, slots=True)
class _Ready:
    config: ResolvedConfig


# ---------------------------------------------------------------------------
# Resolution
# ---------------------------------------------------------------------------


def resolve_from_descriptor(options: ProviderOptions, descriptor: TileMapDescriptor) -> ResolvedConfig:
    """Merge caller options with a descriptor.  Caller values always win."""
    tile_format = descriptor.tile_format
    file_extension = _pick(options.file_extension, tile_format.extension)
    tile_width = _pick(options.tile_width, tile_format.width)
    tile_height = _pick(options.tile_height, tile_format.height)
    minimum_level = _pick(options.minimum_level, descriptor.minimum_order)
    maximum_level = _pick(options.maximum_level, descriptor.maximum_order)

    if options.extent is not None:
        extent = options.extent.clone()
    else:
        # gdal2tiles writes latitudes in the x attributes.
        bbox = descriptor.bounding_box
        southwest = Cartographic.from_degrees(bbox.miny, bbox.minx)
        northeast = Cartographic.from_degrees(bbox.maxy, bbox.maxx)
        extent = Extent.from_corners(southwest, northeast)

    tiling_scheme = options.tiling_scheme
    if tiling_scheme is None:
        tiling_scheme = get_tiling_scheme(descriptor.profile)

    extent = extent.clamp_to(tiling_scheme.extent)
    minimum_level = minimum_level_for_extent(tiling_scheme, extent, minimum_level)
    minimum_level = _cap_minimum_level(minimum_level, maximum_level)

    return ResolvedConfig(
        file_extension=file_extension,
        tile_width=tile_width,
        tile_height=tile_height,
        minimum_level=minimum_level,
        maximum_level=maximum_level,
        tiling_scheme=tiling_scheme,
        extent=extent,
        descriptor=descriptor,
    )


def resolve_fallback(options: ProviderOptions) -> ResolvedConfig:
    """Fill every unset option with its default (descriptor unavailable)."""
    tiling_scheme = options.tiling_scheme or default_tiling_scheme()
    extent = options.extent.clone() if options.extent is not None else tiling_scheme.extent
    maximum_level = _pick(options.maximum_level, DEFAULT_MAXIMUM_LEVEL)
    minimum_level = _cap_minimum_level(
        _pick(options.minimum_level, DEFAULT_MINIMUM_LEVEL), maximum_level
    )
    return ResolvedConfig(
        file_extension=_pick(options.file_extension, DEFAULT_FILE_EXTENSION),
        tile_width=_pick(options.tile_width, DEFAULT_TILE_WIDTH),
        tile_height=_pick(options.tile_height, DEFAULT_TILE_HEIGHT),
        minimum_level=minimum_level,
        maximum_level=maximum_level,
        tiling_scheme=tiling_scheme,
        extent=extent.clamp_to(tiling_scheme.extent),
    )


def minimum_level_for_extent(tiling_scheme: TilingScheme, extent: Extent, minimum_level: int) -> int:
    """Return *minimum_level*, or 0 if *extent* spans too many tiles at it.

    Starting at a level where the extent covers more than
    ``MAX_TILES_AT_MINIMUM_LEVEL`` tiles makes the engine download and
    render all of them before anything coarser is available.
    """
    southwest = tiling_scheme.position_to_tile_xy(extent.southwest, minimum_level)
    northeast = tiling_scheme.position_to_tile_xy(extent.northeast, minimum_level)
    if southwest is None or northeast is None:
        logger.warning(
            "Extent %s lies outside the tiling scheme; keeping minimum level %d",
            extent,
            minimum_level,
        )
        return minimum_level

    tile_count = (abs(northeast.x - southwest.x) + 1) * (abs(northeast.y - southwest.y) + 1)
    if tile_count > MAX_TILES_AT_MINIMUM_LEVEL:
        logger.debug(
            "Extent spans %d tiles at level %d; lowering minimum level to 0",
            tile_count,
            minimum_level,
        )
        return 0
    return minimum_level


def _pick(override: Any, fallback: Any) -> Any:
    return fallback if override is None else override


def _cap_minimum_level(minimum_level: int, maximum_level: int) -> int:
    if minimum_level > maximum_level:
        logger.warning(
            "Minimum level %d is above maximum level %d; using %d",
            minimum_level,
            maximum_level,
            maximum_level,
        )
        return maximum_level
    return minimum_level


# ---------------------------------------------------------------------------
# Provider
# ---------------------------------------------------------------------------


class TileMapServiceImageryProvider(ImageryProvider):
    """Imagery provider for TMS tile pyramids (MapTiler, gdal2tiles).

    Args:
        options: A ``ProviderOptions`` or a mapping of option names
            (camelCase accepted).  Keyword arguments may be used instead.
        descriptor_source: Fetches ``tilemapresource.xml``; defaults to
            ``HttpDescriptorSource``.
        image_loader: Loads tile images; defaults to ``HttpImageLoader``.

    Raises:
        DeveloperError: If no ``url`` is given.
        OptionsValidationError: If an option has an invalid value.

    When constructed inside a running event loop, the descriptor fetch is
    scheduled immediately.  Otherwise it starts on the first
    ``await provider.when_ready()``.
    """

    name = "tile_map_service"

    def __init__(
        self,
        options: ProviderOptions | Mapping[str, Any] | None = None,
        *,
        descriptor_source: DescriptorSource | None = None,
        image_loader: ImageLoader | None = None,
        **kwargs: Any,
    ) -> None:
        if options is not None and kwargs:
            msg = "Pass provider options either as a mapping or as keyword arguments, not both"
            raise TypeError(msg)
        if not isinstance(options, ProviderOptions):
            options = ProviderOptions.from_dict(dict(options if options is not None else kwargs))

        self._options = options
        self._url = options.url.rstrip("/") + "/"
        self._proxy = options.proxy
        self._tile_discard_policy = options.tile_discard_policy
        self._credit = Credit.coerce(options.credit)
        self._error_event = Event()
        self._descriptor_source = descriptor_source or HttpDescriptorSource()
        self._image_loader = image_loader or HttpImageLoader()
        self._state: _Pending | _Ready = _Pending()

        self._init_task: asyncio.Task[ResolvedConfig] | None = None
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.debug("No running event loop; %s initialises on when_ready()", self._url)
        else:
            self._init_task = loop.create_task(self._initialize())

    # ------------------------------------------------------------------
    # Initialisation
    # ------------------------------------------------------------------

    async def when_ready(self) -> ResolvedConfig:
        """Wait for the provider to finish loading and return its configuration.

        Every call awaits the same single initialisation; it is never
        repeated.
        """
        if self._init_task is None:
            self._init_task = asyncio.ensure_future(self._initialize())
        return await asyncio.shield(self._init_task)

    async def _initialize(self) -> ResolvedConfig:
        descriptor_url = self._url + DESCRIPTOR_FILENAME
        try:
            descriptor = await self._descriptor_source.fetch(descriptor_url)
        except Exception as exc:  # noqa: BLE001
            logger.warning(
                "Could not load %s (%s); using defaults for unset options",
                descriptor_url,
                exc,
            )
            config = resolve_fallback(self._options)
            self._state = _Ready(config)
            self._report_error(f"Failed to load tile map resource {descriptor_url}: {exc}", exc)
        else:
            config = resolve_from_descriptor(self._options, descriptor)
            self._state = _Ready(config)

        logger.info(
            "TMS provider ready | url=%s | scheme=%s | levels=%d..%d | format=%s | tile=%dx%d",
            self._url,
            type(config.tiling_scheme).__name__,
            config.minimum_level,
            config.maximum_level,
            config.file_extension,
            config.tile_width,
            config.tile_height,
        )
        return config

    def _report_error(self, message: str, error: BaseException) -> None:
        try:
            self._error_event.raise_event(TileProviderError(self, message, error))
        except Exception:
            logger.exception("Error event listener failed for %s", self._url)

    def _ready_config(self, member: str) -> ResolvedConfig:
        state = self._state
        if not isinstance(state, _Ready):
            msg = f"{member} must not be called before the imagery provider is ready."
            raise DeveloperError(msg)
        return state.config

    # ------------------------------------------------------------------
    # Always available
    # ------------------------------------------------------------------

    @property
    def is_ready(self) -> bool:
        return isinstance(self._state, _Ready)

    @property
    def error_event(self) -> Event:
        return self._error_event

    @property
    def url(self) -> str:
        return self._url

    @property
    def proxy(self) -> Proxy | None:
        return self._proxy

    # ------------------------------------------------------------------
    # Available once ready
    # ------------------------------------------------------------------

    @property
    def config(self) -> ResolvedConfig:
        """The full resolved configuration."""
        return self._ready_config("config")

    @property
    def tile_width(self) -> int:
        return self._ready_config("tile_width").tile_width

    @property
    def tile_height(self) -> int:
        return self._ready_config("tile_height").tile_height

    @property
    def minimum_level(self) -> int:
        return self._ready_config("minimum_level").minimum_level

    @property
    def maximum_level(self) -> int:
        return self._ready_config("maximum_level").maximum_level

    @property
    def tiling_scheme(self) -> TilingScheme:
        return self._ready_config("tiling_scheme").tiling_scheme

    @property
    def extent(self) -> Extent:
        return self._ready_config("extent").extent

    @property
    def file_extension(self) -> str:
        return self._ready_config("file_extension").file_extension

    @property
    def tile_discard_policy(self) -> Any:
        self._ready_config("tile_discard_policy")
        return self._tile_discard_policy

    @property
    def credit(self) -> Credit | None:
        self._ready_config("credit")
        return self._credit

    def request_image(self, x: int, y: int, level: int) -> Awaitable[bytes] | None:
        self._ready_config("request_image")
        return self._image_loader.load_image(self, build_image_url(self, x, y, level))

    def __repr__(self) -> str:
        return f"TileMapServiceImageryProvider(url={self._url!r}, ready={self.is_ready})"


def build_image_url(provider: TileMapServiceImageryProvider, x: int, y: int, level: int) -> str:
    """Return the URL of tile ``(x, y, level)``, passed through the provider's proxy.

    TMS rows count up from the south while tiling-scheme rows count down
    from the north, so the row is flipped.

    Raises:
        DeveloperError: If *provider* is not ready.
    """
    config = provider._ready_config("build_image_url")
    y_tiles = config.tiling_scheme.number_of_y_tiles_at_level(level)
    url = f"{provider.url}{level}/{x}/{y_tiles - y - 1}.{config.file_extension}"

    proxy = provider.proxy
    if proxy is not None:
        url = proxy.get_url(url)

    logger.debug("Tile URL | level=%d | x=%d | y=%d | url=%s", level, x, y, url)
    return url
