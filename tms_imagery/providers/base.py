"""ImageryProvider abstract base class.

Defines the contract a rendering engine relies on when it draws tiled
imagery.  The engine interacts exclusively with this interface and never
knows which concrete provider is behind it.

Lifecycle:
    1. Construct the provider; it starts loading its configuration.
    2. Wait until ``is_ready`` is true (``await provider.when_ready()``).
    3. Read tile size, level range, tiling scheme and extent.
    4. ``request_image(x, y, level)`` for every tile the engine needs.

Only ``url``, ``proxy``, ``is_ready`` and ``error_event`` may be read
before the provider is ready; everything else raises ``DeveloperError``.
"""

from __future__ import annotations

import abc
from typing import TYPE_CHECKING, Any

from tms_imagery.core.exceptions import ImageryError

if TYPE_CHECKING:
    from collections.abc import Awaitable

    from tms_imagery.models.credit import Credit
    from tms_imagery.models.geometry import Extent
    from tms_imagery.providers.proxy import Proxy
    from tms_imagery.tiling.base import TilingScheme
    from tms_imagery.utils.events import Event


class ImageryProvider(abc.ABC):
    """Abstract base class for tiled imagery providers."""

    #: Short provider identifier used in logs and errors.
    name: str = "imagery"

    # ------------------------------------------------------------------
    # Readable at any time
    # ------------------------------------------------------------------

    @property
    @abc.abstractmethod
    def is_ready(self) -> bool:
        """Whether the provider has finished loading its configuration."""

    @property
    @abc.abstractmethod
    def error_event(self) -> Event:
        """Event raised with a ``TileProviderError`` on asynchronous failures."""

    @property
    @abc.abstractmethod
    def url(self) -> str:
        """URL of the service hosting the imagery."""

    @property
    @abc.abstractmethod
    def proxy(self) -> Proxy | None:
        """Proxy applied to tile URLs, if any."""

    # ------------------------------------------------------------------
    # Readable once ready
    # ------------------------------------------------------------------

    @property
    @abc.abstractmethod
    def tile_width(self) -> int:
        """Width of each tile in pixels."""

    @property
    @abc.abstractmethod
    def tile_height(self) -> int:
        """Height of each tile in pixels."""

    @property
    @abc.abstractmethod
    def minimum_level(self) -> int:
        """Lowest level-of-detail that may be requested."""

    @property
    @abc.abstractmethod
    def maximum_level(self) -> int:
        """Highest level-of-detail that may be requested."""

    @property
    @abc.abstractmethod
    def tiling_scheme(self) -> TilingScheme:
        """Tiling scheme the tile coordinates refer to."""

    @property
    @abc.abstractmethod
    def extent(self) -> Extent:
        """Extent, in radians, of the imagery."""

    @property
    @abc.abstractmethod
    def tile_discard_policy(self) -> Any:
        """Policy the engine uses to filter out placeholder tiles, or ``None``."""

    @property
    @abc.abstractmethod
    def credit(self) -> Credit | None:
        """Attribution to display while the imagery is shown."""

    @abc.abstractmethod
    def request_image(self, x: int, y: int, level: int) -> Awaitable[bytes] | None:
        """Start loading the image for a tile.

        Returns:
            An awaitable resolving to the encoded image, or ``None`` if
            too many requests are in flight and the tile should be
            requested again later.

        Raises:
            DeveloperError: If called before the provider is ready.
        """


# ---------------------------------------------------------------------------
# Provider exceptions
# ---------------------------------------------------------------------------


class ProviderError(ImageryError):
    """Base exception for provider errors.

    Attributes:
        provider: Name of the provider that raised the error.
        message: Human-readable error description.
        retryable: Whether the caller should retry the operation.
    """

    default_stage = "provider"
    default_code = "PROVIDER_ERROR"

    def __init__(
        self,
        provider: str,
        message: str,
        *,
        retryable: bool = False,
    ) -> None:
        self.provider = provider
        super().__init__(
            message,
            retryable=retryable,
            code=self.default_code,
            stage=self.default_stage,
        )

    def __str__(self) -> str:
        return f"[{self.provider}] {self.message}"


class ProviderDownloadError(ProviderError):
    """Error while downloading a tile image."""

    default_code = "PROVIDER_DOWNLOAD_FAILED"
