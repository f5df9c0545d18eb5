"""Construction options for ``TileMapServiceImageryProvider``.

Every field except ``url`` is optional.  A value supplied here always
wins over the descriptor; ``None`` means "take it from the descriptor,
or the fallback default when the descriptor cannot be loaded".
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from tms_imagery.core.exceptions import DeveloperError, ValidationError
from tms_imagery.models.credit import Credit
from tms_imagery.models.geometry import Extent

if TYPE_CHECKING:
    from tms_imagery.providers.proxy import Proxy
    from tms_imagery.tiling.base import TilingScheme


class OptionsValidationError(ValidationError):
    """Raised when a provider option has an invalid value.

    Attributes:
        field_name: The option that violated the invariant.
        value: The invalid value.
    """

    default_stage = "options"
    default_code = "OPTIONS_VALIDATION_FAILED"

    def __init__(self, field_name: str, value: object, message: str) -> None:
        self.field_name = field_name
        self.value = value
        super().__init__(f"ProviderOptions.{field_name}={value!r}: {message}")


# camelCase aliases accepted by ``from_dict``.
_ALIASES: dict[str, str] = {
    "fileExtension": "file_extension",
    "minimumLevel": "minimum_level",
    "maximumLevel": "maximum_level",
    "tilingScheme": "tiling_scheme",
    "tileWidth": "tile_width",
    "tileHeight": "tile_height",
    "tileDiscardPolicy": "tile_discard_policy",
}


@dataclass(frozen=True, slots=True)
class ProviderOptions:
    """Caller-supplied configuration for a TMS provider.

    Attributes:
        url: Base URL of the tile pyramid (required, non-empty).
        file_extension: Tile file extension, e.g. ``"png"``.
        proxy: Object with a ``get_url(url)`` method applied to every tile URL.
        credit: Attribution; a plain string is wrapped into a ``Credit``.
        minimum_level: Lowest level-of-detail to request.  Keep the tile
            count at this level small (four or fewer).  Lowered to the
            resolved maximum level, with a warning, when it exceeds it;
            lowered to 0 when the extent spans more than four tiles at it.
        maximum_level: Highest level-of-detail to request.
        extent: Extent in radians covered by the imagery.
        tiling_scheme: Tiling scheme; chosen from the descriptor when ``None``.
        tile_width: Tile width in pixels.
        tile_height: Tile height in pixels.
        tile_discard_policy: Opaque policy handed to the renderer untouched.
    """

    url: str
    file_extension: str | None = None
    proxy: Proxy | None = None
    credit: Credit | str | None = None
    minimum_level: int | None = None
    maximum_level: int | None = None
    extent: Extent | None = None
    tiling_scheme: TilingScheme | None = None
    tile_width: int | None = None
    tile_height: int | None = None
    tile_discard_policy: Any = None

    def __post_init__(self) -> None:
        if not isinstance(self.url, str) or not self.url:
            msg = "options.url is required."
            raise DeveloperError(msg)
        _check_min("minimum_level", self.minimum_level, 0)
        _check_min("maximum_level", self.maximum_level, 0)
        _check_min("tile_width", self.tile_width, 1)
        _check_min("tile_height", self.tile_height, 1)
        if (
            self.minimum_level is not None
            and self.maximum_level is not None
            and self.minimum_level > self.maximum_level
        ):
            raise OptionsValidationError(
                "minimum_level",
                self.minimum_level,
                f"must be <= maximum_level ({self.maximum_level})",
            )
        if self.extent is not None and not isinstance(self.extent, Extent):
            raise OptionsValidationError("extent", self.extent, "must be an Extent (radians)")
        if self.credit is not None and not isinstance(self.credit, (str, Credit)):
            raise OptionsValidationError("credit", self.credit, "must be a str or Credit")

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ProviderOptions:
        """Build options from a dict; camelCase keys are accepted.

        Raises:
            DeveloperError: If ``url`` is missing or empty.
            OptionsValidationError: If a key is unknown or a value is invalid.
        """
        kwargs: dict[str, Any] = {}
        for key, value in data.items():
            name = _ALIASES.get(key, key)
            if name not in cls.__dataclass_fields__:
                raise OptionsValidationError(key, value, "unknown option")
            kwargs[name] = value
        if "url" not in kwargs:
            msg = "options.url is required."
            raise DeveloperError(msg)
        return cls(**kwargs)


def _check_min(field_name: str, value: int | None, minimum: int) -> None:
    if value is None:
        return
    if isinstance(value, bool) or not isinstance(value, int):
        raise OptionsValidationError(field_name, value, "must be an integer")
    if value < minimum:
        raise OptionsValidationError(field_name, value, f"must be >= {minimum}")
