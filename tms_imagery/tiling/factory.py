"""Tiling scheme factory: selects a scheme by TMS profile name.

The factory maintains a registry keyed by the ``TileSets@profile`` value
found in a descriptor.  ``geodetic`` selects the geographic scheme; every
other profile, including unknown and empty ones, selects web mercator.

Usage::

    from tms_imagery.tiling.factory import get_tiling_scheme

    scheme = get_tiling_scheme(descriptor.profile)
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from tms_imagery.core.constants import (
    GEODETIC_PROFILE,
    GLOBAL_MERCATOR_PROFILE,
    MERCATOR_PROFILE,
)
from tms_imagery.tiling.base import TilingScheme

if TYPE_CHECKING:
    from collections.abc import Callable

logger = logging.getLogger(__name__)

# Each entry maps a profile name to a zero-argument scheme constructor.
# Constructors are lazy so that pyproj transformers are only built for
# the scheme actually selected.

_SCHEME_REGISTRY: dict[str, Callable[[], TilingScheme]] = {}


def _register_builtin_schemes() -> None:
    """Register the built-in tiling schemes.

    Called once on first ``get_tiling_scheme`` invocation.
    """

    def _geographic() -> TilingScheme:
        from tms_imagery.tiling.geographic import GeographicTilingScheme

        return GeographicTilingScheme()

    def _web_mercator() -> TilingScheme:
        from tms_imagery.tiling.web_mercator import WebMercatorTilingScheme

        return WebMercatorTilingScheme()

    _SCHEME_REGISTRY[GEODETIC_PROFILE] = _geographic
    _SCHEME_REGISTRY[MERCATOR_PROFILE] = _web_mercator
    _SCHEME_REGISTRY[GLOBAL_MERCATOR_PROFILE] = _web_mercator


def _ensure_registry() -> None:
    """Initialise the scheme registry once (idempotent)."""
    if not _SCHEME_REGISTRY:
        _register_builtin_schemes()


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def register_tiling_scheme(profile: str, factory: Callable[[], TilingScheme]) -> None:
    """Register a scheme constructor for a descriptor profile name.

    Raises:
        ValueError: If the profile name is empty.
    """
    if not profile:
        msg = "Tiling scheme profile must be non-empty"
        raise ValueError(msg)
    _ensure_registry()
    _SCHEME_REGISTRY[profile] = factory
    logger.debug("Registered tiling scheme for profile: %s", profile)


def get_tiling_scheme(profile: str | None) -> TilingScheme:
    """Return a new tiling scheme for a descriptor *profile*.

    Unknown, empty or ``None`` profiles fall back to web mercator.
    """
    _ensure_registry()
    factory = _SCHEME_REGISTRY.get(profile or "")
    if factory is None:
        logger.debug("No tiling scheme registered for profile %r; using web mercator", profile)
        factory = _SCHEME_REGISTRY[MERCATOR_PROFILE]
    return factory()


def default_tiling_scheme() -> TilingScheme:
    """Return the scheme used when nothing else is known (web mercator)."""
    return get_tiling_scheme(MERCATOR_PROFILE)


def list_tiling_schemes() -> list[str]:
    """Return the registered profile names."""
    _ensure_registry()
    return sorted(_SCHEME_REGISTRY)
