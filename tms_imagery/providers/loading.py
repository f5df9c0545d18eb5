"""Tile image loading.

The provider hands each tile URL to an ``ImageLoader``.  A loader either
returns an awaitable that resolves to the encoded image bytes, or
``RETRY_LATER`` (``None``) when it is unwilling to start another request
right now; the renderer retries such tiles on a later frame.  Whether and
when to return ``RETRY_LATER`` is entirely the loader's decision.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Protocol

import httpx

from tms_imagery.core.config import HttpSettings
from tms_imagery.providers.base import ProviderDownloadError

if TYPE_CHECKING:
    from collections.abc import Awaitable

logger = logging.getLogger(__name__)

RETRY_LATER = None
"""Returned instead of an awaitable when the request should be retried later."""


class ImageLoader(Protocol):
    """Starts the download of a tile image."""

    def load_image(self, provider: object, url: str) -> Awaitable[bytes] | None: ...


class HttpImageLoader:
    """Load tile images with ``httpx``.

    Every call returns a coroutine; this loader never returns
    ``RETRY_LATER``.

    Args:
        settings: Transport settings; loaded with ``HttpSettings.from_env()``
            when omitted.
        client: Optional shared ``httpx.AsyncClient``.  When omitted a
            short-lived client is created per request.
    """

    def __init__(
        self,
        settings: HttpSettings | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._settings = settings or HttpSettings.from_env()
        self._client = client

    def load_image(self, provider: object, url: str) -> Awaitable[bytes] | None:
        return self._download(provider, url)

    async def _download(self, provider: object, url: str) -> bytes:
        provider_name = getattr(provider, "name", type(provider).__name__)
        headers = {"User-Agent": self._settings.user_agent}
        try:
            if self._client is not None:
                response = await self._client.get(url, headers=headers)
            else:
                async with httpx.AsyncClient(
                    timeout=self._settings.timeout_s,
                    follow_redirects=self._settings.follow_redirects,
                ) as client:
                    response = await client.get(url, headers=headers)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            msg = f"Tile request failed with HTTP {status}: {url}"
            raise ProviderDownloadError(provider_name, msg, retryable=status >= 500) from exc
        except httpx.HTTPError as exc:
            msg = f"Tile request failed: {url}: {exc}"
            raise ProviderDownloadError(provider_name, msg, retryable=True) from exc

        logger.debug("Loaded tile | url=%s | bytes=%d", url, len(response.content))
        return response.content
