"""Asynchronous retrieval of TMS descriptors.

``DescriptorSource`` is the seam the provider fetches through; tests and
hosts with their own transport supply any object with a matching
``fetch`` coroutine.  ``HttpDescriptorSource`` is the default, backed by
``httpx.AsyncClient``.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Protocol

import httpx

from tms_imagery.core.config import HttpSettings
from tms_imagery.core.exceptions import TransientError
from tms_imagery.descriptor.parser import parse_tile_map_resource

if TYPE_CHECKING:
    from tms_imagery.models.descriptor import TileMapDescriptor

logger = logging.getLogger(__name__)


class DescriptorFetchError(TransientError):
    """The descriptor could not be downloaded.

    Attributes:
        url: The descriptor URL.
        status_code: HTTP status, when a response was received.
    """

    default_stage = "descriptor"
    default_code = "DESCRIPTOR_FETCH_FAILED"

    def __init__(self, url: str, message: str, *, status_code: int | None = None) -> None:
        self.url = url
        self.status_code = status_code
        super().__init__(message)


class DescriptorSource(Protocol):
    """Anything that can fetch and parse a descriptor."""

    async def fetch(self, url: str) -> TileMapDescriptor:
        """Return the parsed descriptor at *url*.

        Raises:
            ImageryError: If the document cannot be fetched or parsed.
        """
        ...


class HttpDescriptorSource:
    """Fetch descriptors over HTTP with ``httpx``.

    Args:
        settings: Transport settings; loaded with ``HttpSettings.from_env()``
            when omitted.
        client: Optional shared ``httpx.AsyncClient``.  When omitted a
            short-lived client is created per fetch.
    """

    def __init__(
        self,
        settings: HttpSettings | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._settings = settings or HttpSettings.from_env()
        self._client = client

    async def fetch(self, url: str) -> TileMapDescriptor:
        """Download and parse the descriptor at *url*.

        Raises:
            DescriptorFetchError: On transport errors or non-2xx status.
            DescriptorParseError: If the body is not a valid descriptor.
        """
        logger.debug("Fetching descriptor | url=%s", url)
        try:
            if self._client is not None:
                response = await self._client.get(url, headers=self._headers())
            else:
                async with httpx.AsyncClient(
                    timeout=self._settings.timeout_s,
                    follow_redirects=self._settings.follow_redirects,
                ) as client:
                    response = await client.get(url, headers=self._headers())
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            msg = f"Descriptor request failed with HTTP {exc.response.status_code}: {url}"
            raise DescriptorFetchError(url, msg, status_code=exc.response.status_code) from exc
        except httpx.HTTPError as exc:
            msg = f"Descriptor request failed: {url}: {exc}"
            raise DescriptorFetchError(url, msg) from exc

        return parse_tile_map_resource(response.content)

    def _headers(self) -> dict[str, str]:
        return {"User-Agent": self._settings.user_agent}
