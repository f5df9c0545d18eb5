"""URL proxies applied to every tile request."""

from __future__ import annotations

from typing import Protocol
from urllib.parse import quote

# RFC 2396 unreserved marks; quote() already keeps letters, digits and -_.~
_UNRESERVED_MARKS = "!*'()"


class Proxy(Protocol):
    """Rewrites a resource URL so it is fetched through a proxy."""

    def get_url(self, resource: str) -> str: ...


class DefaultProxy:
    """Pass the target URL as the query string of a proxy endpoint.

    ``DefaultProxy("/proxy/").get_url("http://a/b.png")`` returns
    ``"/proxy/?http%3A%2F%2Fa%2Fb.png"``.
    """

    def __init__(self, proxy: str) -> None:
        self.proxy = proxy

    def get_url(self, resource: str) -> str:
        return f"{self.proxy}?{quote(resource, safe=_UNRESERVED_MARKS)}"

    def __repr__(self) -> str:
        return f"DefaultProxy({self.proxy!r})"
