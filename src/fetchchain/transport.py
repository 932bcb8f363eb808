"""Request construction and the terminal transport.

The dispatcher never touches the network itself. The last link of every
chain hands the request to a ``Transport``: any ``async`` callable taking
an ``httpx.Request`` and returning a response. ``HTTPXTransport`` is the
default, backed by ``httpx.AsyncClient``.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Protocol

import httpx

from fetchchain.config import DispatcherConfig
from fetchchain.errors import InvalidArgument

# Keyword options accepted alongside a string URL
REQUEST_OPTIONS = frozenset(
    {"method", "headers", "params", "content", "data", "files", "json", "cookies", "extensions"}
)


class Transport(Protocol):
    """Protocol for the terminal network call.

    Accepts functions and callable objects::

        async def send(request: httpx.Request) -> httpx.Response:
            async with httpx.AsyncClient() as client:
                return await client.send(request)
    """

    async def __call__(self, request: httpx.Request) -> httpx.Response: ...


def is_request(value: object) -> bool:
    """True if *value* is an already-built request."""
    return isinstance(value, httpx.Request)


def build_request(
    url: str,
    options: Mapping[str, Any] | None = None,
    config: DispatcherConfig | None = None,
) -> httpx.Request:
    """Build an ``httpx.Request`` from a URL string and keyword options.

    ``method`` falls back to ``config.default_method``. Relative URLs are
    joined onto ``config.base_url`` when one is set, and
    ``config.default_headers`` sit underneath any caller headers.

    Raises:
        InvalidArgument: unknown option, non-string method, or a URL or
            body httpx refuses.
    """
    config = config or DispatcherConfig()
    opts = dict(options or {})

    unknown = set(opts) - REQUEST_OPTIONS
    if unknown:
        msg = f"Unsupported request option(s): {', '.join(sorted(unknown))}"
        raise InvalidArgument(msg)

    method = opts.pop("method", None)
    if method is None:
        method = config.default_method
    if not isinstance(method, str):
        msg = f"Request method must be a string, got {type(method).__name__}"
        raise InvalidArgument(msg)
    if not method:
        msg = "Request method must be a non-empty string"
        raise InvalidArgument(msg)

    try:
        target = httpx.URL(url)
        if config.base_url and target.is_relative_url:
            target = httpx.URL(config.base_url).join(url)

        headers = httpx.Headers(list(config.default_headers))
        headers.update(opts.pop("headers", None))

        return httpx.Request(method.upper(), target, headers=headers, **opts)
    except (httpx.InvalidURL, TypeError, ValueError) as exc:
        msg = f"Cannot build a request from {url!r}: {exc}"
        raise InvalidArgument(msg) from exc


def _merge_base_url(request: httpx.Request, base_url: httpx.URL) -> None:
    """Point a relative *request* at *base_url*, adding the Host header it lacks."""
    raw_path = base_url.raw_path + request.url.raw_path.lstrip(b"/")
    request.url = base_url.copy_with(raw_path=raw_path)
    request.headers.setdefault("Host", request.url.netloc.decode("ascii"))


class HTTPXTransport:
    """Send requests with ``httpx.AsyncClient``.

    With no ``client``, a short-lived client is opened per request
    (no shared mutable state) and the body is read before it closes.
    A caller-supplied client is used as-is and stays owned by the caller.
    Relative request URLs are merged onto its ``base_url``, the same way
    the client merges them for its own ``get``/``post`` calls::

        async with httpx.AsyncClient(base_url="https://api.example.com") as client:
            dispatcher = Dispatcher(transport=HTTPXTransport(client))
    """

    __slots__ = ("client", "follow_redirects", "timeout")

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        *,
        timeout: float = 30.0,
        follow_redirects: bool = False,
    ) -> None:
        self.client = client
        self.timeout = timeout
        self.follow_redirects = follow_redirects

    @classmethod
    def from_config(
        cls, config: DispatcherConfig, client: httpx.AsyncClient | None = None
    ) -> HTTPXTransport:
        return cls(client, timeout=config.timeout, follow_redirects=config.follow_redirects)

    async def __call__(self, request: httpx.Request) -> httpx.Response:
        if self.client is not None:
            if request.url.is_relative_url and self.client.base_url.host:
                _merge_base_url(request, self.client.base_url)
            request.extensions.setdefault("timeout", self.client.timeout.as_dict())
            return await self.client.send(request, follow_redirects=self.follow_redirects)

        request.extensions.setdefault("timeout", httpx.Timeout(self.timeout).as_dict())
        async with httpx.AsyncClient(follow_redirects=self.follow_redirects) as client:
            return await client.send(request)

    def __repr__(self) -> str:
        owner = "shared" if self.client is not None else "per-request"
        return f"HTTPXTransport({owner} client, timeout={self.timeout})"
