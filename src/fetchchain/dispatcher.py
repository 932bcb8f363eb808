"""Dispatcher — an ordered middleware chain around a terminal transport.

The only component that runs the chain. Normalizes ``fetch`` input into
an ``httpx.Request``, builds a per-call chain of registered middleware
plus a terminal link that calls the transport, and walks it front to
back through ``next`` continuations.

The chain is an immutable tuple plus a cursor: ``next`` invokes the
entry at ``cursor + 1``. A link can only reach the links after it, and
a link that never calls ``next`` ends the call there.

Registration comes in two flavors::

    dispatcher.use(Middleware("auth", add_token))        # mutates dispatcher
    scoped = dispatcher.add_temp({"name": "trace", "handler": trace})
    bare = scoped.remove_temp("auth")                    # dispatcher untouched
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable
from functools import partial
from typing import Any

import httpx

from fetchchain._internal.invoke import invoke
from fetchchain.config import DispatcherConfig
from fetchchain.errors import InvalidArgument
from fetchchain.middleware import Middleware, Next, require_middleware, validate_name
from fetchchain.transport import HTTPXTransport, Transport, build_request, is_request

logger = logging.getLogger("fetchchain")

# Name of the synthetic last link that calls the transport
TERMINAL_NAME = "fetch"


async def _run(chain: tuple[Middleware, ...], cursor: int, request: httpx.Request) -> Any:
    entry = chain[cursor]
    next_link: Next | None = None
    if cursor + 1 < len(chain):
        next_link = partial(_run, chain, cursor + 1)
    return await invoke(entry.handler, request, next_link, entry.options)


class Dispatcher:
    """Ordered, named middleware in front of a transport.

    ``use`` appends in place. ``add_temp`` and ``remove_temp`` return a
    new dispatcher sharing this one's transport and config, and leave
    this one alone, so a call site can specialize the shared instance::

        response = await dispatcher.add_temp(no_cache, prepend=True).fetch("/items")
    """

    __slots__ = ("_config", "_entries", "_transport")

    def __init__(
        self,
        middleware: Iterable[object] = (),
        *,
        transport: Transport | None = None,
        config: DispatcherConfig | None = None,
    ) -> None:
        self._config = config or DispatcherConfig()
        if transport is None:
            transport = HTTPXTransport.from_config(self._config)
        self._transport = transport
        self._entries: tuple[Middleware, ...] = tuple(require_middleware(mw) for mw in middleware)

    # -- Introspection --

    @property
    def config(self) -> DispatcherConfig:
        return self._config

    @property
    def transport(self) -> Transport:
        return self._transport

    @property
    def middleware(self) -> tuple[Middleware, ...]:
        """Registered entries, in invocation order."""
        return self._entries

    @property
    def names(self) -> tuple[str, ...]:
        """Registered middleware names, in invocation order."""
        return tuple(entry.name for entry in self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"Dispatcher(middleware={list(self.names)!r}, transport={self._transport!r})"

    # -- Registration --

    def use(self, middleware: object) -> None:
        """Append *middleware* to this dispatcher.

        Raises:
            InvalidArgument: *middleware* is not a valid descriptor.
        """
        entry = require_middleware(middleware)
        # Rebind rather than mutate: in-flight fetches keep their snapshot
        self._entries = (*self._entries, entry)
        logger.debug("use %r (%d registered)", entry.name, len(self._entries))

    def add_temp(self, middleware: object, *, prepend: bool = False) -> Dispatcher:
        """Return a copy of this dispatcher with *middleware* added.

        Added last by default, or first with ``prepend=True``.

        Raises:
            InvalidArgument: *middleware* is not a valid descriptor.
        """
        entry = require_middleware(middleware)
        if prepend:
            entries = (entry, *self._entries)
        else:
            entries = (*self._entries, entry)
        logger.debug("add_temp %r (prepend=%s)", entry.name, prepend)
        return self._derive(entries)

    def remove_temp(self, name: object) -> Dispatcher:
        """Return a copy of this dispatcher without any entry named *name*.

        An unknown name yields an unmodified copy.

        Raises:
            InvalidArgument: *name* is not a non-empty string.
        """
        name = validate_name(name)
        entries = tuple(entry for entry in self._entries if entry.name != name)
        logger.debug("remove_temp %r (%d removed)", name, len(self._entries) - len(entries))
        return self._derive(entries)

    def reset(self) -> None:
        """Drop every registered entry."""
        self._entries = ()

    def _derive(self, entries: tuple[Middleware, ...]) -> Dispatcher:
        derived = Dispatcher(transport=self._transport, config=self._config)
        derived._entries = entries
        return derived

    # -- Dispatch --

    async def fetch(self, target: object = None, /, **options: Any) -> Any:
        """Run *target* through the chain and return the result.

        *target* is a URL string (built into a request with *options*)
        or an ``httpx.Request`` (used as-is, *options* ignored). The
        result is whatever the chain produces: normally the transport's
        response object itself, or the return value of a middleware
        that did not call ``next``.

        Raises:
            InvalidArgument: *target* is neither, or the request cannot
                be built. Raised on await, never on call.
        """
        if isinstance(target, str):
            request = build_request(target, options, self._config)
        elif is_request(target):
            request = target
        else:
            msg = (
                "Invalid input argument(s) supplied: expected a URL string or "
                f"httpx.Request, got {type(target).__name__}"
            )
            raise InvalidArgument(msg)

        chain = (*self._entries, self._terminal())
        logger.debug(
            "fetch %s %s through %d middleware", request.method, request.url, len(chain) - 1
        )
        return await _run(chain, 0, request)

    def _terminal(self) -> Middleware:
        transport = self._transport

        def send(request: httpx.Request, next_link: Next | None, options: Any) -> Any:
            return transport(request)

        return Middleware(TERMINAL_NAME, send)


# -- Process-wide default instance --
#
# Created on first access, never torn down. ``reset()`` clears its
# middleware. Code that must not share state builds its own Dispatcher.

_default: Dispatcher | None = None
_default_lock = threading.Lock()


def default_dispatcher() -> Dispatcher:
    """Return the process-wide dispatcher, creating it on first use."""
    global _default
    if _default is None:
        with _default_lock:
            if _default is None:
                _default = Dispatcher()
    return _default


async def fetch(target: object = None, /, **options: Any) -> Any:
    """``Dispatcher.fetch`` on the default dispatcher."""
    return await default_dispatcher().fetch(target, **options)


def use(middleware: object) -> None:
    """``Dispatcher.use`` on the default dispatcher."""
    default_dispatcher().use(middleware)


def add_temp(middleware: object, *, prepend: bool = False) -> Dispatcher:
    """``Dispatcher.add_temp`` on the default dispatcher."""
    return default_dispatcher().add_temp(middleware, prepend=prepend)


def remove_temp(name: object) -> Dispatcher:
    """``Dispatcher.remove_temp`` on the default dispatcher."""
    return default_dispatcher().remove_temp(name)


def reset() -> None:
    """Clear the default dispatcher's middleware."""
    default_dispatcher().reset()
