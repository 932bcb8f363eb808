"""fetchchain — composable middleware around an HTTP transport.

Wraps the network call in an ordered chain of named middleware, so auth
headers, retries, logging and caching live in one place instead of at
every call site.

Basic usage::

    import fetchchain
    from fetchchain import Middleware

    async def bearer(request, next, options):
        request.headers["Authorization"] = f"Bearer {options['token']}"
        return await next(request)

    fetchchain.use(Middleware("auth", bearer, {"token": "s3cret"}))
    response = await fetchchain.fetch("https://api.example.com/items")

Scoped changes leave the shared dispatcher alone::

    anon = fetchchain.remove_temp("auth")
    response = await anon.fetch("https://api.example.com/public")

Private instances avoid process-wide state entirely::

    dispatcher = Dispatcher(transport=HTTPXTransport(client))
"""

__version__ = "0.1.0.dev0"
__all__ = [
    "ConfigurationError",
    "Dispatcher",
    "DispatcherConfig",
    "FetchChainError",
    "HTTPXTransport",
    "Handler",
    "InvalidArgument",
    "Middleware",
    "Next",
    "Transport",
    "add_temp",
    "default_dispatcher",
    "fetch",
    "remove_temp",
    "reset",
    "use",
    "validate_middleware",
]

_DEFAULT_INSTANCE_API = ("add_temp", "default_dispatcher", "fetch", "remove_temp", "reset", "use")


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import fetchchain`` fast (httpx is only imported on first use)
    while providing a clean top-level API.
    """
    if name == "Dispatcher":
        from fetchchain.dispatcher import Dispatcher

        return Dispatcher

    if name in _DEFAULT_INSTANCE_API:
        from fetchchain import dispatcher as _dispatcher

        return getattr(_dispatcher, name)

    if name == "DispatcherConfig":
        from fetchchain.config import DispatcherConfig

        return DispatcherConfig

    if name in ("ConfigurationError", "FetchChainError", "InvalidArgument"):
        from fetchchain import errors as _errors

        return getattr(_errors, name)

    if name in ("Handler", "Middleware", "Next", "validate_middleware"):
        from fetchchain import middleware as _middleware

        return getattr(_middleware, name)

    if name in ("HTTPXTransport", "Transport"):
        from fetchchain import transport as _transport

        return getattr(_transport, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
