"""Invoke helpers — call sync or async middleware handlers uniformly.

Handlers can be ``def`` or ``async def``, and a ``def`` handler may hand
back the awaitable it got from ``next``. Anything that calls a
user-provided handler goes through this helper so the sync/async check
lives in exactly one place.

Usage::

    from fetchchain._internal.invoke import invoke

    result = await invoke(handler, request, next, options)
"""

import inspect
from typing import Any


async def invoke(handler: Any, *args: Any, **kwargs: Any) -> Any:
    """Call a handler and await the result if it's awaitable.

    Works with both sync and async callables::

        # sync — forwards the awaitable from next, awaited here
        def passthrough(request, next, options):
            return next(request)

        # async — returns coroutine, awaited automatically
        async def stamp(request, next, options):
            request.headers["X-Stamp"] = "1"
            return await next(request)
    """
    result = handler(*args, **kwargs)
    if inspect.isawaitable(result):
        result = await result
    return result
