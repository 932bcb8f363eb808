"""Middleware descriptor, handler types, and descriptor validation.

A middleware is a named handler matching::

    async def my_mw(request: httpx.Request, next: Next, options: Any) -> httpx.Response: ...

``def`` handlers work too; whatever they return is awaited if it is
awaitable. ``next`` continues the chain with a (possibly replaced)
request. Not calling it ends the chain, and the handler's own return
value becomes the result of ``fetch``.

Descriptors are either ``Middleware`` instances or mappings with the
keys ``name``, ``handler`` and optionally ``options``. Validation
returns a tagged result instead of raising, so callers decide how a
bad descriptor surfaces.
"""

from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass
from typing import Any, TypeAlias

import httpx

from fetchchain.errors import InvalidArgument

# The rest of the chain, bound when a link runs
Next: TypeAlias = Callable[[httpx.Request], Awaitable[httpx.Response | None]]

# A middleware handler: (request, next, options) -> response, awaitable, or None
Handler: TypeAlias = Callable[[httpx.Request, Next | None, Any], Any]

DESCRIPTOR_REASON = "Middleware parameter is None/empty or not a middleware descriptor"
FIELDS_REASON = "Middleware name/handler is missing or not a string/callable"
NAME_REASON = "Middleware name must be a non-empty string"


@dataclass(frozen=True, slots=True)
class Middleware:
    """A named entry in a dispatcher's chain.

    ``options`` is opaque: it is handed to ``handler`` as its third
    argument on every call, untouched.
    """

    name: str
    handler: Handler
    options: Any = None


@dataclass(frozen=True, slots=True)
class Ok:
    """Validation succeeded."""

    value: Middleware


@dataclass(frozen=True, slots=True)
class Err:
    """Validation failed; ``reason`` says why."""

    reason: str


ValidationResult: TypeAlias = Ok | Err


def _valid_name(name: object) -> bool:
    return isinstance(name, str) and name != ""


def validate_middleware(obj: object) -> ValidationResult:
    """Check a middleware descriptor without raising.

    Accepts a ``Middleware`` or a mapping with ``name``/``handler``/``options``
    keys. Mappings are normalized into a ``Middleware``.
    """
    if isinstance(obj, Middleware):
        name, handler, options = obj.name, obj.handler, obj.options
    elif isinstance(obj, Mapping):
        name = obj.get("name")
        handler = obj.get("handler")
        options = obj.get("options")
    else:
        return Err(DESCRIPTOR_REASON)

    if not _valid_name(name) or not callable(handler):
        return Err(FIELDS_REASON)

    if isinstance(obj, Middleware):
        return Ok(obj)
    return Ok(Middleware(name=name, handler=handler, options=options))


def require_middleware(obj: object) -> Middleware:
    """Validate a descriptor, raising ``InvalidArgument`` on failure."""
    result = validate_middleware(obj)
    if isinstance(result, Err):
        raise InvalidArgument(result.reason)
    return result.value


def validate_name(name: object) -> str:
    """Return *name* if it is a non-empty string, else raise ``InvalidArgument``."""
    if not _valid_name(name):
        raise InvalidArgument(NAME_REASON)
    return name  # type: ignore[return-value]
