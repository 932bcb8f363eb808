"""fetchchain exception hierarchy.

Shared across the dispatcher, middleware validation, and request
construction so every module raises and catches the same types.
"""


class FetchChainError(Exception):
    """Base for all fetchchain-specific errors."""


class ConfigurationError(FetchChainError):
    """Raised when dispatcher configuration is invalid.

    Typically raised from ``DispatcherConfig.__post_init__`` at construction.
    """


class InvalidArgument(FetchChainError, TypeError):  # noqa: N818 — mirrors TypeError semantics
    """A malformed middleware descriptor, middleware name, or fetch input.

    Subclasses ``TypeError`` so callers written against the plain builtin
    keep catching it.
    """
