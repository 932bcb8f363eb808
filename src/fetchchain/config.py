"""Dispatcher configuration.

DispatcherConfig is a frozen dataclass — immutable after creation,
IDE-autocompletable, no string-key dict lookups.
"""

from dataclasses import dataclass

from fetchchain.errors import ConfigurationError


@dataclass(frozen=True, slots=True)
class DispatcherConfig:
    """Dispatcher configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = DispatcherConfig(base_url="https://api.example.com", timeout=10.0)
    """

    # Request construction (string inputs only)
    base_url: str = ""
    default_method: str = "GET"
    default_headers: tuple[tuple[str, str], ...] = ()

    # HTTPXTransport (only when it owns the client)
    timeout: float = 30.0
    follow_redirects: bool = False

    def __post_init__(self) -> None:
        if not self.default_method:
            msg = "default_method must be a non-empty HTTP method"
            raise ConfigurationError(msg)
        if self.timeout <= 0:
            msg = f"timeout must be positive, got {self.timeout!r}"
            raise ConfigurationError(msg)
