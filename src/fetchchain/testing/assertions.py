"""Assertion helpers for middleware ordering and outgoing requests."""

from __future__ import annotations

from fetchchain.testing.probe import Probe
from fetchchain.testing.transport import RecordingTransport


def _first_stamp(step: Probe | RecordingTransport) -> int:
    if isinstance(step, RecordingTransport):
        if not step.stamps:
            msg = "RecordingTransport was never called"
            raise AssertionError(msg)
        return step.stamps[0]
    return step.first_stamp


def assert_called_in_order(*steps: Probe | RecordingTransport) -> None:
    """Assert each step was first called before the next one."""
    stamps = [_first_stamp(step) for step in steps]
    assert stamps == sorted(stamps), f"Expected call order {stamps!r} to be ascending"


def assert_not_called(*steps: Probe | RecordingTransport) -> None:
    """Assert none of *steps* ran."""
    for step in steps:
        assert not step.called, f"Expected {step!r} not to be called"


def assert_sent(
    transport: RecordingTransport,
    *,
    method: str | None = None,
    url_endswith: str | None = None,
) -> None:
    """Assert the last request sent through *transport* matches."""
    request = transport.last_request
    if method is not None:
        assert request.method == method, f"Expected method {method!r}, got {request.method!r}"
    if url_endswith is not None:
        url = str(request.url)
        assert url.endswith(url_endswith), f"Expected URL ending {url_endswith!r}, got {url!r}"
