"""Shared fixtures: a recording transport and a private dispatcher."""

import httpx
import pytest

from fetchchain import dispatcher as dispatcher_module
from fetchchain.dispatcher import Dispatcher
from fetchchain.testing import RecordingTransport


@pytest.fixture
def transport() -> RecordingTransport:
    return RecordingTransport(httpx.Response(200, text="ok"))


@pytest.fixture
def dispatcher(transport: RecordingTransport) -> Dispatcher:
    return Dispatcher(transport=transport)


@pytest.fixture
def default_transport(monkeypatch: pytest.MonkeyPatch) -> RecordingTransport:
    """Swap in a fresh default dispatcher backed by a recording transport."""
    recording = RecordingTransport(httpx.Response(204))
    monkeypatch.setattr(dispatcher_module, "_default", Dispatcher(transport=recording))
    return recording
