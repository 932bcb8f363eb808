"""Test utilities for code built on fetchchain.

Provides a recording transport, middleware probes, and ordering
assertions::

    from fetchchain.testing import Probe, RecordingTransport, assert_called_in_order
"""

from fetchchain.testing.assertions import assert_called_in_order, assert_not_called, assert_sent
from fetchchain.testing.probe import Probe, ProbeCall
from fetchchain.testing.transport import RecordingTransport

__all__ = [
    "Probe",
    "ProbeCall",
    "RecordingTransport",
    "assert_called_in_order",
    "assert_not_called",
    "assert_sent",
]
