"""Delivery of payloads to lighting controllers."""

from glowline.core.transport.http import STATE_PATH, HttpDeviceTransport
from glowline.core.transport.protocols import DeviceTransport
from glowline.core.transport.retry import RetryPolicy, parse_retry_after_seconds

__all__ = [
    "DeviceTransport",
    "HttpDeviceTransport",
    "RetryPolicy",
    "STATE_PATH",
    "parse_retry_after_seconds",
]
