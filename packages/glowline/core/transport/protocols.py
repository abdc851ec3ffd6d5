"""Protocol definitions for delivering payloads to a controller."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class DeviceTransport(Protocol):
    """Anything that can push a JSON state payload to a controller.

    Example:
        >>> class PrintTransport:
        ...     def send(self, payload: dict[str, Any]) -> bool:
        ...         print(payload)
        ...         return True
    """

    def send(self, payload: dict[str, Any]) -> bool:
        """Deliver ``payload``.

        Args:
            payload: WLED JSON state.

        Returns:
            True when the controller accepted the payload.
        """
        ...


__all__ = ["DeviceTransport"]
