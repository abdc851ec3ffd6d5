"""WLED JSON API transport built on HTTPX.

Provides:
- POST of state payloads to ``/json/state``
- Automatic retries with exponential backoff on transient failures
- Request/response logging

Failures never raise past :meth:`HttpDeviceTransport.send`; they are
logged and reported as ``False``.
"""

from __future__ import annotations

import logging
import time
from typing import Any

import httpx

from glowline.core.transport.retry import RetryPolicy, parse_retry_after_seconds

logger = logging.getLogger(__name__)

STATE_PATH = "/json/state"


class HttpDeviceTransport:
    """Synchronous WLED transport.

    Args:
        base_url: Controller root, e.g. ``http://192.168.1.50``.
        timeout_s: Per-request timeout.
        retry_policy: Retry policy (defaults to three attempts).
        transport: Optional custom transport (useful for testing).

    Example:
        >>> with HttpDeviceTransport("http://wled.local") as device:
        ...     device.send({"on": True, "bri": 128})
    """

    def __init__(
        self,
        base_url: str,
        *,
        timeout_s: float = 5.0,
        retry_policy: RetryPolicy | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.base_url = base_url
        self.retry_policy = retry_policy or RetryPolicy()
        self._client = httpx.Client(
            base_url=base_url,
            headers={"User-Agent": "glowline"},
            timeout=timeout_s,
            transport=transport,
        )

    def close(self) -> None:
        """Close the underlying HTTP client and release resources."""
        self._client.close()

    def __enter__(self) -> HttpDeviceTransport:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def send(self, payload: dict[str, Any]) -> bool:
        """POST ``payload`` to the controller's state endpoint.

        Args:
            payload: WLED JSON state.

        Returns:
            True on a 2xx response, False once retries are exhausted or on
            a non-transient error status.
        """
        attempts = 0
        while True:
            attempts += 1
            start = time.perf_counter()
            try:
                resp = self._client.post(STATE_PATH, json=payload)
            except httpx.TimeoutException as e:
                if attempts >= self.retry_policy.max_attempts:
                    logger.warning(
                        "Timed out sending to %s after %d attempt(s): %s",
                        self.base_url,
                        attempts,
                        e,
                    )
                    return False
                time.sleep(self.retry_policy.compute_delay(attempts))
                continue
            except httpx.RequestError as e:
                if attempts >= self.retry_policy.max_attempts:
                    logger.warning(
                        "Network error sending to %s after %d attempt(s): %s",
                        self.base_url,
                        attempts,
                        e,
                    )
                    return False
                time.sleep(self.retry_policy.compute_delay(attempts))
                continue

            elapsed = time.perf_counter() - start
            logger.debug(
                "POST %s%s -> %d (%.3fs, attempt %d)",
                self.base_url,
                STATE_PATH,
                resp.status_code,
                elapsed,
                attempts,
            )
            if resp.is_success:
                return True

            if (
                not self.retry_policy.should_retry_status(resp.status_code)
                or attempts >= self.retry_policy.max_attempts
            ):
                logger.warning(
                    "Controller %s rejected payload with status %d",
                    self.base_url,
                    resp.status_code,
                )
                return False

            retry_after = parse_retry_after_seconds(resp.headers.get("Retry-After"))
            if retry_after is None:
                retry_after = self.retry_policy.compute_delay(attempts)
            time.sleep(retry_after)


__all__ = ["HttpDeviceTransport", "STATE_PATH"]
