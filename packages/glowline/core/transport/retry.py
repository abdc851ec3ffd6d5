"""Retry policy for device requests."""

from __future__ import annotations

import random

from pydantic import BaseModel, Field, field_validator


class RetryPolicy(BaseModel):
    """Bounded retry with exponential backoff and jitter for device sends.

    Args:
        max_attempts: Total attempts including the first send.
        base_delay_s: Delay before the first retry.
        max_delay_s: Upper bound on any single delay.
        jitter: Fraction of the delay randomised either way (0.15 = +/-15%).
        retry_on_status: HTTP statuses treated as transient.
    """

    model_config = {"frozen": True}

    max_attempts: int = Field(default=3, ge=1)
    base_delay_s: float = Field(default=0.25, ge=0.0)
    max_delay_s: float = Field(default=2.0, ge=0.0)
    jitter: float = Field(default=0.15, ge=0.0, le=1.0)
    retry_on_status: tuple[int, ...] = (408, 429, 500, 502, 503, 504)

    @field_validator("max_delay_s")
    @classmethod
    def validate_max_delay(cls, v: float, info) -> float:
        base = info.data.get("base_delay_s", 0.25)
        if v < base:
            raise ValueError("max_delay_s must be >= base_delay_s")
        return v

    def should_retry_status(self, status_code: int) -> bool:
        return status_code in self.retry_on_status

    def compute_delay(self, attempt: int) -> float:
        """Delay before retry number ``attempt`` (1 = first retry)."""
        delay: float = min(self.max_delay_s, self.base_delay_s * (2 ** (attempt - 1)))
        if self.jitter > 0:
            spread = delay * self.jitter
            delay = max(0.0, delay + random.uniform(-spread, spread))
        return delay


def parse_retry_after_seconds(value: str | None) -> float | None:
    """Numeric ``Retry-After`` header value in seconds.

    HTTP-date values, negatives and garbage yield None.
    """
    if not value:
        return None
    try:
        seconds = float(value.strip())
    except ValueError:
        return None
    return seconds if seconds >= 0 else None


__all__ = ["RetryPolicy", "parse_retry_after_seconds"]
