"""Stored design records."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from glowline.core.models import DesignIntent


class SavedDesign(BaseModel):
    """A design as kept by a repository.

    Attributes:
        id: Design id, unique per user.
        user_id: Owner.
        name: Display name.
        intent: Resolved (or in-progress) intent.
        roofline_id: Installation the design was compiled for.
        payload: Last compiled device payload, if any.
        saved_at: Time of the last save (UTC).
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    id: str = Field(min_length=1)
    user_id: str = Field(min_length=1)
    name: str = ""
    intent: DesignIntent
    roofline_id: str | None = None
    payload: dict[str, Any] | None = None
    saved_at: datetime = Field(default_factory=lambda: datetime.now(UTC))


__all__ = ["SavedDesign"]
