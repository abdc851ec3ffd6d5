"""Protocol for design storage backends."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from glowline.core.persistence.models import SavedDesign


@runtime_checkable
class DesignRepository(Protocol):
    """
    Storage for saved designs, keyed by (user id, design id).

    Implementations must:
    - Overwrite on save of an existing key
    - Return None (not raise) for unknown keys
    - List a user's designs in a stable order
    """

    def save(self, design: SavedDesign) -> None:
        """Store ``design`` under ``(design.user_id, design.id)``."""
        ...

    def load(self, user_id: str, design_id: str) -> SavedDesign | None:
        """Stored design, or None when absent."""
        ...

    def delete(self, user_id: str, design_id: str) -> bool:
        """Remove a design; True if something was removed."""
        ...

    def list(self, user_id: str) -> list[SavedDesign]:
        """All designs of one user, ordered by design id."""
        ...


__all__ = ["DesignRepository"]
