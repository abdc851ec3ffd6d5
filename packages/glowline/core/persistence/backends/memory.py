"""In-process design repository for development and tests."""

from __future__ import annotations

from glowline.core.persistence.models import SavedDesign


class InMemoryDesignRepository:
    """Dictionary-backed repository; contents vanish with the process."""

    def __init__(self) -> None:
        self._designs: dict[tuple[str, str], SavedDesign] = {}

    def save(self, design: SavedDesign) -> None:
        self._designs[(design.user_id, design.id)] = design

    def load(self, user_id: str, design_id: str) -> SavedDesign | None:
        return self._designs.get((user_id, design_id))

    def delete(self, user_id: str, design_id: str) -> bool:
        return self._designs.pop((user_id, design_id), None) is not None

    def list(self, user_id: str) -> list[SavedDesign]:
        return sorted(
            (d for (owner, _), d in self._designs.items() if owner == user_id),
            key=lambda d: d.id,
        )


__all__ = ["InMemoryDesignRepository"]
