"""Group consolidation."""

from __future__ import annotations

from glowline.core.models import LedColorGroup, RGBColor


def merge_adjacent_groups(groups: list[LedColorGroup]) -> list[LedColorGroup]:
    """Sort by start pixel and fuse contiguous groups of the same colour.

    Idempotent: merging an already merged list returns an equal list.
    """
    if not groups:
        return []

    ordered = sorted(groups, key=lambda g: g.start_led)
    merged: list[LedColorGroup] = []
    current = ordered[0]
    for group in ordered[1:]:
        if current.end_led + 1 == group.start_led and current.color == group.color:
            current = current.model_copy(update={"end_led": group.end_led})
        else:
            merged.append(current)
            current = group
    merged.append(current)
    return merged


def groups_from_pixels(pixels: dict[int, RGBColor]) -> list[LedColorGroup]:
    """Run-length encode a pixel -> colour map into merged groups."""
    groups = [
        LedColorGroup(start_led=index, end_led=index, color=color)
        for index, color in sorted(pixels.items())
    ]
    return merge_adjacent_groups(groups)


__all__ = ["groups_from_pixels", "merge_adjacent_groups"]
