"""Colour contrast between layers (WCAG relative luminance)."""

from __future__ import annotations

from glowline.core.models import RGBColor


def _linearize(channel: int) -> float:
    c = channel / 255.0
    if c <= 0.03928:
        return c / 12.92
    return ((c + 0.055) / 1.055) ** 2.4


def relative_luminance(color: RGBColor) -> float:
    return (
        0.2126 * _linearize(color.r)
        + 0.7152 * _linearize(color.g)
        + 0.0722 * _linearize(color.b)
    )


def normalized_contrast(a: RGBColor, b: RGBColor) -> float:
    """WCAG contrast ratio scaled into roughly [0, 1] (21:1 maps to 1)."""
    la = relative_luminance(a)
    lb = relative_luminance(b)
    lighter, darker = max(la, lb), min(la, lb)
    return (lighter + 0.05) / (darker + 0.05) / 21.0


__all__ = ["normalized_contrast", "relative_luminance"]
