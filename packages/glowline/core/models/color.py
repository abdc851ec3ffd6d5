"""Colour value type."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class RGBColor(BaseModel):
    """8-bit RGB colour with an optional dedicated white channel.

    Attributes:
        r: Red 0-255.
        g: Green 0-255.
        b: Blue 0-255.
        w: White 0-255 (only meaningful on RGBW strips).
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    r: int = Field(ge=0, le=255)
    g: int = Field(ge=0, le=255)
    b: int = Field(ge=0, le=255)
    w: int = Field(default=0, ge=0, le=255)

    @classmethod
    def from_hex(cls, value: str) -> RGBColor:
        """Parse ``"FF8800"`` / ``"#ff8800"``.

        Raises:
            ValueError: If the string is not six hex digits.
        """
        text = value.strip().lstrip("#")
        if len(text) != 6:
            raise ValueError(f"Expected 6 hex digits, got {value!r}")
        return cls(r=int(text[0:2], 16), g=int(text[2:4], 16), b=int(text[4:6], 16))

    def to_hex(self) -> str:
        return f"{self.r:02X}{self.g:02X}{self.b:02X}"

    def rgb(self) -> list[int]:
        return [self.r, self.g, self.b]

    def rgbw(self) -> list[int]:
        return [self.r, self.g, self.b, self.w]

    def same_rgb(self, other: RGBColor) -> bool:
        """Compare colour channels, ignoring white."""
        return self.r == other.r and self.g == other.g and self.b == other.b

    def lerp(self, other: RGBColor, t: float) -> RGBColor:
        """Linear interpolation towards ``other``; ``t`` is clamped to [0, 1]."""
        t = max(0.0, min(1.0, t))
        return RGBColor(
            r=round(self.r + (other.r - self.r) * t),
            g=round(self.g + (other.g - self.g) * t),
            b=round(self.b + (other.b - self.b) * t),
            w=round(self.w + (other.w - self.w) * t),
        )


WHITE = RGBColor(r=255, g=255, b=255)
BLACK = RGBColor(r=0, g=0, b=0)


__all__ = ["BLACK", "RGBColor", "WHITE"]
