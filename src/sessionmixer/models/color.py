"""Color model for level indication."""

import colorsys

from pydantic import BaseModel, ConfigDict, Field


class Color(BaseModel):
    """Standard 8-bit RGB color model.

    The model is frozen so colors can be compared and used as dict keys.
    """

    model_config = ConfigDict(frozen=True)

    r: int = Field(ge=0, le=255, description="Red (0-255)")
    g: int = Field(ge=0, le=255, description="Green (0-255)")
    b: int = Field(ge=0, le=255, description="Blue (0-255)")

    @classmethod
    def off(cls) -> "Color":
        """Create off (black) color."""
        return cls(r=0, g=0, b=0)

    @classmethod
    def from_hsv(cls, h: float, s: float, v: float) -> "Color":
        """Create a color from hue/saturation/value, each in 0.0-1.0."""
        r, g, b = colorsys.hsv_to_rgb(h, s, v)
        return cls(r=round(r * 255), g=round(g * 255), b=round(b * 255))

    @property
    def brightness(self) -> int:
        """HSV value (brightest channel), 0-255."""
        return max(self.r, self.g, self.b)

    def to_rgb_tuple(self) -> tuple[int, int, int]:
        """Convert to RGB tuple."""
        return (self.r, self.g, self.b)

    def to_hex(self) -> str:
        """Convert to CSS hex color string (e.g., '#FF0000').

        Example:
            >>> Color(r=255, g=0, b=0).to_hex()
            '#FF0000'
        """
        return f"#{self.r:02X}{self.g:02X}{self.b:02X}"
