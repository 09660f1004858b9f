"""Color models for RGB and HSL representations."""

from pydantic import BaseModel, ConfigDict, Field


class RGBA(BaseModel):
    """RGB color with alpha.

    Channels are floats in 0-255 because CSS allows fractional and
    percentage channels (``rgb(50% 0 0)``). Alpha is 0-1.

    The model is frozen so instances are hashable and can be used as
    cache keys.
    """

    model_config = ConfigDict(frozen=True)

    r: float = Field(ge=0, le=255, description="Red (0-255)")
    g: float = Field(ge=0, le=255, description="Green (0-255)")
    b: float = Field(ge=0, le=255, description="Blue (0-255)")
    a: float = Field(default=1.0, ge=0, le=1, description="Alpha (0-1)")

    @classmethod
    def transparent(cls) -> "RGBA":
        """Create fully transparent black."""
        return cls(r=0, g=0, b=0, a=0)

    @property
    def key(self) -> tuple[float, float, float, float]:
        """Exact RGBA quadruple used as a registry key."""
        return (self.r, self.g, self.b, self.a)

    def to_rgb_tuple(self) -> tuple[int, int, int]:
        """Convert to a rounded RGB tuple."""
        return (round(self.r), round(self.g), round(self.b))


class HSLA(BaseModel):
    """HSL color with alpha.

    Hue is in degrees [0, 360); saturation and lightness are 0-1.
    """

    model_config = ConfigDict(frozen=True)

    h: float = Field(ge=0, le=360, description="Hue in degrees")
    s: float = Field(ge=0, le=1, description="Saturation (0-1)")
    l: float = Field(ge=0, le=1, description="Lightness (0-1)")  # noqa: E741
    a: float = Field(default=1.0, ge=0, le=1, description="Alpha (0-1)")
