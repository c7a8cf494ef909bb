"""
Color model - RGB color value

Display colors are plain RGB triples (0-255). Conversions to hex for the
config editor and to OpenGL floats for the prompt export live in utils.colors.
"""

from dataclasses import dataclass
from typing import Any, Optional, Tuple
from utils.colors import clamp_channel, hex_to_rgb, rgb_to_hex, rgb_to_gl


@dataclass(frozen=True)
class Color:
    """
    Immutable RGB color

    Channels are clamped to 0-255 on construction so a Color is always
    renderable, even when built from a half-edited config value.

    Examples:
        color = Color.from_hex("#ff0000")
        color = Color.from_rgb(0, 255, 0)

        r, g, b = color.to_rgb()
        color.to_hex()   # "#00ff00"
        color.to_gl()    # (0.0, 1.0, 0.0)

        Color.parse("#00f")          # Color(0, 0, 255)
        Color.parse([255, 255, 0])   # Color(255, 255, 0)
        Color.parse("")              # None
    """

    r: int = 0
    g: int = 0
    b: int = 0

    def __post_init__(self):
        object.__setattr__(self, "r", clamp_channel(self.r))
        object.__setattr__(self, "g", clamp_channel(self.g))
        object.__setattr__(self, "b", clamp_channel(self.b))

    # === CONSTRUCTORS ===

    @classmethod
    def from_rgb(cls, r: int, g: int, b: int) -> 'Color':
        """
        Create from RGB

        Args:
            r, g, b: RGB values (0-255, clamped)
        """
        return cls(r, g, b)

    @classmethod
    def from_hex(cls, value: str) -> 'Color':
        """
        Create from hex string ('#rrggbb' or '#rgb')

        Raises:
            ValueError: If the string is not a hex color
        """
        rgb = hex_to_rgb(value)
        if rgb is None:
            raise ValueError(f"Invalid hex color: {value!r}")
        return cls(*rgb)

    @classmethod
    def parse(cls, value: Any) -> Optional['Color']:
        """
        Lenient conversion from external data

        Accepts Color, hex string, [r, g, b] / (r, g, b) or {"r":..,"g":..,"b":..}.
        Returns None for empty or unrecognized input instead of raising.
        """
        if isinstance(value, Color):
            return value

        if isinstance(value, str):
            rgb = hex_to_rgb(value)
            return cls(*rgb) if rgb else None

        if isinstance(value, (list, tuple)) and len(value) == 3:
            return cls(*value)

        if isinstance(value, dict) and all(k in value for k in ("r", "g", "b")):
            return cls(value["r"], value["g"], value["b"])

        return None

    # === COMMON COLORS ===

    @classmethod
    def white(cls) -> 'Color':
        return cls(255, 255, 255)

    @classmethod
    def black(cls) -> 'Color':
        return cls(0, 0, 0)

    @classmethod
    def red(cls) -> 'Color':
        return cls(255, 0, 0)

    @classmethod
    def green(cls) -> 'Color':
        return cls(0, 255, 0)

    @classmethod
    def blue(cls) -> 'Color':
        return cls(0, 0, 255)

    @classmethod
    def yellow(cls) -> 'Color':
        return cls(255, 255, 0)

    # === CONVERSIONS ===

    def to_rgb(self) -> Tuple[int, int, int]:
        """(r, g, b) tuple with values 0-255"""
        return (self.r, self.g, self.b)

    def to_hex(self) -> str:
        """Lowercase '#rrggbb'"""
        return rgb_to_hex(self.r, self.g, self.b)

    def to_gl(self) -> Tuple[float, float, float]:
        """OpenGL float triple (0.0-1.0)"""
        return rgb_to_gl(self.r, self.g, self.b)

    def to_dict(self) -> dict:
        """Serialize for JSON API / Socket.IO payloads"""
        return {
            "hex": self.to_hex(),
            "rgb": list(self.to_rgb()),
        }

    def __str__(self) -> str:
        return self.to_hex()
