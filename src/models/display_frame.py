"""
DisplayFrame - what the rendering surface draws

Derived from (elapsed_seconds, config, blink_phase, status) on every render.
No lifecycle of its own; recomputed, never stored by the core.
"""

from dataclasses import dataclass
from typing import Optional

from models.color import Color
from models.enums import ColorBand


@dataclass(frozen=True)
class DisplayFrame:
    """
    Rendered overlay frame

    Attributes:
        text: Formatted time (MM:SS / HH:MM:SS) or the final message
        color: Color of the active band
        visible: False only during the "off" half of the final-message blink
        limit_reached: Limit enabled and remaining <= 0
        band: Active remaining-time band
        remaining_seconds: limit - elapsed, None when the limit is disabled
    """

    text: str
    color: Color
    visible: bool = True
    limit_reached: bool = False
    band: ColorBand = ColorBand.DEFAULT
    remaining_seconds: Optional[int] = None

    def to_dict(self) -> dict:
        return {
            "text": self.text,
            "color": self.color.to_dict(),
            "visible": self.visible,
            "limit_reached": self.limit_reached,
            "band": self.band.name,
            "remaining_seconds": self.remaining_seconds,
        }
