"""
TimerConfig - immutable overlay configuration

Supplied by the configuration editor (YAML at startup, API edits at runtime).
The editor may hold transiently invalid values mid-edit, so construction from
external data normalizes instead of failing.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field, fields, replace
from typing import Any, Dict, Mapping, Optional

from models.color import Color
from models.enums import ColorBand
from utils.parsing import to_bool

DEFAULT_LIMIT_SECONDS = 300
DEFAULT_FONT_FAMILY = "Arial"
DEFAULT_FONT_SIZE = 120
DEFAULT_FINAL_MESSAGE = "TIME UP"

# camelCase keys used by the editor UI -> field names
_KEY_ALIASES = {
    "limitEnabled": "limit_enabled",
    "limitSeconds": "limit_seconds",
    "fontFamily": "font_family",
    "fontSize": "font_size",
    "finalMessage": "final_message",
    "finalMessageBlink": "final_message_blink",
    "colorDefault": "color_default",
    "color30s": "color_30s",
    "color15s": "color_15s",
    "color10s": "color_10s",
    "color5s": "color_5s",
}

_BAND_FIELDS = {
    ColorBand.DEFAULT: "color_default",
    ColorBand.BAND_30S: "color_30s",
    ColorBand.BAND_15S: "color_15s",
    ColorBand.BAND_10S: "color_10s",
    ColorBand.BAND_5S: "color_5s",
}

COLOR_FIELDS = tuple(_BAND_FIELDS.values())


def _to_int(value: Any, fallback: int) -> int:
    if isinstance(value, bool):
        return fallback
    if isinstance(value, int):
        return value
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return fallback
    if not math.isfinite(number):
        return fallback
    return int(number)


@dataclass(frozen=True)
class TimerConfig:
    """
    Overlay configuration snapshot

    Attributes:
        limit_enabled: Whether a finite duration applies
        limit_seconds: Duration in seconds (>= 0)
        font_family: Font name, opaque to the timer logic
        font_size: Font size in px (> 0), opaque to the timer logic
        final_message: Text shown once the limit is reached
        final_message_blink: Whether the final message blinks
        color_default..color_5s: Display color per remaining-time band
    """

    limit_enabled: bool = True
    limit_seconds: int = DEFAULT_LIMIT_SECONDS
    font_family: str = DEFAULT_FONT_FAMILY
    font_size: int = DEFAULT_FONT_SIZE
    final_message: str = DEFAULT_FINAL_MESSAGE
    final_message_blink: bool = True

    color_default: Color = field(default_factory=Color.white)
    color_30s: Color = field(default_factory=Color.green)
    color_15s: Color = field(default_factory=Color.blue)
    color_10s: Color = field(default_factory=Color.yellow)
    color_5s: Color = field(default_factory=Color.red)

    def __post_init__(self):
        # Numeric fields are clamped even for direct construction
        if self.limit_seconds < 0:
            object.__setattr__(self, "limit_seconds", 0)
        if self.font_size <= 0:
            object.__setattr__(self, "font_size", DEFAULT_FONT_SIZE)

    # === CONSTRUCTION FROM EXTERNAL DATA ===

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]], fallback: Optional['TimerConfig'] = None) -> 'TimerConfig':
        """
        Build a config from YAML/JSON data, normalizing every field

        Unknown keys are ignored. Missing or malformed values take the
        fallback's value (factory defaults when no fallback is given):
        - negative limit_seconds -> 0
        - non-positive font_size -> fallback font size
        - empty / unparseable color -> fallback color of the same band

        Args:
            data: Mapping with snake_case or camelCase keys
            fallback: Config providing values for missing/invalid fields

        Returns:
            Normalized TimerConfig (never raises for malformed values)
        """
        base = fallback or cls()
        raw = cls._canonical_keys(data or {})

        limit_seconds = _to_int(raw.get("limit_seconds", base.limit_seconds), base.limit_seconds)
        font_size = _to_int(raw.get("font_size", base.font_size), base.font_size)
        if font_size <= 0:
            font_size = base.font_size

        font_family = raw.get("font_family", base.font_family)
        if not isinstance(font_family, str) or not font_family.strip():
            font_family = base.font_family

        final_message = raw.get("final_message", base.final_message)
        if final_message is None:
            final_message = base.final_message

        colors = {}
        for name in COLOR_FIELDS:
            parsed = Color.parse(raw.get(name)) if name in raw else None
            colors[name] = parsed or getattr(base, name)

        return cls(
            limit_enabled=to_bool(raw.get("limit_enabled", base.limit_enabled), base.limit_enabled),
            limit_seconds=max(0, limit_seconds),
            font_family=font_family.strip(),
            font_size=font_size,
            final_message=str(final_message),
            final_message_blink=to_bool(
                raw.get("final_message_blink", base.final_message_blink), base.final_message_blink
            ),
            **colors,
        )

    @staticmethod
    def _canonical_keys(data: Mapping[str, Any]) -> Dict[str, Any]:
        known = {f.name for f in fields(TimerConfig)}
        result = {}
        for key, value in data.items():
            name = _KEY_ALIASES.get(key, key)
            if name in known:
                result[name] = value
        return result

    # === EDITING ===

    def with_changes(self, **changes) -> 'TimerConfig':
        """
        Return a new config with the given fields changed

        Values go through the same normalization as from_dict(), with this
        config as the fallback.
        """
        if not changes:
            return replace(self)
        return TimerConfig.from_dict(changes, fallback=self)

    # === ACCESS ===

    def color_for(self, band: ColorBand) -> Color:
        """Display color for a remaining-time band"""
        return getattr(self, _BAND_FIELDS[band])

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to plain data (colors as '#rrggbb')"""
        result = {}
        for f in fields(self):
            value = getattr(self, f.name)
            result[f.name] = value.to_hex() if isinstance(value, Color) else value
        return result
