"""
Config schemas - Pydantic models for the configuration editor
"""

import re
from pydantic import BaseModel, Field, field_validator
from typing import Optional

from models.timer_config import TimerConfig

HEX_COLOR_PATTERN = re.compile(r"^#([0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")


class TimerConfigResponse(BaseModel):
    """Live overlay configuration"""
    limit_enabled: bool
    limit_seconds: int
    font_family: str
    font_size: int
    final_message: str
    final_message_blink: bool
    color_default: str
    color_30s: str
    color_15s: str
    color_10s: str
    color_5s: str

    @classmethod
    def from_config(cls, config: TimerConfig) -> "TimerConfigResponse":
        return cls(**config.to_dict())


class TimerConfigRequest(BaseModel):
    """
    Config edit - every field optional

    PATCH applies only the given fields; PUT replaces the whole config and
    missing fields take the defaults from YAML.
    """
    limit_enabled: Optional[bool] = None
    limit_seconds: Optional[int] = Field(None, ge=0, description="Time limit in seconds")
    font_family: Optional[str] = Field(None, min_length=1)
    font_size: Optional[int] = Field(None, gt=0, description="Font size in px")
    final_message: Optional[str] = None
    final_message_blink: Optional[bool] = None
    color_default: Optional[str] = Field(None, description="#rgb or #rrggbb")
    color_30s: Optional[str] = None
    color_15s: Optional[str] = None
    color_10s: Optional[str] = None
    color_5s: Optional[str] = None

    @field_validator("color_default", "color_30s", "color_15s", "color_10s", "color_5s")
    @classmethod
    def validate_color(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value
        value = value.strip()
        if not HEX_COLOR_PATTERN.match(value):
            raise ValueError("color must be #rgb or #rrggbb")
        return value.lower()

    def changes(self) -> dict:
        """Only the fields the client actually sent"""
        return self.model_dump(exclude_none=True)

    class Config:
        extra = "forbid"
        json_schema_extra = {
            "example": {
                "limit_seconds": 90,
                "final_message": "TIME UP",
                "color_5s": "#ff0000"
            }
        }


class FontListResponse(BaseModel):
    fonts: list[str]
    count: int
    current: str = Field(description="Font family of the live config")


class PromptExportResponse(BaseModel):
    """Code-generation prompt for the current config"""
    plugin_name: str
    plugin_id: str
    limit_seconds: int
    prompt: str
