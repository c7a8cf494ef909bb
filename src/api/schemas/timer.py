"""
Timer schemas - runtime state and display frames
"""

from pydantic import BaseModel, Field
from typing import Literal, Optional

from models.display_frame import DisplayFrame
from models.timer_state import TimerRuntimeState


class ColorValue(BaseModel):
    """Color in both notations the render surfaces use"""
    hex: str = Field(description="#rrggbb")
    rgb: list[int] = Field(description="[r, g, b] each 0-255")


class TimerStateResponse(BaseModel):
    """Transport status and elapsed time"""
    elapsed_seconds: int = Field(ge=0, description="Seconds counted while running")
    status: Literal["IDLE", "RUNNING", "PAUSED"]

    @classmethod
    def from_state(cls, state: TimerRuntimeState) -> "TimerStateResponse":
        return cls(**state.to_dict())


class DisplayFrameResponse(BaseModel):
    """What the overlay should draw right now"""
    text: str = Field(description="MM:SS / HH:MM:SS or the final message")
    color: ColorValue
    visible: bool = Field(description="False during the hidden half of the final-message blink")
    limit_reached: bool
    band: Literal["DEFAULT", "BAND_30S", "BAND_15S", "BAND_10S", "BAND_5S"]
    remaining_seconds: Optional[int] = Field(None, description="None when the limit is disabled")

    @classmethod
    def from_frame(cls, frame: DisplayFrame) -> "DisplayFrameResponse":
        return cls(**frame.to_dict())


class TransportResponse(BaseModel):
    """Result of a transport operation"""
    action: Literal["start", "pause", "stop", "reset"]
    state: TimerStateResponse
    frame: DisplayFrameResponse

    class Config:
        json_schema_extra = {
            "example": {
                "action": "start",
                "state": {"elapsed_seconds": 0, "status": "RUNNING"},
                "frame": {
                    "text": "00:00",
                    "color": {"hex": "#ffffff", "rgb": [255, 255, 255]},
                    "visible": True,
                    "limit_reached": False,
                    "band": "DEFAULT",
                    "remaining_seconds": 300
                }
            }
        }
