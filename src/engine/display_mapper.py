"""
DisplayMapper - pure mapping from timer state to a DisplayFrame

compute_frame(elapsed, config, blink_phase, status) -> DisplayFrame

No state of its own. The blink phase is owned and toggled by the caller
on a separate cadence; it is never derived from elapsed-second parity.
"""

from typing import Optional

from models.display_frame import DisplayFrame
from models.enums import ColorBand, TimerStatus
from models.timer_config import TimerConfig

# Smallest (most urgent) threshold first: tighter bands win
BAND_LADDER = (
    ColorBand.BAND_5S,
    ColorBand.BAND_10S,
    ColorBand.BAND_15S,
    ColorBand.BAND_30S,
)


def remaining_seconds(elapsed_seconds: int, config: TimerConfig) -> Optional[int]:
    """limit - elapsed, or None when no limit applies"""
    if not config.limit_enabled:
        return None
    return config.limit_seconds - elapsed_seconds


def is_limit_reached(elapsed_seconds: int, config: TimerConfig) -> bool:
    remaining = remaining_seconds(elapsed_seconds, config)
    return remaining is not None and remaining <= 0


def select_band(remaining: Optional[int]) -> ColorBand:
    """
    Pick the color band for the remaining time

    Evaluated smallest threshold first, so remaining=3 lands in the 5s band
    and not the 30s band. Negative remaining (past the limit) stays in the
    5s band. No limit -> DEFAULT.
    """
    if remaining is None:
        return ColorBand.DEFAULT

    for band in BAND_LADDER:
        if remaining <= band.value:
            return band
    return ColorBand.DEFAULT


def format_elapsed(total_seconds: int) -> str:
    """
    Format seconds as MM:SS, or HH:MM:SS once hours are non-zero

    Example:
        format_elapsed(65)    # "01:05"
        format_elapsed(3661)  # "01:01:01"
    """
    total_seconds = max(0, int(total_seconds))
    h = total_seconds // 3600
    m = (total_seconds % 3600) // 60
    s = total_seconds % 60
    if h > 0:
        return f"{h:02d}:{m:02d}:{s:02d}"
    return f"{m:02d}:{s:02d}"


def should_blink(elapsed_seconds: int, config: TimerConfig, status: TimerStatus) -> bool:
    """True while the final message must blink (enables the blink cadence)"""
    return (
        is_limit_reached(elapsed_seconds, config)
        and config.final_message_blink
        and status == TimerStatus.RUNNING
    )


def compute_frame(
    elapsed_seconds: int,
    config: TimerConfig,
    blink_phase: bool,
    status: TimerStatus = TimerStatus.RUNNING,
) -> DisplayFrame:
    """
    Map the current elapsed time and config to a frame

    Args:
        elapsed_seconds: Seconds counted by the controller
        config: Live config snapshot (read once per call)
        blink_phase: Current phase of the blink cadence (True = shown)
        status: Controller status; blinking only applies while RUNNING

    Returns:
        DisplayFrame with text, band color and visibility
    """
    remaining = remaining_seconds(elapsed_seconds, config)
    limit_reached = remaining is not None and remaining <= 0
    band = select_band(remaining)

    if limit_reached:
        text = config.final_message
    else:
        text = format_elapsed(elapsed_seconds)

    if should_blink(elapsed_seconds, config, status):
        visible = bool(blink_phase)
    else:
        visible = True

    return DisplayFrame(
        text=text,
        color=config.color_for(band),
        visible=visible,
        limit_reached=limit_reached,
        band=band,
        remaining_seconds=remaining,
    )
