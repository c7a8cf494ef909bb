import pytest

from engine.display_mapper import (
    compute_frame, format_elapsed, is_limit_reached, remaining_seconds,
    select_band, should_blink
)
from models.color import Color
from models.enums import ColorBand, TimerStatus
from models.timer_config import TimerConfig


@pytest.mark.parametrize("seconds, expected", [
    (0, "00:00"),
    (9, "00:09"),
    (65, "01:05"),
    (3599, "59:59"),
    (3600, "01:00:00"),
    (3661, "01:01:01"),
    (36000, "10:00:00"),
])
def test_format_elapsed(seconds, expected):
    assert format_elapsed(seconds) == expected


@pytest.mark.parametrize("remaining, band", [
    (None, ColorBand.DEFAULT),
    (31, ColorBand.DEFAULT),
    (30, ColorBand.BAND_30S),
    (16, ColorBand.BAND_30S),
    (15, ColorBand.BAND_15S),
    (11, ColorBand.BAND_15S),
    (10, ColorBand.BAND_10S),
    (6, ColorBand.BAND_10S),
    (5, ColorBand.BAND_5S),
    (3, ColorBand.BAND_5S),
    (0, ColorBand.BAND_5S),
    (-20, ColorBand.BAND_5S),
])
def test_select_band_smallest_threshold_first(remaining, band):
    assert select_band(remaining) == band


def test_band_colors_never_go_backward(config):
    order = [config.color_default, config.color_30s, config.color_15s, config.color_10s, config.color_5s]
    limit = 31
    config = config.with_changes(limit_seconds=limit)

    last_index = 0
    for elapsed in range(0, limit + 1):
        frame = compute_frame(elapsed, config, blink_phase=True)
        index = order.index(frame.color)
        assert index >= last_index
        last_index = index

    assert last_index == len(order) - 1


def test_five_second_limit_scenario(short_config):
    for elapsed in range(5):
        frame = compute_frame(elapsed, short_config, blink_phase=True)
        assert frame.text == format_elapsed(elapsed)
        assert frame.limit_reached is False
        assert frame.remaining_seconds == 5 - elapsed

    frame = compute_frame(5, short_config, blink_phase=True)
    assert frame.text == "DONE"
    assert frame.limit_reached is True
    assert frame.color == short_config.color_5s


def test_disabled_limit_counts_without_bound():
    config = TimerConfig(limit_enabled=False, limit_seconds=5)
    frame = compute_frame(3661, config, blink_phase=False)

    assert frame.text == "01:01:01"
    assert frame.limit_reached is False
    assert frame.band == ColorBand.DEFAULT
    assert frame.color == config.color_default
    assert frame.remaining_seconds is None
    assert frame.visible is True
    assert remaining_seconds(3661, config) is None
    assert is_limit_reached(10_000, config) is False


def test_zero_limit_is_reached_immediately():
    config = TimerConfig(limit_seconds=0, final_message_blink=False)
    frame = compute_frame(0, config, blink_phase=False)

    assert frame.limit_reached is True
    assert frame.text == config.final_message
    assert frame.band == ColorBand.BAND_5S
    assert frame.visible is True


def test_visible_follows_blink_phase_only_while_running(short_config):
    assert compute_frame(6, short_config, blink_phase=False, status=TimerStatus.RUNNING).visible is False
    assert compute_frame(6, short_config, blink_phase=True, status=TimerStatus.RUNNING).visible is True

    assert compute_frame(6, short_config, blink_phase=False, status=TimerStatus.PAUSED).visible is True
    assert compute_frame(6, short_config, blink_phase=False, status=TimerStatus.IDLE).visible is True


def test_no_blink_before_limit_or_when_disabled(short_config):
    assert compute_frame(2, short_config, blink_phase=False).visible is True

    steady = short_config.with_changes(final_message_blink=False)
    assert compute_frame(6, steady, blink_phase=False).visible is True


def test_should_blink_predicate(short_config):
    assert should_blink(5, short_config, TimerStatus.RUNNING) is True
    assert should_blink(4, short_config, TimerStatus.RUNNING) is False
    assert should_blink(5, short_config, TimerStatus.PAUSED) is False
    assert should_blink(5, short_config.with_changes(final_message_blink=False), TimerStatus.RUNNING) is False


def test_frame_serialization(short_config):
    frame = compute_frame(2, short_config, blink_phase=True)
    assert frame.to_dict() == {
        "text": "00:02",
        "color": {"hex": "#ff0000", "rgb": [255, 0, 0]},
        "visible": True,
        "limit_reached": False,
        "band": "BAND_5S",
        "remaining_seconds": 3,
    }


def test_color_edit_takes_effect_on_next_frame(short_config):
    before = compute_frame(1, short_config, blink_phase=True)
    edited = short_config.with_changes(color_5s="#123456")
    after = compute_frame(1, edited, blink_phase=True)

    assert before.color == Color.red()
    assert after.color == Color.from_hex("#123456")
