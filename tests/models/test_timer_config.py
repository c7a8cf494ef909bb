import pytest

from models.color import Color
from models.enums import ColorBand
from models.timer_config import TimerConfig


def test_defaults_match_factory_overlay():
    config = TimerConfig()
    assert config.limit_enabled is True
    assert config.limit_seconds == 300
    assert config.font_family == "Arial"
    assert config.font_size == 120
    assert config.final_message == "TIME UP"
    assert config.final_message_blink is True
    assert config.to_dict()["color_default"] == "#ffffff"
    assert config.to_dict()["color_30s"] == "#00ff00"
    assert config.to_dict()["color_15s"] == "#0000ff"
    assert config.to_dict()["color_10s"] == "#ffff00"
    assert config.to_dict()["color_5s"] == "#ff0000"


def test_direct_construction_clamps_numbers():
    config = TimerConfig(limit_seconds=-10, font_size=0)
    assert config.limit_seconds == 0
    assert config.font_size == 120


def test_from_dict_accepts_camel_case():
    config = TimerConfig.from_dict({
        "limitEnabled": False,
        "limitSeconds": 90,
        "fontFamily": "Courier",
        "fontSize": 64,
        "finalMessage": "STOP",
        "finalMessageBlink": False,
        "color5s": "#ff00ff",
    })
    assert config.limit_enabled is False
    assert config.limit_seconds == 90
    assert config.font_family == "Courier"
    assert config.font_size == 64
    assert config.final_message == "STOP"
    assert config.final_message_blink is False
    assert config.color_5s == Color(255, 0, 255)


def test_from_dict_normalizes_malformed_values():
    config = TimerConfig.from_dict({
        "limit_seconds": -5,
        "font_size": -1,
        "font_family": "   ",
        "color_default": "",
        "color_30s": "nope",
        "unknown_key": 1,
    })
    assert config.limit_seconds == 0
    assert config.font_size == 120
    assert config.font_family == "Arial"
    assert config.color_default == Color.white()
    assert config.color_30s == Color.green()


def test_from_dict_non_numeric_limit_falls_back():
    fallback = TimerConfig(limit_seconds=42)
    config = TimerConfig.from_dict({"limit_seconds": "abc"}, fallback=fallback)
    assert config.limit_seconds == 42


@pytest.mark.parametrize("value", [float("inf"), float("-inf"), float("nan"), "inf", "1e400"])
def test_from_dict_non_finite_limit_falls_back(value):
    fallback = TimerConfig(limit_seconds=42)
    config = TimerConfig.from_dict({"limitSeconds": value, "fontSize": value}, fallback=fallback)
    assert config.limit_seconds == 42
    assert config.font_size == 120


def test_from_dict_keeps_large_integers_exact():
    assert TimerConfig.from_dict({"limit_seconds": 2**53 + 1}).limit_seconds == 2**53 + 1
    assert TimerConfig.from_dict({"limit_seconds": 10**400}).limit_seconds == 10**400


def test_from_dict_out_of_range_colors_are_clamped():
    config = TimerConfig.from_dict({"color5s": [float("inf"), 10**400, float("nan")]})
    assert config.color_5s == Color(0, 255, 0)


def test_from_dict_parses_string_booleans():
    config = TimerConfig.from_dict({"limit_enabled": "off", "final_message_blink": "yes"})
    assert config.limit_enabled is False
    assert config.final_message_blink is True


def test_with_changes_keeps_other_fields():
    base = TimerConfig(limit_seconds=60, final_message="END")
    edited = base.with_changes(limit_seconds=120, color_10s="#000")

    assert edited.limit_seconds == 120
    assert edited.final_message == "END"
    assert edited.color_10s == Color.black()
    # Original snapshot untouched
    assert base.limit_seconds == 60


def test_with_changes_empty_error_value_keeps_previous_color():
    base = TimerConfig(color_5s=Color(1, 2, 3))
    assert base.with_changes(color_5s="").color_5s == Color(1, 2, 3)


def test_color_for_band():
    config = TimerConfig()
    assert config.color_for(ColorBand.DEFAULT) == config.color_default
    assert config.color_for(ColorBand.BAND_30S) == config.color_30s
    assert config.color_for(ColorBand.BAND_15S) == config.color_15s
    assert config.color_for(ColorBand.BAND_10S) == config.color_10s
    assert config.color_for(ColorBand.BAND_5S) == config.color_5s


def test_to_dict_round_trips_through_from_dict():
    config = TimerConfig(limit_seconds=77, font_family="Impact", color_15s=Color(10, 20, 30))
    assert TimerConfig.from_dict(config.to_dict()) == config
