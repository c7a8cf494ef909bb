import textwrap

import pytest

from managers.config_manager import ConfigManager
from models.color import Color
from models.enums import LogLevel


def write(path, content):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(textwrap.dedent(content), encoding="utf-8")


@pytest.fixture
def config_dir(tmp_path):
    write(tmp_path / "config" / "config.yaml", """
        include:
          - timer.yaml
          - fonts.yaml
          - server.yaml
    """)
    write(tmp_path / "config" / "timer.yaml", """
        timer:
          limit_seconds: 90
          final_message: GAME OVER
          color_5s: "#f0f"
    """)
    write(tmp_path / "config" / "fonts.yaml", """
        fonts:
          - Verdana
          - arial black
          - Courier
          - Verdana
    """)
    write(tmp_path / "config" / "server.yaml", """
        preview:
          tick_interval: 0.5
          blink_interval: -1
        api:
          port: 9000
        logging:
          level: debug
          use_colors: false
    """)
    write(tmp_path / "config" / "factory_defaults.yaml", """
        timer:
          limit_seconds: 60
        fonts:
          - Helvetica
    """)
    return tmp_path


def test_shipped_configuration_loads():
    manager = ConfigManager()
    manager.load()

    assert manager.timer_config.limit_seconds == 300
    assert manager.timer_config.final_message == "TIME UP"
    assert manager.timer_config.color_30s == Color.green()
    assert "Arial" in manager.available_fonts
    assert "Open Sans" in manager.available_fonts
    assert manager.preview_settings.tick_interval == 1.0
    assert manager.preview_settings.blink_interval == 0.5
    assert manager.api_settings.port == 8000


def test_includes_are_merged(config_dir):
    manager = ConfigManager(base_dir=config_dir)
    data = manager.load()

    assert set(data) == {"timer", "fonts", "preview", "api", "logging"}
    assert manager.timer_config.limit_seconds == 90
    assert manager.timer_config.final_message == "GAME OVER"
    assert manager.timer_config.color_5s == Color(255, 0, 255)
    # Untouched fields keep factory values
    assert manager.timer_config.font_family == "Arial"


def test_font_list_is_sorted_deduplicated_and_contains_current(config_dir):
    manager = ConfigManager(base_dir=config_dir)
    manager.load()

    assert manager.available_fonts == ["Arial", "arial black", "Courier", "Verdana"]


def test_invalid_settings_fall_back_to_defaults(config_dir):
    manager = ConfigManager(base_dir=config_dir)
    manager.load()

    assert manager.preview_settings.tick_interval == 0.5
    assert manager.preview_settings.blink_interval == 0.5
    assert manager.api_settings.port == 9000
    assert manager.api_settings.host == "0.0.0.0"
    assert manager.logging_settings.level == LogLevel.DEBUG
    assert manager.logging_settings.use_colors is False


def test_quoted_booleans_and_non_finite_numbers(tmp_path):
    write(tmp_path / "config" / "config.yaml", """
        timer:
          limit_seconds: .inf
        preview:
          tick_interval: .inf
          blink_interval: .nan
          persist_config: "false"
        api:
          docs_enabled: "no"
        logging:
          use_colors: "off"
    """)

    manager = ConfigManager(base_dir=tmp_path)
    manager.load()

    assert manager.timer_config.limit_seconds == 300
    assert manager.preview_settings.tick_interval == 1.0
    assert manager.preview_settings.blink_interval == 0.5
    assert manager.preview_settings.persist_config is False
    assert manager.api_settings.docs_enabled is False
    assert manager.logging_settings.use_colors is False


def test_fonts_including_keeps_live_font_selectable(config_dir):
    manager = ConfigManager(base_dir=config_dir)
    manager.load()

    assert manager.fonts_including("Courier") == manager.available_fonts
    assert manager.fonts_including("Fira Code") == ["Arial", "arial black", "Courier", "Fira Code", "Verdana"]
    assert "Fira Code" not in manager.available_fonts


def test_missing_include_falls_back_to_factory_defaults(config_dir):
    (config_dir / "config" / "fonts.yaml").unlink()

    manager = ConfigManager(base_dir=config_dir)
    manager.load()

    assert manager.timer_config.limit_seconds == 60
    assert manager.available_fonts == ["Arial", "Helvetica"]


def test_monolithic_config(tmp_path):
    write(tmp_path / "config" / "config.yaml", """
        timer:
          limit_enabled: false
        logging:
          level: LOUD
    """)
    manager = ConfigManager(base_dir=tmp_path)
    manager.load()

    assert manager.timer_config.limit_enabled is False
    assert manager.logging_settings.level == LogLevel.INFO


def test_resolve_path(config_dir, tmp_path):
    manager = ConfigManager(base_dir=config_dir)
    assert manager.resolve_path("state/state.json") == config_dir / "state" / "state.json"

    absolute = tmp_path / "elsewhere.json"
    assert manager.resolve_path(str(absolute)) == absolute
