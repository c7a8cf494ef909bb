import asyncio
import json

import pytest

from models.color import Color
from models.events import EventType
from models.timer_config import TimerConfig
from services.config_service import ConfigService
from services.event_bus import EventBus


@pytest.mark.asyncio
async def test_update_publishes_changed_fields(config):
    bus = EventBus()
    events = []
    bus.subscribe(EventType.CONFIG_CHANGED, lambda e: events.append(e))
    service = ConfigService(config, event_bus=bus)

    new_config = await service.update({"limitSeconds": 90, "color5s": "#ff00ff"})

    assert service.get_config() is new_config
    assert new_config.limit_seconds == 90
    assert new_config.color_5s == Color(255, 0, 255)
    assert len(events) == 1
    assert sorted(events[0].changed_fields) == ["color_5s", "limit_seconds"]


@pytest.mark.asyncio
async def test_update_without_changes_is_silent(config):
    bus = EventBus()
    events = []
    bus.subscribe(EventType.CONFIG_CHANGED, lambda e: events.append(e))
    service = ConfigService(config, event_bus=bus)

    await service.update({"limit_seconds": config.limit_seconds})
    assert events == []


@pytest.mark.asyncio
async def test_update_normalizes_mid_edit_values(config):
    service = ConfigService(config)

    edited = await service.update({"limit_seconds": -3, "color_default": ""})

    assert edited.limit_seconds == 0
    assert edited.color_default == config.color_default


@pytest.mark.asyncio
async def test_replace_fills_missing_fields_from_defaults():
    defaults = TimerConfig(final_message="DEFAULT END")
    service = ConfigService(defaults)
    await service.update({"final_message": "EDITED", "limit_seconds": 10})

    replaced = await service.replace({"limit_seconds": 20})

    assert replaced.limit_seconds == 20
    assert replaced.final_message == "DEFAULT END"


@pytest.mark.asyncio
async def test_reset_to_defaults(config):
    service = ConfigService(config)
    await service.update({"font_family": "Courier"})

    reset = await service.reset_to_defaults()

    assert reset == config
    assert service.get_config().font_family == "Arial"


@pytest.mark.asyncio
async def test_edits_are_saved_and_restored(tmp_path, config):
    state_path = tmp_path / "state" / "state.json"
    service = ConfigService(config, state_path=state_path, save_on_change=True, save_delay=0.01)

    await service.update({"limit_seconds": 42, "final_message": "BYE"})
    await asyncio.sleep(0.05)

    saved = json.loads(state_path.read_text(encoding="utf-8"))
    assert saved["timer"]["limit_seconds"] == 42

    restored = ConfigService(config, state_path=state_path)
    assert restored.get_config().limit_seconds == 42
    assert restored.get_config().final_message == "BYE"
    assert restored.defaults == config


@pytest.mark.asyncio
async def test_flush_writes_pending_save(tmp_path, config):
    state_path = tmp_path / "state.json"
    service = ConfigService(config, state_path=state_path, save_on_change=True, save_delay=10)

    await service.update({"font_size": 64})
    assert not state_path.exists()

    await service.flush()
    assert json.loads(state_path.read_text(encoding="utf-8"))["timer"]["font_size"] == 64


def test_unreadable_state_file_is_ignored(tmp_path, config):
    state_path = tmp_path / "state.json"
    state_path.write_text("{ not json", encoding="utf-8")

    service = ConfigService(config, state_path=state_path)
    assert service.get_config() == config
