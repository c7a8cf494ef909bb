import sys
from pathlib import Path

import pytest

# Set UTF-8 encoding for output (logger tree/level symbols)
if hasattr(sys.stdout, 'reconfigure') and sys.stdout.encoding != 'UTF-8':
    sys.stdout.reconfigure(encoding='utf-8')  # type: ignore

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from lifecycle.task_registry import TaskRegistry
from models.color import Color
from models.timer_config import TimerConfig


@pytest.fixture(autouse=True)
def fresh_task_registry():
    """Each test starts with an empty task registry"""
    TaskRegistry.reset_instance()
    yield
    TaskRegistry.reset_instance()


@pytest.fixture
def config():
    """Factory defaults: limit 300s, white/green/blue/yellow/red"""
    return TimerConfig()


@pytest.fixture
def short_config():
    """5 second limit with distinct colors per band"""
    return TimerConfig(
        limit_enabled=True,
        limit_seconds=5,
        final_message="DONE",
        final_message_blink=True,
        color_default=Color.from_hex("#ffffff"),
        color_30s=Color.from_hex("#00ff00"),
        color_15s=Color.from_hex("#0000ff"),
        color_10s=Color.from_hex("#ffff00"),
        color_5s=Color.from_hex("#ff0000"),
    )
