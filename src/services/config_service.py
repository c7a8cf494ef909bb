"""Config service - Owns the live TimerConfig edited by the configuration editor"""

import asyncio
import json
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from models.events import ConfigChangedEvent
from models.timer_config import TimerConfig
from services.event_bus import EventBus
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.CONFIG)


class ConfigService:
    """
    Holds the current TimerConfig snapshot.

    Every edit produces a new immutable TimerConfig; readers call
    get_config() each time they need it and never keep a copy around.

    Edits are optionally persisted to a JSON state file (debounced), and
    restored on the next start on top of the YAML defaults.

    Example:
        service = ConfigService(defaults, event_bus)
        await service.update({"limitSeconds": 90, "color5s": "#ff00ff"})
        service.get_config().limit_seconds   # 90
    """

    def __init__(
        self,
        defaults: TimerConfig,
        event_bus: Optional[EventBus] = None,
        state_path: Optional[Path] = None,
        save_on_change: bool = False,
        save_delay: float = 0.5,
    ):
        """
        Args:
            defaults: Config from YAML (factory defaults for reset)
            event_bus: Bus for ConfigChangedEvent (optional)
            state_path: JSON file for persisted edits
            save_on_change: Persist edits to state_path
            save_delay: Debounce window for saves (seconds)
        """
        self._defaults = defaults
        self._event_bus = event_bus
        self._state_path = Path(state_path) if state_path else None
        self._save_on_change = save_on_change and self._state_path is not None
        self._save_delay = save_delay
        self._save_task: Optional[asyncio.Task] = None

        self._config = self._restore() or defaults

    # === Public API ===

    def get_config(self) -> TimerConfig:
        return self._config

    @property
    def defaults(self) -> TimerConfig:
        return self._defaults

    async def update(self, changes: Mapping[str, Any]) -> TimerConfig:
        """
        Apply a partial edit

        Args:
            changes: Field -> value (snake_case or camelCase); malformed
                values are normalized, unknown keys ignored

        Returns:
            The new live config
        """
        new_config = self._config.with_changes(**dict(changes))
        await self._apply(new_config)
        return new_config

    async def replace(self, data: Mapping[str, Any]) -> TimerConfig:
        """Replace the whole config; missing fields take the defaults"""
        new_config = TimerConfig.from_dict(data, fallback=self._defaults)
        await self._apply(new_config)
        return new_config

    async def reset_to_defaults(self) -> TimerConfig:
        await self._apply(self._defaults)
        return self._defaults

    # === Internal ===

    async def _apply(self, new_config: TimerConfig) -> None:
        old = self._config.to_dict()
        new = new_config.to_dict()
        changed = [name for name in new if old.get(name) != new[name]]

        self._config = new_config

        if not changed:
            log.debug("Config edit without changes")
            return

        log.info("Config updated", fields=", ".join(changed))

        if self._save_on_change:
            self._queue_save()

        if self._event_bus:
            await self._event_bus.publish(ConfigChangedEvent(new_config, changed))

    def _restore(self) -> Optional[TimerConfig]:
        if not self._state_path or not self._state_path.exists():
            return None

        try:
            with open(self._state_path, "r", encoding="utf-8") as f:
                state = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            log.warn(f"Ignoring unreadable config state: {e}", path=str(self._state_path))
            return None

        timer_data = state.get("timer") if isinstance(state, dict) else None
        if not isinstance(timer_data, dict):
            return None

        log.info("Restored edited config from state file", path=str(self._state_path))
        return TimerConfig.from_dict(timer_data, fallback=self._defaults)

    def save_now(self) -> None:
        """Write the current config to the state file"""
        if not self._state_path:
            return

        self._state_path.parent.mkdir(parents=True, exist_ok=True)
        with open(self._state_path, "w", encoding="utf-8") as f:
            json.dump({"timer": self._config.to_dict()}, f, indent=2)
        log.debug("Config state saved", path=str(self._state_path))

    async def _debounced_save(self) -> None:
        await asyncio.sleep(self._save_delay)
        try:
            self.save_now()
        except OSError as e:
            log.error(f"Failed to save config state: {e}")

    def _queue_save(self) -> None:
        if self._save_task and not self._save_task.done():
            self._save_task.cancel()
        self._save_task = asyncio.create_task(self._debounced_save())

    async def flush(self) -> None:
        """Write any pending debounced save immediately (shutdown)"""
        if self._save_task and not self._save_task.done():
            self._save_task.cancel()
            self._save_task = None
            self.save_now()

    def to_dict(self) -> Dict[str, Any]:
        return self._config.to_dict()
