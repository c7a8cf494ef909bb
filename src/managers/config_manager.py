"""
Config Manager

Main configuration manager with include system support.
Loads modular YAML files and builds typed settings for the timer,
the preview runtime, the API server and logging.
"""

import math
import yaml
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional
from models.enums import LogLevel
from models.timer_config import TimerConfig
from utils.logger import get_logger, LogCategory
from utils.parsing import to_bool

log = get_logger().for_category(LogCategory.CONFIG)

SRC_DIR = Path(__file__).resolve().parent.parent


@dataclass(frozen=True)
class PreviewSettings:
    """Preview runtime settings (cadence intervals, config persistence)"""
    tick_interval: float = 1.0
    blink_interval: float = 0.5
    persist_config: bool = False
    state_file: str = "state/state.json"


@dataclass(frozen=True)
class APISettings:
    """FastAPI / uvicorn settings"""
    host: str = "0.0.0.0"
    port: int = 8000
    docs_enabled: bool = True
    cors_origins: List[str] = field(default_factory=lambda: [
        "http://localhost:3000",
        "http://localhost:5173",
        "http://127.0.0.1:3000",
        "http://127.0.0.1:5173",
    ])


@dataclass(frozen=True)
class LoggingSettings:
    level: LogLevel = LogLevel.INFO
    use_colors: bool = True


class ConfigManager:
    """
    Main configuration manager with include system support

    Loads config.yaml and processes include: directive to load modular YAML files.
    Falls back to factory_defaults.yaml when the main config cannot be loaded.

    Example:
        config = ConfigManager()
        config.load()

        config.timer_config        # TimerConfig (normalized)
        config.available_fonts     # ["Arial", "Courier", ...]
        config.preview_settings.blink_interval
    """

    def __init__(self, config_path="config/config.yaml", defaults_path="config/factory_defaults.yaml", base_dir: Optional[Path] = None):
        """
        Initialize ConfigManager

        Args:
            config_path: Path to main config.yaml (relative to base_dir)
            defaults_path: Path to factory defaults fallback (relative to base_dir)
            base_dir: Directory paths are resolved against (default: src/)
        """
        self.base_dir = Path(base_dir) if base_dir else SRC_DIR
        self.config_path = Path(config_path)
        self.factory_defaults_path = Path(defaults_path)
        self.data: Dict[str, Any] = {}

        self.timer_config: TimerConfig = TimerConfig()
        self.available_fonts: List[str] = []
        self.preview_settings: PreviewSettings = PreviewSettings()
        self.api_settings: APISettings = APISettings()
        self.logging_settings: LoggingSettings = LoggingSettings()

    def load(self) -> Dict[str, Any]:
        """
        Load YAML configuration with include system support

        Process:
        1. Load main config.yaml
        2. If it has 'include:' list, load and merge those files
        3. Otherwise treat as monolithic config
        4. Fallback to factory defaults on failure
        5. Build typed settings

        Returns:
            Merged config data dict
        """
        try:
            full_path = self.base_dir / self.config_path

            with open(full_path, "r", encoding="utf-8") as f:
                main_config = yaml.safe_load(f) or {}

            if 'include' in main_config:
                log.info("Using include-based configuration")
                self.data = self._load_with_includes(main_config['include'], full_path.parent)
            else:
                log.info("Using monolithic configuration")
                self.data = main_config

        except Exception as ex:
            log.error("Failed to load config.yaml", error=str(ex), error_type=type(ex).__name__)
            log.warn("Falling back to factory defaults")

            defaults_path = self.base_dir / self.factory_defaults_path
            with open(defaults_path, "r", encoding="utf-8") as f:
                self.data = yaml.safe_load(f) or {}

        self._build_settings()

        return self.data

    def _load_with_includes(self, include_list: List[str], config_dir: Path) -> Dict:
        """
        Load and merge multiple YAML files from include list

        Args:
            include_list: List of filenames to load (e.g., ["timer.yaml", "fonts.yaml"])
            config_dir: Directory containing config files

        Returns:
            Merged config dict (later files override earlier top-level keys)
        """
        merged = {}

        for filename in include_list:
            filepath = config_dir / filename
            try:
                with open(filepath, 'r', encoding='utf-8') as f:
                    file_data = yaml.safe_load(f)
                    if file_data:
                        merged.update(file_data)
                        log.info(f"Loaded {filename}", keys=str(list(file_data.keys())))
            except FileNotFoundError:
                log.error(f"File not found: {filename}")
                raise
            except Exception as ex:
                log.error(f"Error loading {filename}", error=str(ex))
                raise

        log.info("Config merge complete", total_keys=len(merged), keys=str(list(merged.keys())))
        return merged

    # ===== Typed settings =====

    def _build_settings(self) -> None:
        self.timer_config = TimerConfig.from_dict(self.data.get("timer") or {})
        self.available_fonts = self._parse_fonts(self.data.get("fonts") or [])
        self.preview_settings = self._parse_preview(self.data.get("preview") or {})
        self.api_settings = self._parse_api(self.data.get("api") or {})
        self.logging_settings = self._parse_logging(self.data.get("logging") or {})

        log.info(
            "Timer config loaded",
            limit=f"{self.timer_config.limit_seconds}s" if self.timer_config.limit_enabled else "off",
            font=f"{self.timer_config.font_family} {self.timer_config.font_size}px",
            fonts=len(self.available_fonts)
        )

    def _parse_fonts(self, fonts_raw: Any) -> List[str]:
        """Deduplicated, alphabetically sorted; always contains the configured font"""
        if not isinstance(fonts_raw, list):
            log.warn("fonts must be a list, ignoring", value=str(fonts_raw))
            fonts_raw = []

        names = {str(f).strip() for f in fonts_raw if str(f).strip()}
        names.add(self.timer_config.font_family)
        return sorted(names, key=str.lower)

    def fonts_including(self, font_family: str) -> List[str]:
        """Configured fonts plus font_family (the live font stays selectable)"""
        if font_family in self.available_fonts:
            return list(self.available_fonts)
        return sorted([*self.available_fonts, font_family], key=str.lower)

    def _parse_preview(self, raw: Dict[str, Any]) -> PreviewSettings:
        defaults = PreviewSettings()
        tick = self._positive_float(raw.get("tick_interval"), defaults.tick_interval, "preview.tick_interval")
        blink = self._positive_float(raw.get("blink_interval"), defaults.blink_interval, "preview.blink_interval")
        return PreviewSettings(
            tick_interval=tick,
            blink_interval=blink,
            persist_config=to_bool(raw.get("persist_config"), defaults.persist_config),
            state_file=str(raw.get("state_file", defaults.state_file)),
        )

    def _parse_api(self, raw: Dict[str, Any]) -> APISettings:
        defaults = APISettings()
        origins = raw.get("cors_origins", defaults.cors_origins)
        if not isinstance(origins, list):
            log.warn("api.cors_origins must be a list, using defaults")
            origins = defaults.cors_origins

        try:
            port = int(raw.get("port", defaults.port))
        except (TypeError, ValueError):
            log.warn("Invalid api.port, using default", value=str(raw.get("port")))
            port = defaults.port

        return APISettings(
            host=str(raw.get("host", defaults.host)),
            port=port,
            docs_enabled=to_bool(raw.get("docs_enabled"), defaults.docs_enabled),
            cors_origins=[str(o) for o in origins],
        )

    def _parse_logging(self, raw: Dict[str, Any]) -> LoggingSettings:
        level_name = str(raw.get("level", "INFO")).upper()
        try:
            level = LogLevel[level_name]
        except KeyError:
            log.warn(f"Unknown log level '{level_name}', using INFO")
            level = LogLevel.INFO
        return LoggingSettings(level=level, use_colors=to_bool(raw.get("use_colors"), True))

    @staticmethod
    def _positive_float(value: Any, default: float, name: str) -> float:
        if value is None:
            return default
        try:
            result = float(value)
        except (TypeError, ValueError, OverflowError):
            log.warn(f"Invalid {name}, using default", value=str(value))
            return default
        if not math.isfinite(result) or result <= 0:
            log.warn(f"{name} must be a positive number, using default", value=str(value))
            return default
        return result

    def resolve_path(self, relative: str) -> Path:
        """Resolve a config-relative path (e.g. preview.state_file)"""
        path = Path(relative)
        return path if path.is_absolute() else self.base_dir / path
