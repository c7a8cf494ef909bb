"""
Managers for configuration
"""

from .config_manager import ConfigManager, PreviewSettings, APISettings, LoggingSettings

__all__ = ['ConfigManager', 'PreviewSettings', 'APISettings', 'LoggingSettings']
