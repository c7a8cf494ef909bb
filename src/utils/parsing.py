"""
Lenient parsing of scalar values from YAML, JSON and API payloads
"""

from typing import Any


def to_bool(value: Any, fallback: bool) -> bool:
    """
    Interpret a config value as a boolean

    Accepts bools, numbers and the usual strings ("true"/"false", "yes"/"no",
    "on"/"off", "1"/"0"). Anything else returns fallback.

    Example:
        to_bool("false", True)  # False
        to_bool("maybe", True)  # True
    """
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value != 0
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in ("true", "yes", "on", "1"):
            return True
        if lowered in ("false", "no", "off", "0", ""):
            return False
    return fallback
