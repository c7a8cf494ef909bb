"""
Utility functions for the progressive timer
"""

from .colors import (
    clamp_channel,
    hex_to_rgb,
    rgb_to_hex,
    rgb_to_gl,
)

__all__ = [
    'clamp_channel',
    'hex_to_rgb',
    'rgb_to_hex',
    'rgb_to_gl',
]
