"""Data models for the session mixer."""

from .color import Color
from .config import DEFAULT_CONFIG_PATH, GangControlConfig, MixerConfig
from .enums import DisplayUnit, GangMode, ParameterType

__all__ = [
    "DEFAULT_CONFIG_PATH",
    # Models
    "Color",
    "GangControlConfig",
    "MixerConfig",
    # Enums
    "DisplayUnit",
    "GangMode",
    "ParameterType",
]
