"""Terminal user interface."""

from .app import MixerApp

__all__ = ["MixerApp"]
