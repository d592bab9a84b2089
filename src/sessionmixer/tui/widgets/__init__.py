"""TUI widgets."""

from .fader import FaderWidget, render_bar
from .status_bar import StatusBar

__all__ = ["FaderWidget", "StatusBar", "render_bar"]
