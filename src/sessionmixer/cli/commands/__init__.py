"""CLI commands for sessionmixer."""

from .config import config
from .controls import controls_group
from .run import run

__all__ = ["config", "controls_group", "run"]
