"""SessionMixer: ganged fader bank for hardware mixer controls."""

__version__ = "0.1.0"

from .core import Channel, Dispatcher, Gang, GangAssembler, SessionMixer

__all__ = [
    "Channel",
    "Dispatcher",
    "Gang",
    "GangAssembler",
    "SessionMixer",
]
