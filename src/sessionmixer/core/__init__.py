"""Bidirectional synchronization engine."""

from .assembler import GangAssembler
from .atomic import AtomicInt
from .channel import Channel
from .dispatcher import Dispatcher
from .gang import Gang
from .levels import SILENT_COLOR, level_to_color
from .mixer import FaderView, SessionMixer
from .taper import DecibelTaper, LinearTaper, make_taper

__all__ = [
    "AtomicInt",
    "Channel",
    "DecibelTaper",
    "Dispatcher",
    "FaderView",
    "Gang",
    "GangAssembler",
    "LinearTaper",
    "SILENT_COLOR",
    "SessionMixer",
    "level_to_color",
    "make_taper",
]
