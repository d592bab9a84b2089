"""Enumerations for the session mixer."""

from enum import Enum


class GangMode(str, Enum):
    """How a gang keeps its member channels in step."""

    MIRROR = "mirror"  # Every channel receives the identical raw value
    RELATIVE = "relative"  # Keep offsets between channels (not implemented, behaves as mirror)
    SCALED = "scaled"  # Scale to each channel's range (not implemented, behaves as mirror)

    @property
    def is_implemented(self) -> bool:
        """Whether this mode has its own handler rather than the mirror fallback."""
        return self is GangMode.MIRROR


class DisplayUnit(str, Enum):
    """Unit used to label a fader value."""

    DB = "db"
    RAW = "raw"


class ParameterType(str, Enum):
    """Value classification of a hardware control element."""

    BOOLEAN = "boolean"
    INTEGER = "integer"
    INTEGER64 = "integer64"
    ENUMERATED = "enumerated"
    BYTES = "bytes"
    IEC958 = "iec958"

    @property
    def is_integer(self) -> bool:
        """Only integer-valued scalars can back a fader or a level meter."""
        return self in (ParameterType.INTEGER, ParameterType.INTEGER64)
