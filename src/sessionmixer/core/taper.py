"""Fader tapers: raw hardware value <-> fader position and display label.

Fader travel always moves in the hardware's raw domain (or its normalized
0..1 form). Decibels are only ever computed for labels, never stored, so
dragging a fader cannot accumulate rounding from dB round-trips.
"""

import math
from typing import Optional, Protocol, Union

from sessionmixer.models import DisplayUnit

HEADROOM_DB = 12.0
"""Gain at full scale. Raw ``max`` is +12 dB in the card's mixer format."""

DEFAULT_RANGE_DB = 72.0

SILENT = float("-inf")
SILENT_LABEL = "-∞ dB"


class Taper(Protocol):
    """Conversion pair used by a fader."""

    min: int
    max: int

    def to_raw(self, position: float) -> int:
        ...

    def to_normalized(self, raw: int) -> float:
        ...

    def format(self, raw: int) -> str:
        ...


class LinearTaper:
    """Position maps straight onto the raw range; labels show the raw integer."""

    def __init__(self, min: int, max: int):
        self.min = min
        self.max = max

    def to_raw(self, position: float) -> int:
        """Normalized position (clamped to 0..1) to raw value."""
        position = max(0.0, min(1.0, position))
        return round(position * (self.max - self.min)) + self.min

    def to_normalized(self, raw: int) -> float:
        if self.max == self.min:
            return 0.0
        return (raw - self.min) / (self.max - self.min)

    def format(self, raw: int) -> str:
        return f"{raw}"


class DecibelTaper(LinearTaper):
    """
    Linear travel with decibel labels.

    ``db = 20*log10(raw/max) + 12``: raw ``max`` reads +12 dB and anything at
    or below ``min``, or quieter than ``12 - range_db``, reads as silent.

    Args:
        min: Raw lower bound
        max: Raw upper bound
        range_db: Audible window below full scale (must be positive)
    """

    def __init__(self, min: int, max: int, range_db: float = DEFAULT_RANGE_DB):
        if range_db <= 0:
            raise ValueError(f"range_db must be positive, got {range_db}")
        super().__init__(min, max)
        self.range_db = range_db

    @property
    def floor_db(self) -> float:
        return HEADROOM_DB - self.range_db

    def to_db(self, raw: Union[int, float]) -> float:
        """Raw value to display decibels, or ``-inf`` for silence."""
        if raw <= self.min or raw <= 0 or self.max <= 0:
            return SILENT
        if raw >= self.max:
            return HEADROOM_DB
        db = 20.0 * math.log10(raw / self.max) + HEADROOM_DB
        if db < self.floor_db:
            return SILENT
        return db

    def format(self, raw: int) -> str:
        db = self.to_db(raw)
        if db == SILENT:
            return SILENT_LABEL
        return f"{db:.2f} dB"


def make_taper(
    unit: Union[DisplayUnit, str],
    range_db: Optional[float],
    min: int,
    max: int,
) -> LinearTaper:
    """
    Select the taper for a fader.

    A configured ``range_db`` selects the decibel taper explicitly; a ``db``
    unit without a range uses the default 72 dB window. Everything else is
    linear.
    """
    if range_db is not None:
        return DecibelTaper(min, max, range_db)
    if DisplayUnit(unit) is DisplayUnit.DB:
        return DecibelTaper(min, max, DEFAULT_RANGE_DB)
    return LinearTaper(min, max)
