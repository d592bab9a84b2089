"""A single hardware control as seen by the mixer."""

import logging
import math
from typing import Optional

from sessionmixer.exceptions import HardwareError, InitError, WriteError
from sessionmixer.hardware import ParameterBinding

from .atomic import AtomicInt

logger = logging.getLogger(__name__)

CHANNEL_DB_MIN = -60.0
CHANNEL_DB_MAX = 12.0


class Channel:
    """
    One hardware control with cached UI-side and hardware-side values.

    The caches are not authoritative: the hardware is. Both start from a
    single hardware read and are then updated independently by the UI path
    (``handle_ui_change``) and the event path (``handle_hw_change``).

    The equality check in ``handle_hw_change`` breaks the feedback loop: a
    write issued by the UI comes back as a hardware event with the same
    value, finds ``last_hw_value`` already equal and stops there.
    """

    def __init__(self, binding: Optional[ParameterBinding], display_name: str, unit: str = "raw"):
        """
        Create a channel and read its initial value from hardware.

        Raises:
            InitError: If the binding is missing or the initial read fails
        """
        if binding is None:
            raise InitError(None)

        try:
            initial_value = binding.read()
        except HardwareError as e:
            raise InitError(binding.name, e) from e

        self._binding = binding
        self._display_name = display_name
        self._unit = unit
        self._last_ui_value = AtomicInt(initial_value)
        self._last_hw_value = AtomicInt(initial_value)

    @property
    def binding(self) -> ParameterBinding:
        return self._binding

    @property
    def parameter_id(self) -> int:
        return self._binding.id

    @property
    def display_name(self) -> str:
        return self._display_name

    @property
    def unit(self) -> str:
        return self._unit

    @property
    def min(self) -> int:
        return self._binding.min

    @property
    def max(self) -> int:
        return self._binding.max

    @property
    def last_ui_value(self) -> int:
        return self._last_ui_value.load()

    @property
    def last_hw_value(self) -> int:
        return self._last_hw_value.load()

    def handle_ui_change(self, new_value: int) -> None:
        """
        Apply a value chosen by the user.

        Writes to hardware immediately when the value differs from the last
        UI value; an unchanged value is a no-op. The cache keeps the user's
        value even if the write fails.

        Raises:
            WriteError: If the hardware rejected the write
        """
        new_value = max(self.min, min(self.max, new_value))
        if self._last_ui_value.load() == new_value:
            return

        self._last_ui_value.store(new_value)

        try:
            self._binding.write(new_value)
        except HardwareError as e:
            logger.warning(f"Failed to write {new_value} to {self._binding.name}: {e.technical_message}")
            raise WriteError(self._binding.id, self._binding.name, e) from e

    def handle_hw_change(self, new_value: int) -> None:
        """Apply a value reported by hardware. Hardware wins over the UI cache."""
        if self._last_hw_value.load() == new_value:
            return

        self._last_hw_value.store(new_value)
        self._last_ui_value.store(new_value)

    def get_current_value(self) -> int:
        """Value to display this frame."""
        return self._last_ui_value.load()

    current_value = property(get_current_value)

    def to_db(self, raw_value: int) -> float:
        """Raw value to dB on a generic linear -60..+12 dB span."""
        if self.max == self.min:
            return 0.0
        normalized = (raw_value - self.min) / (self.max - self.min)
        return normalized * (CHANNEL_DB_MAX - CHANNEL_DB_MIN) + CHANNEL_DB_MIN

    def from_db(self, db: float) -> int:
        """Inverse of ``to_db``; input is clamped to -60..+12 dB."""
        db = max(CHANNEL_DB_MIN, min(CHANNEL_DB_MAX, db))
        normalized = (db - CHANNEL_DB_MIN) / (CHANNEL_DB_MAX - CHANNEL_DB_MIN)
        return math.floor(normalized * (self.max - self.min) + 0.5) + self.min

    def __repr__(self) -> str:
        return f"Channel({self._display_name!r}, value={self.get_current_value()})"
