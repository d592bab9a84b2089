"""Ganged faders: one logical control driving several hardware controls."""

import logging
from collections.abc import Sequence
from typing import Optional

from sessionmixer.exceptions import ConfigError, HardwareError, WriteError
from sessionmixer.hardware import ParameterBinding
from sessionmixer.models import Color, DisplayUnit, GangMode

from .atomic import AtomicInt
from .channel import Channel
from .levels import level_to_color
from .taper import LinearTaper, make_taper

logger = logging.getLogger(__name__)


class Gang:
    """
    A named fader bound to one or more channels.

    In mirror mode every channel receives the identical raw value, so the
    gang's range is taken from the first channel and all channels are
    assumed range-compatible. Optional read-only level bindings tint the
    fader with the current peak signal.

    Example:
        ```python
        gang = Gang("DAW 1/2", "db", GangMode.MIRROR, [left, right], taper_range_db=72)
        gang.handle_ui_change(32768)        # writes both channels
        gang.handle_hw_change(left.parameter_id, 40000)  # external move
        ```
    """

    def __init__(
        self,
        name: str,
        unit: str | DisplayUnit,
        mode: GangMode,
        channels: Sequence[Channel],
        level_bindings: Sequence[ParameterBinding] = (),
        taper_range_db: Optional[float] = None,
    ):
        """
        Args:
            name: Fader label
            unit: Display unit ("db" or "raw")
            mode: Synchronization mode
            channels: Member channels, at least one
            level_bindings: Read-only meters (may be empty)
            taper_range_db: Decibel taper range, None for the unit's default

        Raises:
            ConfigError: If ``channels`` is empty
        """
        if len(channels) < 1:
            raise ConfigError(
                user_message=f"Gang '{name}' must have at least 1 channel",
                recovery_hint="Add at least one entry under 'controls' for this gang.",
            )

        self._name = name
        self._unit = DisplayUnit(unit)
        self._mode = GangMode(mode)
        self._channels = tuple(channels)
        self._level_bindings = tuple(level_bindings)
        self._taper_range_db = taper_range_db

        self._min = self._channels[0].min
        self._max = self._channels[0].max
        self._last_value = AtomicInt(self._channels[0].get_current_value())

        self._level_min = 0
        self._level_max = 0
        if self._level_bindings:
            self._level_min = self._level_bindings[0].min
            self._level_max = self._level_bindings[0].max

        self._taper = make_taper(self._unit, taper_range_db, self._min, self._max)

        if not self._mode.is_implemented:
            logger.warning(
                f"Gang '{name}': {self._mode.value} mode is not implemented yet, using mirror mode"
            )

    # =================================================================
    # Properties
    # =================================================================

    @property
    def name(self) -> str:
        return self._name

    @property
    def unit(self) -> DisplayUnit:
        return self._unit

    @property
    def mode(self) -> GangMode:
        return self._mode

    @property
    def channels(self) -> tuple[Channel, ...]:
        return self._channels

    @property
    def level_bindings(self) -> tuple[ParameterBinding, ...]:
        return self._level_bindings

    @property
    def min(self) -> int:
        return self._min

    @property
    def max(self) -> int:
        return self._max

    @property
    def level_min(self) -> int:
        return self._level_min

    @property
    def level_max(self) -> int:
        return self._level_max

    @property
    def taper(self) -> LinearTaper:
        return self._taper

    @property
    def taper_range_db(self) -> Optional[float]:
        return self._taper_range_db

    @property
    def has_levels(self) -> bool:
        return len(self._level_bindings) > 0

    # =================================================================
    # UI -> hardware
    # =================================================================

    def handle_ui_change(self, new_value: int) -> None:
        """
        Apply a new fader value from the user to every channel.

        A write failure on one channel does not stop the others; after the
        broadcast the last failure is raised.

        Raises:
            WriteError: The last channel write that failed
        """
        new_value = max(self._min, min(self._max, new_value))
        if self._last_value.load() == new_value:
            return

        self._last_value.store(new_value)

        # relative and scaled modes fall back to mirror until implemented
        self._handle_mirror_mode(new_value)

    def _handle_mirror_mode(self, value: int) -> None:
        last_error: Optional[WriteError] = None

        for channel in self._channels:
            try:
                channel.handle_ui_change(value)
            except WriteError as e:
                logger.warning(f"Gang '{self._name}': write to {channel.display_name} failed")
                last_error = e

        if last_error is not None:
            raise last_error

    # =================================================================
    # Hardware -> UI
    # =================================================================

    def owns(self, parameter_id: int) -> bool:
        """Whether a hardware parameter is one of this gang's channels."""
        return any(channel.parameter_id == parameter_id for channel in self._channels)

    def handle_hw_change(self, parameter_id: int, new_value: int) -> None:
        """
        Fold a hardware change into the gang.

        The reporting channel's value becomes the gang value directly, since
        in mirror mode all channels carry the same value. Unknown parameter
        ids are ignored.
        """
        for channel in self._channels:
            if channel.parameter_id == parameter_id:
                channel.handle_hw_change(new_value)
                self._last_value.store(new_value)
                return

    # =================================================================
    # Display
    # =================================================================

    def get_current_value(self) -> int:
        return self._last_value.load()

    def format_value(self, raw: Optional[int] = None) -> str:
        """Label for a raw value (the current value by default)."""
        if raw is None:
            raw = self.get_current_value()
        return self._taper.format(raw)

    @property
    def position(self) -> float:
        """Current value as 0..1 fader travel."""
        return self._taper.to_normalized(self.get_current_value())

    def get_max_level(self) -> Optional[int]:
        """
        Peak reading across all level bindings.

        A failed read counts as no signal for that meter.

        Returns:
            The peak value, or None when there are no level bindings or
            none of them could be read
        """
        if not self._level_bindings:
            return None

        peak: Optional[int] = None
        for binding in self._level_bindings:
            try:
                value = binding.read()
            except HardwareError as e:
                logger.debug(f"Level read failed for {binding.name}: {e.technical_message}")
                continue
            if peak is None or value > peak:
                peak = value
        return peak

    def get_level_color(self) -> Optional[Color]:
        """Fader tint for the current peak level, or None without a reading."""
        level = self.get_max_level()
        if level is None:
            return None
        return level_to_color(level, self._level_min, self._level_max)

    def __repr__(self) -> str:
        return f"Gang({self._name!r}, channels={len(self._channels)}, value={self.get_current_value()})"
