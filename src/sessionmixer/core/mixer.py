"""Per-frame view of the mixer for a GUI."""

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Optional

from sessionmixer.exceptions import WriteError
from sessionmixer.hardware import ControlProvider
from sessionmixer.models import Color, MixerConfig

from .dispatcher import Dispatcher
from .gang import Gang

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FaderView:
    """Everything a GUI needs to draw one fader this frame."""

    index: int
    name: str
    value: int
    min: int
    max: int
    label: str
    position: float
    color: Optional[Color]


class SessionMixer:
    """
    The mixer as a GUI sees it.

    ``faders()`` is a pure read of the cached values and is meant to be
    called every frame. User input comes back through ``set_fader``; a write
    failure is logged and returned, the fader still shows the requested
    position.
    """

    def __init__(
        self,
        provider: ControlProvider,
        config: MixerConfig,
        gangs: Sequence[Gang],
        dispatcher: Optional[Dispatcher] = None,
    ):
        self._provider = provider
        self._config = config
        self._gangs = tuple(gangs)
        self._dispatcher = dispatcher

    @property
    def provider(self) -> ControlProvider:
        return self._provider

    @property
    def config(self) -> MixerConfig:
        return self._config

    @property
    def gangs(self) -> tuple[Gang, ...]:
        return self._gangs

    @property
    def dispatcher(self) -> Optional[Dispatcher]:
        return self._dispatcher

    @property
    def is_synchronized(self) -> bool:
        """True while hardware changes are being followed."""
        return self._dispatcher is not None and self._dispatcher.failure is None and self._dispatcher.is_running

    def faders(self) -> list[FaderView]:
        views = []
        for index, gang in enumerate(self._gangs):
            value = gang.get_current_value()
            views.append(
                FaderView(
                    index=index,
                    name=gang.name,
                    value=value,
                    min=gang.min,
                    max=gang.max,
                    label=gang.format_value(value),
                    position=gang.taper.to_normalized(value),
                    color=gang.get_level_color() if gang.has_levels else None,
                )
            )
        return views

    def set_fader(self, index: int, value: int) -> Optional[WriteError]:
        """
        Apply a user move of fader ``index``.

        Returns:
            The write error if any ganged channel rejected the value, else None
        """
        gang = self._gangs[index]
        try:
            gang.handle_ui_change(value)
        except WriteError as e:
            logger.warning(f"Fader '{gang.name}' set to {value} with errors: {e.technical_message}")
            return e
        return None

    def step_fader(self, index: int, fraction: float) -> Optional[WriteError]:
        """Move a fader by a fraction of its raw range (negative moves down)."""
        gang = self._gangs[index]
        step = round(fraction * (gang.max - gang.min))
        if step == 0:
            step = 1 if fraction > 0 else -1
        return self.set_fader(index, gang.get_current_value() + step)
