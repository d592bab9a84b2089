"""Builds gangs from the session configuration."""

import logging

from sessionmixer.exceptions import InitError, ParameterNotFoundError, ResolutionError
from sessionmixer.hardware import ControlProvider, ParameterBinding
from sessionmixer.models import GangControlConfig, MixerConfig

from .channel import Channel
from .gang import Gang

logger = logging.getLogger(__name__)


class GangAssembler:
    """
    Resolves configured control names against a provider and creates gangs.

    Runs once at startup, strictly in order. The first problem aborts the
    whole assembly; there is no partially-built mixer.
    """

    def __init__(self, provider: ControlProvider, config: MixerConfig):
        self._provider = provider
        self._config = config

    def load_gangs(self) -> list[Gang]:
        """
        Create one Gang per configured gang control.

        Raises:
            ResolutionError: A control is missing, read-only or not an integer
            InitError: A channel's initial hardware read failed
            ConfigError: A gang definition has no controls
        """
        gangs = [
            self._build_gang(index, gang_config)
            for index, gang_config in enumerate(self._config.gang_controls)
        ]
        logger.info(f"Assembled {len(gangs)} gangs on card {self._provider.card}")
        return gangs

    def _build_gang(self, index: int, gang_config: GangControlConfig) -> Gang:
        channels: list[Channel] = []
        for entry_index, control_name in enumerate(gang_config.controls):
            binding = self._resolve(index, gang_config.name, "control", entry_index, control_name)
            if not binding.writable:
                raise ResolutionError(
                    index, gang_config.name, "control", entry_index, control_name, "control is read-only"
                )

            try:
                channel = Channel(binding, f"{gang_config.name} [{control_name}]", gang_config.unit.value)
            except InitError as e:
                raise InitError(control_name, e.cause, gang_index=index, gang_name=gang_config.name) from e
            channels.append(channel)

        levels = [
            self._resolve(index, gang_config.name, "level", entry_index, level_name)
            for entry_index, level_name in enumerate(gang_config.levels)
        ]

        gang = Gang(
            gang_config.name,
            gang_config.unit,
            gang_config.mode,
            channels,
            level_bindings=levels,
            taper_range_db=gang_config.taper_db,
        )
        logger.debug(f"Gang {index} ({gang.name}): {len(channels)} channels, {len(levels)} levels")
        return gang

    def _resolve(
        self, gang_index: int, gang_name: str, kind: str, entry_index: int, name: str
    ) -> ParameterBinding:
        try:
            binding = self._provider.find_parameter(name)
        except ParameterNotFoundError as e:
            raise ResolutionError(
                gang_index, gang_name, kind, entry_index, name, "not found on hardware"
            ) from e

        if not binding.type.is_integer:
            raise ResolutionError(
                gang_index, gang_name, kind, entry_index, name, f"type {binding.type.value} not supported"
            )
        return binding
