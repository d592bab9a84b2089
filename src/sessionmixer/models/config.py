"""Session configuration model."""

import logging
from pathlib import Path

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from sessionmixer.exceptions import (
    ConfigError,
    ConfigFileInvalidError,
    ConfigFileNotFoundError,
    wrap_pydantic_error,
)

from .enums import DisplayUnit, GangMode

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path.home() / ".config" / "sessionmixer" / "session.yaml"


class GangControlConfig(BaseModel):
    """One logical fader and the hardware controls it drives."""

    name: str = Field(min_length=1, description="Fader label")
    controls: list[str] = Field(
        min_length=1,
        description="Hardware control names moved together by this fader",
    )
    unit: DisplayUnit = Field(default=DisplayUnit.RAW, description="Display unit (db or raw)")
    taper_db: float | None = Field(
        default=None,
        gt=0,
        description="Decibel range of the fader taper; omit for a linear taper",
    )
    levels: list[str] = Field(
        default_factory=list,
        description="Read-only level meter controls used to tint the fader",
    )
    mode: GangMode = Field(default=GangMode.MIRROR, description="Gang synchronization mode")

    @field_validator("controls", "levels")
    @classmethod
    def validate_names(cls, names: list[str]) -> list[str]:
        """Reject blank control names."""
        for name in names:
            if not name.strip():
                raise ValueError("control names must not be empty")
        return names


class MixerConfig(BaseModel):
    """Session configuration: which card to open and how to gang its controls."""

    card: int = Field(ge=0, description="ALSA card index")
    gang_controls: list[GangControlConfig] = Field(
        default_factory=list,
        description="Faders shown in the mixer, left to right",
    )

    @classmethod
    def load(cls, path: Path | None = None) -> "MixerConfig":
        """
        Load and validate a session file.

        Args:
            path: Path to the YAML file. If None, uses
                  ~/.config/sessionmixer/session.yaml.

        Raises:
            ConfigFileNotFoundError: If the file does not exist
            ConfigFileInvalidError: If the file has invalid YAML syntax
            ConfigValidationError: If values fail validation
        """
        if path is None:
            path = DEFAULT_CONFIG_PATH

        if not path.exists():
            raise ConfigFileNotFoundError(str(path))

        try:
            data = yaml.safe_load(path.read_text(encoding="utf-8"))
        except yaml.YAMLError as e:
            logger.error(f"YAML error loading {path}: {e}")
            raise ConfigFileInvalidError(str(path), str(e)) from e
        except OSError as e:
            raise ConfigError(
                user_message=f"Cannot read configuration file {path}",
                technical_message=f"Cannot read {path}: {e}",
            ) from e

        if data is None:
            raise ConfigFileInvalidError(str(path), "File is empty")
        if not isinstance(data, dict):
            raise ConfigFileInvalidError(
                str(path), f"Expected a mapping at top level, got {type(data).__name__}"
            )

        try:
            config = cls.model_validate(data)
        except ValidationError as e:
            logger.error(f"Validation error loading {path}: {e}")
            raise wrap_pydantic_error(e, str(path)) from e

        logger.debug(f"Loaded session config from {path} ({len(config.gang_controls)} gangs)")
        return config

    def save(self, path: Path | None = None) -> None:
        """Write the configuration as YAML."""
        if path is None:
            path = DEFAULT_CONFIG_PATH

        path.parent.mkdir(parents=True, exist_ok=True)
        data = self.model_dump(mode="json", exclude_defaults=False)
        path.write_text(yaml.safe_dump(data, sort_keys=False), encoding="utf-8")
        logger.info(f"Saved session config to {path}")

    @classmethod
    def example(cls) -> "MixerConfig":
        """Example session for a Scarlett-style interface, used by 'config init'."""
        return cls(
            card=1,
            gang_controls=[
                GangControlConfig(
                    name="DAW 1/2",
                    controls=[
                        "Mix A Input 01 Playback Volume",
                        "Mix B Input 02 Playback Volume",
                    ],
                    unit=DisplayUnit.DB,
                    taper_db=72.0,
                    levels=["Level Meter 01", "Level Meter 02"],
                ),
                GangControlConfig(
                    name="Mic 1",
                    controls=[
                        "Mix A Input 05 Playback Volume",
                        "Mix B Input 05 Playback Volume",
                    ],
                    unit=DisplayUnit.DB,
                    taper_db=72.0,
                ),
            ],
        )
