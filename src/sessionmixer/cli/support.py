"""Helpers shared by CLI commands."""

import logging
from pathlib import Path
from typing import Optional

import click

from sessionmixer.exceptions import format_error_for_display
from sessionmixer.hardware import AlsaCard, ControlProvider, SimulatedCard
from sessionmixer.models import MixerConfig

logger = logging.getLogger(__name__)


def open_provider(config: MixerConfig, simulate: bool) -> ControlProvider:
    """Open the card named in the config, or a simulated one providing its controls."""
    if simulate:
        card = SimulatedCard.from_config(config)
        card.start_meters()
        return card
    logger.info(f"Opening ALSA card {config.card}")
    return AlsaCard(config.card)


def echo_error(error: Exception, log_path: Optional[Path] = None) -> None:
    """Show a clean error message with recovery hint, without traceback."""
    user_message, recovery_hint = format_error_for_display(error)

    click.echo("\n" + "=" * 70, err=True)
    click.echo(f"ERROR: {user_message}", err=True)
    click.echo("=" * 70, err=True)

    if recovery_hint:
        click.echo(f"\n{recovery_hint}", err=True)

    if log_path:
        click.echo(f"\nFor details, check the log file: {log_path}", err=True)
