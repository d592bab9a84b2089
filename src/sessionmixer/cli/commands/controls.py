"""Hardware control listing."""

import logging
import sys
from pathlib import Path
from typing import Optional

import click

from sessionmixer.exceptions import SessionMixerError
from sessionmixer.hardware import AlsaCard, ControlProvider
from sessionmixer.models import MixerConfig

from ..support import echo_error, open_provider

logger = logging.getLogger(__name__)


@click.group(name="controls")
def controls_group():
    """Hardware control commands."""
    pass


@controls_group.command(name="list")
@click.option('--card', type=int, default=None, help='ALSA card index (default: from session file)')
@click.option(
    '--config', '-c', 'config_path',
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help='Session file used for the card index and --simulate'
)
@click.option('--simulate', is_flag=True, help='List the controls of a simulated card')
@click.option('--all', 'show_all', is_flag=True, help='Include non-integer controls')
def list_controls(card: Optional[int], config_path: Optional[Path], simulate: bool, show_all: bool):
    """List mixer controls available on the card."""
    provider: Optional[ControlProvider] = None
    try:
        if card is not None and not simulate:
            provider = AlsaCard(card)
        else:
            provider = open_provider(MixerConfig.load(config_path), simulate)

        parameters = provider.list_parameters()
        if not show_all:
            parameters = [p for p in parameters if p.type.is_integer]

        click.echo(f"Controls on card {provider.card}:\n")
        if not parameters:
            click.echo("  No controls found.")
        for parameter in parameters:
            access = "rw" if parameter.writable else "r-"
            click.echo(
                f"  #{parameter.id:<5} {access}  [{parameter.min}..{parameter.max}]  {parameter.name}"
            )

    except SessionMixerError as e:
        logger.error(f"Listing controls failed: {e.technical_message}")
        echo_error(e)
        sys.exit(1)
    finally:
        if provider is not None:
            provider.close()
