"""Run the interactive mixer."""

import logging
import sys
from pathlib import Path
from typing import Optional

import click

from sessionmixer.core import Dispatcher, GangAssembler, SessionMixer
from sessionmixer.models import MixerConfig

from ..support import echo_error, open_provider

logger = logging.getLogger(__name__)


@click.command(name="run")
@click.option(
    '--config', '-c', 'config_path',
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help='Session file (default: ~/.config/sessionmixer/session.yaml)'
)
@click.option(
    '--simulate',
    is_flag=True,
    help='Use an in-memory card providing the configured controls'
)
@click.option(
    '--frame-rate',
    type=click.FloatRange(min=1.0, max=120.0),
    default=30.0,
    show_default=True,
    help='Screen refreshes per second'
)
@click.pass_context
def run(ctx, config_path: Optional[Path], simulate: bool, frame_rate: float):
    """Run the interactive session mixer."""
    # Lazy import keeps 'controls' and 'config' commands light
    from sessionmixer.tui import MixerApp

    log_path = ctx.obj.get("log_path") if ctx.obj else None
    provider = None
    dispatcher = None

    try:
        config = MixerConfig.load(config_path)
        provider = open_provider(config, simulate)

        gangs = GangAssembler(provider, config).load_gangs()

        dispatcher = Dispatcher(provider, gangs)
        dispatcher.start()

        mixer = SessionMixer(provider, config, gangs, dispatcher)
        MixerApp(mixer, frame_rate=frame_rate).run()

        if dispatcher.failure is not None:
            echo_error(dispatcher.failure, log_path)
            sys.exit(1)

    except KeyboardInterrupt:
        logger.info("Mixer interrupted by user")
        click.echo("\nShutting down...", err=True)
    except Exception as e:
        logger.exception("Error running mixer")
        echo_error(e, log_path)
        sys.exit(1)
    finally:
        if dispatcher is not None:
            dispatcher.stop()
        if provider is not None:
            provider.close()
