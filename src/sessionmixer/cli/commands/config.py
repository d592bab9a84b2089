"""
Session file commands.

Commands:
    - config show [--config PATH]       # Display gangs
    - config validate [--config PATH]   # Validate the session file
    - config init [--config PATH]       # Write an example session file
"""

import sys
from pathlib import Path
from typing import Optional

import click

from sessionmixer.exceptions import ConfigError
from sessionmixer.models import DEFAULT_CONFIG_PATH, MixerConfig

from ..support import echo_error

config_path_option = click.option(
    '--config', '-c', 'config_path',
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help='Session file (default: ~/.config/sessionmixer/session.yaml)'
)


def _load_or_exit(config_path: Optional[Path]) -> MixerConfig:
    try:
        return MixerConfig.load(config_path)
    except ConfigError as e:
        echo_error(e)
        sys.exit(1)


@click.group(name="config")
def config():
    """Manage the session file."""
    pass


@config.command(name="show")
@config_path_option
def show(config_path: Optional[Path]):
    """Display the configured gangs."""
    cfg = _load_or_exit(config_path)

    click.echo(f"Card: {cfg.card}")
    if not cfg.gang_controls:
        click.echo("\nNo gangs configured.")
        return

    for index, gang in enumerate(cfg.gang_controls):
        taper = f"{gang.taper_db:g} dB taper" if gang.taper_db is not None else "linear taper"
        click.echo(f"\n[{index}] {gang.name}  ({gang.unit.value}, {taper}, {gang.mode.value})")
        for name in gang.controls:
            click.echo(f"      control: {name}")
        for name in gang.levels:
            click.echo(f"      level:   {name}")


@config.command(name="validate")
@config_path_option
def validate(config_path: Optional[Path]):
    """Validate the session file."""
    cfg = _load_or_exit(config_path)
    click.echo(
        f"[OK] {config_path or DEFAULT_CONFIG_PATH}: card {cfg.card}, {len(cfg.gang_controls)} gangs"
    )


@config.command(name="init")
@config_path_option
@click.option('--force', is_flag=True, help='Overwrite an existing session file')
def init(config_path: Optional[Path], force: bool):
    """Write an example session file."""
    path = config_path or DEFAULT_CONFIG_PATH
    if path.exists() and not force:
        click.echo(f"{path} already exists (use --force to overwrite).", err=True)
        sys.exit(1)

    MixerConfig.example().save(path)
    click.echo(f"Wrote example session to {path}")
    click.echo("Edit the control names to match 'sessionmixer controls list'.")
