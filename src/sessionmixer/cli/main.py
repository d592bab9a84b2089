"""Main CLI entry point."""

import logging
import logging.handlers
from pathlib import Path
from typing import Optional

import click

from .commands import config, controls_group, run

logger = logging.getLogger(__name__)

LOG_DIR = Path.home() / ".config" / "sessionmixer" / "logs"


def setup_logging(verbose: int, debug: bool, log_file: Optional[Path], log_level: str) -> Path:
    """
    Configure logging for the application.

    The TUI owns the terminal, so logs always go to a file.

    Args:
        verbose: Verbosity count (0 = WARNING, 1 = INFO, 2+ = DEBUG)
        debug: If True, log at DEBUG level to ./sessionmixer-debug.log
        log_file: Custom log file path (optional)
        log_level: Log level used together with --log-file

    Returns:
        Path of the log file
    """
    if debug or verbose >= 2:
        level = logging.DEBUG
    elif verbose == 1:
        level = logging.INFO
    else:
        level = logging.WARNING

    if log_file:
        level = getattr(logging, log_level.upper())

    if debug and not log_file:
        log_path = Path.cwd() / "sessionmixer-debug.log"
    elif log_file:
        log_path = log_file
    else:
        LOG_DIR.mkdir(parents=True, exist_ok=True)
        log_path = LOG_DIR / "sessionmixer.log"

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    # keeps last 5 files, max 10MB each
    file_handler = logging.handlers.RotatingFileHandler(
        log_path,
        maxBytes=10 * 1024 * 1024,
        backupCount=5
    )
    file_handler.setLevel(level)
    file_handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.addHandler(file_handler)

    logger.info(f"Logging configured: level={logging.getLevelName(level)}, file={log_path}")
    return log_path


@click.group()
@click.pass_context
@click.version_option(version="0.1.0", prog_name="sessionmixer")
@click.option(
    '-v', '--verbose',
    count=True,
    help='Increase verbosity (-v: INFO, -vv: DEBUG)'
)
@click.option(
    '--debug',
    is_flag=True,
    help='Enable debug mode (DEBUG level, logs to ./sessionmixer-debug.log)'
)
@click.option(
    '--log-file',
    type=click.Path(path_type=Path),
    default=None,
    help='Custom log file path'
)
@click.option(
    '--log-level',
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR'], case_sensitive=False),
    default='INFO',
    help='Log level for file logging (default: INFO)'
)
def cli(ctx, verbose: int, debug: bool, log_file: Optional[Path], log_level: str):
    """
    SessionMixer - ganged fader bank for hardware mixer controls.

    Each fader drives one or more mixer controls on the card and follows
    changes made by other software or the hardware itself.

    \b
    Examples:
      # Write an example session file
      sessionmixer config init

    \b
      # Run the mixer against the configured card
      sessionmixer run

    \b
      # Try it without hardware
      sessionmixer run --simulate

    \b
      # List controls available on card 1
      sessionmixer controls list --card 1
    """
    ctx.ensure_object(dict)
    ctx.obj["log_path"] = setup_logging(verbose, debug, log_file, log_level)


cli.add_command(run)
cli.add_command(controls_group)
cli.add_command(config)

if __name__ == "__main__":
    cli()
