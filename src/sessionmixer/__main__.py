"""Main entry point for ``python -m sessionmixer``."""

from sessionmixer.cli.main import cli

if __name__ == "__main__":
    cli()
