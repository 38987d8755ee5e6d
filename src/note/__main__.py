"""Allow ``python -m note``."""

from note.interfaces.cli.app import run_cli

run_cli()
