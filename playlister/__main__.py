"""Allow running as ``python -m playlister``."""

from playlister.cli import cli

cli()
