"""Initialize configuration file for playlister."""

from __future__ import annotations

from importlib import resources
from pathlib import Path

import click

from playlister.cli import Context, pass_context
from playlister.config import get_default_config_path
from playlister.utils.fileops import secure_atomic_write, secure_mkdir
from playlister.utils.output import error, info, success


def _load_example_config() -> str:
    """Load the example configuration from package data."""
    return resources.files("playlister").joinpath("config.example.toml").read_text()


@click.command("init-config")
@click.option(
    "--force",
    "-f",
    is_flag=True,
    default=False,
    help="Overwrite existing config file",
)
@click.option(
    "--output",
    "-o",
    type=click.Path(path_type=Path),
    default=None,
    help="Output path for config file (default: ~/.config/playlister/config.toml)",
)
@pass_context
def cli(ctx: Context, force: bool, output: Path | None) -> None:
    """Create a new configuration file with default settings.

    The generated file lists every option with its default and a short
    explanation.

    Examples:

    \b
      # Create config at default location
      playlister init-config

    \b
      # Overwrite existing config
      playlister init-config --force
    """
    config_path = output if output is not None else get_default_config_path()
    config_path = config_path.expanduser().resolve()

    if config_path.exists() and not force:
        error(
            f"Config file already exists: {config_path}",
            hint="Use --force to overwrite",
        )
        raise SystemExit(1)

    secure_mkdir(config_path.parent)

    try:
        secure_atomic_write(config_path, _load_example_config())
    except OSError as e:
        error(f"Failed to write config file: {e}")
        raise SystemExit(1)

    success(f"Created config file: {config_path}")
    info("Run 'playlister auth --token <token>' to connect your account.")
