"""Named station management commands."""

from __future__ import annotations

import click

from playlister.cli import Context, pass_context
from playlister.config import Config, save_config
from playlister.scraper.schema import PRESET_STATIONS, SCHEMAS, all_stations
from playlister.utils.output import console, create_table, error, success


@click.group("stations", invoke_without_command=True)
@click.pass_context
def cli(click_ctx: click.Context) -> None:
    """List and manage named stations.

    Without a subcommand, lists every known station.

    Examples:

        playlister stations

        playlister stations add kexp https://example.org/kexp/playlist

        playlister stations remove kexp
    """
    if click_ctx.invoked_subcommand is None:
        click_ctx.invoke(list_cmd)


@cli.command("list")
@pass_context
def list_cmd(ctx: Context) -> None:
    """List preset and user-defined stations and the page schemas."""
    config = ctx.config or Config()

    table = create_table(title="Stations", show_header=True, header_style="bold")
    table.add_column("Name", style="bold")
    table.add_column("URL", style="url")
    table.add_column("Source")
    for name, url in sorted(all_stations(config.stations).items()):
        source = "config" if name in config.stations else "preset"
        table.add_row(name, url, source)
    console.print(table)

    schemas = create_table(title="Page schemas", show_header=True, header_style="bold")
    schemas.add_column("Schema", style="bold")
    schemas.add_column("Track selector")
    for schema in SCHEMAS.values():
        schemas.add_row(schema.name, schema.track_selector)
    console.print(schemas)


@cli.command("add")
@click.argument("name")
@click.argument("url")
@pass_context
def add(ctx: Context, name: str, url: str) -> None:
    """Save a named station to the config file."""
    config = ctx.config or Config()

    if not url.startswith(("http://", "https://")):
        error(f"Not a URL: {url}", hint="Station URLs must start with http:// or https://")
        raise SystemExit(1)

    replaced = name in config.stations
    config.stations[name] = url
    path = save_config(config)

    verb = "Updated" if replaced else "Added"
    success(f"{verb} station '{name}' in {path}")
    if name in PRESET_STATIONS:
        console.print(f"  [dim]Overrides the preset URL {PRESET_STATIONS[name]}[/dim]")


@cli.command("remove")
@click.argument("name")
@pass_context
def remove(ctx: Context, name: str) -> None:
    """Remove a user-defined station from the config file."""
    config = ctx.config or Config()

    if name not in config.stations:
        hint = "Preset stations cannot be removed" if name in PRESET_STATIONS else None
        error(f"No user-defined station named '{name}'", hint=hint)
        raise SystemExit(1)

    del config.stations[name]
    path = save_config(config)
    success(f"Removed station '{name}' from {path}")
