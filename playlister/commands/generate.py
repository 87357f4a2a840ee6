"""Generate a streaming playlist from a published track listing."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import click

from playlister.catalog.base import CatalogService
from playlister.catalog.credentials import get_access_token
from playlister.catalog.spotify import SpotifyCatalog
from playlister.cli import Context, pass_context
from playlister.commands import (
    EXIT_AUTH_ERROR,
    EXIT_CATALOG_ERROR,
    EXIT_SCRAPE_ERROR,
    EXIT_SUCCESS,
    EXIT_WRITE_ERROR,
)
from playlister.config import Config
from playlister.exceptions import (
    CatalogAuthError,
    CatalogError,
    PlaylistWriteError,
    ScrapeError,
    UnknownStationError,
)
from playlister.matching import (
    MatchResolver,
    PromptDisambiguator,
    TitleNormalizer,
    resolve_all,
    search_with,
)
from playlister.models import BatchResult, Query, Tracklist
from playlister.playlist import push_playlist
from playlister.reporter import ConsoleReporter, print_batch_summary, print_push_report
from playlister.scraper import PageFetcher, SelectorSchema, get_schema, station_url
from playlister.scraper.schema import BBC_PLAYLISTER, BBC_STATION, SCHEMAS
from playlister.utils.output import (
    console,
    create_progress,
    debug,
    error,
    info,
    success,
    verbose,
    warning,
)


@click.command("generate")
@click.argument("url", required=False)
@click.option(
    "--station",
    "-s",
    default=None,
    help="Named station to use instead of a URL (see: playlister stations)",
)
@click.option(
    "--schema",
    type=click.Choice(sorted(SCHEMAS)),
    default=None,
    help="Page layout to scrape (default: bbc_station for --station, else bbc_playlister)",
)
@click.option(
    "--guided/--no-guided",
    default=None,
    help="Ask which candidate to use when no result matches automatically",
)
@click.option(
    "--replace-existing/--no-replace-existing",
    default=None,
    help="Replace an owned playlist with the same name instead of creating one",
)
@click.option(
    "--jobs",
    "-j",
    type=click.IntRange(min=1),
    default=None,
    help="Concurrent catalog searches (default: from config)",
)
@click.option(
    "--limit",
    "-l",
    type=click.IntRange(1, 50),
    default=None,
    help="Candidates requested per search (default: from config)",
)
@click.option(
    "--dry-run",
    "-n",
    is_flag=True,
    default=False,
    help="Match tracks but do not write the playlist",
)
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Write the match results as JSON to this file",
)
@pass_context
def cli(
    ctx: Context,
    url: str | None,
    station: str | None,
    schema: str | None,
    guided: bool | None,
    replace_existing: bool | None,
    jobs: int | None,
    limit: int | None,
    dry_run: bool,
    output: Path | None,
) -> None:
    """Scrape a track listing and write the matches to a playlist.

    Each track is searched in the catalog and accepted on an exact or
    normalized title match from the same artist. With --guided you are
    asked to pick a candidate for the rest.

    Examples:

    \b
      # Preset station
      playlister generate --station radio1

    \b
      # A playlist page, asking about unmatched tracks
      playlister generate https://www.bbc.co.uk/music/playlists/zzzzwj --guided

    \b
      # Preview and keep the results
      playlister generate --station 6music --dry-run -o matches.json
    """
    config = ctx.config or Config()

    source_url, page_schema = _resolve_source(config, url, station, schema)

    verbose(f"Fetching {source_url} (schema: {page_schema.name})")
    try:
        tracklist = PageFetcher().fetch_tracklist(source_url, page_schema)
    except ScrapeError as e:
        error(str(e))
        raise SystemExit(EXIT_SCRAPE_ERROR)

    info(f"Found {len(tracklist.tracks)} tracks in '{tracklist.name}'")

    try:
        catalog = SpotifyCatalog(get_access_token(config), config.catalog_market)
    except CatalogAuthError as e:
        error(str(e))
        raise SystemExit(EXIT_AUTH_ERROR)

    jobs = jobs or config.search_jobs
    limit = limit or config.search_limit
    guided = config.guided if guided is None else guided
    debug(f"jobs={jobs} limit={limit} guided={guided}")

    resolver = MatchResolver(
        normalizer=TitleNormalizer.from_config(treat_with_as_feat=config.treat_with_as_feat),
        disambiguator=PromptDisambiguator(console),
        reporter=ConsoleReporter(console, quiet=ctx.quiet),
        guided=guided,
    )

    try:
        batch = _match_tracks(
            tracklist.tracks,
            catalog,
            resolver,
            jobs=jobs,
            limit=limit,
            show_progress=not ctx.quiet,
        )
    except CatalogAuthError as e:
        error(str(e))
        raise SystemExit(EXIT_AUTH_ERROR)
    except CatalogError as e:
        error(f"Catalog search failed: {e}")
        raise SystemExit(EXIT_CATALOG_ERROR)

    if not ctx.quiet:
        print_batch_summary(batch, console)

    if output is not None:
        try:
            output.write_text(json.dumps(batch_to_dict(tracklist, batch), indent=2) + "\n")
        except OSError as e:
            error(f"Failed to write {output}: {e}")
            raise SystemExit(EXIT_WRITE_ERROR)
        info(f"Match results written to {output}")

    if dry_run:
        info("Dry run, playlist not written")
        raise SystemExit(EXIT_SUCCESS)

    if not batch.catalog_ids:
        warning("No tracks matched, playlist not written")
        raise SystemExit(EXIT_SUCCESS)

    replace = config.replace_existing if replace_existing is None else replace_existing
    try:
        report = push_playlist(catalog, tracklist, batch, replace_existing=replace)
    except CatalogAuthError as e:
        error(str(e))
        raise SystemExit(EXIT_AUTH_ERROR)
    except PlaylistWriteError as e:
        error(str(e))
        raise SystemExit(EXIT_WRITE_ERROR)

    if ctx.quiet:
        success(report.playlist_url or report.playlist_id)
    else:
        print_push_report(report, console)
    raise SystemExit(EXIT_SUCCESS)


def _resolve_source(
    config: Config, url: str | None, station: str | None, schema: str | None
) -> tuple[str, SelectorSchema]:
    """Pick the page URL and the schema to scrape it with."""
    if url and station:
        error("Give either a URL or --station, not both.")
        raise SystemExit(EXIT_SCRAPE_ERROR)
    if not url and not station:
        error(
            "Specify a track listing:\n"
            "  playlister generate <url>\n"
            "  playlister generate --station <name>",
            hint="List stations with: playlister stations",
        )
        raise SystemExit(EXIT_SCRAPE_ERROR)

    if station:
        try:
            url = station_url(station, config.stations)
        except UnknownStationError as e:
            error(str(e), hint="Add one with: playlister stations add <name> <url>")
            raise SystemExit(EXIT_SCRAPE_ERROR)

    if schema is not None:
        page_schema = get_schema(schema)
    else:
        page_schema = BBC_STATION if station else BBC_PLAYLISTER
    return url, page_schema  # type: ignore[return-value]


def _match_tracks(
    queries: list[Query],
    catalog: CatalogService,
    resolver: MatchResolver,
    *,
    jobs: int,
    limit: int,
    show_progress: bool,
) -> BatchResult:
    """Search and resolve every track, showing progress while searching."""
    search = search_with(catalog, limit)
    if not show_progress:
        return resolve_all(queries, search, resolver, jobs=jobs)

    with create_progress() as progress:
        task = progress.add_task("Searching catalog...", total=len(queries))

        def on_searched(query: Query) -> None:
            progress.advance(task)
            # Prompts and report lines follow; the bar must be gone by then
            if progress.finished:
                progress.stop()

        return resolve_all(queries, search, resolver, jobs=jobs, on_searched=on_searched)


def batch_to_dict(tracklist: Tracklist, batch: BatchResult) -> dict[str, Any]:
    """JSON-ready summary of a matched track list."""
    tracks = []
    for query, verdict in batch.pairs:
        tracks.append(
            {
                "title": query.title,
                "artist": query.artist,
                "tier": verdict.tier.value,
                "catalog_id": verdict.catalog_id,
                "match": verdict.chosen.label if verdict.chosen else None,
            }
        )
    return {
        "playlist": {
            "name": tracklist.name,
            "description": tracklist.description,
            "source_url": tracklist.source_url,
        },
        "matched": batch.matches,
        "total": batch.total,
        "failed_searches": batch.failed_searches,
        "tracks": tracks,
    }
