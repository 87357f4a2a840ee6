"""Per-track match report lines and end-of-run summaries."""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape

from playlister.models import BatchResult, Candidate, MatchTier, PushReport, Query
from playlister.utils.output import console as global_console

_TIER_MESSAGES = {
    MatchTier.EXACT: ("Found match", "match.exact"),
    MatchTier.NORMALIZED: ("Found match", "match.normalized"),
    MatchTier.USER: ("User match", "match.user"),
    MatchTier.NONE_NO_MATCH: ("No match", "match.none"),
    MatchTier.NONE_NO_RESULTS: ("No results", "match.none"),
}


class ConsoleReporter:
    """Prints one colored line per resolved query."""

    def __init__(self, console: Console | None = None, *, quiet: bool = False) -> None:
        self.console = console or global_console
        self.quiet = quiet

    def report(self, tier: MatchTier, query: Query, chosen: Candidate | None) -> None:
        if self.quiet:
            return
        message, style = _TIER_MESSAGES[tier]
        line = f"[{style}]{message}[/{style}] [track.query]{escape(query.label)}[/track.query]"
        if chosen is not None:
            line += f" [arrow]->[/arrow] [track.match]{escape(chosen.label)}[/track.match]"
        self.console.print(line)


def print_batch_summary(batch: BatchResult, console: Console | None = None) -> None:
    """Print how many tracks were matched, by tier."""
    console = console or global_console
    console.print(
        f"\n[info]Finished searching, matched {batch.matches} of {batch.total} tracks[/info]"
    )
    parts = [
        f"exact: {batch.count(MatchTier.EXACT)}",
        f"normalized: {batch.count(MatchTier.NORMALIZED)}",
        f"user: {batch.count(MatchTier.USER)}",
        f"no match: {batch.count(MatchTier.NONE_NO_MATCH)}",
        f"no results: {batch.count(MatchTier.NONE_NO_RESULTS)}",
    ]
    console.print(f"  [dim]{', '.join(parts)}[/dim]")
    if batch.failed_searches:
        console.print(f"  [warning]{batch.failed_searches} search(es) failed[/warning]")


def print_push_report(report: PushReport, console: Console | None = None) -> None:
    """Print the outcome of writing the playlist."""
    console = console or global_console
    verb = "Replaced" if report.mode == "replaced" else "Created"
    console.print(f"[success]{verb} playlist {escape(report.playlist_id)}[/success]")
    if report.playlist_url:
        console.print(f"  [url]{escape(report.playlist_url)}[/url]")
    console.print(f"  Added {report.pushed} track(s)")
    if report.mode == "replaced":
        console.print(f"  Removed {report.cut} previous track(s)")
    if report.description is None:
        console.print("  [warning]Playlist description was not updated[/warning]")
