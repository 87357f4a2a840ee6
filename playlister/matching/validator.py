"""Search result validation."""

from __future__ import annotations

from playlister.models import TRACK_KIND, Candidate, Query


def same_text(a: str, b: str) -> bool:
    """Case-insensitive exact comparison."""
    return a.casefold() == b.casefold()


def is_valid_candidate(candidate: Candidate, query: Query | None = None) -> bool:
    """Check that a search result is a playable, fully-populated track.

    When ``query`` is given the candidate's artist must also equal the
    query's artist, ignoring case.
    """
    if candidate.kind != TRACK_KIND:
        return False
    if not (candidate.artist and candidate.title and candidate.catalog_id):
        return False
    if query is not None and not same_text(candidate.artist, query.artist):
        return False
    return True
