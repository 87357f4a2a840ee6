"""Unit tests for search result validation."""

from __future__ import annotations

from playlister.matching.validator import is_valid_candidate, same_text
from playlister.models import Candidate, Query


def _candidate(**overrides) -> Candidate:
    fields = {"catalog_id": "spotify:track:1", "title": "Around the World", "artist": "Daft Punk"}
    fields.update(overrides)
    return Candidate(**fields)


def test_same_text_ignores_case() -> None:
    assert same_text("Daft Punk", "DAFT PUNK")
    assert not same_text("Daft Punk", "Daft  Punk")


def test_complete_track_is_valid() -> None:
    assert is_valid_candidate(_candidate())


def test_non_track_kind_rejected() -> None:
    assert not is_valid_candidate(_candidate(kind="album"))


def test_missing_fields_rejected() -> None:
    assert not is_valid_candidate(_candidate(catalog_id=None))
    assert not is_valid_candidate(_candidate(catalog_id=""))
    assert not is_valid_candidate(_candidate(title=""))
    assert not is_valid_candidate(_candidate(artist=""))


def test_artist_must_match_query() -> None:
    query = Query(title="Around the World", artist="daft punk")
    assert is_valid_candidate(_candidate(), query)
    assert not is_valid_candidate(_candidate(artist="Daft Punk Tribute Band"), query)


def test_artist_ignored_without_query() -> None:
    assert is_valid_candidate(_candidate(artist="Someone Else"))
