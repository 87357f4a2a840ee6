"""Shared pytest fixtures."""

from __future__ import annotations

import shutil
import tempfile
from pathlib import Path
from typing import TYPE_CHECKING

import pytest

from playlister.exceptions import CatalogError
from playlister.models import Candidate, PlaylistInfo, Query

if TYPE_CHECKING:
    from collections.abc import Generator, Sequence


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files."""
    path = Path(tempfile.mkdtemp())
    try:
        yield path
    finally:
        shutil.rmtree(path, ignore_errors=True)


@pytest.fixture
def sample_config(temp_dir: Path) -> Path:
    """Create a sample config file."""
    config_path = temp_dir / "config.toml"
    config_path.write_text("""[display]
colored_output = true

[catalog]
access_token = "config-token"
market = "GB"
search_limit = 10
jobs = 2

[matching]
guided = true

[playlist]
replace_existing = true

[stations]
kexp = "https://www.bbc.co.uk/kexp/playlist"
""")
    return config_path


@pytest.fixture
def query() -> Query:
    return Query(title="One More Time", artist="Daft Punk")


class FakeCatalog:
    """In-memory CatalogService recording every write."""

    def __init__(
        self,
        results: dict[str, Sequence[Candidate] | None] | None = None,
        playlists: list[PlaylistInfo] | None = None,
        entries: dict[str, list[str]] | None = None,
    ) -> None:
        self.results = results or {}
        self.playlists = playlists or []
        self.entries = entries or {}
        self.fail_on: set[str] = set()
        self.searches: list[tuple[str, int]] = []
        self.created: list[str] = []
        self.removed: list[tuple[str, list[str]]] = []
        self.added: list[tuple[str, list[str]]] = []
        self.descriptions: dict[str, str] = {}

    def _maybe_fail(self, op: str) -> None:
        if op in self.fail_on:
            raise CatalogError(f"{op} failed")

    def current_user(self) -> tuple[str, str | None]:
        return "me", "Me"

    def search(self, query: str, max_results: int) -> list[Candidate] | None:
        self.searches.append((query, max_results))
        self._maybe_fail("search")
        found = self.results.get(query)
        return list(found) if found is not None else None

    def get_playlists(self) -> list[PlaylistInfo]:
        self._maybe_fail("get_playlists")
        return list(self.playlists)

    def create_playlist(self, name: str, description: str | None = None) -> PlaylistInfo:
        self._maybe_fail("create_playlist")
        playlist = PlaylistInfo(
            id=f"new{len(self.created)}",
            name=name,
            url=f"https://open.spotify.com/playlist/new{len(self.created)}",
            owner_id="me",
        )
        self.created.append(name)
        self.playlists.append(playlist)
        return playlist

    def get_playlist_entries(self, playlist_id: str) -> list[str]:
        self._maybe_fail("get_playlist_entries")
        return list(self.entries.get(playlist_id, []))

    def remove_entries(self, playlist_id: str, entry_ids: Sequence[str]) -> None:
        self._maybe_fail("remove_entries")
        self.removed.append((playlist_id, list(entry_ids)))

    def add_entries(self, playlist_id: str, catalog_ids: Sequence[str]) -> None:
        self._maybe_fail("add_entries")
        self.added.append((playlist_id, list(catalog_ids)))

    def update_metadata(self, playlist_id: str, *, description: str) -> None:
        self._maybe_fail("update_metadata")
        self.descriptions[playlist_id] = description


@pytest.fixture
def fake_catalog() -> FakeCatalog:
    return FakeCatalog()
