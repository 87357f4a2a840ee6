"""Interface the matcher and playlist writer expect from a streaming service."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from playlister.models import Candidate, PlaylistInfo


class CatalogService(Protocol):
    """Search and playlist operations of a remote music catalog.

    Implementations raise ``CatalogAuthError`` for rejected credentials and
    ``CatalogError`` for any other transport or HTTP failure.
    """

    def current_user(self) -> tuple[str, str | None]:
        """Return ``(user_id, display_name)`` for the authenticated user."""
        ...

    def search(self, query: str, max_results: int) -> list[Candidate] | None:
        """Search the catalog; ``None`` when the service returned no result set."""
        ...

    def get_playlists(self) -> list[PlaylistInfo]: ...

    def create_playlist(self, name: str, description: str | None = None) -> PlaylistInfo: ...

    def get_playlist_entries(self, playlist_id: str) -> list[str]:
        """Return the entry ids currently in the playlist, in order."""
        ...

    def remove_entries(self, playlist_id: str, entry_ids: Sequence[str]) -> None: ...

    def add_entries(self, playlist_id: str, catalog_ids: Sequence[str]) -> None: ...

    def update_metadata(self, playlist_id: str, *, description: str) -> None: ...
