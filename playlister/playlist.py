"""Write a matched track list to the remote service as a playlist.

Steps:
  1. Find the playlist to replace, or create a new one
  2. Remove the entries of a replaced playlist
  3. Add the matched tracks in order
  4. Update the description (best effort)
"""

from __future__ import annotations

import logging

from playlister.catalog.base import CatalogService
from playlister.exceptions import CatalogAuthError, CatalogError, PlaylistWriteError
from playlister.models import BatchResult, PlaylistInfo, PushReport, Tracklist

logger = logging.getLogger(__name__)


def find_replaceable(
    playlists: list[PlaylistInfo], name: str, owner_id: str | None
) -> PlaylistInfo | None:
    """First playlist with exactly ``name`` owned by ``owner_id``."""
    for playlist in playlists:
        if playlist.name == name and (owner_id is None or playlist.owner_id == owner_id):
            return playlist
    return None


def _target_playlist(
    catalog: CatalogService, name: str, replace_existing: bool
) -> tuple[PlaylistInfo, str]:
    if replace_existing:
        try:
            user_id, _ = catalog.current_user()
            existing = find_replaceable(catalog.get_playlists(), name, user_id)
        except CatalogAuthError:
            raise
        except CatalogError as e:
            raise PlaylistWriteError("finding existing playlists", str(e)) from e
        if existing is not None:
            logger.info("Replacing existing playlist %s (%s)", existing.name, existing.id)
            return existing, "replaced"

    try:
        created = catalog.create_playlist(name)
    except CatalogAuthError:
        raise
    except CatalogError as e:
        raise PlaylistWriteError("creating the playlist", str(e)) from e
    logger.info("Created playlist %s (%s)", created.name, created.id)
    return created, "created"


def push_playlist(
    catalog: CatalogService,
    tracklist: Tracklist,
    batch: BatchResult,
    *,
    replace_existing: bool = False,
) -> PushReport:
    """Create or replace the remote playlist for ``tracklist``.

    Args:
        catalog: Remote service to write to.
        tracklist: Scraped playlist metadata (name, description).
        batch: Match results; resolved catalog ids are written in order.
        replace_existing: Reuse an owned playlist with the same name.

    Returns:
        What was written.

    Raises:
        PlaylistWriteError: If creating, clearing or filling the playlist fails.
        CatalogAuthError: If the service rejects the credentials.
    """
    playlist, mode = _target_playlist(catalog, tracklist.name, replace_existing)
    report = PushReport(playlist_id=playlist.id, playlist_url=playlist.url, mode=mode)

    try:
        if mode == "replaced":
            entries = catalog.get_playlist_entries(playlist.id)
            if entries:
                catalog.remove_entries(playlist.id, entries)
            report.cut = len(entries)
    except CatalogAuthError:
        raise
    except CatalogError as e:
        raise PlaylistWriteError("emptying the existing playlist", str(e)) from e

    catalog_ids = batch.catalog_ids
    try:
        if catalog_ids:
            catalog.add_entries(playlist.id, catalog_ids)
        report.pushed = len(catalog_ids)
    except CatalogAuthError:
        raise
    except CatalogError as e:
        raise PlaylistWriteError("adding tracks to the playlist", str(e)) from e

    try:
        catalog.update_metadata(playlist.id, description=tracklist.description)
        report.description = tracklist.description
    except CatalogError as e:
        logger.warning("Could not update the playlist description: %s", e)

    return report
