"""Track listing extraction from HTML pages."""

from __future__ import annotations

import logging

from bs4 import BeautifulSoup, Tag

from playlister.models import Query, Tracklist
from playlister.scraper.schema import SelectorSchema

logger = logging.getLogger(__name__)

GENERATED_BY = "generated by playlister"


def _select_text(element: Tag | BeautifulSoup, selector: str) -> str:
    """Concatenated, stripped text of every element matching ``selector``."""
    if not selector:
        return ""
    return "".join(el.get_text() for el in element.select(selector)).strip()


def _page_description(soup: BeautifulSoup, schema: SelectorSchema) -> str:
    if schema.playlist_desc_selector == "meta":
        meta = soup.find("meta", attrs={"name": "description"})
        content = meta.get("content") if isinstance(meta, Tag) else None
        return content.strip() if isinstance(content, str) else ""
    return _select_text(soup, schema.playlist_desc_selector)


def build_description(page_description: str, source_url: str) -> str:
    """Playlist description naming the page it was generated from."""
    footer = f"source: {source_url} ({GENERATED_BY})"
    if page_description:
        return f"{page_description} | {footer}"
    return footer


def _track_elements(soup: BeautifulSoup, schema: SelectorSchema) -> list[Tag]:
    """Track elements inside the track list containers, in document order."""
    seen: set[int] = set()
    tracks: list[Tag] = []
    for container in soup.select(schema.tracklist_selector):
        for el in container.select(schema.track_selector):
            if id(el) not in seen:
                seen.add(id(el))
                tracks.append(el)
    return tracks


def parse_tracklist(html: str, source_url: str, schema: SelectorSchema) -> Tracklist:
    """Build a Tracklist from a page.

    The artist falls back to ``alt_artist_selector`` when the primary
    selector has no text. Entries missing a title or an artist are skipped.

    Args:
        html: Raw HTML of the page.
        source_url: URL the page was fetched from.
        schema: Selectors for this kind of page.

    Returns:
        Playlist name, description, source url and the ordered queries.
    """
    soup = BeautifulSoup(html, "html.parser")

    name = _select_text(soup, schema.playlist_name_selector) or source_url
    description = build_description(_page_description(soup, schema), source_url)

    queries: list[Query] = []
    for position, el in enumerate(_track_elements(soup, schema), 1):
        artist = _select_text(el, schema.artist_selector) or _select_text(
            el, schema.alt_artist_selector
        )
        title = _select_text(el, schema.title_selector)
        if not title or not artist:
            missing = "title" if not title else "artist"
            logger.warning("Skipping track %d on %s: missing %s", position, source_url, missing)
            continue
        queries.append(Query(title=title, artist=artist))

    return Tracklist(name=name, description=description, source_url=source_url, tracks=queries)
