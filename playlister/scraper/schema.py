"""CSS selector schemas describing where a page keeps its track listing."""

from __future__ import annotations

import re
from dataclasses import dataclass

from playlister.exceptions import UnknownStationError


@dataclass(frozen=True)
class SelectorSchema:
    """Selectors used to pull a track list out of an HTML page.

    Attributes:
        tracklist_selector: Container(s) holding the tracks.
        track_selector: One element per track, searched inside the containers.
        artist_selector: Artist text inside a track element.
        alt_artist_selector: Fallback when ``artist_selector`` yields no text.
        title_selector: Title text inside a track element.
        playlist_name_selector: Page element holding the playlist name.
        playlist_desc_selector: Page element holding the description, or
            ``"meta"`` to read ``<meta name="description">``.
        url_pattern: Regex a source URL must match to use this schema.
    """

    name: str
    tracklist_selector: str
    track_selector: str
    artist_selector: str
    alt_artist_selector: str
    title_selector: str
    playlist_name_selector: str
    playlist_desc_selector: str = "meta"
    url_pattern: str = r"bbc\.co\.uk"

    def supports(self, url: str) -> bool:
        return bool(url) and re.search(self.url_pattern, url, re.IGNORECASE) is not None


BBC_PLAYLISTER = SelectorSchema(
    name="bbc_playlister",
    tracklist_selector="ul.plr-playlist-trackslist",
    track_selector="li.plr-playlist-trackslist-track",
    artist_selector=".plr-playlist-trackslist-track-name-artistlink",
    alt_artist_selector=".plr-playlist-trackslist-track-name-artist",
    title_selector=".plr-playlist-trackslist-track-name-title",
    playlist_name_selector="h1.plr-playlist-title",
)

BBC_STATION = SelectorSchema(
    name="bbc_station",
    tracklist_selector="div.pll-content",
    track_selector="div.pll-playlist-item",
    artist_selector="div.pll-playlist-item-artist a",
    alt_artist_selector="div.pll-playlist-item-artist",
    title_selector="div.pll-playlist-item-title",
    playlist_name_selector="title",
)

SCHEMAS: dict[str, SelectorSchema] = {s.name: s for s in (BBC_PLAYLISTER, BBC_STATION)}

PRESET_STATIONS: dict[str, str] = {
    "radio1": "https://www.bbc.co.uk/radio1/playlist",
    "1xtra": "https://www.bbc.co.uk/1xtra/playlist",
    "radio2": "https://www.bbc.co.uk/radio2/playlist",
    "6music": "https://www.bbc.co.uk/6music/playlist",
}


def get_schema(name: str) -> SelectorSchema:
    """Look up a built-in schema by name."""
    try:
        return SCHEMAS[name]
    except KeyError:
        raise KeyError(f"Unknown schema '{name}'. Known schemas: {', '.join(SCHEMAS)}") from None


def all_stations(extra: dict[str, str] | None = None) -> dict[str, str]:
    """Preset stations merged with user-defined ones (user entries win)."""
    stations = dict(PRESET_STATIONS)
    stations.update(extra or {})
    return stations


def station_url(name: str, extra: dict[str, str] | None = None) -> str:
    stations = all_stations(extra)
    if name not in stations:
        raise UnknownStationError(name, sorted(stations))
    return stations[name]


def is_supported_url(url: str, schema: SelectorSchema) -> bool:
    """Whether ``schema`` can scrape ``url``."""
    return schema.supports(url)
