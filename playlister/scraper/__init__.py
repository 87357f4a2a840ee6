"""Scraping of web-published track listings."""

from playlister.scraper.fetch import PageFetcher
from playlister.scraper.parser import parse_tracklist
from playlister.scraper.schema import (
    SCHEMAS,
    SelectorSchema,
    get_schema,
    is_supported_url,
    station_url,
)

__all__ = [
    "SCHEMAS",
    "PageFetcher",
    "SelectorSchema",
    "get_schema",
    "is_supported_url",
    "parse_tracklist",
    "station_url",
]
