"""Download source pages and turn them into track lists."""

from __future__ import annotations

import logging
import time

import requests

from playlister import __version__
from playlister.exceptions import InvalidSourceUrlError, ScrapeError
from playlister.models import Tracklist
from playlister.scraper.parser import parse_tracklist
from playlister.scraper.schema import SelectorSchema, is_supported_url

logger = logging.getLogger(__name__)

_USER_AGENT = f"playlister/{__version__}"
_REQUEST_TIMEOUT = 30
_MAX_RETRIES = 3
_BACKOFF_BASE = 2.0


class PageFetcher:
    """Fetches playlist pages over HTTP with retry and backoff."""

    def __init__(self) -> None:
        self._session = requests.Session()
        self._session.headers.update({"User-Agent": _USER_AGENT})

    def fetch(self, url: str) -> str:
        """GET ``url`` and return its body.

        Raises:
            ScrapeError: If the page cannot be fetched.
        """
        for attempt in range(_MAX_RETRIES):
            try:
                resp = self._session.get(url, timeout=_REQUEST_TIMEOUT)
            except requests.RequestException as e:
                if attempt == _MAX_RETRIES - 1:
                    raise ScrapeError(url, f"failed after {_MAX_RETRIES} attempts: {e}") from e
                wait = _BACKOFF_BASE * (2**attempt)
                logger.warning("Request failed, retrying in %.1fs: %s", wait, e)
                time.sleep(wait)
                continue

            if resp.status_code in (429, 503) and attempt < _MAX_RETRIES - 1:
                wait = _BACKOFF_BASE * (2**attempt)
                logger.warning("HTTP %d from %s, waiting %.1fs...", resp.status_code, url, wait)
                time.sleep(wait)
                continue

            if resp.status_code >= 400:
                raise ScrapeError(url, f"HTTP {resp.status_code}")
            return resp.text

        raise ScrapeError(url, "request failed unexpectedly")  # pragma: no cover

    def fetch_tracklist(self, url: str, schema: SelectorSchema) -> Tracklist:
        """Fetch and parse a playlist page.

        Raises:
            InvalidSourceUrlError: If ``schema`` does not handle ``url``.
            ScrapeError: If the page cannot be fetched or has no tracks.
        """
        if not is_supported_url(url, schema):
            raise InvalidSourceUrlError(url, schema.name)

        tracklist = parse_tracklist(self.fetch(url), url, schema)
        if not tracklist.tracks:
            raise ScrapeError(url, f"no tracks found with schema '{schema.name}'")
        return tracklist
