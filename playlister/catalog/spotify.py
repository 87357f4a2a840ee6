"""Spotify Web API adapter for the catalog interface.

Handles bearer-token requests with retry, backoff and an adaptive rate
limiter, and maps Spotify's JSON objects onto playlister's models.
"""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Generator, Iterable, Iterator, Sequence
from typing import Any, TypeVar

import requests

from playlister import __version__
from playlister.exceptions import CatalogAuthError, CatalogError
from playlister.models import Candidate, PlaylistInfo

logger = logging.getLogger(__name__)

T = TypeVar("T")

_USER_AGENT = f"playlister/{__version__}"
_REQUEST_TIMEOUT = 30
_MAX_RETRIES = 5
_BACKOFF_BASE = 2.0  # seconds
_WRITE_CHUNK_SIZE = 100  # Spotify accepts at most 100 items per playlist write
_DESCRIPTION_MAX_LEN = 300

API_BASE = "https://api.spotify.com/v1"


class _AdaptiveRateLimiter:
    """AIMD (Additive Increase / Multiplicative Decrease) rate limiter.

    Shared by the search worker threads; every interval read and update
    happens under one lock.
    """

    def __init__(
        self,
        min_interval: float = 0.0,
        max_interval: float = 30.0,
        initial_interval: float = 0.05,
        increase_delta: float = 0.01,
        decrease_factor: float = 2.0,
    ) -> None:
        self._interval = initial_interval
        self._min = min_interval
        self._max = max_interval
        self._delta = increase_delta
        self._factor = decrease_factor
        self._last_request = 0.0
        self._lock = threading.Lock()

    def wait(self) -> None:
        """Sleep if needed to respect the current rate limit interval."""
        with self._lock:
            now = time.monotonic()
            start = now
            if self._last_request > 0:
                start = max(now, self._last_request + self._interval)
            # Reserve the slot, then sleep without holding the lock
            self._last_request = start
        if start > now:
            time.sleep(start - now)

    def on_success(self) -> None:
        """Additive increase: slowly ramp up request rate."""
        with self._lock:
            self._interval = max(self._min, self._interval - self._delta)

    def on_rate_limited(self) -> None:
        """Multiplicative decrease: back off on 429/503."""
        with self._lock:
            self._interval = min(self._max, max(self._interval, 0.05) * self._factor)
            interval = self._interval
        logger.info("Rate limiter: slowing to %.2fs between requests", interval)

    @property
    def interval(self) -> float:
        with self._lock:
            return self._interval


def chunked(items: Iterable[T], size: int) -> Iterator[list[T]]:
    """Yield lists of at most ``size`` items."""
    if size <= 0:
        raise ValueError("size must be > 0")
    buf: list[T] = []
    for item in items:
        buf.append(item)
        if len(buf) >= size:
            yield buf
            buf = []
    if buf:
        yield buf


def _to_candidate(item: dict[str, Any]) -> Candidate:
    """Map a Spotify search item to a Candidate.

    Only the first credited artist is kept; the matcher compares it with the
    scraped artist.
    """
    artists = item.get("artists") or []
    artist = (artists[0].get("name") or "") if artists else ""
    return Candidate(
        catalog_id=item.get("uri") or None,
        title=item.get("name") or "",
        artist=artist,
        kind=item.get("type") or "",
    )


def _to_playlist(item: dict[str, Any]) -> PlaylistInfo:
    return PlaylistInfo(
        id=item["id"],
        name=item.get("name") or "",
        url=(item.get("external_urls") or {}).get("spotify"),
        owner_id=(item.get("owner") or {}).get("id"),
    )


class SpotifyCatalog:
    """HTTP client for the Spotify Web API.

    Args:
        access_token: OAuth bearer token with playlist-modify scopes.
        market: Optional ISO 3166-1 country code restricting search results.
    """

    def __init__(self, access_token: str, market: str | None = None) -> None:
        self.market = market
        self._session = requests.Session()
        self._session.headers.update(
            {
                "Authorization": f"Bearer {access_token}",
                "User-Agent": _USER_AGENT,
            }
        )
        self._limiter = _AdaptiveRateLimiter()
        self._user_id: str | None = None

    def _request(self, method: str, path_or_url: str, **kwargs: Any) -> requests.Response:
        """Make an API request with retry and backoff logic.

        Args:
            method: HTTP method.
            path_or_url: API path relative to ``API_BASE`` or an absolute
                ``next`` pagination URL.
            **kwargs: Additional arguments passed to requests.

        Returns:
            The HTTP response.

        Raises:
            CatalogAuthError: If the token is rejected (401/403).
            CatalogError: On transport errors, other HTTP errors, or when
                retries are exhausted.
        """
        url = path_or_url if path_or_url.startswith("http") else f"{API_BASE}{path_or_url}"
        kwargs.setdefault("timeout", _REQUEST_TIMEOUT)

        for attempt in range(_MAX_RETRIES):
            self._limiter.wait()

            try:
                resp = self._session.request(method, url, **kwargs)
            except requests.RequestException as e:
                if attempt == _MAX_RETRIES - 1:
                    raise CatalogError(
                        f"Request to {url} failed after {_MAX_RETRIES} attempts: {e}"
                    ) from e
                wait = _BACKOFF_BASE * (2**attempt)
                logger.warning("Request failed, retrying in %.1fs: %s", wait, e)
                time.sleep(wait)
                continue

            if resp.status_code in (401, 403):
                raise CatalogAuthError(
                    "Spotify rejected the access token. It may have expired. "
                    "Re-authenticate with: playlister auth --token <token>"
                )

            if resp.status_code in (429, 503):
                self._limiter.on_rate_limited()
                if attempt == _MAX_RETRIES - 1:
                    raise CatalogError(
                        f"Rate limited by Spotify after {_MAX_RETRIES} retries. Try again later."
                    )
                # Respect Retry-After header if present
                retry_after = resp.headers.get("Retry-After")
                if retry_after:
                    try:
                        wait = max(float(retry_after), _BACKOFF_BASE)
                    except ValueError:
                        wait = _BACKOFF_BASE * (2**attempt)
                else:
                    wait = _BACKOFF_BASE * (2**attempt)
                logger.warning(
                    "Spotify rate limit detected (HTTP %d), waiting %.1fs...",
                    resp.status_code,
                    wait,
                )
                time.sleep(wait)
                continue

            try:
                resp.raise_for_status()
            except requests.HTTPError as e:
                raise CatalogError(f"{method} {url} failed: HTTP {resp.status_code}") from e
            self._limiter.on_success()
            return resp

        # Should not reach here, but satisfy type checker
        raise CatalogError(f"Request to {url} failed after {_MAX_RETRIES} attempts")

    def _json(self, resp: requests.Response) -> dict[str, Any]:
        try:
            data = resp.json()
        except ValueError as e:
            raise CatalogError(f"Invalid JSON from {resp.url}: {e}") from e
        return data if isinstance(data, dict) else {}

    def _iter_pages(self, path: str, params: dict[str, Any]) -> Generator[dict[str, Any], None, None]:
        """Yield items across all pages of a paging object."""
        data = self._json(self._request("GET", path, params=params))
        while True:
            yield from data.get("items") or []
            next_url = data.get("next")
            if not next_url:
                break
            data = self._json(self._request("GET", next_url))

    def current_user(self) -> tuple[str, str | None]:
        data = self._json(self._request("GET", "/me"))
        if "id" not in data:
            raise CatalogError("Spotify /me response has no user id")
        self._user_id = data["id"]
        return data["id"], data.get("display_name")

    @property
    def user_id(self) -> str:
        if self._user_id is None:
            self.current_user()
        return self._user_id  # type: ignore[return-value]

    def search(self, query: str, max_results: int) -> list[Candidate] | None:
        params: dict[str, Any] = {"q": query, "type": "track", "limit": max_results}
        if self.market:
            params["market"] = self.market
        data = self._json(self._request("GET", "/search", params=params))
        tracks = data.get("tracks")
        if not tracks or tracks.get("items") is None:
            return None
        return [_to_candidate(item) for item in tracks["items"] if item]

    def get_playlists(self) -> list[PlaylistInfo]:
        return [_to_playlist(item) for item in self._iter_pages("/me/playlists", {"limit": 50})]

    def create_playlist(self, name: str, description: str | None = None) -> PlaylistInfo:
        payload: dict[str, Any] = {"name": name, "public": False}
        if description:
            payload["description"] = description[:_DESCRIPTION_MAX_LEN]
        resp = self._request("POST", f"/users/{self.user_id}/playlists", json=payload)
        return _to_playlist(self._json(resp))

    def get_playlist_entries(self, playlist_id: str) -> list[str]:
        params = {"limit": 100, "fields": "items(track(uri)),next"}
        entries: list[str] = []
        for item in self._iter_pages(f"/playlists/{playlist_id}/tracks", params):
            track = item.get("track") or {}
            if track.get("uri"):
                entries.append(track["uri"])
        return entries

    def remove_entries(self, playlist_id: str, entry_ids: Sequence[str]) -> None:
        # Spotify removes every occurrence of a uri, so each is sent once.
        unique = list(dict.fromkeys(entry_ids))
        for chunk in chunked(unique, _WRITE_CHUNK_SIZE):
            self._request(
                "DELETE",
                f"/playlists/{playlist_id}/tracks",
                json={"tracks": [{"uri": uri} for uri in chunk]},
            )

    def add_entries(self, playlist_id: str, catalog_ids: Sequence[str]) -> None:
        for chunk in chunked(catalog_ids, _WRITE_CHUNK_SIZE):
            self._request("POST", f"/playlists/{playlist_id}/tracks", json={"uris": chunk})

    def update_metadata(self, playlist_id: str, *, description: str) -> None:
        self._request(
            "PUT",
            f"/playlists/{playlist_id}",
            json={"description": description[:_DESCRIPTION_MAX_LEN]},
        )
