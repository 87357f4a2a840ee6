"""Core data types shared by the scraper, matcher and catalog adapters."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field

TRACK_KIND = "track"


@dataclass(frozen=True)
class Query:
    """A single scraped track to locate in the remote catalog."""

    title: str
    artist: str

    @property
    def label(self) -> str:
        return f"{self.artist} - {self.title}"


@dataclass(frozen=True)
class Candidate:
    """One remote search result.

    Attributes:
        catalog_id: Opaque id the remote service uses for the track, if any.
        title: Track title as returned by the service.
        artist: Primary credited artist.
        kind: Result kind tag; only ``TRACK_KIND`` results are playable.
    """

    catalog_id: str | None
    title: str
    artist: str
    kind: str = TRACK_KIND

    @property
    def label(self) -> str:
        """Display key used when presenting the candidate to a human."""
        return f"{self.artist} - {self.title}"


class MatchTier(enum.Enum):
    """Strength and provenance of a match decision."""

    NONE_NO_RESULTS = "no_results"
    NONE_NO_MATCH = "no_match"
    EXACT = "exact"
    NORMALIZED = "normalized"
    USER = "user"

    @property
    def resolved(self) -> bool:
        return self in (MatchTier.EXACT, MatchTier.NORMALIZED, MatchTier.USER)


@dataclass(frozen=True)
class MatchVerdict:
    """Outcome of resolving one query against its candidate list."""

    tier: MatchTier
    chosen: Candidate | None = None
    catalog_id: str | None = None

    def __post_init__(self) -> None:
        if self.tier.resolved != (self.catalog_id is not None):
            raise ValueError(f"catalog_id must be set exactly when tier is resolved ({self.tier})")
        if (self.chosen is None) != (self.catalog_id is None):
            raise ValueError("chosen must be set exactly when catalog_id is set")

    @classmethod
    def unresolved(cls, tier: MatchTier) -> MatchVerdict:
        return cls(tier=tier)

    @classmethod
    def resolved(cls, tier: MatchTier, candidate: Candidate) -> MatchVerdict:
        return cls(tier=tier, chosen=candidate, catalog_id=candidate.catalog_id)


@dataclass
class BatchResult:
    """Per-query verdicts for a whole track list, in input order."""

    pairs: list[tuple[Query, MatchVerdict]] = field(default_factory=list)
    failed_searches: int = 0

    @property
    def total(self) -> int:
        return len(self.pairs)

    @property
    def matches(self) -> int:
        return sum(1 for _, verdict in self.pairs if verdict.tier.resolved)

    @property
    def catalog_ids(self) -> list[str]:
        """Resolved catalog ids in playlist order."""
        return [v.catalog_id for _, v in self.pairs if v.catalog_id is not None]

    def count(self, tier: MatchTier) -> int:
        return sum(1 for _, verdict in self.pairs if verdict.tier is tier)


@dataclass
class Tracklist:
    """Scraped playlist page: metadata plus ordered queries."""

    name: str
    description: str
    source_url: str
    tracks: list[Query] = field(default_factory=list)


@dataclass
class PlaylistInfo:
    """A playlist owned by (or visible to) the authenticated user."""

    id: str
    name: str
    url: str | None = None
    owner_id: str | None = None


@dataclass
class PushReport:
    """What happened when a playlist was written to the remote service."""

    playlist_id: str
    playlist_url: str | None
    mode: str  # "created" or "replaced"
    pushed: int = 0
    cut: int = 0
    description: str | None = None
