"""Tiered match decision for a single query.

Policy, in order:
  1. No candidates at all                  -> NONE_NO_RESULTS
  2. Valid candidate, title equal          -> EXACT
     (ignoring case; beats any earlier normalized match)
  3. Valid candidate, normalized equal     -> NORMALIZED
  4. Guided mode: human picks one          -> USER
  5. Otherwise                             -> NONE_NO_MATCH
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Protocol

from playlister.matching.disambiguator import Disambiguator
from playlister.matching.normalize import TitleNormalizer
from playlister.matching.validator import is_valid_candidate, same_text
from playlister.models import Candidate, MatchTier, MatchVerdict, Query

logger = logging.getLogger(__name__)


class Reporter(Protocol):
    """Sink notified once for every resolved query."""

    def report(self, tier: MatchTier, query: Query, chosen: Candidate | None) -> None: ...


class MatchResolver:
    """Decide which search candidate, if any, is the queried recording.

    Args:
        normalizer: Title normalizer for the loose comparison tier.
        disambiguator: Asked when guided and nothing matched automatically.
        reporter: Notified exactly once per ``resolve`` call.
        guided: Whether to fall back to the disambiguator.
    """

    def __init__(
        self,
        normalizer: TitleNormalizer | None = None,
        disambiguator: Disambiguator | None = None,
        reporter: Reporter | None = None,
        *,
        guided: bool = False,
    ) -> None:
        self.normalizer = normalizer or TitleNormalizer()
        self.disambiguator = disambiguator
        self.reporter = reporter
        self.guided = guided

    def resolve(self, query: Query, candidates: Sequence[Candidate] | None) -> MatchVerdict:
        verdict = self._decide(query, candidates or [])
        logger.debug("%s -> %s (%s)", query.label, verdict.tier.value, verdict.catalog_id)
        if self.reporter is not None:
            self.reporter.report(verdict.tier, query, verdict.chosen)
        return verdict

    def _decide(self, query: Query, candidates: Sequence[Candidate]) -> MatchVerdict:
        if not candidates:
            return MatchVerdict.unresolved(MatchTier.NONE_NO_RESULTS)

        valid = [c for c in candidates if is_valid_candidate(c, query)]
        for candidate in valid:
            if same_text(candidate.title, query.title):
                return MatchVerdict.resolved(MatchTier.EXACT, candidate)

        wanted = self.normalizer.normalize(query.title)
        for candidate in valid:
            if self.normalizer.normalize(candidate.title) == wanted:
                return MatchVerdict.resolved(MatchTier.NORMALIZED, candidate)

        if self.guided and self.disambiguator is not None:
            choice = self.disambiguator.ask(candidates, query)
            if choice is not None:
                return MatchVerdict.resolved(MatchTier.USER, choice)

        return MatchVerdict.unresolved(MatchTier.NONE_NO_MATCH)
