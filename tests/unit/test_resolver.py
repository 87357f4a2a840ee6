"""Unit tests for the tiered match resolver."""

from __future__ import annotations

from unittest.mock import MagicMock

from playlister.matching.resolver import MatchResolver
from playlister.models import Candidate, MatchTier, Query

QUERY = Query(title="Rock & Roll (Radio Edit)", artist="Led Zeppelin")


def _c(title: str, artist: str = "Led Zeppelin", cid: str | None = None, kind: str = "track"):
    return Candidate(catalog_id=cid or f"id:{title}", title=title, artist=artist, kind=kind)


class TestResolve:
    def test_no_candidates(self) -> None:
        verdict = MatchResolver().resolve(QUERY, [])
        assert verdict.tier is MatchTier.NONE_NO_RESULTS

    def test_absent_candidates(self) -> None:
        verdict = MatchResolver().resolve(QUERY, None)
        assert verdict.tier is MatchTier.NONE_NO_RESULTS

    def test_exact_match_ignores_case(self) -> None:
        verdict = MatchResolver().resolve(QUERY, [_c("ROCK & ROLL (radio edit)")])
        assert verdict.tier is MatchTier.EXACT
        assert verdict.catalog_id == "id:ROCK & ROLL (radio edit)"

    def test_normalized_match(self) -> None:
        verdict = MatchResolver().resolve(QUERY, [_c("Rock and Roll")])
        assert verdict.tier is MatchTier.NORMALIZED

    def test_later_exact_match_beats_earlier_normalized(self) -> None:
        candidates = [_c("Rock and Roll", cid="first"), _c(QUERY.title.lower(), cid="second")]
        verdict = MatchResolver().resolve(QUERY, candidates)
        assert verdict.tier is MatchTier.EXACT
        assert verdict.catalog_id == "second"

    def test_first_normalized_candidate_wins(self) -> None:
        candidates = [_c("Rock and Roll", cid="first"), _c("Rock & Roll", cid="second")]
        verdict = MatchResolver().resolve(QUERY, candidates)
        assert verdict.tier is MatchTier.NORMALIZED
        assert verdict.catalog_id == "first"

    def test_radio_edit_exact_over_plain_title(self) -> None:
        query = Query(title="Hello (Radio Edit)", artist="Adele")
        candidates = [
            _c("Hello", artist="Adele", cid="norm"),
            _c("hello (radio edit)", artist="Adele", cid="exact"),
        ]
        verdict = MatchResolver().resolve(query, candidates)
        assert verdict.tier is MatchTier.EXACT
        assert verdict.catalog_id == "exact"

    def test_scan_skips_invalid_and_non_matching(self) -> None:
        candidates = [
            _c("Stairway to Heaven"),
            _c(QUERY.title, kind="album", cid="album"),
            _c(QUERY.title, artist="Cover Band", cid="cover"),
            _c(QUERY.title, cid="real"),
        ]
        verdict = MatchResolver().resolve(QUERY, candidates)
        assert verdict.tier is MatchTier.EXACT
        assert verdict.catalog_id == "real"

    def test_artist_mismatch_is_no_match(self) -> None:
        verdict = MatchResolver().resolve(QUERY, [_c(QUERY.title, artist="Someone Else")])
        assert verdict.tier is MatchTier.NONE_NO_MATCH
        assert verdict.catalog_id is None


class TestGuided:
    def test_user_choice(self) -> None:
        choice = _c("Rock n Roll", cid="picked")
        disambiguator = MagicMock()
        disambiguator.ask.return_value = choice
        resolver = MatchResolver(disambiguator=disambiguator, guided=True)

        candidates = [choice]
        verdict = resolver.resolve(QUERY, candidates)

        assert verdict.tier is MatchTier.USER
        assert verdict.catalog_id == "picked"
        disambiguator.ask.assert_called_once_with(candidates, QUERY)

    def test_declined_choice_is_no_match(self) -> None:
        disambiguator = MagicMock()
        disambiguator.ask.return_value = None
        resolver = MatchResolver(disambiguator=disambiguator, guided=True)

        verdict = resolver.resolve(QUERY, [_c("Something Else")])
        assert verdict.tier is MatchTier.NONE_NO_MATCH

    def test_not_asked_when_unguided(self) -> None:
        disambiguator = MagicMock()
        resolver = MatchResolver(disambiguator=disambiguator, guided=False)
        resolver.resolve(QUERY, [_c("Something Else")])
        disambiguator.ask.assert_not_called()

    def test_not_asked_after_automatic_match(self) -> None:
        disambiguator = MagicMock()
        resolver = MatchResolver(disambiguator=disambiguator, guided=True)
        resolver.resolve(QUERY, [_c(QUERY.title)])
        disambiguator.ask.assert_not_called()

    def test_not_asked_without_results(self) -> None:
        disambiguator = MagicMock()
        resolver = MatchResolver(disambiguator=disambiguator, guided=True)
        resolver.resolve(QUERY, [])
        disambiguator.ask.assert_not_called()


class TestReporting:
    def test_reporter_called_once_per_query(self) -> None:
        reporter = MagicMock()
        resolver = MatchResolver(reporter=reporter)

        resolver.resolve(QUERY, [])
        candidate = _c(QUERY.title)
        resolver.resolve(QUERY, [candidate])

        assert reporter.report.call_count == 2
        reporter.report.assert_any_call(MatchTier.NONE_NO_RESULTS, QUERY, None)
        reporter.report.assert_any_call(MatchTier.EXACT, QUERY, candidate)

    def test_with_rule_configurable(self) -> None:
        from playlister.matching.normalize import TitleNormalizer

        query = Query(title="Song (feat. Guest)", artist="Led Zeppelin")
        candidates = [_c("Song (with Guest)")]

        assert MatchResolver().resolve(query, candidates).tier is MatchTier.NONE_NO_MATCH
        resolver = MatchResolver(normalizer=TitleNormalizer.from_config(treat_with_as_feat=True))
        assert resolver.resolve(query, candidates).tier is MatchTier.NORMALIZED
