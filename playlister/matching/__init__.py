"""Track matching engine: normalize, validate, resolve, batch."""

from playlister.matching.batch import resolve_all, search_with
from playlister.matching.disambiguator import PromptDisambiguator, build_options
from playlister.matching.normalize import TitleNormalizer, normalize
from playlister.matching.resolver import MatchResolver
from playlister.matching.validator import is_valid_candidate

__all__ = [
    "MatchResolver",
    "PromptDisambiguator",
    "TitleNormalizer",
    "build_options",
    "is_valid_candidate",
    "normalize",
    "resolve_all",
    "search_with",
]
