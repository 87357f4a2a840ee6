"""Title canonicalization used to compare titles loosely.

The normalized form is only ever used for comparison, never for display.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

# ---------------------------------------------------------------------------
# Pre-compiled patterns
# ---------------------------------------------------------------------------

_RADIO_EDIT = re.compile(r"\(RADIO EDIT\) | \(RADIO EDIT\)|\(RADIO EDIT\)", re.IGNORECASE)
_AMPERSAND = re.compile(r"&")
_FEAT = re.compile(r"FEAT\.|FEATURING", re.IGNORECASE)
_FEAT_OR_WITH = re.compile(r"FEAT\.|FEATURING|\bWITH\b", re.IGNORECASE)
_PARENS = re.compile(r"[()]")
_APOSTROPHES = re.compile("['‘’ʼ′`´]")
_QUESTION_MARK = re.compile(r"\?")


@dataclass(frozen=True)
class RewriteRule:
    """A single textual rewrite, applied only when its pattern is present."""

    name: str
    pattern: re.Pattern[str]
    replacement: str = ""

    def apply(self, title: str) -> str:
        if not self.pattern.search(title):
            return title
        return self.pattern.sub(self.replacement, title)


def default_rules(*, treat_with_as_feat: bool = False) -> tuple[RewriteRule, ...]:
    """Return the ordered rule set.

    Args:
        treat_with_as_feat: Also rewrite the word ``WITH`` to ``FEAT``.
    """
    return (
        RewriteRule("radio_edit", _RADIO_EDIT),
        RewriteRule("ampersand", _AMPERSAND, "AND"),
        RewriteRule("featuring", _FEAT_OR_WITH if treat_with_as_feat else _FEAT, "FEAT"),
        RewriteRule("parentheses", _PARENS),
        RewriteRule("apostrophes", _APOSTROPHES, "'"),
        RewriteRule("question_marks", _QUESTION_MARK),
    )


class TitleNormalizer:
    """Applies an ordered rule set to an upper-cased title.

    The order of rules is significant. The whole pass is repeated until the
    title stops changing, so ``normalize(normalize(x)) == normalize(x)``.
    """

    def __init__(self, rules: tuple[RewriteRule, ...] | None = None) -> None:
        self.rules = rules if rules is not None else default_rules()

    @classmethod
    def from_config(cls, *, treat_with_as_feat: bool = False) -> TitleNormalizer:
        return cls(default_rules(treat_with_as_feat=treat_with_as_feat))

    def _single_pass(self, title: str) -> str:
        for rule in self.rules:
            title = rule.apply(title)
        return title

    def normalize(self, title: str) -> str:
        current = title.upper()
        while True:
            rewritten = self._single_pass(current)
            if rewritten == current:
                return rewritten
            current = rewritten

    __call__ = normalize


_DEFAULT = TitleNormalizer()


def normalize(title: str) -> str:
    """Normalize a title with the default rule set."""
    return _DEFAULT.normalize(title)
