"""Ask a human to pick the right search result when automatic matching fails."""

from __future__ import annotations

import logging
import threading
from collections.abc import Sequence
from typing import Protocol

import click
from rapidfuzz import fuzz
from rich.console import Console
from rich.markup import escape

from playlister.matching.validator import is_valid_candidate
from playlister.models import Candidate, Query
from playlister.utils.output import console as global_console

logger = logging.getLogger(__name__)


class Disambiguator(Protocol):
    """Anything that can turn a candidate list into a single human choice."""

    def ask(self, candidates: Sequence[Candidate], query: Query) -> Candidate | None: ...


def build_options(candidates: Sequence[Candidate]) -> dict[str, Candidate]:
    """Map display labels to candidates.

    Only structurally valid candidates are kept (the artist is not checked).
    Candidates sharing a label collapse into one option: the option keeps the
    position where the label first appeared and resolves to the last-seen
    candidate with that label.
    """
    options: dict[str, Candidate] = {}
    for candidate in candidates:
        if is_valid_candidate(candidate):
            options[candidate.label] = candidate
    return options


class PromptDisambiguator:
    """Terminal prompt listing the options with a numbered menu.

    ``0`` means "none of these". Calls are serialized so concurrent callers
    never interleave prompts on the one terminal.
    """

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or global_console
        self._lock = threading.Lock()

    def ask(self, candidates: Sequence[Candidate], query: Query) -> Candidate | None:
        options = build_options(candidates)
        if not options:
            logger.debug("No selectable candidates for %s", query.label)
            return None

        labels = list(options)
        with self._lock:
            self.console.print(
                f"\n[info]Possible match. Which of the following is the best match for:[/info] "
                f"[bold underline]{escape(query.label)}[/bold underline]"
            )
            for i, label in enumerate(labels, 1):
                similarity = fuzz.token_sort_ratio(label.lower(), query.label.lower())
                self.console.print(f"  {i}. {escape(label)} [dim]({similarity:.0f}%)[/dim]")
            self.console.print("  0. None of these")

            index = click.prompt(
                "Choice",
                type=click.IntRange(0, len(labels)),
                default=0,
                show_default=True,
            )

        if index == 0:
            return None
        return options[labels[index - 1]]
