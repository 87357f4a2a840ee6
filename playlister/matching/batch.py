"""Resolve a whole track list against the remote catalog.

Runs in two phases: every search is issued up front on a bounded thread
pool, then the resolver walks the results in input order on the calling
thread. Human prompts and report lines therefore come out in playlist
order and never interleave, whatever order the searches complete in.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from concurrent.futures import ThreadPoolExecutor, as_completed

import requests

from playlister.catalog.base import CatalogService
from playlister.exceptions import CatalogAuthError, CatalogError
from playlister.matching.resolver import MatchResolver
from playlister.models import BatchResult, Candidate, Query

logger = logging.getLogger(__name__)

DEFAULT_SEARCH_LIMIT = 5
DEFAULT_JOBS = 4

SearchFn = Callable[[Query], Sequence[Candidate] | None]


def search_with(catalog: CatalogService, limit: int = DEFAULT_SEARCH_LIMIT) -> SearchFn:
    """Build a per-query search function searching for ``"<artist> <title>"``."""

    def search(query: Query) -> Sequence[Candidate] | None:
        try:
            return catalog.search(f"{query.artist} {query.title}", limit)
        except (KeyError, TypeError, AttributeError) as e:
            raise CatalogError(f"Unexpected search response: {e!r}") from e

    return search


def _search_all(
    queries: Sequence[Query],
    search: SearchFn,
    jobs: int,
    on_searched: Callable[[Query], None] | None,
) -> tuple[list[Sequence[Candidate]], int]:
    """Run every search concurrently, returning results by input index.

    A failed search leaves an empty list at its index and is counted, be
    it a catalog error or a raw socket or HTTP error.
    Authentication failures cancel the remaining searches and propagate.
    """
    results: list[Sequence[Candidate]] = [[] for _ in queries]
    failed = 0

    executor = ThreadPoolExecutor(max_workers=max(1, jobs))
    try:
        future_to_index = {executor.submit(search, query): i for i, query in enumerate(queries)}

        for future in as_completed(future_to_index):
            index = future_to_index[future]
            query = queries[index]
            try:
                results[index] = future.result() or []
            except CatalogAuthError:
                raise
            except (CatalogError, requests.RequestException, OSError) as e:
                failed += 1
                logger.warning("Search failed for %s: %s", query.label, e)

            if on_searched is not None:
                on_searched(query)
    except BaseException:
        executor.shutdown(wait=False, cancel_futures=True)
        raise
    else:
        executor.shutdown(wait=True)

    return results, failed


def resolve_all(
    queries: Sequence[Query],
    search: SearchFn,
    resolver: MatchResolver,
    *,
    jobs: int = DEFAULT_JOBS,
    on_searched: Callable[[Query], None] | None = None,
) -> BatchResult:
    """Search for and resolve every query.

    Args:
        queries: Tracks to find, in playlist order.
        search: Returns the candidate list for one query; may raise
            ``CatalogError`` or a transport error, which degrades that query
            to no results.
        resolver: Decides the verdict for each query.
        jobs: Maximum concurrent searches.
        on_searched: Called on the calling thread after each search completes.

    Returns:
        One verdict per query, in input order.
    """
    candidate_lists, failed = _search_all(queries, search, jobs, on_searched)

    batch = BatchResult(failed_searches=failed)
    for query, candidates in zip(queries, candidate_lists):
        batch.pairs.append((query, resolver.resolve(query, candidates)))

    logger.info("Matched %d of %d tracks (%d failed searches)", batch.matches, batch.total, failed)
    return batch
