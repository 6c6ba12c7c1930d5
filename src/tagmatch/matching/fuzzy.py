"""Fuzzy fallback stage of the match engine.

Uses RapidFuzz ``token_set_ratio`` over each item's name, content and
flattened tag values, so a short field only scores high when its tokens
actually appear in the query. RapidFuzz similarities (0-100, higher is
closer) are converted to distances in [0, 1] so that lower scores mean more
similar, and a hit is kept when its distance is at or below the configured
threshold.
"""

from __future__ import annotations

from typing import Callable, Iterable

from loguru import logger
from rapidfuzz import fuzz, utils

from tagmatch.core.types import FuzzyHit, Item
from tagmatch.matching.ports import FuzzyIndex
from tagmatch.ontology.values import flatten_value


def item_search_fields(item: Item) -> list[str]:
    """Searchable strings of an item: name, content and tag values."""
    fields = [item.name or "", item.content or ""]
    for tag in item.tags or ():
        fields.extend(flatten_value(tag.value))
    return [f for f in fields if f]


class RapidFuzzIndex:
    """In-memory FuzzyIndex backed by RapidFuzz.

    Example:
        index = RapidFuzzIndex()
        index.set_collection(items)
        hits = index.search("project kickoff")
        # [FuzzyHit(item=..., score=0.05), ...]
    """

    def __init__(self, limit: int | None = None):
        """Initialize an empty index.

        Args:
            limit: Maximum hits returned by search; None for all.
        """
        self.limit = limit
        self._entries: list[tuple[Item, list[str]]] = []

    def set_collection(self, items: Iterable[Item]) -> None:
        self._entries = []
        for item in items:
            processed = [utils.default_process(f) for f in item_search_fields(item)]
            self._entries.append((item, [p for p in processed if p]))

    def search(self, text: str) -> list[FuzzyHit]:
        query = utils.default_process(text or "")
        if not query:
            return []

        hits: list[FuzzyHit] = []
        for item, fields in self._entries:
            if not fields:
                continue
            best = max(fuzz.token_set_ratio(query, field) for field in fields)
            hits.append(FuzzyHit(item=item, score=round(1.0 - best / 100.0, 4)))

        hits.sort(key=lambda h: h.score)
        if self.limit is not None:
            hits = hits[: self.limit]
        return hits


def fuzzy_search(
    items: list[Item],
    text: str,
    *,
    threshold: float,
    index_factory: Callable[[], FuzzyIndex] = RapidFuzzIndex,
    limit: int | None = None,
) -> list[FuzzyHit]:
    """Rank items against text with a freshly built index.

    A new index is built on every call, so concurrent callers never share
    index state.

    Args:
        items: Collection to search.
        text: Query text.
        threshold: Maximum distance for a hit to be kept.
        index_factory: Zero-argument callable creating an empty FuzzyIndex.
        limit: Maximum number of hits to return.

    Returns:
        Hits with score <= threshold, most similar first.
    """
    index = index_factory()
    index.set_collection(items)
    hits = [hit for hit in index.search(text) if hit.score <= threshold]
    if limit is not None:
        hits = hits[:limit]
    logger.debug(f"Fuzzy stage: {len(hits)} hits within threshold {threshold}")
    return hits
