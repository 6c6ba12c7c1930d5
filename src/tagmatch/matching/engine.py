"""Two-stage match engine.

For each incoming event the engine loads every stored item and runs the
rule stage: an item matches when any of its tags matches the event. Only
when no item matches by rule does it fall back to fuzzy text search over
the same snapshot. Structured rules always take precedence over
approximate matches.
"""

from __future__ import annotations

from datetime import timezone
from typing import Callable

from loguru import logger

from tagmatch.core.config import Config, MatchConfig
from tagmatch.core.exceptions import SourceError
from tagmatch.core.types import Event, Item, MatchResult, MatchSource
from tagmatch.matching.fuzzy import RapidFuzzIndex, fuzzy_search
from tagmatch.matching.ports import FuzzyIndex, ItemSource, NotificationSink
from tagmatch.matching.rules import item_matches
from tagmatch.notifications import format_match_message
from tagmatch.ontology.registry import (
    TagTypeRegistry,
    get_default_registry,
    load_registry,
)


def dedupe_items(items: list[Item]) -> list[Item]:
    """Drop repeated items by id, keeping first occurrence order."""
    seen: set[str] = set()
    unique: list[Item] = []
    for item in items:
        if item.id in seen:
            continue
        seen.add(item.id)
        unique.append(item)
    return unique


class MatchEngine:
    """Match incoming events against the stored item collection.

    The engine keeps no state between calls. Each fuzzy fallback builds its
    own index from ``index_factory``.

    Example:
        engine = MatchEngine(item_source, notifier=LoggingNotifier())
        result = await engine.match_event(event)
        result.ids          # ["a", "c"]
        result.source       # MatchSource.RULE
    """

    def __init__(
        self,
        item_source: ItemSource,
        *,
        registry: TagTypeRegistry | None = None,
        config: MatchConfig | None = None,
        index_factory: Callable[[], FuzzyIndex] = RapidFuzzIndex,
        notifier: NotificationSink | None = None,
    ):
        """Initialize the match engine.

        Args:
            item_source: Source of stored items.
            registry: Tag type registry; defaults to the built-in types.
            config: Matching configuration (fuzzy threshold etc.).
            index_factory: Creates an empty FuzzyIndex for each fallback.
            notifier: Sink informed by handle_event when something matched.
        """
        self.item_source = item_source
        self.registry = registry or get_default_registry()
        self.config = config or MatchConfig()
        self.index_factory = index_factory
        self.notifier = notifier

    async def match_event(self, event: Event) -> MatchResult:
        """Find stored items relevant to an event.

        Args:
            event: Incoming event; never mutated.

        Returns:
            Deduplicated matches, from the rule stage if any rule matched,
            otherwise from the fuzzy stage.

        Raises:
            SourceError: If the item source fails to load.
        """
        items = await self._load_items()
        return self._match(items, event)

    async def find_matches(self, item: Item) -> MatchResult:
        """Find stored items related to another item.

        The item's content is used as event text and its update time as the
        event time; a naive update time is taken as UTC. The item itself is
        never part of the result.

        Raises:
            SourceError: If the item source fails to load.
        """
        updated_at = item.updated_at
        if updated_at is not None and updated_at.tzinfo is None:
            updated_at = updated_at.replace(tzinfo=timezone.utc)
        event = Event(
            content=item.content or "",
            created_at=int(updated_at.timestamp()) if updated_at else 0,
        )
        items = [other for other in await self._load_items() if other.id != item.id]
        return self._match(items, event)

    async def handle_event(self, event: Event) -> MatchResult:
        """Match an event and notify the sink when anything matched.

        Returns:
            The match result, whether or not a notification was sent.
        """
        result = await self.match_event(event)
        if result and self.notifier is not None:
            self.notifier.notify(format_match_message(result, event))
        return result

    async def _load_items(self) -> list[Item]:
        try:
            items = await self.item_source.get_all()
        except Exception as e:
            raise SourceError(f"Failed to load items: {e}") from e
        return list(items or [])

    def _match(self, items: list[Item], event: Event) -> MatchResult:
        text = (event.content or "").lower()

        matched = [
            item
            for item in items
            if item_matches(item, event, self.registry, text=text)
        ]
        logger.debug(f"Rule stage: {len(matched)} of {len(items)} items matched")
        if matched:
            return MatchResult(items=dedupe_items(matched), source=MatchSource.RULE)

        if not self.config.fuzzy_enabled:
            return MatchResult()

        hits = fuzzy_search(
            items,
            event.content or "",
            threshold=self.config.fuzzy_threshold,
            index_factory=self.index_factory,
            limit=self.config.fuzzy_limit,
        )
        if not hits:
            return MatchResult()
        return MatchResult(
            items=dedupe_items([hit.item for hit in hits]),
            source=MatchSource.FUZZY,
        )


def create_match_engine(
    config: Config,
    item_source: ItemSource,
    notifier: NotificationSink | None = None,
) -> MatchEngine:
    """Factory function to create a MatchEngine from application config.

    Args:
        config: Application configuration.
        item_source: Source of stored items.
        notifier: Optional notification sink.

    Returns:
        Configured MatchEngine instance.
    """
    if config.ontology_path is not None:
        registry = load_registry(config.ontology_path)
    else:
        registry = get_default_registry()
    return MatchEngine(
        item_source,
        registry=registry,
        config=config.match,
        notifier=notifier,
    )
