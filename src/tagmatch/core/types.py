"""Type definitions for tagmatch."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import TYPE_CHECKING, Any, Iterator

if TYPE_CHECKING:
    from tagmatch.ontology.tags import TagInstance


class MatchSource(Enum):
    """Stage of the match engine that produced a result."""

    RULE = "rule"
    FUZZY = "fuzzy"
    NONE = "none"


@dataclass(frozen=True)
class Event:
    """An external, timestamped, authored text message.

    Attributes:
        content: Message text.
        created_at: Creation time in epoch seconds.
        pubkey: Author public key.
        tags: Raw tag arrays carried by the event (e.g. ``("t", "topic")``).
        id: Optional event identifier.
    """

    content: str = ""
    created_at: int = 0
    pubkey: str = ""
    tags: tuple[tuple[str, ...], ...] = ()
    id: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Event":
        """Build an event from its wire form."""
        return cls(
            content=data.get("content") or "",
            created_at=int(data.get("created_at") or 0),
            pubkey=data.get("pubkey") or "",
            tags=tuple(tuple(str(part) for part in tag) for tag in data.get("tags") or ()),
            id=data.get("id"),
        )

    @property
    def timestamp(self) -> datetime | None:
        """Creation time as an aware UTC datetime, or None if unrepresentable."""
        try:
            return datetime.fromtimestamp(self.created_at, tz=timezone.utc)
        except (ValueError, OverflowError, OSError):
            return None


@dataclass
class Item:
    """A stored content item carrying tags.

    Attributes:
        id: Unique identifier, used for deduplication.
        name: Display name.
        content: Item body text.
        tags: Tags owned by this item.
        updated_at: Last modification time.
    """

    id: str
    name: str = ""
    content: str = ""
    tags: list["TagInstance"] = field(default_factory=list)
    updated_at: datetime | None = None


@dataclass(frozen=True)
class FuzzyHit:
    """A ranked fuzzy-search result.

    Attributes:
        item: The matched item.
        score: Distance from the query, 0.0 (identical) to 1.0.
    """

    item: Item
    score: float


@dataclass
class MatchResult:
    """Deduplicated items matched for one event.

    Attributes:
        items: Matched items in discovery order, unique by id.
        source: Stage that produced the items.
    """

    items: list[Item] = field(default_factory=list)
    source: MatchSource = MatchSource.NONE

    @property
    def ids(self) -> list[str]:
        """Identifiers of the matched items."""
        return [item.id for item in self.items]

    def __len__(self) -> int:
        return len(self.items)

    def __bool__(self) -> bool:
        return bool(self.items)

    def __iter__(self) -> Iterator[Item]:
        return iter(self.items)
