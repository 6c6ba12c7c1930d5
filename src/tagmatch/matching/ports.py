"""Port definitions for the match engine.

The engine depends on these protocols rather than on concrete storage,
search or UI code, so it can run against in-memory fakes in tests and
against real collaborators in an application.

Protocols defined:
    - ItemSource: Loads the full stored item collection
    - FuzzyIndex: Approximate text search over items
    - NotificationSink: Receives a message when an event matched
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable, Protocol, runtime_checkable

if TYPE_CHECKING:
    from tagmatch.core.types import FuzzyHit, Item


@runtime_checkable
class ItemSource(Protocol):
    """Stored item collection.

    Example implementation: a key/value object store exposing all records.
    """

    async def get_all(self) -> list["Item"]:
        """Load every stored item.

        Returns:
            Snapshot of the collection at the time of the call.
        """
        ...


@runtime_checkable
class FuzzyIndex(Protocol):
    """Approximate text search over a collection of items.

    Scores are distances: lower is more similar.

    Example implementation: RapidFuzzIndex.
    """

    def set_collection(self, items: Iterable["Item"]) -> None:
        """Replace the indexed collection."""
        ...

    def search(self, text: str) -> list["FuzzyHit"]:
        """Rank indexed items against text.

        Returns:
            Hits sorted by ascending score.
        """
        ...


@runtime_checkable
class NotificationSink(Protocol):
    """Receiver of user-facing match notifications."""

    def notify(self, message: str) -> None:
        ...
