"""Test fakes for testing without real infrastructure.

This module provides in-memory implementations of the match engine ports:
- ItemSource (stored item collection)
- NotificationSink (records messages instead of showing them)

Example:
    from tests.fakes import InMemoryItemSource, RecordingNotifier

    engine = MatchEngine(
        InMemoryItemSource([make_item("a", name="Standup")]),
        notifier=RecordingNotifier(),
    )
"""

from .items import (
    FailingItemSource,
    InMemoryItemSource,
    RecordingNotifier,
    epoch,
    make_event,
    make_item,
)

__all__ = [
    "InMemoryItemSource",
    "FailingItemSource",
    "RecordingNotifier",
    "make_item",
    "make_event",
    "epoch",
]
