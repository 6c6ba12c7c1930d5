"""Match notifications.

Formats the user-facing message sent when an event matched stored items.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from loguru import logger

if TYPE_CHECKING:
    from tagmatch.core.types import Event, MatchResult


def short_author(pubkey: str) -> str:
    """Abbreviate a public key for display."""
    if not pubkey:
        return "unknown author"
    if len(pubkey) <= 16:
        return pubkey
    return f"{pubkey[:8]}...{pubkey[-8:]}"


def format_match_message(result: "MatchResult", event: "Event") -> str:
    """Describe a match result in one message.

    Example:
        Match in 2 object(s) for event from 3bf0c63f...a1b2c3d4:
        - Team meeting (updated 2024-01-15 09:30)
        - Budget (updated never)
    """
    lines = [
        f"Match in {len(result)} object(s) for event from {short_author(event.pubkey)}:"
    ]
    for item in result:
        updated = item.updated_at.strftime("%Y-%m-%d %H:%M") if item.updated_at else "never"
        lines.append(f"- {item.name or item.id} (updated {updated})")
    return "\n".join(lines)


class LoggingNotifier:
    """NotificationSink that writes match messages to the log."""

    def notify(self, message: str) -> None:
        logger.info(message)
