"""Rule stage of the match engine.

Evaluates stored tags against an incoming event. A tag whose value does not
validate, or whose value cannot be parsed at evaluation time, simply does
not match. Tags on one item are OR-combined: the item matches if any of its
tags matches.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING

from loguru import logger

from tagmatch.ontology.definitions import Condition, SemanticKind
from tagmatch.ontology.registry import TagTypeRegistry, get_default_registry
from tagmatch.ontology.values import (
    NumberRange,
    TimeRange,
    as_text,
    compile_pattern,
    extract_number,
    parse_number,
    parse_timestamp,
)

if TYPE_CHECKING:
    from tagmatch.core.types import Event, Item
    from tagmatch.ontology.tags import TagInstance


def evaluate_tag(
    tag: "TagInstance",
    event: "Event",
    registry: TagTypeRegistry | None = None,
    *,
    text: str | None = None,
) -> bool:
    """Decide whether a single tag matches an event.

    Args:
        tag: Tag to evaluate.
        event: Incoming event.
        registry: Registry used to resolve the tag's type.
        text: Lower-cased event content; computed from the event if omitted.

    Returns:
        True if the tag validates and its condition holds for the event.
    """
    definition = (registry or get_default_registry()).lookup(tag.name)
    if not definition.validate(tag.value, tag.condition):
        return False

    if text is None:
        text = (event.content or "").lower()

    match (definition.kind, tag.condition):
        case (SemanticKind.TIME_RANGE, Condition.BETWEEN):
            time_range = TimeRange.parse(tag.value)
            moment = event.timestamp
            if time_range is None or moment is None:
                return False
            return time_range.contains(moment)

        case (SemanticKind.NUMBER_RANGE, Condition.BETWEEN):
            number_range = NumberRange.parse(tag.value)
            number = extract_number(text)
            return number_range is not None and number is not None and number_range.contains(number)

        case (_, Condition.MATCHES_REGEX):
            pattern = compile_pattern(tag.value)
            if pattern is None:
                logger.warning(f"Invalid regex in tag '{tag.name}': {tag.value!r}")
                return False
            return pattern.search(text) is not None

        case (SemanticKind.OBJECT, Condition.IS | Condition.CONTAINS):
            return _object_matches(tag.value, event, text)

        case (_, Condition.IS | Condition.CONTAINS):
            needle = as_text(tag.value)
            return bool(needle) and needle.lower() in text

        case (SemanticKind.TIME_RANGE, Condition.BEFORE | Condition.AFTER):
            bound = parse_timestamp(tag.value)
            moment = event.timestamp
            if bound is None or moment is None:
                return False
            if tag.condition == Condition.BEFORE:
                return moment < bound
            return moment > bound

        case (SemanticKind.NUMBER_RANGE, Condition.GREATER_THAN | Condition.LESS_THAN):
            bound = parse_number(tag.value)
            number = extract_number(text)
            if bound is None or number is None:
                return False
            if tag.condition == Condition.GREATER_THAN:
                return number > bound
            return number < bound

        case (SemanticKind.ENUM, Condition.IS_ONE_OF):
            return any(option.lower() in text for option in tag.value)

        case _:
            return False


def _object_matches(value: Mapping, event: "Event", text: str) -> bool:
    pubkey = value.get("pubkey")
    if pubkey and event.pubkey and pubkey == event.pubkey:
        return True
    return any(isinstance(v, str) and v and v.lower() in text for v in value.values())


def item_matches(
    item: "Item",
    event: "Event",
    registry: TagTypeRegistry | None = None,
    *,
    text: str | None = None,
) -> bool:
    """True if any tag on the item matches the event."""
    if text is None:
        text = (event.content or "").lower()
    return any(evaluate_tag(tag, event, registry, text=text) for tag in item.tags or ())
