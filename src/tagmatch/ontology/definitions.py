"""Tag type definitions.

A TagTypeDefinition says what a tag name means: which semantic kind it
belongs to, which conditions are legal for it, how a value is validated for
a given condition, and how it is (de)serialized. Behavior is chosen by an
exhaustive match on SemanticKind rather than per-type closures.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum, StrEnum
from typing import Any

from tagmatch.ontology.values import (
    NumberRange,
    TimeRange,
    compile_pattern,
    parse_number,
    parse_timestamp,
)


class SemanticKind(Enum):
    """Semantic kind of a tag type."""

    TEXT = "text"
    LOCATION = "location"
    NUMBER_RANGE = "number"
    TIME_RANGE = "time"
    REGEX = "regex"
    ENUM = "enum"
    OBJECT = "object"


class Condition(StrEnum):
    """Known condition identifiers."""

    IS = "is"
    CONTAINS = "contains"
    NEAR = "near"
    BEFORE = "before"
    AFTER = "after"
    BETWEEN = "between"
    GREATER_THAN = "greater than"
    LESS_THAN = "less than"
    MATCHES_REGEX = "matches regex"
    IS_ONE_OF = "is one of"
    REFERENCES = "references"


DEFAULT_CONDITIONS: dict[SemanticKind, tuple[str, ...]] = {
    SemanticKind.TEXT: (Condition.IS, Condition.CONTAINS, Condition.MATCHES_REGEX),
    SemanticKind.LOCATION: (Condition.IS, Condition.CONTAINS, Condition.NEAR),
    SemanticKind.NUMBER_RANGE: (
        Condition.IS,
        Condition.GREATER_THAN,
        Condition.LESS_THAN,
        Condition.BETWEEN,
    ),
    SemanticKind.TIME_RANGE: (
        Condition.IS,
        Condition.BEFORE,
        Condition.AFTER,
        Condition.BETWEEN,
    ),
    SemanticKind.REGEX: (Condition.MATCHES_REGEX,),
    SemanticKind.ENUM: (Condition.IS, Condition.IS_ONE_OF),
    SemanticKind.OBJECT: (Condition.IS, Condition.CONTAINS),
}


@dataclass(frozen=True)
class TagTypeDefinition:
    """Meaning of one tag name.

    Attributes:
        name: Tag type name (e.g. "time", "Emotion").
        kind: Semantic kind driving validation and evaluation.
        conditions: Legal conditions, in display order.
        options: Allowed values for ENUM kinds; empty means open.
        description: Optional human-readable description.
    """

    name: str
    kind: SemanticKind
    conditions: tuple[str, ...] = ()
    options: tuple[str, ...] = ()
    description: str = ""

    def __post_init__(self) -> None:
        if not self.conditions:
            object.__setattr__(self, "conditions", DEFAULT_CONDITIONS[self.kind])

    @property
    def default_condition(self) -> str:
        return self.conditions[0]

    def value_shape(self, condition: str) -> str:
        """Shape a value takes under a condition: range, list, object or scalar."""
        if condition == Condition.BETWEEN and self.kind in (
            SemanticKind.NUMBER_RANGE,
            SemanticKind.TIME_RANGE,
        ):
            return "range"
        if condition == Condition.IS_ONE_OF:
            return "list"
        if self.kind is SemanticKind.OBJECT:
            return "object"
        return "scalar"

    def empty_value(self, condition: str) -> Any:
        """Blank value for a freshly chosen condition."""
        match self.value_shape(condition):
            case "range" if self.kind is SemanticKind.TIME_RANGE:
                return {"start": "", "end": ""}
            case "range":
                return {"lower": "", "upper": ""}
            case "list":
                return []
            case "object":
                return {}
            case _:
                return ""

    def validate(self, value: Any, condition: str) -> bool:
        """Check that value is well-formed for this type under condition.

        A condition not declared by this type is always invalid. Never raises.
        """
        if condition not in self.conditions:
            return False

        match self.kind:
            case SemanticKind.TEXT:
                if condition == Condition.MATCHES_REGEX:
                    return compile_pattern(value) is not None
                return isinstance(value, str)
            case SemanticKind.LOCATION:
                return isinstance(value, str) and len(value) > 0
            case SemanticKind.TIME_RANGE:
                if condition == Condition.BETWEEN:
                    return TimeRange.parse(value) is not None
                return parse_timestamp(value) is not None
            case SemanticKind.NUMBER_RANGE:
                if condition == Condition.BETWEEN:
                    return NumberRange.parse(value) is not None
                return parse_number(value) is not None
            case SemanticKind.REGEX:
                return compile_pattern(value) is not None
            case SemanticKind.ENUM:
                if condition == Condition.IS_ONE_OF:
                    return (
                        isinstance(value, list)
                        and len(value) > 0
                        and all(self._is_option(v) for v in value)
                    )
                return self._is_option(value)
            case SemanticKind.OBJECT:
                return isinstance(value, Mapping) and any(
                    isinstance(v, str) and v for v in value.values()
                )

    def serialize(self, value: Any) -> Any:
        """Canonical wire form of a value: plain str, number, dict or list."""
        match self.kind:
            case SemanticKind.NUMBER_RANGE | SemanticKind.TIME_RANGE | SemanticKind.OBJECT:
                return dict(value) if isinstance(value, Mapping) else value
            case SemanticKind.ENUM:
                return list(value) if isinstance(value, (list, tuple)) else value
            case SemanticKind.TEXT | SemanticKind.LOCATION | SemanticKind.REGEX:
                return value

    def deserialize(self, raw: Any) -> Any:
        """Inverse of serialize."""
        match self.kind:
            case SemanticKind.NUMBER_RANGE | SemanticKind.TIME_RANGE | SemanticKind.OBJECT:
                return dict(raw) if isinstance(raw, Mapping) else raw
            case SemanticKind.ENUM:
                return list(raw) if isinstance(raw, (list, tuple)) else raw
            case SemanticKind.TEXT | SemanticKind.LOCATION | SemanticKind.REGEX:
                return raw

    def _is_option(self, value: Any) -> bool:
        if not isinstance(value, str) or not value:
            return False
        if not self.options:
            return True
        folded = value.casefold()
        return any(option.casefold() == folded for option in self.options)
