"""Tag instances attached to stored items."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Any

from tagmatch.ontology.definitions import Condition, TagTypeDefinition
from tagmatch.ontology.registry import TagTypeRegistry, get_default_registry

if TYPE_CHECKING:
    from tagmatch.core.types import Event


@dataclass
class TagInstance:
    """A concrete tag: a name, a condition and a value.

    The shape of ``value`` depends on the tag type and condition: a string
    for scalar conditions, ``{"lower", "upper"}`` for numeric ``between``,
    ``{"start", "end"}`` for time ``between``, a list for ``is one of``.

    Attributes:
        name: Tag type name, resolved through a TagTypeRegistry.
        condition: Condition identifier (e.g. "is", "between").
        value: Condition operand in wire shape.
    """

    name: str
    condition: str = Condition.IS.value
    value: Any = ""

    def definition(self, registry: TagTypeRegistry | None = None) -> TagTypeDefinition:
        return (registry or get_default_registry()).lookup(self.name)

    def is_valid(self, registry: TagTypeRegistry | None = None) -> bool:
        return self.definition(registry).validate(self.value, self.condition)

    def with_condition(
        self,
        condition: str,
        registry: TagTypeRegistry | None = None,
    ) -> "TagInstance":
        """Return a copy using a new condition.

        The value is kept when both conditions take the same shape and is
        reset to the new condition's blank value otherwise (e.g. switching
        "is" to "between" yields an empty range).
        """
        definition = self.definition(registry)
        if definition.value_shape(condition) == definition.value_shape(self.condition):
            return replace(self, condition=condition)
        return replace(self, condition=condition, value=definition.empty_value(condition))

    def to_dict(self, registry: TagTypeRegistry | None = None) -> dict[str, Any]:
        """Wire form, with the value serialized by the tag's type."""
        return {
            "name": self.name,
            "condition": self.condition,
            "value": self.definition(registry).serialize(self.value),
        }

    @classmethod
    def from_dict(
        cls,
        data: dict[str, Any],
        registry: TagTypeRegistry | None = None,
    ) -> "TagInstance":
        """Build a tag from its wire form."""
        name = str(data.get("name", ""))
        definition = (registry or get_default_registry()).lookup(name)
        return cls(
            name=name,
            condition=str(data.get("condition") or definition.default_condition),
            value=definition.deserialize(data.get("value", "")),
        )


def extract_tags_from_event(event: "Event") -> list[TagInstance]:
    """Decode the raw tag arrays of an event into tag instances.

    - ``["t", topic]`` becomes a topic tag named after the topic.
    - ``["p", key]`` and ``["e", id]`` become "references" tags.
    - Any other tag with a name and value becomes an "is" tag.
    - Tags with fewer than two entries are skipped.
    """
    tags: list[TagInstance] = []
    for raw in event.tags:
        if len(raw) < 2:
            continue
        name, value = raw[0], raw[1]
        if name == "t":
            tags.append(TagInstance(name=value, condition=Condition.IS.value, value=""))
        elif name in ("p", "e"):
            tags.append(TagInstance(name=name, condition=Condition.REFERENCES.value, value=value))
        else:
            tags.append(TagInstance(name=name, condition=Condition.IS.value, value=value))
    return tags
