"""Tag type registry.

Maps tag names to their TagTypeDefinition. Lookups never fail: a name
with no definition resolves to the generic "string" type, so user-entered
tags with unfamiliar names still behave as plain text.
"""

from __future__ import annotations

import json
from functools import lru_cache
from pathlib import Path
from typing import Any, Iterable, Iterator

from loguru import logger

from tagmatch.core.exceptions import OntologyError, RegistryError
from tagmatch.ontology.definitions import SemanticKind, TagTypeDefinition

FALLBACK_TYPE = "string"

STRING_TYPE = TagTypeDefinition(
    name=FALLBACK_TYPE,
    kind=SemanticKind.TEXT,
    description="Free text.",
)

BUILTIN_TYPES: tuple[TagTypeDefinition, ...] = (
    STRING_TYPE,
    TagTypeDefinition(
        name="location",
        kind=SemanticKind.LOCATION,
        description="A place name or address.",
    ),
    TagTypeDefinition(
        name="time",
        kind=SemanticKind.TIME_RANGE,
        description="An ISO-8601 timestamp or time range.",
    ),
    TagTypeDefinition(
        name="number",
        kind=SemanticKind.NUMBER_RANGE,
        description="A number or numeric range.",
    ),
    TagTypeDefinition(
        name="pattern",
        kind=SemanticKind.REGEX,
        description="A regular expression tested against message text.",
    ),
    TagTypeDefinition(
        name="Emotion",
        kind=SemanticKind.ENUM,
        options=("Happiness", "Sadness", "Anger"),
        description="Emotional tone.",
    ),
    TagTypeDefinition(
        name="Business",
        kind=SemanticKind.ENUM,
        options=("Software", "Hardware", "Service"),
        description="Business product line.",
    ),
    TagTypeDefinition(
        name="People",
        kind=SemanticKind.OBJECT,
        description="A person, identified by public key and name.",
    ),
)


class TagTypeRegistry:
    """Immutable table of tag type definitions.

    Definitions are fixed at construction. To add types, build a new
    registry with ``extend``.

    Example:
        registry = TagTypeRegistry(BUILTIN_TYPES)
        registry.lookup("time").kind      # SemanticKind.TIME_RANGE
        registry.lookup("mystery").name   # "string"
    """

    def __init__(self, definitions: Iterable[TagTypeDefinition] = ()):
        """Initialize the registry.

        Args:
            definitions: Tag type definitions. The "string" fallback type is
                added if not supplied.

        Raises:
            RegistryError: If two definitions share a name.
        """
        self._definitions: dict[str, TagTypeDefinition] = {}
        for definition in definitions:
            if definition.name in self._definitions:
                raise RegistryError(definition.name, "already registered")
            self._definitions[definition.name] = definition
        self._definitions.setdefault(FALLBACK_TYPE, STRING_TYPE)

    def lookup(self, name: Any) -> TagTypeDefinition:
        """Resolve a tag name, falling back to the "string" type."""
        if isinstance(name, str) and name in self._definitions:
            return self._definitions[name]
        return self._definitions[FALLBACK_TYPE]

    def conditions_for(self, name: str) -> tuple[str, ...]:
        return self.lookup(name).conditions

    def default_condition(self, name: str) -> str:
        return self.lookup(name).default_condition

    def names(self) -> list[str]:
        """Registered type names in registration order."""
        return list(self._definitions)

    def extend(self, definitions: Iterable[TagTypeDefinition]) -> "TagTypeRegistry":
        """Return a new registry with extra definitions added.

        Raises:
            RegistryError: If a definition name is already registered.
        """
        return TagTypeRegistry([*self._definitions.values(), *definitions])

    def __contains__(self, name: object) -> bool:
        return name in self._definitions

    def __iter__(self) -> Iterator[TagTypeDefinition]:
        return iter(self._definitions.values())

    def __len__(self) -> int:
        return len(self._definitions)


@lru_cache(maxsize=1)
def get_default_registry() -> TagTypeRegistry:
    """Registry holding the built-in tag types."""
    return TagTypeRegistry(BUILTIN_TYPES)


def _definition_from_dict(name: str, data: dict[str, Any]) -> TagTypeDefinition:
    try:
        kind = SemanticKind(data.get("kind", SemanticKind.TEXT.value))
    except ValueError as e:
        raise OntologyError(f"Unknown kind for tag type '{name}': {data.get('kind')}") from e

    conditions = data.get("conditions", [])
    options = data.get("options", [])
    if not isinstance(conditions, list) or not isinstance(options, list):
        raise OntologyError(f"Tag type '{name}': conditions and options must be lists")

    return TagTypeDefinition(
        name=name,
        kind=kind,
        conditions=tuple(str(c) for c in conditions),
        options=tuple(str(o) for o in options),
        description=str(data.get("description", "")),
    )


def load_registry(path: Path | str) -> TagTypeRegistry:
    """Load a registry from a JSON file on top of the built-in types.

    The file maps type names to definitions, either wrapped in a "types"
    key or flat:

        {"types": {"Mood": {"kind": "enum", "options": ["Calm", "Tense"]}}}

    Args:
        path: Path to the ontology JSON file.

    Returns:
        Registry with the built-in types plus the file's types.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        OntologyError: If the file is not valid JSON or a definition is malformed.
    """
    path = Path(path)
    try:
        with open(path) as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise OntologyError(f"Invalid ontology file {path}: {e}") from e

    if not isinstance(data, dict):
        raise OntologyError(f"Invalid ontology file {path}: expected an object")

    types = data.get("types", data)
    if not isinstance(types, dict):
        raise OntologyError(f"Invalid ontology file {path}: 'types' must be an object")

    definitions = []
    for name, entry in types.items():
        if not isinstance(entry, dict):
            raise OntologyError(f"Tag type '{name}' must be an object")
        definitions.append(_definition_from_dict(name, entry))

    logger.debug(f"Loaded {len(definitions)} tag types from {path}")
    return get_default_registry().extend(definitions)
