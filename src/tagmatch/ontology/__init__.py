"""Tag ontology module.

Provides:
- SemanticKind / TagTypeDefinition: what a tag type means
- TagTypeRegistry: name -> definition lookup with a "string" fallback
- TagInstance: a tag attached to a stored item
"""

from tagmatch.ontology.definitions import Condition, SemanticKind, TagTypeDefinition
from tagmatch.ontology.registry import (
    BUILTIN_TYPES,
    TagTypeRegistry,
    get_default_registry,
    load_registry,
)
from tagmatch.ontology.tags import TagInstance, extract_tags_from_event

__all__ = [
    "Condition",
    "SemanticKind",
    "TagTypeDefinition",
    "BUILTIN_TYPES",
    "TagTypeRegistry",
    "get_default_registry",
    "load_registry",
    "TagInstance",
    "extract_tags_from_event",
]
