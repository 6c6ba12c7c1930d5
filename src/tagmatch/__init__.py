"""tagmatch - Semantic tag ontology and event matching.

Stored items carry typed tags (time ranges, number ranges, free text,
enumerations, ...). Incoming events are matched against every stored item
by tag rules first, falling back to fuzzy text similarity when no rule
fires.

Example
-------
>>> from tagmatch import Event, Item, MatchEngine, TagInstance
>>> item = Item(id="b", name="Standup", tags=[TagInstance("desc", "contains", "meeting")])
>>> engine = MatchEngine(item_source)
>>> result = await engine.match_event(Event(content="Reminder: MEETING at 5pm"))
>>> result.ids
['b']
"""

from tagmatch.core.config import Config, MatchConfig
from tagmatch.core.exceptions import (
    OntologyError,
    RegistryError,
    SourceError,
    TagMatchError,
)
from tagmatch.core.types import Event, FuzzyHit, Item, MatchResult, MatchSource
from tagmatch.matching import MatchEngine, create_match_engine
from tagmatch.ontology import (
    SemanticKind,
    TagInstance,
    TagTypeDefinition,
    TagTypeRegistry,
    get_default_registry,
    load_registry,
)

__version__ = "0.1.0"

__all__ = [
    "Config",
    "MatchConfig",
    "TagMatchError",
    "SourceError",
    "OntologyError",
    "RegistryError",
    "Event",
    "Item",
    "FuzzyHit",
    "MatchResult",
    "MatchSource",
    "MatchEngine",
    "create_match_engine",
    "SemanticKind",
    "TagInstance",
    "TagTypeDefinition",
    "TagTypeRegistry",
    "get_default_registry",
    "load_registry",
]
