"""Event matching: rule stage, fuzzy fallback and the engine tying them together."""

from tagmatch.matching.engine import MatchEngine, create_match_engine, dedupe_items
from tagmatch.matching.fuzzy import RapidFuzzIndex, fuzzy_search
from tagmatch.matching.ports import FuzzyIndex, ItemSource, NotificationSink
from tagmatch.matching.rules import evaluate_tag, item_matches

__all__ = [
    "MatchEngine",
    "create_match_engine",
    "dedupe_items",
    "RapidFuzzIndex",
    "fuzzy_search",
    "FuzzyIndex",
    "ItemSource",
    "NotificationSink",
    "evaluate_tag",
    "item_matches",
]
