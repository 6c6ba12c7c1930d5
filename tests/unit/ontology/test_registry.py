"""Tests for the tag type registry."""

import json

import pytest

from tagmatch.core.exceptions import OntologyError, RegistryError
from tagmatch.ontology.definitions import SemanticKind, TagTypeDefinition
from tagmatch.ontology.registry import (
    BUILTIN_TYPES,
    FALLBACK_TYPE,
    TagTypeRegistry,
    get_default_registry,
    load_registry,
)


class TestLookup:
    """Tests for TagTypeRegistry.lookup."""

    def test_exact_match(self):
        registry = get_default_registry()

        assert registry.lookup("time").kind is SemanticKind.TIME_RANGE
        assert registry.lookup("number").kind is SemanticKind.NUMBER_RANGE
        assert registry.lookup("People").kind is SemanticKind.OBJECT

    def test_unknown_falls_back_to_string(self):
        registry = get_default_registry()

        definition = registry.lookup("desc")

        assert definition.name == FALLBACK_TYPE
        assert definition.kind is SemanticKind.TEXT

    def test_lookup_is_case_sensitive(self):
        registry = get_default_registry()

        assert registry.lookup("Time").name == FALLBACK_TYPE

    def test_lookup_never_raises(self):
        registry = get_default_registry()

        assert registry.lookup(None).name == FALLBACK_TYPE
        assert registry.lookup(["time"]).name == FALLBACK_TYPE

    def test_fallback_added_when_missing(self):
        registry = TagTypeRegistry(
            [TagTypeDefinition(name="amount", kind=SemanticKind.NUMBER_RANGE)]
        )

        assert FALLBACK_TYPE in registry
        assert registry.lookup("other").kind is SemanticKind.TEXT


class TestRegistryContents:
    """Tests for registry introspection."""

    def test_names_in_registration_order(self):
        registry = get_default_registry()

        assert registry.names() == [d.name for d in BUILTIN_TYPES]
        assert len(registry) == len(BUILTIN_TYPES)

    def test_conditions_for(self):
        registry = get_default_registry()

        assert registry.conditions_for("time") == ("is", "before", "after", "between")
        assert registry.conditions_for("unknown") == ("is", "contains", "matches regex")

    def test_default_condition(self):
        registry = get_default_registry()

        assert registry.default_condition("pattern") == "matches regex"
        assert registry.default_condition("Business") == "is"

    def test_duplicate_registration_rejected(self):
        with pytest.raises(RegistryError) as exc_info:
            TagTypeRegistry(
                [
                    TagTypeDefinition(name="x", kind=SemanticKind.TEXT),
                    TagTypeDefinition(name="x", kind=SemanticKind.LOCATION),
                ]
            )

        assert exc_info.value.name == "x"

    def test_extend_returns_new_registry(self):
        base = get_default_registry()
        extended = base.extend([TagTypeDefinition(name="Mood", kind=SemanticKind.ENUM)])

        assert "Mood" in extended
        assert "Mood" not in base

    def test_default_registry_is_shared(self):
        assert get_default_registry() is get_default_registry()


class TestLoadRegistry:
    """Tests for load_registry."""

    def test_load_wrapped_format(self, tmp_path):
        path = tmp_path / "ontology.json"
        path.write_text(
            json.dumps(
                {
                    "types": {
                        "Mood": {
                            "kind": "enum",
                            "options": ["Calm", "Tense"],
                            "description": "How it felt.",
                        },
                        "amount": {"kind": "number"},
                    }
                }
            )
        )

        registry = load_registry(path)

        mood = registry.lookup("Mood")
        assert mood.kind is SemanticKind.ENUM
        assert mood.options == ("Calm", "Tense")
        assert mood.description == "How it felt."
        assert registry.lookup("amount").conditions == (
            "is",
            "greater than",
            "less than",
            "between",
        )
        assert "time" in registry

    def test_load_flat_format(self, tmp_path):
        path = tmp_path / "ontology.json"
        path.write_text(json.dumps({"venue": {"kind": "location", "conditions": ["is"]}}))

        registry = load_registry(path)

        assert registry.lookup("venue").conditions == ("is",)

    def test_unknown_kind(self, tmp_path):
        path = tmp_path / "ontology.json"
        path.write_text(json.dumps({"types": {"odd": {"kind": "color"}}}))

        with pytest.raises(OntologyError):
            load_registry(path)

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "ontology.json"
        path.write_text("{not json")

        with pytest.raises(OntologyError):
            load_registry(path)

    def test_redefining_builtin_rejected(self, tmp_path):
        path = tmp_path / "ontology.json"
        path.write_text(json.dumps({"types": {"time": {"kind": "text"}}}))

        with pytest.raises(RegistryError):
            load_registry(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_registry(tmp_path / "missing.json")
