"""Pytest configuration and fixtures."""

import pytest

from tagmatch.ontology.registry import TagTypeRegistry, get_default_registry


@pytest.fixture
def registry() -> TagTypeRegistry:
    """Provide the built-in tag type registry."""
    return get_default_registry()
