"""Custom exceptions for tagmatch."""


class TagMatchError(Exception):
    """Base exception for all tagmatch errors."""

    pass


class SourceError(TagMatchError):
    """Loading items from the item source failed."""

    pass


class OntologyError(TagMatchError):
    """Tag ontology could not be built or loaded."""

    pass


class RegistryError(OntologyError):
    """Tag type registration failed."""

    def __init__(self, name: str, reason: str):
        """Initialize exception with the offending type name.

        Args:
            name: Tag type name that could not be registered.
            reason: Human-readable reason.
        """
        self.name = name
        self.reason = reason
        super().__init__(f"Cannot register tag type '{name}': {reason}")
