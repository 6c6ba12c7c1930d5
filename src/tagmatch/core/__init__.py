"""Core configuration, exceptions and types."""
