"""Domain-specific helpers for configuration management."""

from . import guard, logging

__all__ = [
    "guard",
    "logging",
]
