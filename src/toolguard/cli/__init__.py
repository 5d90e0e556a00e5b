"""Command-line interface for toolguard."""

from .app import app

__all__ = ["app"]
