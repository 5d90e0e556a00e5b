"""Hierarchical .ignore policy resolution."""
