"""Sandbox path resolution."""
