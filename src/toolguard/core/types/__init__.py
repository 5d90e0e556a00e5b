"""Shared type definitions for the tool execution contract."""
