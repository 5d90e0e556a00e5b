"""Tool result post-processing."""
