"""Recover a dependency-injection graph from annotated Java sources."""

__version__ = "0.1.0"
