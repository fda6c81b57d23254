"""Parade card game engine and line-based multiplayer server."""

__version__ = "1.0.0"
