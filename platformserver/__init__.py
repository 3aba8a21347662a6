"""Authoritative TCP game server for a 2D multiplayer platformer."""

__version__ = "0.1.0"