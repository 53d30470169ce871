"""Command-line interface for objekt."""

from .app import app

__all__ = ["app"]
