"""CLI commands for objekt."""

from . import (
    sample,
    demo,
    config_cmd,
)

__all__ = [
    "sample",
    "demo",
    "config_cmd",
]
