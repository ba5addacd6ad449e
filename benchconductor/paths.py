"""Path helpers for command-line tools."""

from __future__ import annotations

import os


def get_relative_path(p: str) -> str:
    """Return ``p`` relative to the working directory, or ``p`` if that fails."""
    if not os.path.isabs(p):
        return p
    try:
        return os.path.relpath(p, os.getcwd())
    except (OSError, ValueError):
        return p


def get_absolute_path(p: str) -> str:
    """Return the cleaned absolute form of ``p``, or ``p`` if that fails."""
    try:
        return os.path.abspath(p)
    except (OSError, ValueError):
        return p