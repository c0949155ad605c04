"""Shared utilities for jacbridge."""

from __future__ import annotations

from pathlib import Path


def path_to_uri(path: str | Path) -> str:
    """Convert a file-system path to the ``file://`` URI used as a document key.

    Examples:
        >>> path_to_uri("/ws/main.py")
        'file:///ws/main.py'
        >>> path_to_uri("/ws/my pkg/main.py")
        'file:///ws/my%20pkg/main.py'
    """
    return Path(path).absolute().as_uri()
