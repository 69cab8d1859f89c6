"""Upward directory scan shared by version-control and marker detection."""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path

logger = logging.getLogger(__name__)


def environment_scan_ancestors(
    start: Path,
    predicate: Callable[[Path], bool],
    max_depth: int | None = None,
) -> Path | None:
    """Walk from `start` towards the filesystem root until `predicate` matches.

    The start directory is depth 0. An `OSError` raised by the predicate counts
    as no match at that level and the walk continues with the parent, so
    unreadable directories never abort the scan.

    Args:
        start: First directory to test.
        predicate: Test applied to each directory on the way up.
        max_depth: Optional number of parent steps allowed after `start`.

    Returns:
        Path | None: First matching directory, or None when the walk ends without a match.

    Raises:
        ValueError: Raised when `max_depth` is negative.
    """

    if max_depth is not None and max_depth < 0:
        raise ValueError("max_depth must not be negative")

    current = start
    depth = 0
    while max_depth is None or depth <= max_depth:
        try:
            if predicate(current):
                return current
        except OSError as error:
            logger.debug("Skipping unreadable directory '%s' during ancestor scan: %s", current, error)

        parent = current.parent
        if parent == current:
            return None
        current = parent
        depth += 1
    return None
