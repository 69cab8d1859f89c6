"""Project-native typed exceptions for environment and version resolution."""

from __future__ import annotations

from collections.abc import Sequence


class AppEnvError(Exception):
    """Base exception for startup environment and version failures."""


class ConfigurationError(AppEnvError, ValueError):
    """Caller supplied invalid or insufficient resolution parameters."""


class NotFoundError(AppEnvError, LookupError):
    """Strict marker search found no matching ancestor directory.

    Attributes:
        marker_names: Marker directory names that were searched for.
    """

    def __init__(self, message: str, marker_names: Sequence[str] = ()):
        super().__init__(message)
        self.marker_names = tuple(marker_names)


class MalformedInputError(AppEnvError, ValueError):
    """Raw version input is blank or otherwise unusable."""
