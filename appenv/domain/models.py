"""Typed domain models shared across runtime layers.

This module provides the immutable contracts produced once at startup: the
resolved environment directories and the parsed build version metadata.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Final

from .errors import ConfigurationError

VERSION_BUILT_AT_UNSET: Final[datetime] = datetime.min.replace(tzinfo=timezone.utc)


class AppMode(str, Enum):
    """Execution context used to choose an application-root strategy.

    Members are listed in precedence order.
    """

    DEV = "dev"
    TEST = "test"
    PACKAGED_TOOL = "packaged_tool"
    CONTAINER = "container"
    PROCESS_DIRECTORY = "process_directory"
    CURRENT_WORKING_DIRECTORY = "current_working_directory"
    MARKER_ROOT = "marker_root"
    CUSTOM_ROOT = "custom_root"


FALLBACK_MODES: Final[frozenset[AppMode]] = frozenset(
    {AppMode.CURRENT_WORKING_DIRECTORY, AppMode.PROCESS_DIRECTORY}
)


@dataclass(frozen=True)
class EnvironmentResult:
    """Resolved directories for application state.

    Attributes:
        mode: How the root was determined.
        app_root: Absolute base directory for writable state.
        config_dir: `app_root/config`.
        log_dir: `app_root/log`.
    """

    mode: AppMode
    app_root: Path
    config_dir: Path
    log_dir: Path

    @classmethod
    def from_root(cls, mode: AppMode, app_root: Path | str) -> EnvironmentResult:
        """Build a result whose config and log directories derive from the root.

        Args:
            mode: Resolution mode that produced the root.
            app_root: Absolute application root.

        Returns:
            EnvironmentResult: Immutable environment result.

        Raises:
            ConfigurationError: Raised when the root is empty or relative.
        """

        if not str(app_root).strip():
            raise ConfigurationError("application root must not be blank")
        root_path = Path(app_root)
        # drive-relative Windows paths such as `C:foo` carry a drive but no root
        if not root_path.root:
            raise ConfigurationError(f"application root must be absolute, got '{app_root}'")
        return cls(
            mode=mode,
            app_root=root_path,
            config_dir=root_path / "config",
            log_dir=root_path / "log",
        )


class CaseInsensitiveMapping(Mapping[str, str]):
    """Read-only string mapping with case-insensitive key lookup.

    Iteration yields each key in the spelling it was first seen with; a later
    pair whose key differs only in case replaces the value.
    """

    __slots__ = ("_entries",)

    def __init__(self, pairs: Iterable[tuple[str, str]] = ()):
        entries: dict[str, tuple[str, str]] = {}
        for key, value in pairs:
            folded_key = key.casefold()
            original_key = entries[folded_key][0] if folded_key in entries else key
            entries[folded_key] = (original_key, value)
        self._entries = entries

    def __getitem__(self, key: str) -> str:
        if not isinstance(key, str):
            raise KeyError(key)
        return self._entries[key.casefold()][1]

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and key.casefold() in self._entries

    def __iter__(self) -> Iterator[str]:
        return (original_key for original_key, _ in self._entries.values())

    def __len__(self) -> int:
        return len(self._entries)

    def __hash__(self) -> int:
        return hash(frozenset((folded_key, value) for folded_key, (_, value) in self._entries.items()))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({dict(self.items())!r})"


@dataclass(frozen=True)
class VersionInfo:
    """Structured product version and build metadata.

    Attributes:
        product: Product name, may be empty.
        sem_ver: Version portion before the first `+`.
        build_counter: CI build counter, `0` when absent or unparsable.
        branch: Source branch, empty when absent.
        built_at: Build timestamp in UTC, `VERSION_BUILT_AT_UNSET` when absent or unparsable.
        env: Build environment label, empty when absent.
        sha: Source commit hash, empty when absent.
        git_commits: Commit count, `0` when absent or unparsable.
        extra: Every `Key.Value` metadata token, known keys included.
    """

    product: str
    sem_ver: str
    build_counter: int = 0
    branch: str = ""
    built_at: datetime = VERSION_BUILT_AT_UNSET
    env: str = ""
    sha: str = ""
    git_commits: int = 0
    extra: CaseInsensitiveMapping = field(default_factory=CaseInsensitiveMapping)

    @property
    def has_built_at(self) -> bool:
        """Return whether a build timestamp was parsed."""

        return self.built_at != VERSION_BUILT_AT_UNSET
