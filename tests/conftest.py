"""Shared test doubles for environment resolution tests."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from appenv.environment import OsRuntimeProbe, RuntimePlatform
from appenv.environment.detectors import CONTAINER_CGROUP_PATH, CONTAINER_MARKER_PATH


class FakeRuntimeProbe(OsRuntimeProbe):
    """Runtime probe with injected process facts over the real filesystem.

    Container marker and cgroup files are virtualised so tests behave the same
    inside and outside containers.
    """

    def __init__(
        self,
        base_directory: Path,
        current_directory: Path | None = None,
        home: Path | None = None,
        environment: dict[str, str] | None = None,
        command_line: str = "/usr/bin/python3 -m appenv.main",
        executable_path: Path | None = None,
        platform: RuntimePlatform = RuntimePlatform.LINUX,
        container_marker: bool = False,
        cgroup_text: str | None = None,
        unreadable: set[Path] | None = None,
    ):
        self._base_directory = base_directory
        self._current_directory = current_directory if current_directory is not None else base_directory
        self._home = home if home is not None else base_directory / "home"
        self._environment = dict(environment or {})
        self._command_line = command_line
        self._executable_path = executable_path
        self._platform = platform
        self._container_marker = container_marker
        self._cgroup_text = cgroup_text
        self._unreadable = set(unreadable or ())

    def probe_environment_variable(self, name: str) -> str | None:
        return self._environment.get(name)

    def probe_command_line(self) -> str:
        return self._command_line

    def probe_base_directory(self) -> Path:
        return self._base_directory

    def probe_executable_path(self) -> Path | None:
        return self._executable_path

    def probe_current_directory(self) -> Path:
        return self._current_directory

    def probe_platform(self) -> RuntimePlatform:
        return self._platform

    def probe_home_directory(self) -> Path:
        return self._home

    def probe_path_exists(self, path: Path) -> bool:
        if Path(path) == CONTAINER_MARKER_PATH:
            return self._container_marker
        return super().probe_path_exists(path)

    def probe_read_text(self, path: Path) -> str:
        if Path(path) == CONTAINER_CGROUP_PATH:
            if self._cgroup_text is None:
                raise FileNotFoundError(str(path))
            return self._cgroup_text
        return super().probe_read_text(path)

    def probe_list_directory_names(self, path: Path) -> list[str]:
        if Path(path) in self._unreadable:
            raise PermissionError(f"permission denied: {path}")
        return super().probe_list_directory_names(path)


@pytest.fixture
def make_probe() -> Callable[..., FakeRuntimeProbe]:
    """Return the fake probe constructor.

    Returns:
        Callable[..., FakeRuntimeProbe]: Factory accepting `FakeRuntimeProbe` arguments.

    Raises:
        RuntimeError: This fixture does not raise runtime errors.
    """

    return FakeRuntimeProbe
