"""Execution-context detectors for the environment classification cascade.

Each detector is best-effort: filesystem failures read as "signal absent" so
classification always produces a mode.
"""

from __future__ import annotations

import logging
from pathlib import Path, PurePosixPath
from typing import Final

from appenv.domain import AppMode

from .ancestor_scan import environment_scan_ancestors
from .interfaces import RuntimePlatform, RuntimeProbePort

logger = logging.getLogger(__name__)

CONTAINER_MARKER_PATH: Final[Path] = Path("/.dockerenv")
CONTAINER_CGROUP_PATH: Final[Path] = Path("/proc/1/cgroup")
CONTAINER_ROOT_VARIABLE: Final[str] = "APPENV_ROOT"
CONTAINER_DEFAULT_ROOT: Final[Path] = Path("/app")
CONTAINER_FLAG_VARIABLES: Final[tuple[str, ...]] = ("APPENV_RUNNING_IN_CONTAINER", "DOTNET_RUNNING_IN_CONTAINER")
PACKAGED_TOOL_FLAG_VARIABLE: Final[str] = "APPENV_IS_PACKAGED_TOOL"
VCS_MARKER_NAME: Final[str] = ".git"

_CONTAINER_CGROUP_KEYWORDS: Final[tuple[str, ...]] = ("docker", "kubepods", "containerd")
_TEST_COMMAND_LINE_TOKENS: Final[tuple[str, ...]] = (
    "pytest",
    "py.test",
    "unittest",
    "nose2",
    "tox",
    "testhost",
    "vstest",
)
_TEST_HARNESS_VARIABLES: Final[tuple[str, ...]] = ("PYTEST_CURRENT_TEST", "PYTEST_XDIST_WORKER", "TOX_ENV_NAME")
_PACKAGED_TOOL_PATH_FRAGMENTS: Final[tuple[str, ...]] = ("/.dotnet/tools/", "/pipx/venvs/", "/uv/tools/")
_PACKAGE_STORE_SEGMENTS: Final[frozenset[str]] = frozenset({".store"})
_FLAG_TRUE_VALUES: Final[frozenset[str]] = frozenset({"1", "true"})


def environment_classify(probe: RuntimeProbePort, fallback_mode: AppMode) -> AppMode:
    """Run the classification cascade; the first matching detector wins.

    Args:
        probe: Runtime fact source.
        fallback_mode: Mode returned when no detector matches.

    Returns:
        AppMode: Classified execution mode.

    Raises:
        RuntimeError: Detectors do not raise for filesystem failures.
    """

    if environment_is_container(probe):
        return AppMode.CONTAINER
    if environment_is_test(probe):
        return AppMode.TEST
    if environment_is_packaged_tool(probe):
        return AppMode.PACKAGED_TOOL
    if environment_find_vcs_root(probe) is not None:
        return AppMode.DEV
    return fallback_mode


def environment_is_container(probe: RuntimeProbePort) -> bool:
    """Detect a container runtime via marker file, flag variable or init cgroup.

    Args:
        probe: Runtime fact source.

    Returns:
        bool: True when any container signal is present.

    Raises:
        RuntimeError: This detector does not raise runtime errors.
    """

    if probe.probe_path_exists(CONTAINER_MARKER_PATH):
        return True
    if any(_environment_flag_is_set(probe, name) for name in CONTAINER_FLAG_VARIABLES):
        return True
    if probe.probe_platform() is not RuntimePlatform.LINUX:
        return False

    try:
        cgroup_text = probe.probe_read_text(CONTAINER_CGROUP_PATH).lower()
    except OSError as error:
        logger.debug("Container cgroup probe unavailable: %s", error)
        return False
    return any(keyword in cgroup_text for keyword in _CONTAINER_CGROUP_KEYWORDS)


def environment_is_test(probe: RuntimeProbePort) -> bool:
    """Detect a test runner from the command line or harness variables.

    Args:
        probe: Runtime fact source.

    Returns:
        bool: True when a test-runner token or harness variable is present.

    Raises:
        RuntimeError: This detector does not raise runtime errors.
    """

    command_line = probe.probe_command_line().lower()
    if any(token in command_line for token in _TEST_COMMAND_LINE_TOKENS):
        return True
    return any(probe.probe_environment_variable(name) for name in _TEST_HARNESS_VARIABLES)


def environment_is_packaged_tool(probe: RuntimeProbePort) -> bool:
    """Detect a per-user tool install from an override flag or install path shape.

    Args:
        probe: Runtime fact source.

    Returns:
        bool: True when the process runs from a per-user tool install or package store.

    Raises:
        RuntimeError: This detector does not raise runtime errors.
    """

    if _environment_flag_is_set(probe, PACKAGED_TOOL_FLAG_VARIABLE):
        return True

    candidates: list[str] = []
    base_directory = _environment_read_base_directory(probe)
    if base_directory is not None:
        candidates.append(str(base_directory))
    executable_path = probe.probe_executable_path()
    if executable_path is not None:
        candidates.append(str(executable_path))

    return any(
        environment_has_tool_install_fragment(candidate) or environment_has_package_store_segment(candidate)
        for candidate in candidates
    )


def environment_has_tool_install_fragment(path: str) -> bool:
    """Return whether a path lies inside a per-user tool installation directory.

    Args:
        path: Path text with either separator style.

    Returns:
        bool: True when a known tool-install fragment occurs in the path.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    if not path:
        return False
    normalized_path = path.replace("\\", "/").lower()
    if not normalized_path.endswith("/"):
        normalized_path = f"{normalized_path}/"
    return any(fragment in normalized_path for fragment in _PACKAGED_TOOL_PATH_FRAGMENTS)


def environment_has_package_store_segment(path: str) -> bool:
    """Return whether a path has a package-store directory as an exact segment.

    `/tools/.store/pkg` matches while `/tools/mystore/pkg` does not.

    Args:
        path: Path text with either separator style.

    Returns:
        bool: True when one path segment equals a package-store name.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    if not path:
        return False
    segments = PurePosixPath(path.replace("\\", "/")).parts
    return any(segment in _PACKAGE_STORE_SEGMENTS for segment in segments)


def environment_find_vcs_root(probe: RuntimeProbePort) -> Path | None:
    """Find the nearest version-control root above the process locations.

    Starting points are tried in order: base directory, executable directory,
    current working directory. A `.git` file counts as well as a directory so
    worktrees are recognised.

    Args:
        probe: Runtime fact source.

    Returns:
        Path | None: Directory containing the VCS marker, or None.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    for start in _environment_vcs_scan_starts(probe):
        vcs_root = environment_scan_ancestors(
            start,
            lambda directory: probe.probe_path_exists(directory / VCS_MARKER_NAME),
        )
        if vcs_root is not None:
            return vcs_root
    return None


def _environment_vcs_scan_starts(probe: RuntimeProbePort) -> list[Path]:
    starts: list[Path] = []
    base_directory = _environment_read_base_directory(probe)
    if base_directory is not None:
        starts.append(base_directory)
    executable_path = probe.probe_executable_path()
    if executable_path is not None:
        starts.append(executable_path.parent)
    try:
        starts.append(probe.probe_current_directory())
    except OSError as error:
        logger.debug("Working directory unavailable for VCS scan: %s", error)
    return starts


def _environment_read_base_directory(probe: RuntimeProbePort) -> Path | None:
    try:
        return probe.probe_base_directory()
    except OSError as error:
        logger.debug("Base directory unavailable for detection: %s", error)
        return None


def _environment_flag_is_set(probe: RuntimeProbePort, name: str) -> bool:
    value = probe.probe_environment_variable(name)
    return value is not None and value.strip().lower() in _FLAG_TRUE_VALUES
