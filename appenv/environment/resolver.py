"""Application-root resolution from the classified execution context."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

from appenv.domain import FALLBACK_MODES, AppMode, ConfigurationError, EnvironmentResult, NotFoundError

from .ancestor_scan import environment_scan_ancestors
from .detectors import (
    CONTAINER_DEFAULT_ROOT,
    CONTAINER_ROOT_VARIABLE,
    environment_classify,
    environment_find_vcs_root,
)
from .interfaces import RuntimePlatform, RuntimeProbePort
from .probe import OsRuntimeProbe
from .user_dirs import user_state_directory

logger = logging.getLogger(__name__)

_CASE_INSENSITIVE_PLATFORMS = frozenset({RuntimePlatform.WINDOWS, RuntimePlatform.MACOS})


class EnvironmentResolver:
    """Resolve application root, config and log directories.

    The resolver keeps no state between calls; every call re-reads the runtime
    facts from its probe.
    """

    def __init__(self, probe: RuntimeProbePort | None = None):
        """Initialize environment resolver.

        Args:
            probe: Runtime fact source; defaults to the real process and filesystem.
        """

        self._probe = probe if probe is not None else OsRuntimeProbe()

    def environment_detect(
        self,
        fallback_mode: AppMode = AppMode.PROCESS_DIRECTORY,
        organization: str | None = None,
        app_name: str | None = None,
    ) -> EnvironmentResult:
        """Classify the execution context and derive the application root.

        Args:
            fallback_mode: Mode used when no detector matches; `CURRENT_WORKING_DIRECTORY`
                or `PROCESS_DIRECTORY`.
            organization: Organization name, required in packaged-tool mode.
            app_name: Application name, required in packaged-tool mode.

        Returns:
            EnvironmentResult: Resolved mode and directories.

        Raises:
            ConfigurationError: Raised for an invalid fallback mode, or for packaged-tool
                mode without organization and application name.
        """

        _environment_validate_fallback_mode(fallback_mode)

        mode = environment_classify(self._probe, fallback_mode)
        if mode is AppMode.PACKAGED_TOOL and (_is_blank(organization) or _is_blank(app_name)):
            raise ConfigurationError(
                "packaged tool mode detected: organization and app_name are required for per-user state paths"
            )

        result = EnvironmentResult.from_root(mode, self._environment_determine_root(mode, organization, app_name))
        logger.info("Resolved application environment mode=%s root=%s", result.mode.value, result.app_root)
        return result

    def environment_resolve_with_custom_root(self, path: str | Path) -> EnvironmentResult:
        """Build an environment result for an explicit root, skipping classification.

        Args:
            path: Application root. Relative paths are anchored at the working directory.

        Returns:
            EnvironmentResult: Result in `CUSTOM_ROOT` mode.

        Raises:
            ConfigurationError: Raised when `path` is blank.
        """

        if path is None or not str(path).strip():
            raise ConfigurationError("custom root must not be blank")

        root = Path(str(path).strip())
        if not root.is_absolute():
            root = self._probe.probe_current_directory() / root
        return EnvironmentResult.from_root(AppMode.CUSTOM_ROOT, root)

    def environment_resolve_with_markers(
        self,
        strict: bool,
        organization: str | None = None,
        app_name: str | None = None,
        marker_names: Iterable[str] = (),
        fallback_mode: AppMode = AppMode.PROCESS_DIRECTORY,
        max_depth: int | None = None,
    ) -> EnvironmentResult:
        """Locate the application root by searching ancestors for marker directories.

        The search starts at the process base directory. A directory matches when
        one of its immediate child directories carries a marker name; names
        compare case-insensitively on Windows and macOS.

        Args:
            strict: Raise on a miss instead of falling back to detection.
            organization: Organization name for the detection fallback.
            app_name: Application name for the detection fallback.
            marker_names: Marker directory names; blank entries are ignored.
            fallback_mode: Fallback mode for the detection fallback.
            max_depth: Optional number of parent steps allowed above the base directory.

        Returns:
            EnvironmentResult: `MARKER_ROOT` result on a hit, else the detection result.

        Raises:
            ConfigurationError: Raised for an invalid fallback mode, or by the detection fallback.
            NotFoundError: Raised in strict mode when no ancestor carries a marker.
        """

        _environment_validate_fallback_mode(fallback_mode)

        markers = [name.strip() for name in marker_names if name and name.strip()]
        if not markers:
            return self.environment_detect(fallback_mode, organization, app_name)

        marker_root = self._environment_find_marker_root(markers, max_depth)
        if marker_root is not None:
            logger.info("Resolved application root from markers root=%s", marker_root)
            return EnvironmentResult.from_root(AppMode.MARKER_ROOT, marker_root)

        if strict:
            raise NotFoundError(
                f"No app root markers [{', '.join(markers)}] found in directory hierarchy.",
                marker_names=markers,
            )

        logger.info("No app root markers [%s] found, falling back to detection", ", ".join(markers))
        return self.environment_detect(fallback_mode, organization, app_name)

    def _environment_find_marker_root(self, markers: list[str], max_depth: int | None) -> Path | None:
        ignore_case = self._probe.probe_platform() in _CASE_INSENSITIVE_PLATFORMS
        wanted = {marker.casefold() if ignore_case else marker for marker in markers}

        def has_marker_child(directory: Path) -> bool:
            child_names = self._probe.probe_list_directory_names(directory)
            return any((name.casefold() if ignore_case else name) in wanted for name in child_names)

        return environment_scan_ancestors(self._probe.probe_base_directory(), has_marker_child, max_depth)

    def _environment_determine_root(self, mode: AppMode, organization: str | None, app_name: str | None) -> Path:
        if mode is AppMode.CONTAINER:
            override = self._probe.probe_environment_variable(CONTAINER_ROOT_VARIABLE)
            return Path(override.strip()) if not _is_blank(override) else CONTAINER_DEFAULT_ROOT

        if mode in (AppMode.TEST, AppMode.DEV):
            vcs_root = environment_find_vcs_root(self._probe)
            if vcs_root is not None:
                return vcs_root / "dev" / "app.vs"
            current_directory = self._probe.probe_current_directory()
            return current_directory / "test-output" if mode is AppMode.TEST else current_directory

        if mode is AppMode.PACKAGED_TOOL:
            return user_state_directory(
                platform=self._probe.probe_platform(),
                organization=organization,
                app_name=app_name,
                home=self._probe.probe_home_directory(),
                local_app_data=self._probe.probe_environment_variable("LOCALAPPDATA"),
                xdg_state_home=self._probe.probe_environment_variable("XDG_STATE_HOME"),
            )

        if mode is AppMode.PROCESS_DIRECTORY:
            # already a directory: trim separators, never step up to the parent
            base_directory = str(self._probe.probe_base_directory())
            return Path(base_directory.rstrip("/\\") or base_directory)

        return self._probe.probe_current_directory()


def _environment_validate_fallback_mode(fallback_mode: AppMode) -> None:
    if fallback_mode not in FALLBACK_MODES:
        raise ConfigurationError(
            f"fallback mode must be {AppMode.CURRENT_WORKING_DIRECTORY.value} or "
            f"{AppMode.PROCESS_DIRECTORY.value}, got {getattr(fallback_mode, 'value', fallback_mode)}"
        )


def _is_blank(value: str | None) -> bool:
    return value is None or not value.strip()
