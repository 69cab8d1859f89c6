"""Environment layer package for execution-context classification and root resolution."""

from .ancestor_scan import environment_scan_ancestors
from .detectors import (
    environment_classify,
    environment_find_vcs_root,
    environment_is_container,
    environment_is_packaged_tool,
    environment_is_test,
)
from .interfaces import RuntimePlatform, RuntimeProbePort
from .probe import OsRuntimeProbe
from .resolver import EnvironmentResolver
from .user_dirs import user_state_directory

__all__ = [
    "EnvironmentResolver",
    "OsRuntimeProbe",
    "RuntimePlatform",
    "RuntimeProbePort",
    "environment_classify",
    "environment_find_vcs_root",
    "environment_is_container",
    "environment_is_packaged_tool",
    "environment_is_test",
    "environment_scan_ancestors",
    "user_state_directory",
]
