"""Per-user state directory conventions for packaged tool installs."""

from __future__ import annotations

from pathlib import Path

from appenv.domain import ConfigurationError

from .interfaces import RuntimePlatform


def user_state_directory(
    platform: RuntimePlatform,
    organization: str | None,
    app_name: str | None,
    home: Path,
    local_app_data: str | None = None,
    xdg_state_home: str | None = None,
) -> Path:
    """Compose the per-user state directory for one organization and application.

    Args:
        platform: Operating system family.
        organization: Owning organization name.
        app_name: Application name.
        home: Current user's home directory.
        local_app_data: Windows `LOCALAPPDATA` value, if any.
        xdg_state_home: `XDG_STATE_HOME` value, if any. Relative values are ignored.

    Returns:
        Path: `<platform state root>/<organization>/<app_name>`.

    Raises:
        ConfigurationError: Raised when organization or application name is blank.
    """

    if organization is None or not organization.strip():
        raise ConfigurationError("organization is required for per-user state directories")
    if app_name is None or not app_name.strip():
        raise ConfigurationError("app_name is required for per-user state directories")

    if platform is RuntimePlatform.WINDOWS:
        if local_app_data and local_app_data.strip():
            state_root = Path(local_app_data)
        else:
            state_root = home / "AppData" / "Local"
    elif platform is RuntimePlatform.MACOS:
        state_root = home / "Library" / "Application Support"
    elif xdg_state_home and xdg_state_home.strip() and Path(xdg_state_home).is_absolute():
        state_root = Path(xdg_state_home)
    else:
        state_root = home / ".local" / "state"

    return state_root / organization.strip() / app_name.strip()
