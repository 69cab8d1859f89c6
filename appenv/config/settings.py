"""Typed runtime settings with dotenv support and startup validation."""

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from appenv.domain import FALLBACK_MODES, AppMode


class SettingsLoadError(RuntimeError):
    """Raised when runtime settings cannot be loaded or validated."""


class AppSettings(BaseSettings):
    """Application settings for startup environment and version resolution.

    Environment variable names map directly to field names in uppercase.
    Example: `app_custom_root` reads from `APP_CUSTOM_ROOT`.

    Attributes:
        environment_name: Runtime environment label.
        application_host: Host interface for web server binding.
        application_port: Web server port.
        app_organization: Organization name used for per-user state directories.
        app_name: Application name used for per-user state directories.
        app_fallback_mode: Mode used when no execution context is detected.
        app_root_markers: Comma-separated marker directory names for root search.
        app_root_markers_strict: Fail startup when no marker directory is found.
        app_custom_root: Explicit application root; skips detection when set.
        app_product: Product name reported alongside the version.
        app_version: Raw build version string; read from distribution metadata when unset.
        app_distribution: Installed distribution queried when `app_version` is unset.
        log_level: Console log level name.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    environment_name: str = Field(default="development")
    application_host: str = Field(default="127.0.0.1")
    application_port: int = Field(default=8000, ge=1, le=65535)
    app_organization: str | None = Field(default=None)
    app_name: str | None = Field(default=None)
    app_fallback_mode: AppMode = Field(default=AppMode.PROCESS_DIRECTORY)
    app_root_markers: str = Field(default="")
    app_root_markers_strict: bool = Field(default=False)
    app_custom_root: str | None = Field(default=None)
    app_product: str | None = Field(default=None)
    app_version: str | None = Field(default=None)
    app_distribution: str = Field(default="appenv", min_length=1)
    log_level: str = Field(default="INFO")

    @field_validator("app_organization", "app_name", "app_custom_root", "app_product", "app_version")
    @classmethod
    def _normalize_optional_string(cls, value: str | None) -> str | None:
        if value is None:
            return None
        stripped_value = value.strip()
        return stripped_value or None

    @field_validator("app_fallback_mode")
    @classmethod
    def _validate_fallback_mode(cls, value: AppMode) -> AppMode:
        if value not in FALLBACK_MODES:
            raise ValueError(
                f"app_fallback_mode must be {AppMode.CURRENT_WORKING_DIRECTORY.value} "
                f"or {AppMode.PROCESS_DIRECTORY.value}"
            )
        return value

    @field_validator("log_level")
    @classmethod
    def _validate_log_level(cls, value: str) -> str:
        normalized_value = value.strip().upper()
        if normalized_value not in {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}:
            raise ValueError("log_level must be one of CRITICAL, ERROR, WARNING, INFO, DEBUG")
        return normalized_value

    def settings_root_marker_names(self) -> tuple[str, ...]:
        """Return configured marker directory names.

        Returns:
            tuple[str, ...]: Non-blank, trimmed marker names in configured order.

        Raises:
            RuntimeError: This helper does not raise runtime errors.
        """

        return tuple(name.strip() for name in self.app_root_markers.split(",") if name.strip())


def config_load_settings() -> AppSettings:
    """Load and validate runtime settings from environment and dotenv.

    Returns:
        AppSettings: Validated runtime settings object.

    Raises:
        SettingsLoadError: Raised when settings are invalid.
    """

    try:
        return AppSettings()
    except ValidationError as error:
        raise SettingsLoadError(
            f"Startup configuration validation failed. Update .env or environment variables. Details: {error}"
        ) from error
