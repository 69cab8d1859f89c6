"""Application bootstrap wiring for startup resolution and dependency assembly."""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from pathlib import Path

from fastapi import FastAPI

from appenv.api import create_api_application
from appenv.config import AppSettings, config_configure_logging, config_load_settings
from appenv.domain import (
    EnvironmentResult,
    VersionInfo,
    domain_version_parse_from_product,
    domain_version_read_installed,
)
from appenv.environment import EnvironmentResolver, RuntimeProbePort

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StartupConfiguration:
    """Read-only startup values handed to the rest of the application.

    Attributes:
        settings: Validated runtime settings.
        environment: Resolved environment directories.
        version: Parsed build version metadata.
        work_dir: Scratch directory under the application root.
    """

    settings: AppSettings
    environment: EnvironmentResult
    version: VersionInfo
    work_dir: Path


def bootstrap_resolve_environment(settings: AppSettings, resolver: EnvironmentResolver) -> EnvironmentResult:
    """Resolve the environment using the strategy selected by settings.

    A custom root wins over marker search, and marker search wins over plain detection.

    Args:
        settings: Validated runtime settings.
        resolver: Environment resolver instance.

    Returns:
        EnvironmentResult: Resolved environment directories.

    Raises:
        ConfigurationError: Raised when resolution parameters are invalid.
        NotFoundError: Raised when strict marker search finds no marker.
    """

    if settings.app_custom_root is not None:
        return resolver.environment_resolve_with_custom_root(settings.app_custom_root)

    marker_names = settings.settings_root_marker_names()
    if marker_names:
        return resolver.environment_resolve_with_markers(
            strict=settings.app_root_markers_strict,
            organization=settings.app_organization,
            app_name=settings.app_name,
            marker_names=marker_names,
            fallback_mode=settings.app_fallback_mode,
        )

    return resolver.environment_detect(
        fallback_mode=settings.app_fallback_mode,
        organization=settings.app_organization,
        app_name=settings.app_name,
    )


def bootstrap_resolve_version(settings: AppSettings) -> VersionInfo:
    """Parse the configured build version, or the installed distribution version.

    Args:
        settings: Validated runtime settings.

    Returns:
        VersionInfo: Parsed version metadata.

    Raises:
        MalformedInputError: Raised when no usable version string is available.
    """

    if settings.app_version is not None:
        return domain_version_parse_from_product(product=settings.app_product, raw=settings.app_version)

    version = domain_version_read_installed(settings.app_distribution)
    if settings.app_product is None:
        return version
    return replace(version, product=settings.app_product)


def bootstrap_create_startup_configuration(
    settings: AppSettings | None = None,
    probe: RuntimeProbePort | None = None,
) -> StartupConfiguration:
    """Resolve directories and version, create directories and configure logging.

    Args:
        settings: Optional pre-validated settings; loaded from environment when omitted.
        probe: Optional runtime probe for the environment resolver.

    Returns:
        StartupConfiguration: Composite startup configuration.

    Raises:
        SettingsLoadError: Raised when startup configuration validation fails.
        ConfigurationError: Raised when resolution parameters are invalid.
        NotFoundError: Raised when strict marker search finds no marker.
        MalformedInputError: Raised when no usable version string is available.
        OSError: Raised when directories or log files cannot be created.
    """

    resolved_settings = settings if settings is not None else config_load_settings()
    environment = bootstrap_resolve_environment(resolved_settings, EnvironmentResolver(probe=probe))
    version = bootstrap_resolve_version(resolved_settings)
    work_dir = environment.app_root / "work"

    for directory in (environment.config_dir, environment.log_dir, work_dir):
        directory.mkdir(parents=True, exist_ok=True)
    config_configure_logging(environment.log_dir, resolved_settings.log_level)

    logger.info(
        "Startup configuration ready mode=%s root=%s version=%s",
        environment.mode.value,
        environment.app_root,
        version.sem_ver,
    )
    return StartupConfiguration(
        settings=resolved_settings,
        environment=environment,
        version=version,
        work_dir=work_dir,
    )


def bootstrap_create_application(startup: StartupConfiguration | None = None) -> FastAPI:
    """Assemble the runtime application around the startup configuration.

    Args:
        startup: Optional prepared startup configuration.

    Returns:
        FastAPI: Fully initialized FastAPI application instance.

    Raises:
        SettingsLoadError: Raised when startup configuration validation fails.
    """

    resolved_startup = startup if startup is not None else bootstrap_create_startup_configuration()
    return create_api_application(
        settings=resolved_startup.settings,
        environment=resolved_startup.environment,
        version=resolved_startup.version,
    )
