"""Domain models, errors and version parsing used across application layers."""

from .errors import AppEnvError, ConfigurationError, MalformedInputError, NotFoundError
from .models import (
    FALLBACK_MODES,
    VERSION_BUILT_AT_UNSET,
    AppMode,
    CaseInsensitiveMapping,
    EnvironmentResult,
    VersionInfo,
)
from .version_parsing import (
    domain_version_parse,
    domain_version_parse_from_product,
    domain_version_read_installed,
)

__all__ = [
    "FALLBACK_MODES",
    "VERSION_BUILT_AT_UNSET",
    "AppEnvError",
    "AppMode",
    "CaseInsensitiveMapping",
    "ConfigurationError",
    "EnvironmentResult",
    "MalformedInputError",
    "NotFoundError",
    "VersionInfo",
    "domain_version_parse",
    "domain_version_parse_from_product",
    "domain_version_read_installed",
]
