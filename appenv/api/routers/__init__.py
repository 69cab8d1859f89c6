"""API router package for endpoint composition."""

from .health import api_create_health_router
from .version import api_create_version_router, api_serialize_environment, api_serialize_version

__all__ = [
    "api_create_health_router",
    "api_create_version_router",
    "api_serialize_environment",
    "api_serialize_version",
]
