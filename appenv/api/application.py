"""FastAPI application factory exposing startup configuration surfaces."""

from fastapi import FastAPI

from appenv.config import AppSettings
from appenv.domain import EnvironmentResult, VersionInfo

from .routers import api_create_health_router, api_create_version_router


def create_api_application(
    settings: AppSettings,
    environment: EnvironmentResult,
    version: VersionInfo,
) -> FastAPI:
    """Create the FastAPI application instance for the service.

    Args:
        settings: Validated application settings used for runtime metadata.
        environment: Resolved environment directories.
        version: Parsed build version metadata.

    Returns:
        FastAPI: Framework application instance.

    Raises:
        RuntimeError: Raised if application initialization fails.
    """
    application = FastAPI(title=version.product or "appenv", version=version.sem_ver)

    @application.get("/", tags=["foundation"])
    def foundation_index() -> dict[str, str]:
        """Return a minimal foundation response for bootstrap verification.

        Returns:
            dict[str, str]: Minimal response for API framework verification.

        Raises:
            RuntimeError: Raised if route handler cannot produce a response.
        """

        return {
            "service": version.product or "appenv",
            "status": "foundation-ready",
            "environment": settings.environment_name,
        }

    application.include_router(api_create_health_router(environment=environment, version=version))
    application.include_router(api_create_version_router(environment=environment, version=version))

    return application
