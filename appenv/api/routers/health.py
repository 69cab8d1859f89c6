"""Health endpoint router composition for application state checks."""

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from appenv.domain import EnvironmentResult, VersionInfo


def api_create_health_router(environment: EnvironmentResult, version: VersionInfo) -> APIRouter:
    """Create health-check router reporting application root availability.

    Args:
        environment: Resolved environment directories.
        version: Parsed build version metadata.

    Returns:
        APIRouter: Router exposing `/health` endpoint.

    Raises:
        ValueError: Raised when environment or version is None.
    """

    if environment is None:
        raise ValueError("environment must not be None")
    if version is None:
        raise ValueError("version must not be None")

    router = APIRouter(tags=["health"])

    @router.get("/health")
    def api_health_status() -> JSONResponse:
        """Return application health and the resolved runtime mode.

        Returns:
            JSONResponse: `200` when the application root exists, else `503`.

        Raises:
            RuntimeError: This handler does not raise runtime errors.
        """

        payload = {
            "status": "ok",
            "app": "up",
            "mode": environment.mode.value,
            "version": version.sem_ver,
        }
        if environment.app_root.is_dir():
            return JSONResponse(content=payload, status_code=status.HTTP_200_OK)

        payload["status"] = "degraded"
        payload["detail"] = "application root directory is missing"
        return JSONResponse(content=payload, status_code=status.HTTP_503_SERVICE_UNAVAILABLE)

    return router
