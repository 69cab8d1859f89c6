"""Version and environment endpoint router composition."""

from fastapi import APIRouter

from appenv.domain import EnvironmentResult, VersionInfo


def api_serialize_version(version: VersionInfo) -> dict[str, object]:
    """Convert version metadata into a JSON-compatible payload.

    Args:
        version: Parsed build version metadata.

    Returns:
        dict[str, object]: Version payload; `built_at` is ISO-8601 or None when unset.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    return {
        "product": version.product,
        "sem_ver": version.sem_ver,
        "build_counter": version.build_counter,
        "branch": version.branch,
        "built_at": version.built_at.isoformat() if version.has_built_at else None,
        "env": version.env,
        "sha": version.sha,
        "git_commits": version.git_commits,
        "extra": dict(version.extra.items()),
    }


def api_serialize_environment(environment: EnvironmentResult) -> dict[str, str]:
    """Convert resolved environment directories into a JSON-compatible payload.

    Args:
        environment: Resolved environment directories.

    Returns:
        dict[str, str]: Mode and directory paths.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    return {
        "mode": environment.mode.value,
        "app_root": str(environment.app_root),
        "config_dir": str(environment.config_dir),
        "log_dir": str(environment.log_dir),
    }


def api_create_version_router(environment: EnvironmentResult, version: VersionInfo) -> APIRouter:
    """Create router exposing build version and resolved environment.

    Args:
        environment: Resolved environment directories.
        version: Parsed build version metadata.

    Returns:
        APIRouter: Router exposing `/version` and `/environment` endpoints.

    Raises:
        ValueError: Raised when environment or version is None.
    """

    if environment is None:
        raise ValueError("environment must not be None")
    if version is None:
        raise ValueError("version must not be None")

    router = APIRouter(tags=["version"])
    version_payload = api_serialize_version(version)
    environment_payload = api_serialize_environment(environment)

    @router.get("/version")
    def api_version_details() -> dict[str, object]:
        """Return parsed build version metadata."""

        return version_payload

    @router.get("/environment")
    def api_environment_details() -> dict[str, str]:
        """Return resolved mode and application directories."""

        return environment_payload

    return router
