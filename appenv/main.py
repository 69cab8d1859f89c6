"""Main module entrypoint for local runtime execution.

This module resolves the startup configuration and either launches the FastAPI
service or prints the resolved environment or version as JSON.
"""

import argparse
import json

import uvicorn

from appenv.api.routers import api_serialize_environment, api_serialize_version
from appenv.bootstrap import bootstrap_create_application, bootstrap_create_startup_configuration
from appenv.config import SettingsLoadError
from appenv.domain import AppEnvError


def main() -> None:
    """Run selected runtime command with validated startup configuration.

    Returns:
        None: This function does not return a runtime value.

    Raises:
        SystemExit: Raised with status 1 when startup resolution fails.
    """

    argument_parser = argparse.ArgumentParser(description="Application environment runtime entrypoint")
    argument_parser.add_argument(
        "command",
        nargs="?",
        default="api",
        choices=("api", "environment", "version"),
        help="Runtime command: `api` starts server, `environment` prints resolved directories, "
        "`version` prints parsed build version metadata",
        type=str,
    )
    parsed_arguments = argument_parser.parse_args()

    try:
        startup = bootstrap_create_startup_configuration()
    except (SettingsLoadError, AppEnvError) as error:
        argument_parser.exit(status=1, message=f"startup failed: {error}\n")

    if parsed_arguments.command == "environment":
        print(json.dumps(api_serialize_environment(startup.environment), indent=2))
        return

    if parsed_arguments.command == "version":
        print(json.dumps(api_serialize_version(startup.version), indent=2))
        return

    application = bootstrap_create_application(startup)
    uvicorn.run(
        application,
        host=startup.settings.application_host,
        port=startup.settings.application_port,
    )


if __name__ == "__main__":
    main()
