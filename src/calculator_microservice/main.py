"""
Main entrypoint used by the console script and Docker.

This script:
- Reads settings from the environment
- Applies command-line overrides
- Serves the calculator application with uvicorn
"""

import argparse
from typing import List, Optional

from pydantic import BaseModel, Field, IPvAnyAddress, ValidationError
import uvicorn

from calculator_microservice.common.config import Settings, get_settings
from calculator_microservice.common.logger import logger
from calculator_microservice.server.server import create_app


class CliArgs(BaseModel):
    """
    Pydantic model used to validate CLI arguments.

    Attributes
    ----------
    host : IPvAnyAddress, optional
        Address to bind, overrides ``CALCULATOR_HOST``.
    port : int, optional
        TCP port to listen on, overrides ``CALCULATOR_PORT``.
    env : str, optional
        Environment name, overrides ``CALCULATOR_ENVIRONMENT``.
    """

    host: Optional[IPvAnyAddress] = None
    port: Optional[int] = Field(default=None, ge=1, le=65535)
    env: Optional[str] = None


def parse_args(argv: Optional[List[str]] = None) -> CliArgs:
    """
    Parse and validate command-line arguments.

    :param list argv: Arguments to parse, sys.argv when omitted

    :return: Validated CLI arguments
    :rtype: CliArgs
    """
    parser = argparse.ArgumentParser(description="Calculator HTTP microservice")
    parser.add_argument("--host", help="Address to bind")
    parser.add_argument("--port", help="TCP port to listen on")
    parser.add_argument("--env", help="Environment name, 'production' disables console logging")

    args = parser.parse_args(argv)

    try:
        return CliArgs(host=args.host, port=args.port, env=args.env)
    except ValidationError as exc:
        parser.error(str(exc))


def build_settings(cli_args: CliArgs, base: Optional[Settings] = None) -> Settings:
    """
    Merge CLI overrides into the environment settings.

    :param CliArgs cli_args: Validated CLI arguments
    :param Settings base: Settings to override, read from the environment when omitted

    :return: Effective settings
    :rtype: Settings
    """
    base = base or get_settings()
    overrides = {}
    if cli_args.host is not None:
        overrides["host"] = cli_args.host
    if cli_args.port is not None:
        overrides["port"] = cli_args.port
    if cli_args.env is not None:
        overrides["environment"] = cli_args.env
    return base.model_copy(update=overrides)


def main(argv: Optional[List[str]] = None) -> None:
    """
    Main function executed by the console script.
    """
    settings = build_settings(parse_args(argv))
    app = create_app(settings)
    logger.info(f"Server running on port {settings.port}")
    uvicorn.run(app, host=str(settings.host), port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
