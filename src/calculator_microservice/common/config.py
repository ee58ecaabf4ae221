"""Service settings read from the environment."""
from functools import lru_cache
from pathlib import Path

from pydantic import Field, IPvAnyAddress
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Runtime configuration of the calculator service.

    Every field can be set through a ``CALCULATOR_``-prefixed environment
    variable (e.g. ``CALCULATOR_PORT=8080``) or a ``.env`` file.
    """

    model_config = SettingsConfigDict(env_prefix="CALCULATOR_", env_file=".env", extra="ignore")

    environment: str = Field(default="development", description="Deployment environment name")
    host: IPvAnyAddress = Field(default="0.0.0.0", description="Address the HTTP server binds to")
    port: int = Field(default=3040, ge=1, le=65535, description="HTTP server TCP port")
    log_dir: Path = Field(default=Path("."), description="Directory holding error.log and combined.log")
    log_level: str = Field(default="INFO", description="Minimum level written to the log files")
    service_name: str = Field(default="calculator-microservice", description="Service tag added to log records")

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"


@lru_cache()
def get_settings() -> Settings:
    return Settings()
