"""Test class Settings."""
from pathlib import Path

from pydantic import ValidationError
import pytest

from calculator_microservice.common.config import Settings


def test_settings_defaults(monkeypatch) -> None:
    """Defaults listen on port 3040 outside production."""
    for var in ("CALCULATOR_ENVIRONMENT", "CALCULATOR_PORT", "CALCULATOR_HOST"):
        monkeypatch.delenv(var, raising=False)
    settings = Settings(_env_file=None)
    assert settings.port == 3040
    assert str(settings.host) == "0.0.0.0"
    assert settings.service_name == "calculator-microservice"
    assert settings.log_dir == Path(".")
    assert not settings.is_production


def test_settings_from_environment(monkeypatch) -> None:
    """Prefixed environment variables override defaults."""
    monkeypatch.setenv("CALCULATOR_ENVIRONMENT", "Production")
    monkeypatch.setenv("CALCULATOR_PORT", "8080")
    settings = Settings(_env_file=None)
    assert settings.port == 8080
    assert settings.is_production


def test_settings_invalid_port() -> None:
    """Ports outside the valid range raise a ValidationError."""
    with pytest.raises(ValidationError):
        Settings(_env_file=None, port=70000)


def test_settings_invalid_host() -> None:
    """Invalid IP addresses raise a ValidationError."""
    with pytest.raises(ValidationError):
        Settings(_env_file=None, host="999.999.999.999")
