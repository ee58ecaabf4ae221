"""Test the command-line entrypoint."""
from pathlib import Path

import pytest

from calculator_microservice import main as main_module
from calculator_microservice.common.config import Settings
from calculator_microservice.main import CliArgs, build_settings, parse_args


def test_parse_args_valid() -> None:
    """Valid arguments are converted and validated."""
    args = parse_args(["--host", "127.0.0.1", "--port", "8080", "--env", "production"])
    assert str(args.host) == "127.0.0.1"
    assert args.port == 8080
    assert args.env == "production"


def test_parse_args_empty() -> None:
    """No arguments leaves every override unset."""
    assert parse_args([]) == CliArgs()


@pytest.mark.parametrize("argv", [["--port", "70000"], ["--port", "abc"], ["--host", "not-an-ip"]])
def test_parse_args_invalid(argv: list) -> None:
    """Invalid values exit through the argument parser."""
    with pytest.raises(SystemExit):
        parse_args(argv)


def test_build_settings_overrides(tmp_path: Path) -> None:
    """CLI values win over environment settings."""
    base = Settings(_env_file=None, log_dir=tmp_path)
    settings = build_settings(CliArgs(port=9000, env="production"), base)
    assert settings.port == 9000
    assert settings.is_production
    assert settings.host == base.host
    assert settings.log_dir == tmp_path


def test_main_serves_app(tmp_path: Path, monkeypatch) -> None:
    """main builds the app and hands it to uvicorn."""
    calls = {}

    def fake_run(app, host, port, log_level):
        calls.update(app=app, host=host, port=port, log_level=log_level)

    monkeypatch.setattr(main_module, "get_settings", lambda: Settings(_env_file=None, log_dir=tmp_path))
    monkeypatch.setattr(main_module.uvicorn, "run", fake_run)

    main_module.main(["--port", "4000", "--host", "127.0.0.1"])

    assert calls["host"] == "127.0.0.1"
    assert calls["port"] == 4000
    assert calls["log_level"] == "info"
    assert "Server running on port 4000" in (tmp_path / "combined.log").read_text()
