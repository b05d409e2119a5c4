"""Tests for required credentials and startup."""

from pathlib import Path

import pytest

import fitplan.main
from fitplan.config import (
    get_required_env,
    settings,
)


def test_required_env_present(monkeypatch: pytest.MonkeyPatch) -> None:
    """A set variable is returned as-is."""
    monkeypatch.setenv("FITPLAN_TEST_KEY", "sk-123")

    assert get_required_env("FITPLAN_TEST_KEY") == "sk-123"


def test_required_env_from_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    """Values loaded into settings (e.g. from .env) also count."""
    monkeypatch.delenv("ANTHROPIC_API_KEY", raising=False)
    monkeypatch.setattr(settings, "ANTHROPIC_API_KEY", "sk-from-dotenv")

    assert get_required_env("ANTHROPIC_API_KEY") == "sk-from-dotenv"


@pytest.mark.parametrize("value", [None, ""])
def test_required_env_missing_exits(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str], value: str | None
) -> None:
    """Missing or empty credentials terminate the process with status 1."""
    if value is None:
        monkeypatch.delenv("FITPLAN_TEST_KEY", raising=False)
    else:
        monkeypatch.setenv("FITPLAN_TEST_KEY", value)

    with pytest.raises(SystemExit) as excinfo:
        get_required_env("FITPLAN_TEST_KEY")

    assert excinfo.value.code == 1
    captured = capsys.readouterr()
    assert "Environment variable FITPLAN_TEST_KEY is not set" in captured.err
    assert captured.out == ""


def test_main_exits_before_serving(monkeypatch: pytest.MonkeyPatch) -> None:
    """Without a credential the server never starts listening."""
    monkeypatch.delenv("ANTHROPIC_API_KEY", raising=False)
    monkeypatch.setattr(settings, "ANTHROPIC_API_KEY", None)
    monkeypatch.setattr(settings, "LOG_LEVEL", settings.LOG_LEVEL)

    def _fail_run_api(*_args: object, **_kwargs: object) -> None:
        raise AssertionError("run_api must not be reached")

    monkeypatch.setattr(fitplan.main, "run_api", _fail_run_api)

    with pytest.raises(SystemExit) as excinfo:
        fitplan.main.main(["--provider", "anthropic", "--log-level", "warning"])

    assert excinfo.value.code == 1


def test_main_builds_app_with_provider_default_model(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    """With a credential, main hands a configured app to the server."""
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
    monkeypatch.setattr(settings, "AGENT_MODEL", None)
    monkeypatch.setattr(settings, "LOG_LEVEL", settings.LOG_LEVEL)
    monkeypatch.setattr(settings, "WORKING_DIR", str(tmp_path))
    captured = {}

    def _capture(app, host, port, log_level) -> None:
        captured.update(app=app, host=host, port=port, log_level=log_level)

    monkeypatch.setattr(fitplan.main, "run_api", _capture)

    fitplan.main.main(
        ["--provider", "openai", "--port", "9001", "--public-dir", str(tmp_path), "--log-level", "debug"]
    )

    app = captured["app"]
    assert captured["port"] == 9001
    assert captured["log_level"] == "debug"
    assert app.state.model == "gpt-4o-mini"
    assert app.state.public_root == tmp_path
    assert app.state.agent.provider.api_key == "sk-test"
