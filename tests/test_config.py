import pytest
from pydantic import ValidationError

from core.config import AppSettings, DEFAULT_BASE_URI, LogLevel, write_user_env_vars


def test_defaults(monkeypatch):
    for name in ("MESSAGEMEDIA_BASE_URI", "MESSAGEMEDIA_USE_HMAC_AUTHENTICATION"):
        monkeypatch.delenv(name, raising=False)

    settings = AppSettings(_env_file=None)

    assert settings.base_uri == DEFAULT_BASE_URI
    assert settings.use_hmac_authentication is False
    assert settings.user_agent.startswith("messagemedia-messages-python-sdk-")


def test_environment_variables_are_read(monkeypatch):
    monkeypatch.setenv("MESSAGEMEDIA_BASIC_AUTH_USER_NAME", "env-key")
    monkeypatch.setenv("MESSAGEMEDIA_MAX_WORKERS", "8")

    settings = AppSettings(_env_file=None)

    assert settings.basic_auth_user_name == "env-key"
    assert settings.max_workers == 8


def test_settings_are_frozen():
    settings = AppSettings(_env_file=None)

    with pytest.raises(ValidationError):
        settings.base_uri = "https://elsewhere"


def test_write_user_env_vars_merges_existing(tmp_path):
    env_path = tmp_path / "config" / ".env"
    write_user_env_vars({"MESSAGEMEDIA_BASE_URI": "https://a"}, env_path=env_path)
    write_user_env_vars({"MESSAGEMEDIA_BASIC_AUTH_USER_NAME": "k"}, env_path=env_path)

    lines = env_path.read_text(encoding="utf-8").splitlines()

    assert lines[0].startswith("#")
    assert "MESSAGEMEDIA_BASE_URI=https://a" in lines
    assert "MESSAGEMEDIA_BASIC_AUTH_USER_NAME=k" in lines


def test_log_level_is_normalised_and_validated(monkeypatch):
    monkeypatch.setenv("MESSAGEMEDIA_LOG_LEVEL", "info")
    assert AppSettings(_env_file=None).log_level is LogLevel.INFO

    monkeypatch.setenv("MESSAGEMEDIA_LOG_LEVEL", "loud")
    with pytest.raises(ValidationError):
        AppSettings(_env_file=None)


def test_write_user_env_vars_keeps_unrelated_lines(tmp_path):
    env_path = tmp_path / ".env"
    env_path.write_text("# mine\nOTHER_TOOL_TOKEN=abc\nMESSAGEMEDIA_BASE_URI=https://old\n", encoding="utf-8")

    write_user_env_vars(
        {"MESSAGEMEDIA_BASE_URI": "https://new", "MESSAGEMEDIA_BASIC_AUTH_PASSWORD": None},
        env_path=env_path,
    )

    lines = env_path.read_text(encoding="utf-8").splitlines()
    assert "OTHER_TOOL_TOKEN=abc" in lines
    assert "MESSAGEMEDIA_BASE_URI=https://new" in lines
    assert "MESSAGEMEDIA_BASE_URI=https://old" not in lines
    assert not any(line.startswith("MESSAGEMEDIA_BASIC_AUTH_PASSWORD") for line in lines)
