import pydantic
import pytest

from order_intake.config import Settings, load_settings


def test_load_settings_from_environment(monkeypatch):
    monkeypatch.setenv("BASEROW_API_TOKEN", "tok")
    monkeypatch.setenv("BASEROW_TABLE_ID", "55")
    monkeypatch.setenv("TG_BOT_TOKEN", "bot")
    monkeypatch.setenv("TG_CHAT_ID", "chat")
    monkeypatch.setenv("BASEROW_URL", "https://baserow.example.com/")

    settings = load_settings()

    assert settings.baserow_api_token == "tok"
    assert settings.baserow_table_id == "55"
    assert settings.baserow_url == "https://baserow.example.com"
    assert settings.telegram_api_url == "https://api.telegram.org"
    assert settings.store_configured
    assert settings.notifier_configured


def test_optional_settings_absent(monkeypatch):
    for name in ("BASEROW_API_TOKEN", "BASEROW_TABLE_ID", "TG_BOT_TOKEN", "TG_CHAT_ID", "BASEROW_URL"):
        monkeypatch.delenv(name, raising=False)

    settings = load_settings()

    assert not settings.store_configured
    assert not settings.notifier_configured
    assert settings.baserow_url == "https://api.baserow.io"


def test_empty_values_count_as_missing():
    assert not Settings(baserow_api_token="", baserow_table_id="1").store_configured
    assert not Settings(tg_bot_token="x", tg_chat_id="").notifier_configured


def test_settings_are_immutable():
    settings = Settings(baserow_api_token="tok")
    with pytest.raises(pydantic.ValidationError):
        settings.baserow_api_token = "other"
