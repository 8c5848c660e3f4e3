# tests/core/test_config.py
from bookreviewhub.clients import api
from bookreviewhub.core.config import Settings


def test_api_base_url_strips_trailing_slash():
    settings = Settings(API_URL="http://backend.local:5000/")
    assert settings.api_base_url == "http://backend.local:5000"


def test_settings_read_environment(monkeypatch):
    monkeypatch.setenv("API_URL", "http://from-env:8000")
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")

    settings = Settings()

    assert settings.API_URL == "http://from-env:8000"
    assert settings.LOG_LEVEL == "DEBUG"


def test_client_defaults_to_normalised_settings_url(monkeypatch):
    monkeypatch.setattr(api, "settings", Settings(API_URL="http://backend.local:5000//"))

    assert api.BookReviewClient().base_url == "http://backend.local:5000"
    assert api.BookReviewClient(base_url="http://other:1/").base_url == "http://other:1"


def test_settings_fields():
    assert set(Settings.model_fields) == {"API_URL", "LOG_LEVEL"}
