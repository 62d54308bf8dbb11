import pytest

from todo_service.settings import get_settings

ENV_VARS = ["IDENTITY_HEADER", "CORS_ALLOW_ORIGINS", "LOG_LEVEL", "HOST", "PORT"]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults():
    s = get_settings()
    assert s.identity_header == "username"
    assert s.cors_allow_origins == ["*"]
    assert s.log_level == "INFO"
    assert s.host == "127.0.0.1"
    assert s.port == 8000


def test_overrides(monkeypatch):
    monkeypatch.setenv("IDENTITY_HEADER", "X-User")
    monkeypatch.setenv("CORS_ALLOW_ORIGINS", "http://a.example, http://b.example,")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    monkeypatch.setenv("PORT", "9001")
    s = get_settings()
    assert s.identity_header == "x-user"
    assert s.cors_allow_origins == ["http://a.example", "http://b.example"]
    assert s.log_level == "DEBUG"
    assert s.port == 9001


@pytest.mark.parametrize("name, value, attr, expected", [
    ("LOG_LEVEL", "chatty", "log_level", "INFO"),
    ("PORT", "eighty", "port", 8000),
    ("PORT", "70000", "port", 8000),
])
def test_invalid_values_fall_back(monkeypatch, name, value, attr, expected):
    monkeypatch.setenv(name, value)
    assert getattr(get_settings(), attr) == expected
