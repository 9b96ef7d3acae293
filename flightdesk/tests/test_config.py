import pytest
from pydantic import ValidationError

from flightdesk.config import Settings, get_settings


@pytest.fixture(autouse=True)
def fresh_settings():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def test_settings_from_env(monkeypatch):
    monkeypatch.setenv("FLIGHTDESK_POINT_OF_SALE", " us ")
    monkeypatch.setenv("FLIGHTDESK_DEFAULT_CABIN", "Business")
    monkeypatch.setenv("FLIGHTDESK_GUEST_LABEL", "Anonymous")
    monkeypatch.setenv("FLIGHTDESK_LOG_LEVEL", "debug")

    cfg = get_settings()
    assert isinstance(cfg, Settings)
    assert cfg.point_of_sale == "US"
    assert cfg.default_cabin == "Business"
    assert cfg.guest_label == "Anonymous"
    assert cfg.log_level == "DEBUG"


def test_settings_defaults(monkeypatch):
    for name in (
        "FLIGHTDESK_POINT_OF_SALE",
        "FLIGHTDESK_DEFAULT_CABIN",
        "FLIGHTDESK_GUEST_LABEL",
        "FLIGHTDESK_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)

    cfg = get_settings()
    assert cfg.point_of_sale == "BD"
    assert cfg.default_cabin == "Economy"
    assert cfg.guest_label == "Guest"


def test_settings_reject_unknown_cabin(monkeypatch):
    monkeypatch.setenv("FLIGHTDESK_DEFAULT_CABIN", "Steerage")
    with pytest.raises(ValidationError):
        get_settings()


def test_settings_reject_blank_point_of_sale(monkeypatch):
    monkeypatch.setenv("FLIGHTDESK_POINT_OF_SALE", "   ")
    with pytest.raises(ValidationError):
        get_settings()


def test_settings_reject_unknown_log_level(monkeypatch):
    monkeypatch.setenv("FLIGHTDESK_LOG_LEVEL", "chatty")
    with pytest.raises(ValidationError, match="FLIGHTDESK_LOG_LEVEL"):
        get_settings()


@pytest.mark.parametrize("level", ["warning", " error ", "Debug"])
def test_settings_accept_level_names(monkeypatch, level):
    monkeypatch.setenv("FLIGHTDESK_LOG_LEVEL", level)
    assert get_settings().log_level == level.strip().upper()
