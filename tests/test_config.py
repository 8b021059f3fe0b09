from datetime import timedelta

import pytest

from api import create_app
from api.config import (
    DevelopmentConfig,
    ProductionConfig,
    TestingConfig,
    get_config,
    parse_duration,
)


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("1h", timedelta(hours=1)),
        ("7d", timedelta(days=7)),
        ("15m", timedelta(minutes=15)),
        ("30s", timedelta(seconds=30)),
        ("2w", timedelta(weeks=2)),
        ("3600", timedelta(seconds=3600)),
        (" 12H ", timedelta(hours=12)),
        (90, timedelta(seconds=90)),
    ],
)
def test_parse_duration(raw, expected):
    assert parse_duration(raw) == expected


@pytest.mark.parametrize("raw", ["", "h", "1y", "-1h", "1.5h"])
def test_parse_duration_rejects_garbage(raw):
    with pytest.raises(ValueError):
        parse_duration(raw)


def test_literal_defaults():
    assert DevelopmentConfig.JWT_ACCESS_SECRET == "access-secret"
    assert DevelopmentConfig.JWT_REFRESH_SECRET == "refresh-secret"
    assert DevelopmentConfig.JWT_ACCESS_EXPIRES == timedelta(hours=1)
    assert DevelopmentConfig.JWT_REFRESH_EXPIRES == timedelta(days=7)


def test_get_config_by_name():
    assert get_config("production") is ProductionConfig
    assert get_config("prod") is ProductionConfig
    assert get_config("testing") is TestingConfig
    assert get_config("dev") is DevelopmentConfig


def test_app_wires_configured_lifetimes():
    app = create_app("testing")
    codec = app.extensions["session_service"].codec
    assert codec.access_ttl == TestingConfig.JWT_ACCESS_EXPIRES
    assert codec.refresh_ttl == TestingConfig.JWT_REFRESH_EXPIRES
    assert "session_sweeper" not in app.extensions


def test_each_app_gets_an_empty_session_store():
    first = create_app("testing").extensions["session_service"].store
    second = create_app("testing").extensions["session_service"].store
    assert first is not second
    assert len(first) == 0


def test_sweeper_starts_when_enabled(monkeypatch):
    monkeypatch.setattr(TestingConfig, "SESSION_SWEEPER_ENABLED", True)
    app = create_app("testing")
    sweeper = app.extensions["session_sweeper"]
    try:
        assert sweeper.running
        assert sweeper.interval == 3600
    finally:
        sweeper.stop()
