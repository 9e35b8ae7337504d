"""Configuration: duration parsing and database URL normalization."""

from datetime import timedelta

import pytest

from book_api.config import Settings, parse_duration


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("1h", timedelta(hours=1)),
        ("7d", timedelta(days=7)),
        ("30m", timedelta(minutes=30)),
        ("45s", timedelta(seconds=45)),
        ("90", timedelta(seconds=90)),
        (120, timedelta(seconds=120)),
        (timedelta(hours=2), timedelta(hours=2)),
    ],
)
def test_parse_duration(raw, expected):
    assert parse_duration(raw) == expected


@pytest.mark.parametrize("raw", ["", "1w", "h1", "one hour"])
def test_parse_duration_rejects_unknown_notation(raw):
    with pytest.raises(ValueError):
        parse_duration(raw)


def test_expiry_env_shorthand(monkeypatch):
    monkeypatch.setenv("ACCESS_TOKEN_EXPIRY", "15m")
    monkeypatch.setenv("REFRESH_TOKEN_EXPIRY", "2d")
    settings = Settings()
    assert settings.access_token_expiry == timedelta(minutes=15)
    assert settings.refresh_token_expiry == timedelta(days=2)


def test_defaults_one_hour_and_seven_days(monkeypatch):
    monkeypatch.delenv("ACCESS_TOKEN_EXPIRY", raising=False)
    monkeypatch.delenv("REFRESH_TOKEN_EXPIRY", raising=False)
    settings = Settings()
    assert settings.access_token_expiry == timedelta(hours=1)
    assert settings.refresh_token_expiry == timedelta(days=7)
    assert settings.per_page == 10


def test_plain_postgres_url_gets_asyncpg_driver():
    settings = Settings(database_url="postgresql://u:p@db:5432/books")
    assert settings.database_url == "postgresql+asyncpg://u:p@db:5432/books"


def test_missing_secrets_fail(monkeypatch):
    monkeypatch.delenv("ACCESS_TOKEN_SECRET", raising=False)
    monkeypatch.delenv("REFRESH_TOKEN_SECRET", raising=False)
    with pytest.raises(ValueError):
        Settings(_env_file=None)


@pytest.mark.parametrize("per_page", [0, -1, 101])
def test_per_page_out_of_bounds_fails(per_page):
    with pytest.raises(ValueError):
        Settings(per_page=per_page)
