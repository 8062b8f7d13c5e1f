"""
Tests for settings loaded from the environment.
"""

from account_ledger.config import Settings


def test_database_url_taken_as_is(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "sqlite:///./ledger.db")
    assert Settings().DATABASE_URL == "sqlite:///./ledger.db"


def test_database_url_composed_from_parts(monkeypatch):
    monkeypatch.delenv("DATABASE_URL", raising=False)
    monkeypatch.setenv("DB_USER", "ledger")
    monkeypatch.setenv("DB_PASS", "secret")
    monkeypatch.setenv("DB_HOSTNAME", "db")
    monkeypatch.setenv("DB_PORT", "6543")
    monkeypatch.setenv("DB_NAME", "accounts")

    assert Settings().DATABASE_URL == (
        "postgresql+psycopg://ledger:secret@db:6543/accounts"
    )


def test_defaults(monkeypatch):
    for name in ("PORT", "LOCK_TIMEOUT_MS", "SEED_ON_STARTUP"):
        monkeypatch.delenv(name, raising=False)

    settings = Settings()

    assert settings.PORT == 9999
    assert settings.LOCK_TIMEOUT_MS == 5000
    assert settings.SEED_ON_STARTUP is False


def test_flags_parsed(monkeypatch):
    monkeypatch.setenv("SEED_ON_STARTUP", "TRUE")
    monkeypatch.setenv("LOCK_TIMEOUT_MS", "250")

    settings = Settings()

    assert settings.SEED_ON_STARTUP is True
    assert settings.LOCK_TIMEOUT_MS == 250
