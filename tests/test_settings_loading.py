"""
Test settings loading from environment variables.

Each section reads its own prefix; the aggregator groups them.
"""
from decimal import Decimal

import pytest

from core.settings import get_app_settings
from core.settings.sections import DatabaseSettings, OrderSettings, StorageSettings


@pytest.fixture(autouse=True)
def _clear_settings_cache():
    get_app_settings.cache_clear()
    yield
    get_app_settings.cache_clear()


def test_defaults(monkeypatch):
    monkeypatch.delenv("DB_DATABASE_URL", raising=False)
    settings = DatabaseSettings(_env_file=None)
    assert settings.database_url.startswith("sqlite+aiosqlite://")
    assert settings.create_tables is True

    storage = StorageSettings(_env_file=None)
    assert storage.max_proof_bytes == 5_000_000
    assert set(storage.allowed_extensions) == {"jpeg", "jpg", "png", "webp"}


def test_prefixed_environment_variables(monkeypatch):
    monkeypatch.setenv("DB_DATABASE_URL", "postgresql+asyncpg://user:secret@db:5432/marketplace")
    monkeypatch.setenv("ORDER_DEFAULT_SHIPPING_COST", "7.50")
    monkeypatch.setenv("ORDER_NUMBER_PREFIX", "REP")
    monkeypatch.setenv("UPLOAD_DIR", "/srv/uploads")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    settings = get_app_settings()

    assert settings.database.database_url.startswith("postgresql+asyncpg://")
    assert settings.orders.default_shipping_cost == Decimal("7.50")
    assert settings.orders.number_prefix == "REP"
    assert settings.storage.dir == "/srv/uploads"
    assert settings.logging.level == "debug"
    assert get_app_settings() is settings


def test_invalid_values_are_rejected(monkeypatch):
    monkeypatch.setenv("ORDER_DEFAULT_SHIPPING_COST", "-1")
    with pytest.raises(ValueError):
        OrderSettings(_env_file=None)
