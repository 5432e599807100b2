# core/settings/app.py
from __future__ import annotations

from functools import lru_cache

from pydantic import BaseModel, ConfigDict

from core.settings.sections import (
    DatabaseSettings,
    LoggingSettings,
    OrderSettings,
    StorageSettings,
)


class AppSettings(BaseModel):
    """
    Application settings aggregator.

    Each section is a BaseSettings reading its own env prefix; this model
    only groups them so callers take one object.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True, extra="ignore")

    database: DatabaseSettings
    storage: StorageSettings
    orders: OrderSettings
    logging: LoggingSettings


@lru_cache()
def get_app_settings() -> AppSettings:
    """Return cached global settings for the entire app."""
    return AppSettings(
        database=DatabaseSettings(),
        storage=StorageSettings(),
        orders=OrderSettings(),
        logging=LoggingSettings(),
    )
