"""Settings sections, one per concern."""

from .database import DatabaseSettings
from .logging import LoggingSettings
from .orders import OrderSettings
from .storage import StorageSettings

__all__ = ["DatabaseSettings", "LoggingSettings", "OrderSettings", "StorageSettings"]
