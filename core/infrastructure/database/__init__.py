"""Database engine and session lifecycle."""

from .config import (
    close_database,
    create_engine,
    create_session_factory,
    get_engine,
    get_session_factory,
    init_database,
)

__all__ = [
    "close_database",
    "create_engine",
    "create_session_factory",
    "get_engine",
    "get_session_factory",
    "init_database",
]
