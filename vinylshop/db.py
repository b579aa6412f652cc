"""Opening the database connection from environment settings."""

from __future__ import annotations

import os
from collections.abc import Mapping

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.exc import ArgumentError, SQLAlchemyError


class DatabaseConnectionError(ConnectionError):
    """Raised when the database cannot be reached."""

    def __init__(self, reason: str = "") -> None:
        message = "database: connection failed"
        super().__init__(f"{message}: {reason}" if reason else message)


def connection_url(env: Mapping[str, str] | None = None) -> str:
    """Build the PostgreSQL URL from DB_* settings in ``env`` (default: os.environ)."""
    settings = os.environ if env is None else env
    user = settings.get("DB_USER", "")
    pwd = settings.get("DB_PWD", "")
    host = settings.get("DB_HOST", "")
    port = settings.get("DB_PORT", "")
    name = settings.get("DB_NAME", "")
    return f"postgresql://{user}:{pwd}@{host}:{port}/{name}"


def connect(env: Mapping[str, str] | None = None) -> Engine:
    """Return an engine for the configured database after checking it answers.

    Raises ValueError for a malformed connection string and
    DatabaseConnectionError when the server cannot be reached.
    """
    try:
        url = make_url(connection_url(env))
    except (ArgumentError, ValueError) as exc:
        raise ValueError(f"invalid connection string: {exc}") from exc

    try:
        engine = create_engine(url)
    except (ImportError, SQLAlchemyError) as exc:
        raise DatabaseConnectionError(str(exc)) from exc

    try:
        with engine.connect():
            pass
    except SQLAlchemyError as exc:
        engine.dispose()
        raise DatabaseConnectionError(str(exc)) from exc
    return engine