"""Helpers for values kept in the signed session cookie."""

from __future__ import annotations

from datetime import timedelta
from typing import Any

from flask import session

SESSION_MAX_AGE = timedelta(seconds=86400)


def set_value(key: str, value: Any) -> None:
    """Store ``value`` under ``key`` in a persistent session."""
    session.permanent = True
    session[key] = value


def get_value(key: str) -> Any:
    """Return the value stored under ``key``, or None."""
    return session.get(key)


def delete_key(key: str) -> None:
    """Remove ``key`` from the session if present."""
    session.pop(key, None)


def clear_all() -> None:
    """Empty the session so its cookie is dropped."""
    session.clear()