"""Data access for products and users."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from sqlalchemy import text
from sqlalchemy.engine import Engine

from vinylshop.models import Product, User


class NotFoundError(LookupError):
    """Raised when a query that must return a row returns none."""


def _product_from_row(row: Sequence[Any]) -> Product:
    product_id, title, year, artist, img, price, genre = row
    return Product(
        id=product_id,
        title=title,
        year=year,
        artist=artist,
        img=img,
        price=price,
        genre=genre,
    )


def _user_from_row(row: Sequence[Any]) -> User:
    user_id, username, email, password_hash = row
    return User(id=user_id, username=username, email=email, password_hash=password_hash)


class ProductRepo:
    """Reads the products table."""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    def get_all_products(self) -> list[Product]:
        """Return every product in the table."""
        with self._engine.connect() as conn:
            rows = conn.execute(text("SELECT * FROM products")).all()
        return [_product_from_row(row) for row in rows]

    def get_product_details(self, product_id: int) -> Product:
        """Return the product with ``product_id`` or raise NotFoundError."""
        with self._engine.connect() as conn:
            row = conn.execute(
                text("SELECT * FROM products WHERE id=:id"), {"id": product_id}
            ).first()
        if row is None:
            raise NotFoundError(f"product {product_id} not found")
        return _product_from_row(row)


class UserRepo:
    """Reads and writes the users table."""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    def get_by_username(self, username: str) -> User:
        """Return the user called ``username`` or raise NotFoundError."""
        with self._engine.connect() as conn:
            row = conn.execute(
                text("SELECT * FROM users WHERE username=:username"),
                {"username": username},
            ).first()
        if row is None:
            raise NotFoundError(f"user {username!r} not found")
        return _user_from_row(row)

    def create_user(self, user: User) -> None:
        """Insert ``user``; the database assigns its id."""
        with self._engine.begin() as conn:
            conn.execute(
                text(
                    "INSERT INTO users (username, email, password_hash) "
                    "VALUES (:username, :email, :password_hash)"
                ),
                {
                    "username": user.username,
                    "email": user.email,
                    "password_hash": user.password_hash,
                },
            )