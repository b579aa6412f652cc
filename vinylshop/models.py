"""Domain records shared by the repositories, services and views."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class Product:
    """A record on sale in the shop."""

    id: int
    title: str
    year: int
    artist: str
    img: str
    price: int
    genre: str


@dataclass
class User:
    """A registered shop customer."""

    id: int
    username: str
    email: str
    password_hash: str


@dataclass
class CartItem:
    """One line of a shopping cart: a product and how many of it."""

    product_id: int
    quantity: int
    product: Product