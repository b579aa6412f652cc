"""Request handlers for the home, account, product and cart pages."""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any, Protocol

import yaml
from flask import Response, abort, redirect, request

from vinylshop import session
from vinylshop.models import CartItem
from vinylshop.services import (
    CartMap,
    InvalidCredentialsError,
    ProductService,
    UserExistsError,
    UserService,
    add_to_cart as _add_to_cart,
    remove_from_cart as _remove_from_cart,
)

_INTEGER = re.compile(r"[+-]?[0-9]+")
_SEE_OTHER = 303
_FOUND = 302


class Renderer(Protocol):
    """Anything that turns a template name and its data into page text."""

    def render(self, name: str, data: Mapping[str, Any] | None = None) -> str: ...


def _parse_int(value: str | None) -> int | None:
    """Parse a decimal integer the strict way; None when it is not one."""
    if value is None or not _INTEGER.fullmatch(value):
        return None
    return int(value)


def _logged_in() -> bool:
    return session.get_value("user_id") is not None


def _see_other(location: str) -> Response:
    return redirect(location, code=_SEE_OTHER)


def view_home(renderer: Renderer) -> Response | str:
    """GET / – the home page for logged-in users."""
    if not _logged_in():
        return redirect("/login", code=_FOUND)
    return renderer.render("home.tpl", {"Logged": True})


def load_cart() -> CartMap | None:
    """Return the cart kept in the session, or an empty one.

    Raises ValueError when the stored cart cannot be read.
    """
    raw = session.get_value("cart")
    if raw is None:
        return {}
    if not isinstance(raw, str):
        raise ValueError("malformed cart data")
    try:
        cart = yaml.safe_load(raw)
    except yaml.YAMLError as exc:
        raise ValueError(f"malformed cart data: {exc}") from exc
    if cart is None:
        return None
    if not isinstance(cart, dict) or not all(
        isinstance(key, int) and not isinstance(key, bool)
        and isinstance(qty, int) and not isinstance(qty, bool)
        for key, qty in cart.items()
    ):
        raise ValueError("malformed cart data")
    return cart


def save_cart(cart: CartMap | None) -> None:
    """Store ``cart`` in the session as YAML."""
    encoded = yaml.safe_dump(cart if cart is not None else {}, default_flow_style=False)
    session.set_value("cart", encoded)


class AuthHandler:
    """Registration, login and logout pages."""

    def __init__(self, user_service: UserService, renderer: Renderer) -> None:
        self._users = user_service
        self._renderer = renderer

    def register_form(self) -> Response | str:
        """GET /register"""
        if _logged_in():
            return _see_other("/login")
        return self._renderer.render("register.tpl", None)

    def register_submit(self) -> Response | str:
        """POST /register"""
        username = request.form.get("username", "")
        email = request.form.get("email", "")
        pwd = request.form.get("password", "")
        repeated = request.form.get("repeatedPassword", "")

        if not username or not email or not pwd:
            return self._renderer.render("register.tpl", {"Error": "Fill all fields"})
        if pwd != repeated:
            return self._renderer.render(
                "register.tpl", {"Error": "Password and repeated password must match"}
            )

        try:
            self._users.register(username, email, pwd)
        except UserExistsError as exc:
            return self._renderer.render("register.tpl", {"Error": str(exc)})
        except Exception:
            abort(500, description="server error")
        return _see_other("/login")

    def login_form(self) -> Response | str:
        """GET /login"""
        if _logged_in():
            return _see_other("/")
        return self._renderer.render("login.tpl", None)

    def login_submit(self) -> Response:
        """POST /login"""
        username = request.form.get("username", "")
        pwd = request.form.get("password", "")
        try:
            user = self._users.login(username, pwd)
        except InvalidCredentialsError as exc:
            abort(401, description=str(exc))
        except Exception as exc:
            abort(500, description=str(exc))
        session.set_value("user_id", str(user.id))
        return _see_other("/")

    def logout(self) -> Response:
        """GET /logout – forget the user and go back to the login page."""
        session.delete_key("user_id")
        return _see_other("/login")


class ProductHandler:
    """Product list and product detail pages."""

    def __init__(self, product_service: ProductService, renderer: Renderer) -> None:
        self._products = product_service
        self._renderer = renderer

    def list_products(self) -> Response | str:
        """GET /products"""
        if not _logged_in():
            return _see_other("/login")
        try:
            products = self._products.get_products()
        except Exception:
            abort(500, description="server error")
        return self._renderer.render("products.tpl", {"Products": products})

    def product_details(self, product_id: str) -> Response | str:
        """GET /products/<id>"""
        if not _logged_in():
            return _see_other("/login")
        parsed = _parse_int(product_id)
        if parsed is None:
            abort(400, description="invalid product id")
        try:
            product = self._products.get_product_by_id(parsed)
        except Exception:
            abort(500, description="server error")
        return self._renderer.render("singleProduct.tpl", {"Product": product})


class CartHandler:
    """Viewing and changing the cart held in the session."""

    def __init__(self, product_service: ProductService, renderer: Renderer) -> None:
        self._products = product_service
        self._renderer = renderer

    def view_cart(self) -> Response | str:
        """GET /cart"""
        if not _logged_in():
            return _see_other("/login")
        try:
            cart = load_cart()
        except ValueError:
            abort(500, description="cannot load cart")
        items = [
            CartItem(product_id=pid, quantity=qty, product=self._products.get_product_by_id(pid))
            for pid, qty in (cart or {}).items()
        ]
        return self._renderer.render("cart.tpl", {"CartItems": items})

    def add_to_cart(self) -> Response:
        """POST /cart/add – unreadable numbers count as zero."""
        if not _logged_in():
            return _see_other("/login")
        pid = _parse_int(request.form.get("product_id")) or 0
        qty = _parse_int(request.form.get("quantity")) or 0
        try:
            cart = load_cart()
        except ValueError:
            abort(500, description="could not load cart")
        try:
            save_cart(_add_to_cart(cart, pid, qty))
        except yaml.YAMLError:
            abort(400, description="cannot save cart")
        return _see_other("/cart")

    def remove_from_cart(self) -> Response:
        """POST /cart/remove"""
        if not _logged_in():
            return _see_other("/login")
        pid = _parse_int(request.form.get("product_id"))
        if pid is None:
            abort(400, description="invalid product id")
        try:
            cart = load_cart()
        except ValueError:
            abort(500, description="could not load cart")
        try:
            save_cart(_remove_from_cart(cart, pid))
        except yaml.YAMLError:
            abort(500, description="could not save cart")
        return _see_other("/cart")