"""Application assembly and the command that starts the web server."""

from __future__ import annotations

import argparse
import os
import sys
from collections.abc import Sequence
from datetime import datetime, timezone
from pathlib import Path

from dotenv import load_dotenv
from flask import Flask, jsonify, request

from vinylshop.db import DatabaseConnectionError, connect
from vinylshop.handlers import AuthHandler, CartHandler, ProductHandler, Renderer, view_home
from vinylshop.repository import ProductRepo, UserRepo
from vinylshop.services import ProductService, UserService
from vinylshop.session import SESSION_MAX_AGE
from vinylshop.view import TemplateLoadError, TemplateRenderer

_HTTP_ERROR_CODES = (400, 401, 403, 404, 405, 413, 415, 500)


def _log_request(response):
    query = request.query_string.decode("latin-1")
    uri = request.path + (f"?{query}" if query else "")
    stamp = datetime.now(timezone.utc).astimezone().isoformat(timespec="seconds")
    sys.stdout.write(
        f"time={stamp}, method={request.method}, uri={uri}, status={response.status_code}\n"
    )
    sys.stdout.flush()
    return response


def _error_as_json(exc):
    message = exc.description
    if message == type(exc).description:
        message = exc.name
    return jsonify(message=message), exc.code


def create_app(
    user_service: UserService,
    product_service: ProductService,
    renderer: Renderer,
    secret_key: str,
    static_dir: str,
) -> Flask:
    """Build the Flask application with all routes wired."""
    app = Flask(
        __name__,
        static_url_path="/staticFiles",
        static_folder=os.path.abspath(static_dir or "."),
    )
    app.secret_key = secret_key
    app.config.update(
        PERMANENT_SESSION_LIFETIME=SESSION_MAX_AGE,
        SESSION_COOKIE_HTTPONLY=True,
        SESSION_COOKIE_PATH="/",
    )
    app.after_request(_log_request)
    for code in _HTTP_ERROR_CODES:
        app.register_error_handler(code, _error_as_json)

    auth = AuthHandler(user_service, renderer)
    products = ProductHandler(product_service, renderer)
    cart = CartHandler(product_service, renderer)

    routes = [
        ("/", "home", lambda: view_home(renderer), "GET"),
        ("/login", "login_form", auth.login_form, "GET"),
        ("/login", "login_submit", auth.login_submit, "POST"),
        ("/register", "register_form", auth.register_form, "GET"),
        ("/register", "register_submit", auth.register_submit, "POST"),
        ("/logout", "logout", auth.logout, "GET"),
        ("/products", "list_products", products.list_products, "GET"),
        ("/products/<product_id>", "product_details", products.product_details, "GET"),
        ("/cart/add", "add_to_cart", cart.add_to_cart, "POST"),
        ("/cart/remove", "remove_from_cart", cart.remove_from_cart, "POST"),
        ("/cart", "view_cart", cart.view_cart, "GET"),
    ]
    for rule, endpoint, view, method in routes:
        app.add_url_rule(rule, endpoint, view, methods=[method])
    return app


def main(argv: Sequence[str] | None = None) -> int:
    """Load settings from .env, connect to the database and serve the shop."""
    argparse.ArgumentParser(prog="vinylshop", description="Run the shop web server.").parse_args(argv)

    if not Path(".env").is_file():
        raise SystemExit("Error loading .env file")
    load_dotenv(".env")

    try:
        engine = connect()
    except (ValueError, DatabaseConnectionError) as exc:
        raise SystemExit(f"failed to connect to DB: {exc}") from exc

    try:
        user_service = UserService(UserRepo(engine))
        product_service = ProductService(ProductRepo(engine))
        try:
            renderer = TemplateRenderer("templates")
        except TemplateLoadError as exc:
            raise SystemExit(f"view: {exc}") from exc

        app = create_app(
            user_service,
            product_service,
            renderer,
            os.environ.get("SESSION_KEY", ""),
            os.environ.get("STATIC_DIR", ""),
        )
        port = os.environ.get("SERVER_PORT", "")
        host = os.environ.get("SERVER_HOST", "")
        app.run(host=host or "0.0.0.0", port=int(port) if port else 0)
    finally:
        engine.dispose()
    return 0


if __name__ == "__main__":
    sys.exit(main())