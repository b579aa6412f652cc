"""Business rules for carts, products and user accounts."""

from __future__ import annotations

import bcrypt

from vinylshop.models import Product, User
from vinylshop.repository import NotFoundError, ProductRepo, UserRepo

CartMap = dict[int, int]

_BCRYPT_COST = 10
_BCRYPT_MAX_BYTES = 72


class InvalidCredentialsError(Exception):
    """Raised when a username and password do not match a user."""

    def __init__(self, message: str = "service: invalid credentials") -> None:
        super().__init__(message)


class UserExistsError(Exception):
    """Raised when registering a username that is already taken."""

    def __init__(self, message: str = "service: can't register this user") -> None:
        super().__init__(message)


class CartNotFoundError(Exception):
    """Raised when a cart cannot be fetched."""

    def __init__(self, message: str = "cart not found") -> None:
        super().__init__(message)


def add_to_cart(cart: CartMap | None, product_id: int, quantity: int) -> CartMap:
    """Add ``quantity`` of a product to ``cart``; a missing cart becomes an empty one."""
    if cart is None:
        return {}
    cart[product_id] = cart.get(product_id, 0) + quantity
    return cart


def remove_from_cart(cart: CartMap | None, product_id: int) -> CartMap | None:
    """Drop a product from ``cart``; absent products are ignored."""
    if cart is not None:
        cart.pop(product_id, None)
    return cart


def hash_password(password: str) -> str:
    """Return a bcrypt hash of ``password``."""
    encoded = password.encode("utf-8")
    if len(encoded) > _BCRYPT_MAX_BYTES:
        raise ValueError("service: hash password: password length exceeds 72 bytes")
    return bcrypt.hashpw(encoded, bcrypt.gensalt(rounds=_BCRYPT_COST)).decode("ascii")


def check_password(hashed: str, password: str) -> bool:
    """Tell whether ``password`` matches the bcrypt hash ``hashed``."""
    try:
        return bcrypt.checkpw(password.encode("utf-8"), hashed.encode("utf-8"))
    except ValueError:
        return False


class ProductService:
    """Product lookups on top of a product repository."""

    def __init__(self, repo: ProductRepo) -> None:
        self._repo = repo

    def get_products(self) -> list[Product]:
        return self._repo.get_all_products()

    def get_product_by_id(self, product_id: int) -> Product:
        return self._repo.get_product_details(product_id)


class UserService:
    """Registration and login on top of a user repository."""

    def __init__(self, user_repo: UserRepo) -> None:
        self._user_repo = user_repo

    def register(self, username: str, email: str, password: str) -> User:
        """Create a new user; raises UserExistsError if the name is taken."""
        try:
            self._user_repo.get_by_username(username)
        except NotFoundError:
            pass
        else:
            raise UserExistsError()

        user = User(id=0, username=username, email=email, password_hash=hash_password(password))
        self._user_repo.create_user(user)
        return user

    def login(self, username: str, password: str) -> User:
        """Return the user if the credentials match, else raise InvalidCredentialsError."""
        try:
            user = self._user_repo.get_by_username(username)
        except NotFoundError as exc:
            raise InvalidCredentialsError() from exc
        if not check_password(user.password_hash, password):
            raise InvalidCredentialsError()
        return user