import pytest
from sqlalchemy import create_engine, text
from sqlalchemy.exc import IntegrityError

from vinylshop.models import Product, User
from vinylshop.repository import NotFoundError, ProductRepo, UserRepo

PRODUCTS = [
    Product(1, "Kind of Blue", 1959, "Miles Davis", "kind_of_blue.jpg", 30, "Jazz"),
    Product(2, "Abbey Road", 1969, "The Beatles", "abbey_road.jpg", 28, "Rock"),
]


@pytest.fixture
def engine(tmp_path):
    engine = create_engine(f"sqlite:///{tmp_path / 'shop.db'}")
    with engine.begin() as conn:
        conn.execute(
            text(
                "CREATE TABLE products (id INTEGER PRIMARY KEY, title TEXT, "
                "year INTEGER, artist TEXT, img TEXT, price INTEGER, genre TEXT)"
            )
        )
        conn.execute(
            text(
                "CREATE TABLE users (id INTEGER PRIMARY KEY AUTOINCREMENT, "
                "username TEXT UNIQUE, email TEXT, password_hash TEXT)"
            )
        )
    yield engine
    engine.dispose()


def _insert_products(engine, products):
    with engine.begin() as conn:
        for p in products:
            conn.execute(
                text(
                    "INSERT INTO products VALUES "
                    "(:id, :title, :year, :artist, :img, :price, :genre)"
                ),
                {
                    "id": p.id,
                    "title": p.title,
                    "year": p.year,
                    "artist": p.artist,
                    "img": p.img,
                    "price": p.price,
                    "genre": p.genre,
                },
            )


def test_get_all_products_returns_inserted_rows(engine):
    _insert_products(engine, PRODUCTS)
    assert ProductRepo(engine).get_all_products() == PRODUCTS


def test_get_all_products_on_empty_table(engine):
    assert ProductRepo(engine).get_all_products() == []


def test_get_product_details_by_id(engine):
    _insert_products(engine, PRODUCTS)
    assert ProductRepo(engine).get_product_details(PRODUCTS[1].id) == PRODUCTS[1]


def test_get_product_details_missing_id(engine):
    _insert_products(engine, PRODUCTS)
    with pytest.raises(NotFoundError):
        ProductRepo(engine).get_product_details(999)


def test_create_then_get_user(engine):
    repo = UserRepo(engine)
    repo.create_user(
        User(id=0, username="alice", email="alice@example.com", password_hash="placeholder")
    )
    user = repo.get_by_username("alice")
    assert (user.username, user.email, user.password_hash) == (
        "alice",
        "alice@example.com",
        "placeholder",
    )
    assert user.id > 0


def test_get_unknown_user(engine):
    with pytest.raises(NotFoundError):
        UserRepo(engine).get_by_username("nobody")


def test_create_duplicate_user_fails(engine):
    repo = UserRepo(engine)
    user = User(id=0, username="bob", email="bob@example.com", password_hash="placeholder")
    repo.create_user(user)
    with pytest.raises(IntegrityError):
        repo.create_user(user)