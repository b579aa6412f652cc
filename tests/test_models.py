from dataclasses import asdict, replace

from vinylshop.models import CartItem, Product, User


def _product(**overrides):
    fields = dict(
        id=1,
        title="Blue Train",
        year=1958,
        artist="John Coltrane",
        img="blue_train.jpg",
        price=25,
        genre="Jazz",
    )
    fields.update(overrides)
    return Product(**fields)


def test_product_round_trips_through_asdict():
    product = _product()
    assert Product(**asdict(product)) == product


def test_products_differing_in_one_field_are_not_equal():
    product = _product()
    other = replace(product, price=product.price + 1)
    assert (other == product) is False
    assert other.title == product.title


def test_user_keeps_given_fields():
    user = User(id=3, username="alice", email="alice@example.com", password_hash="placeholder")
    assert (user.id, user.username, user.email, user.password_hash) == (
        3,
        "alice",
        "alice@example.com",
        "placeholder",
    )


def test_cart_item_nests_product_in_asdict():
    product = _product(id=9)
    item = CartItem(product_id=product.id, quantity=2, product=product)
    data = asdict(item)
    assert data["product"] == asdict(product)
    assert data["product_id"] == data["product"]["id"]
    assert data["quantity"] == 2