# vinylshop

A small web shop for vinyl records. Visitors register and log in. Once they
are logged in, they can browse the record catalogue, open a record's detail
page and keep a shopping cart in their session. The catalogue and the user
accounts are kept in a PostgreSQL database.

## Installation

```
pip install .
```

To run the tests as well:

```
pip install ".[test]"
pytest
```

## Configuration

Settings are read from the environment. A `.env` file in the working
directory is loaded first.

| Variable       | Meaning                                      |
|----------------|----------------------------------------------|
| `DB_HOST`      | database host                                |
| `DB_PORT`      | database port                                |
| `DB_USER`      | database user                                |
| `DB_PWD`       | database password                            |
| `DB_NAME`      | database name                                |
| `SESSION_KEY`  | key that signs the session cookie            |
| `STATIC_DIR`   | directory served under `/staticFiles`        |
| `SERVER_HOST`  | address to listen on                         |
| `SERVER_PORT`  | port to listen on                            |

Templates are loaded from `*.tpl` files in a `templates` directory. The pages
use `home.tpl`, `login.tpl`, `register.tpl`, `products.tpl`,
`singleProduct.tpl` and `cart.tpl`.

An example `.env`:

```
DB_HOST=localhost
DB_PORT=5432
DB_USER=user
DB_PWD=password
DB_NAME=vinylshop
SESSION_KEY=secret
STATIC_DIR=static
SERVER_HOST=127.0.0.1
SERVER_PORT=8080
```

## Running

```
vinylshop
```

## Routes

| Method | Path             | Purpose                                  |
|--------|------------------|------------------------------------------|
| GET    | `/`              | home page; redirects to login when needed |
| GET    | `/login`         | login form                               |
| POST   | `/login`         | log in                                   |
| GET    | `/register`      | registration form                        |
| POST   | `/register`      | create an account                        |
| GET    | `/logout`        | log out                                  |
| GET    | `/products`      | list all records                         |
| GET    | `/products/<id>` | one record's details                     |
| POST   | `/cart/add`      | add `quantity` of `product_id` to the cart |
| POST   | `/cart/remove`   | remove `product_id` from the cart        |
| GET    | `/cart`          | show the cart                            |

## Using it as a library

`vinylshop.app.create_app(user_service, product_service, renderer,
secret_key, static_dir)` builds the Flask application from the services in
`vinylshop.services`, which use the repositories in `vinylshop.repository`,
and a `vinylshop.view.TemplateRenderer`. This lets you serve the shop from
your own WSGI setup or test it with stand-in services.