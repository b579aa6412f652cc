[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "vinylshop"
version = "0.1.0"
description = "A small web shop for vinyl records with user accounts, a product catalogue and a session cart."
requires-python = ">=3.10"
keywords = ["flask", "web shop", "vinyl", "shopping cart", "postgresql"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Framework :: Flask",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: WWW/HTTP :: Dynamic Content",
]
dependencies = [
    "flask",
    "sqlalchemy",
    "bcrypt",
    "pyyaml",
    "jinja2",
    "python-dotenv",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
vinylshop = "vinylshop.app:main"

[tool.hatch.build.targets.wheel]
packages = ["vinylshop"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
