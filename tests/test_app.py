"""Tests for the application factory, configuration and seed command."""
import os

from product_catalog import create_app
from product_catalog.config import COLLECTION_NAME, Config, get_database_url
from product_catalog.seed import PRODUCTS
from product_catalog.services.catalog import Product, db


def test_create_app_applies_overrides(app, upload_dir):
    assert app.config["TESTING"] is True
    assert app.config["UPLOAD_FOLDER"] == str(upload_dir)
    assert app.extensions["catalog"].storage.root == os.path.abspath(upload_dir)


def test_upload_folder_created_at_startup(upload_dir, app):
    assert upload_dir.is_dir()


def test_defaults():
    assert Config.MAX_IMAGE_SIZE == 5 * 1024 * 1024
    assert Config.MAX_CONTENT_LENGTH > Config.MAX_IMAGE_SIZE


def test_table_name_comes_from_environment_only(tmp_path):
    """The table is named by COLLECTION_NAME at import; app overrides do not rename it."""
    assert not hasattr(Config, "COLLECTION_NAME")
    assert Product.__tablename__ == COLLECTION_NAME
    assert COLLECTION_NAME == os.environ.get("COLLECTION_NAME", "products")

    app = create_app({
        "SQLALCHEMY_DATABASE_URI": f"sqlite:///{tmp_path / 'catalog.db'}",
        "UPLOAD_FOLDER": str(tmp_path / "uploads"),
        "COLLECTION_NAME": "catalog_items",
    })

    with app.app_context():
        tables = db.inspect(db.engine).get_table_names()
    assert COLLECTION_NAME in tables
    assert "catalog_items" not in tables


def test_database_url_prefers_environment(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "postgresql://catalog@db/catalog")

    assert get_database_url() == "postgresql://catalog@db/catalog"


def test_database_url_built_from_db_name(monkeypatch):
    monkeypatch.delenv("DATABASE_URL", raising=False)
    monkeypatch.setenv("DB_NAME", "shop")

    url = get_database_url()

    assert url.startswith("sqlite:///")
    assert url.endswith("shop.db")


def test_seed_command_is_idempotent(app):
    runner = app.test_cli_runner()

    first = runner.invoke(args=["seed"])
    second = runner.invoke(args=["seed"])

    assert first.exit_code == 0
    assert second.exit_code == 0
    with app.app_context():
        assert app.extensions["catalog"].repository.count() == len(PRODUCTS)


def test_apps_are_isolated(tmp_path):
    """Two apps built by the factory do not share a catalog."""
    first = create_app({
        "SQLALCHEMY_DATABASE_URI": f"sqlite:///{tmp_path / 'one.db'}",
        "UPLOAD_FOLDER": str(tmp_path / "one"),
    })
    second = create_app({
        "SQLALCHEMY_DATABASE_URI": f"sqlite:///{tmp_path / 'two.db'}",
        "UPLOAD_FOLDER": str(tmp_path / "two"),
    })

    with first.app_context():
        first.extensions["catalog"].create_product("Lamp", "A desk lamp")

    with second.app_context():
        assert second.extensions["catalog"].list_products() == []
    assert first.extensions["catalog"] is not second.extensions["catalog"]


def test_direct_imports_are_declared_dependencies():
    """click and werkzeug are imported directly, so they are declared, not left to Flask."""
    pyproject = os.path.join(os.path.dirname(os.path.dirname(__file__)), "pyproject.toml")
    with open(pyproject, encoding="utf-8") as f:
        text = f.read()
    dependencies = text.split("dependencies = [", 1)[1].split("]", 1)[0].lower()

    for name in ("flask", "werkzeug", "click", "flask-sqlalchemy", "sqlalchemy", "loguru", "python-dotenv"):
        assert f'"{name}>=' in dependencies
