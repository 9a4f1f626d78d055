import io

import pytest
from werkzeug.datastructures import FileStorage

from product_catalog import create_app
from product_catalog.services.catalog import LocalStorage, db
from tests.helpers import PNG_BYTES


@pytest.fixture(scope="function")
def upload_dir(tmp_path):
    return tmp_path / "uploads"


@pytest.fixture(scope="function")
def app(tmp_path, upload_dir):
    """Create an app with a throwaway SQLite file and upload folder for each test."""
    app = create_app({
        "TESTING": True,
        "SECRET_KEY": "test",
        "SQLALCHEMY_DATABASE_URI": f"sqlite:///{tmp_path / 'catalog.db'}",
        "UPLOAD_FOLDER": str(upload_dir),
    })

    yield app

    with app.app_context():
        db.session.remove()
        db.engine.dispose()


@pytest.fixture(scope="function")
def client(app):
    return app.test_client()


@pytest.fixture(scope="function")
def service(app):
    """ProductService inside an app context, for direct use-case calls."""
    with app.app_context():
        yield app.extensions["catalog"]


@pytest.fixture(scope="function")
def repository(service):
    return service.repository


@pytest.fixture(scope="function")
def storage(tmp_path):
    return LocalStorage(tmp_path / "store")


@pytest.fixture
def make_upload():
    """Build a werkzeug FileStorage the way Flask hands uploads to views."""
    def _make(filename="photo.png", content_type="image/png", data=PNG_BYTES):
        return FileStorage(stream=io.BytesIO(data), filename=filename, content_type=content_type)
    return _make
