import io
import shutil

import pytest

from atelier import create_app
from atelier.application.auth import DEFAULT_ADMIN_PASSWORD, DEFAULT_ADMIN_USERNAME, ensure_admin_user
from atelier.extensions import db

# Uploads are checked by MIME type and extension only, never decoded
PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64


@pytest.fixture
def app():
    app = create_app("test")

    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()

    shutil.rmtree(app.config["UPLOAD_FOLDER"], ignore_errors=True)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def admin(app):
    ensure_admin_user()
    return {"username": DEFAULT_ADMIN_USERNAME, "password": DEFAULT_ADMIN_PASSWORD}


@pytest.fixture
def auth_headers(client, admin):
    response = client.post("/api/auth/login", json=admin)
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.get_json()['access_token']}"}


@pytest.fixture
def png():
    """Factory for in-memory PNG uploads usable in multipart test requests."""
    def make(name="image.png", content_type="image/png", data=PNG_BYTES):
        return (io.BytesIO(data), name, content_type)
    return make


def product_payload(**overrides):
    payload = {
        "name": "Handwoven Rug",
        "description": "Wool rug woven on a floor loom.",
        "category": "rug",
        "price": 249.5,
        "status": "available",
        "stockQuantity": 1,
        "dimensions": {"width": 120, "height": 180, "unit": "cm"},
        "materials": "Wool",
    }
    payload.update(overrides)
    return payload
