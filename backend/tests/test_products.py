import json
import os
from datetime import datetime, timedelta, timezone

import pytest

from atelier.extensions import db
from atelier.models import Product, ProductImage
from conftest import product_payload


def make_product(name, category="rug", status="available", created_at=None):
    product = Product(
        name=name,
        description="",
        category=category,
        price=100,
        status=status,
        stock_quantity=1,
        images=[],
    )
    if created_at is not None:
        product.created_at = created_at
    db.session.add(product)
    db.session.commit()
    return product


def test_create_then_get_product(client, auth_headers):
    response = client.post("/api/products", json=product_payload(), headers=auth_headers)
    assert response.status_code == 201

    created = response.get_json()
    assert created["name"] == "Handwoven Rug"
    assert created["price"] == 249.5
    assert created["stockQuantity"] == 1

    fetched = client.get(f"/api/products/{created['id']}").get_json()
    for key in ("name", "description", "category", "status", "dimensions", "materials"):
        assert fetched[key] == created[key]


def test_create_product_requires_token(client):
    response = client.post("/api/products", json=product_payload())
    assert response.status_code == 401
    assert response.get_json()["statusCode"] == 401


def test_create_product_rejects_unknown_fields(client, auth_headers):
    response = client.post(
        "/api/products",
        json=product_payload(discount=10),
        headers=auth_headers,
    )
    body = response.get_json()

    assert response.status_code == 400
    assert body["error"] == "Bad Request"
    assert "discount" in body["errors"]


def test_create_product_rejects_negative_price(client, auth_headers):
    response = client.post("/api/products", json=product_payload(price=-1), headers=auth_headers)
    assert response.status_code == 400
    assert "price" in response.get_json()["errors"]


def test_get_unknown_product_is_404(client):
    response = client.get("/api/products/does-not-exist")
    body = response.get_json()

    assert response.status_code == 404
    assert body == {
        "statusCode": 404,
        "message": 'Product with ID "does-not-exist" not found',
        "error": "Not Found",
    }


@pytest.mark.parametrize(
    "method, path, payload, message",
    [
        ("patch", "/api/products/missing", {"price": 10}, 'Product with ID "missing" not found'),
        ("delete", "/api/products/missing", None, 'Product with ID "missing" not found'),
        ("patch", "/api/products/images/missing", {"showOnHome": True}, 'Product image with ID "missing" not found'),
        ("delete", "/api/products/images/missing", None, 'Product image with ID "missing" not found'),
    ],
)
def test_changes_to_unknown_ids_are_404(client, auth_headers, method, path, payload, message):
    response = getattr(client, method)(path, json=payload, headers=auth_headers)

    assert response.status_code == 404
    assert response.get_json() == {"statusCode": 404, "message": message, "error": "Not Found"}


def test_list_products_paginates(client, app):
    for index in range(25):
        make_product(f"Rug {index:02d}")

    body = client.get("/api/products?limit=10").get_json()

    assert len(body["data"]) == 10
    assert body["total"] == 25
    assert body["page"] == 1
    assert body["limit"] == 10
    assert body["totalPages"] == 3

    last = client.get("/api/products?limit=10&page=3").get_json()
    assert len(last["data"]) == 5


def test_list_products_rejects_limit_above_100(client):
    assert client.get("/api/products?limit=101").status_code == 400


def test_list_products_filters_by_search(client, app):
    make_product("Blue Wave Rug")
    make_product("Sunset Macrame", category="wall-hanging")

    body = client.get("/api/products?search=wave").get_json()
    assert [p["name"] for p in body["data"]] == ["Blue Wave Rug"]


def test_statistics_add_up(client, app):
    make_product("A", category="rug", status="available")
    make_product("B", category="rug", status="draft")
    make_product("C", category="wall-hanging", status="sold")

    stats = client.get("/api/products/statistics").get_json()

    assert stats["total"] == 3
    assert sum(stats["byCategory"].values()) == stats["total"]
    assert sum(stats["byStatus"].values()) == stats["total"]
    assert stats["byCategory"] == {"wall-hanging": 1, "rug": 2}
    assert stats["byStatus"] == {"available": 1, "sold": 1, "draft": 1}


def test_category_listing_only_shows_available_newest_first(client, app, auth_headers):
    now = datetime.now(timezone.utc)
    make_product("Older Rug", created_at=now - timedelta(days=2))
    make_product("Newer Rug", created_at=now - timedelta(days=1))
    draft = make_product("Draft Rug", status="draft", created_at=now)
    make_product("Hanging", category="wall-hanging")

    names = [p["name"] for p in client.get("/api/products/category/rug").get_json()]
    assert names == ["Newer Rug", "Older Rug"]

    response = client.patch(
        f"/api/products/{draft.id}",
        json={"status": "available"},
        headers=auth_headers,
    )
    assert response.status_code == 200

    names = [p["name"] for p in client.get("/api/products/category/rug").get_json()]
    assert names == ["Draft Rug", "Newer Rug", "Older Rug"]


def test_unknown_category_is_404(client):
    assert client.get("/api/products/category/lamp").status_code == 404


def test_partial_update_keeps_other_fields(client, auth_headers):
    created = client.post("/api/products", json=product_payload(), headers=auth_headers).get_json()

    updated = client.patch(
        f"/api/products/{created['id']}",
        json={"price": 199},
        headers=auth_headers,
    ).get_json()

    assert updated["price"] == 199
    assert updated["name"] == created["name"]
    assert updated["dimensions"] == created["dimensions"]


def test_create_with_upload_and_home_grid(client, app, auth_headers, png):
    data = {
        "name": "Loom Piece",
        "description": "Tapestry",
        "category": "wall-hanging",
        "price": "89.90",
        "status": "available",
        "dimensions": json.dumps({"width": 40, "height": 60, "unit": "cm"}),
        "showOnHome": json.dumps([True, False]),
        "images": [png("front.png"), png("back.png")],
    }
    response = client.post(
        "/api/products/with-upload",
        data=data,
        headers=auth_headers,
        content_type="multipart/form-data",
    )
    assert response.status_code == 201

    product = response.get_json()
    assert len(product["images"]) == 2
    assert [i["showOnHome"] for i in product["productImages"]] == [True, False]
    for url in product["images"]:
        assert url.startswith("http://localhost:4000/uploads/products/")

    grid = client.get("/api/products/home-grid").get_json()
    assert len(grid) == 1
    assert grid[0]["url"] == product["images"][0]
    assert grid[0]["product"]["name"] == "Loom Piece"


def test_create_with_upload_requires_images(client, auth_headers):
    response = client.post(
        "/api/products/with-upload",
        data={"name": "No Images", "category": "rug", "price": "10"},
        headers=auth_headers,
        content_type="multipart/form-data",
    )
    assert response.status_code == 400


def test_upload_rejects_non_image(client, auth_headers, png):
    response = client.post(
        "/api/products/with-upload",
        data={
            "name": "Text",
            "category": "rug",
            "price": "10",
            "images": [png("notes.txt", "text/plain", b"hello")],
        },
        headers=auth_headers,
        content_type="multipart/form-data",
    )
    assert response.status_code == 400
    assert "Invalid file type" in response.get_json()["message"]


def test_upload_rejects_oversized_file(client, app, auth_headers, png):
    app.config["MAX_UPLOAD_SIZE"] = 16

    response = client.post(
        "/api/products/with-upload",
        data={
            "name": "Big",
            "category": "rug",
            "price": "10",
            "images": [png("big.png", data=b"\x00" * 64)],
        },
        headers=auth_headers,
        content_type="multipart/form-data",
    )
    assert response.status_code == 413


def test_upload_rejects_more_than_five_images(client, auth_headers, png):
    response = client.post(
        "/api/products/with-upload",
        data={
            "name": "Many",
            "category": "rug",
            "price": "10",
            "images": [png(f"{i}.png") for i in range(6)],
        },
        headers=auth_headers,
        content_type="multipart/form-data",
    )
    assert response.status_code == 400


def test_delete_product_removes_files_and_images(client, app, auth_headers, png):
    product = client.post(
        "/api/products/with-upload",
        data={"name": "Temp", "category": "rug", "price": "10", "images": [png()]},
        headers=auth_headers,
        content_type="multipart/form-data",
    ).get_json()

    stored = os.path.join(
        app.config["UPLOAD_FOLDER"], "products", product["images"][0].rsplit("/", 1)[1]
    )
    assert os.path.exists(stored)

    response = client.delete(f"/api/products/{product['id']}", headers=auth_headers)
    assert response.status_code == 204
    assert not os.path.exists(stored)
    assert db.session.get(Product, product["id"]) is None
    assert ProductImage.query.count() == 0


def test_delete_product_with_foreign_urls(client, auth_headers):
    created = client.post(
        "/api/products",
        json=product_payload(images=["https://images.example.com/rug.jpg"]),
        headers=auth_headers,
    ).get_json()

    response = client.delete(f"/api/products/{created['id']}", headers=auth_headers)
    assert response.status_code == 204
    assert client.get(f"/api/products/{created['id']}").status_code == 404


def test_update_and_remove_product_image(client, auth_headers, png):
    product = client.post(
        "/api/products/with-upload",
        data={"name": "Pair", "category": "rug", "price": "10", "images": [png("a.png"), png("b.png")]},
        headers=auth_headers,
        content_type="multipart/form-data",
    ).get_json()
    first, second = product["productImages"]

    updated = client.patch(
        f"/api/products/images/{first['id']}",
        json={"showOnHome": True},
        headers=auth_headers,
    ).get_json()
    assert updated["showOnHome"] is True

    response = client.delete(f"/api/products/images/{second['id']}", headers=auth_headers)
    assert response.status_code == 204

    remaining = client.get(f"/api/products/{product['id']}").get_json()
    assert remaining["images"] == [first["url"]]
    assert [i["id"] for i in remaining["productImages"]] == [first["id"]]


def test_add_images_appends_after_existing(client, auth_headers, png):
    product = client.post(
        "/api/products/with-upload",
        data={"name": "Grow", "category": "rug", "price": "10", "images": [png()]},
        headers=auth_headers,
        content_type="multipart/form-data",
    ).get_json()

    response = client.post(
        f"/api/products/{product['id']}/images",
        data={"images": [png("more.png")], "showOnHome": json.dumps([True])},
        headers=auth_headers,
        content_type="multipart/form-data",
    )
    assert response.status_code == 201

    images = response.get_json()["productImages"]
    assert [i["sortOrder"] for i in images] == [0, 1]
    assert images[1]["showOnHome"] is True
