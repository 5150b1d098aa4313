import json

import httpx

from atelier.client import (
    AboutSectionsAdmin,
    AuthSession,
    BlogArticlesAdmin,
    BlogTagsAdmin,
    ClientConfig,
    ContactLinksAdmin,
    PageContentAdmin,
    ProductsAdmin,
)
from atelier.client.resources import form_fields

CONFIG = ClientConfig(public_api_url="http://api.test/api", server_side=True)

IMAGE = ("rug.png", b"\x89PNG\r\n\x1a\n" + b"\x00" * 16, "image/png")


class Recorder:
    """MockTransport handler that records requests and answers from a route table."""

    def __init__(self, routes):
        self.routes = routes
        self.requests = []

    def __call__(self, request):
        self.requests.append(request)
        status, body = self.routes.get(
            (request.method, request.url.path),
            (404, {"statusCode": 404, "message": "Not Found", "error": "Not Found"}),
        )
        if body is None:
            return httpx.Response(status)
        return httpx.Response(status, json=body)

    def client(self):
        return httpx.Client(transport=httpx.MockTransport(self))

    def last(self, method, path):
        return [r for r in self.requests if r.method == method and r.url.path == path][-1]


def signed_in():
    session = AuthSession()
    session.sign_in("tok", {"id": "u", "username": "admin"})
    return session


def test_form_fields_encode_non_strings_as_json():
    fields = form_fields({
        "name": "Dune",
        "price": 320.5,
        "isPublished": True,
        "dimensions": {"width": 120, "height": 180, "unit": "cm"},
        "description": None,
    })

    assert fields == {
        "name": "Dune",
        "price": "320.5",
        "isPublished": "true",
        "dimensions": '{"width": 120, "height": 180, "unit": "cm"}',
    }


# ------------------------
# Products
# ------------------------

def test_create_product_with_images_sends_multipart():
    product = {"id": "p1", "name": "Dune"}
    recorder = Recorder({
        ("POST", "/api/products/with-upload"): (201, product),
        ("GET", "/api/products"): (200, {"data": [product], "total": 1, "page": 1, "limit": 10, "totalPages": 1}),
    })
    admin = ProductsAdmin(CONFIG, session=signed_in(), http=recorder.client())

    created = admin.create_product_with_images(
        {"name": "Dune", "category": "rug", "price": 320, "images": ["ignored"]},
        [IMAGE, IMAGE],
        show_on_home=[True, False],
    )

    assert created == product
    assert admin.products == [product]

    request = recorder.last("POST", "/api/products/with-upload")
    body = request.content
    assert request.headers["content-type"].startswith("multipart/form-data")
    assert request.headers["authorization"] == "Bearer tok"
    assert body.count(b'name="images"; filename="rug.png"') == 2
    assert b'name="showOnHome"' in body
    assert b"[true, false]" in body
    assert b"ignored" not in body


def test_create_product_with_images_failure_keeps_error():
    recorder = Recorder({
        ("POST", "/api/products/with-upload"): (
            400,
            {"statusCode": 400, "message": ["At least one image is required"], "error": "Bad Request"},
        ),
    })
    admin = ProductsAdmin(CONFIG, session=signed_in(), http=recorder.client())

    assert admin.create_product_with_images({"name": "Dune"}, []) is None
    assert admin.error["message"] == "At least one image is required"
    assert admin.products == []
    assert admin.loading is False


def test_fetch_statistics_and_delete():
    stats = {"total": 2, "wallHangings": 1, "rugs": 1, "available": 2, "sold": 0, "draft": 0}
    recorder = Recorder({
        ("GET", "/api/products/statistics"): (200, stats),
        ("GET", "/api/products"): (200, {"data": [{"id": "p1"}, {"id": "p2"}]}),
        ("DELETE", "/api/products/p1"): (204, None),
    })
    admin = ProductsAdmin(CONFIG, session=signed_in(), http=recorder.client())

    assert admin.fetch_statistics() == stats
    assert admin.statistics == stats

    admin.fetch_products(status="available", search="")
    assert recorder.last("GET", "/api/products").url.params["status"] == "available"
    assert "search" not in recorder.last("GET", "/api/products").url.params

    assert admin.delete_product("p1") is True
    assert [p["id"] for p in admin.products] == ["p2"]


def test_product_image_operations():
    product = {"id": "p1", "images": ["a", "b"]}
    recorder = Recorder({
        ("POST", "/api/products/p1/images"): (201, product),
        ("PATCH", "/api/products/images/i1"): (200, {"id": "i1", "showOnHome": True}),
        ("DELETE", "/api/products/images/i1"): (204, None),
    })
    admin = ProductsAdmin(CONFIG, session=signed_in(), http=recorder.client())
    admin.products = [{"id": "p1", "images": ["a"]}]

    assert admin.add_images("p1", [IMAGE], show_on_home=[True]) == product
    assert admin.products == [product]
    assert b"[true]" in recorder.last("POST", "/api/products/p1/images").content

    assert admin.update_image("i1", {"showOnHome": True})["showOnHome"] is True
    assert json.loads(recorder.last("PATCH", "/api/products/images/i1").content) == {"showOnHome": True}
    assert admin.remove_image("i1") is True


# ------------------------
# Blog
# ------------------------

def test_create_article_with_images_sends_multipart():
    article = {"id": "a1", "title": "Loom notes"}
    recorder = Recorder({
        ("POST", "/api/blog-articles"): (201, article),
        ("GET", "/api/blog-articles/all"): (200, [article]),
    })
    admin = BlogArticlesAdmin(CONFIG, session=signed_in(), http=recorder.client())

    created = admin.create_article_with_images(
        {"title": "Loom notes", "content": "<p>Warp</p>", "isPublished": True, "tagIds": ["t1"]},
        [IMAGE],
    )

    assert created == article
    assert admin.articles == [article]

    request = recorder.last("POST", "/api/blog-articles")
    assert request.headers["content-type"].startswith("multipart/form-data")
    assert b'name="tagIds"' in request.content
    assert b'["t1"]' in request.content
    assert b'filename="rug.png"' in request.content


def test_create_article_without_images_sends_json():
    recorder = Recorder({
        ("POST", "/api/blog-articles"): (201, {"id": "a1"}),
        ("GET", "/api/blog-articles/all"): (200, [{"id": "a1"}]),
    })
    admin = BlogArticlesAdmin(CONFIG, session=signed_in(), http=recorder.client())

    admin.create_article_with_images({"title": "Loom notes", "content": "Warp"})

    request = recorder.last("POST", "/api/blog-articles")
    assert request.headers["content-type"] == "application/json"
    assert json.loads(request.content) == {"title": "Loom notes", "content": "Warp"}


def test_article_image_operations():
    images = [{"id": "i1", "isCover": True}, {"id": "i2", "isCover": False}]
    recorder = Recorder({
        ("POST", "/api/blog-articles/a1/images"): (201, images),
        ("PATCH", "/api/blog-articles/a1/images/i2"): (200, {"id": "i2", "isCover": True}),
        ("DELETE", "/api/blog-articles/a1/images/i1"): (204, None),
    })
    admin = BlogArticlesAdmin(CONFIG, session=signed_in(), http=recorder.client())

    assert admin.add_images("a1", [IMAGE, IMAGE], alt_texts=["Warp", "Weft"]) == images
    assert b'["Warp", "Weft"]' in recorder.last("POST", "/api/blog-articles/a1/images").content

    assert admin.update_image("a1", "i2", {"isCover": True})["isCover"] is True
    assert admin.remove_image("a1", "i1") is True


def test_article_missing_keeps_list():
    recorder = Recorder({})
    admin = BlogArticlesAdmin(CONFIG, session=signed_in(), http=recorder.client())
    admin.articles = [{"id": "a1"}]

    assert admin.delete_article("nope") is False
    assert admin.error["statusCode"] == 404
    assert admin.articles == [{"id": "a1"}]


def test_tag_crud():
    recorder = Recorder({
        ("GET", "/api/blog-tags"): (200, [{"id": "t1", "name": "Wool"}]),
        ("POST", "/api/blog-tags"): (201, {"id": "t2", "name": "Linen"}),
        ("PATCH", "/api/blog-tags/t1"): (200, {"id": "t1", "name": "Merino"}),
        ("DELETE", "/api/blog-tags/t2"): (204, None),
    })
    admin = BlogTagsAdmin(CONFIG, session=signed_in(), http=recorder.client())

    admin.fetch_all_tags()
    admin.create_tag("Linen")
    admin.update_tag("t1", "Merino")
    assert [t["name"] for t in admin.tags] == ["Merino", "Linen"]

    assert admin.delete_tag("t2") is True
    assert admin.tags == [{"id": "t1", "name": "Merino"}]
    assert admin.has_tags


# ------------------------
# Site content
# ------------------------

def test_page_content_image_replacement():
    updated = {"id": "c1", "page": "home", "image": "http://api.test/uploads/page-content/new.png"}
    recorder = Recorder({
        ("GET", "/api/page-content/all"): (200, [{"id": "c1", "page": "home"}, {"id": "c2", "page": "about"}]),
        ("PATCH", "/api/page-content/id/c1/image"): (200, updated),
    })
    admin = PageContentAdmin(CONFIG, session=signed_in(), http=recorder.client())

    admin.fetch_all()
    assert [c["id"] for c in admin.get_by_page("home")] == ["c1"]

    assert admin.update_content_image("c1", IMAGE, image_alt="Loom") == updated
    assert admin.contents[0] == updated

    body = recorder.last("PATCH", "/api/page-content/id/c1/image").content
    assert b'name="imageAlt"' in body
    assert b'name="image"; filename="rug.png"' in body


def test_about_section_created_with_image():
    section = {"id": "s1", "title": "Origins"}
    recorder = Recorder({
        ("POST", "/api/about-sections"): (201, section),
        ("GET", "/api/about-sections/all"): (200, [section]),
    })
    admin = AboutSectionsAdmin(CONFIG, session=signed_in(), http=recorder.client())

    admin.create_section_with_image(
        {"title": "Origins", "paragraphs": ["Once", "Then"], "imageAlt": "Studio"},
        IMAGE,
    )

    assert admin.sections == [section]
    assert b'["Once", "Then"]' in recorder.last("POST", "/api/about-sections").content


def test_contact_link_lifecycle_and_shared_session():
    session = signed_in()
    recorder = Recorder({
        ("POST", "/api/contact-links"): (201, {"id": "l1", "platform": "instagram"}),
        ("DELETE", "/api/contact-links/l1"): (401, {"statusCode": 401, "message": "Token has expired", "error": "Unauthorized"}),
    })
    links = ContactLinksAdmin(CONFIG, session=session, http=recorder.client())
    products = ProductsAdmin(CONFIG, session=session, http=recorder.client())

    assert links.create_contact_link({"platform": "instagram", "url": "https://instagram.com/kaisla"})
    assert links.delete_contact_link("l1") is False

    assert links.contact_links == [{"id": "l1", "platform": "instagram"}]
    assert products.session.token is None
