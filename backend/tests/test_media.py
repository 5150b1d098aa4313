import io
import os

import pytest
from werkzeug.datastructures import FileStorage
from werkzeug.exceptions import BadRequest, RequestEntityTooLarge

from atelier.utils import media
from atelier.utils.html import sanitize_article_html, sanitize_basic_html


def upload(name="photo.png", content_type="image/png", data=b"\x89PNG" + b"\x00" * 32):
    return FileStorage(stream=io.BytesIO(data), filename=name, content_type=content_type)


@pytest.mark.parametrize(
    "name, content_type",
    [("a.jpg", "image/jpeg"), ("a.jpeg", "image/jpeg"), ("a.png", "image/png"), ("a.webp", "image/webp")],
)
def test_accepts_supported_images(app, name, content_type):
    assert media.accept_image(upload(name, content_type)).filename == name


def test_rejects_other_mime_types(app):
    with pytest.raises(BadRequest):
        media.accept_image(upload("anim.gif", "image/gif"))


def test_rejects_mismatched_extension(app):
    with pytest.raises(BadRequest):
        media.accept_image(upload("script.php", "image/png"))


def test_rejects_missing_file(app):
    with pytest.raises(BadRequest):
        media.accept_image(None)


def test_rejects_oversized_file(app):
    app.config["MAX_UPLOAD_SIZE"] = 10
    with pytest.raises(RequestEntityTooLarge):
        media.accept_image(upload())


def test_accept_images_enforces_count(app):
    with pytest.raises(BadRequest):
        media.accept_images([upload() for _ in range(3)], max_count=2)
    assert media.accept_images([], required=False) == []


def test_save_and_delete_round_trip(app):
    filename = media.save_file(upload("My Photo.PNG"), "products")

    assert filename.endswith(".png")
    path = os.path.join(app.config["UPLOAD_FOLDER"], "products", filename)
    assert os.path.exists(path)

    url = media.get_file_url(filename, "products")
    assert url == f"http://localhost:4000/uploads/products/{filename}"
    assert media.extract_filename(url, "products") == filename

    assert media.delete_file_urls([url], "products") == 1
    assert not os.path.exists(path)


def test_foreign_urls_are_left_alone(app):
    assert media.extract_filename("https://images.unsplash.com/photo-1?w=800", "products") is None
    assert media.delete_file_urls(["https://cdn.example.com/x.png", None], "products") == 0


def test_deleting_missing_file_is_not_an_error(app):
    assert media.delete_file("nothing-here.png", "blog") is False


def test_unknown_subdir_is_refused(app):
    with pytest.raises(ValueError):
        media.ensure_upload_dir("../etc")


def test_uploaded_files_are_served(client, app):
    filename = media.save_file(upload(), "blog")

    response = client.get(f"/uploads/blog/{filename}")
    assert response.status_code == 200
    response.close()

    assert client.get(f"/uploads/secrets/{filename}").status_code == 404


def test_article_html_keeps_links_and_colour():
    html = sanitize_article_html(
        '<p><a href="https://kaisla.com" onclick="x()">site</a>'
        '<span style="color: red; position: fixed">red</span>'
        '<a href="javascript:alert(1)">bad</a></p>'
    )

    assert 'href="https://kaisla.com"' in html
    assert "onclick" not in html
    assert "color: red" in html
    assert "position" not in html
    assert "javascript:" not in html


def test_basic_html_drops_attributes():
    assert sanitize_basic_html('<p class="x">Hi <img src="y"></p>') == "<p>Hi </p>"
    assert sanitize_basic_html(None) is None
