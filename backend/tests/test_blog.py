from atelier.application.blog import generate_slug
from atelier.extensions import db
from atelier.models import blog_articles_tags


def create_tag(client, headers, name):
    response = client.post("/api/blog-tags", json={"name": name}, headers=headers)
    assert response.status_code == 201
    return response.get_json()


def create_article(client, headers, **fields):
    payload = {"title": "Spring Weaving", "content": "<p>Hello</p>", "isPublished": True}
    payload.update(fields)
    return client.post("/api/blog-articles", json=payload, headers=headers)


def test_generate_slug():
    assert generate_slug("Tissage d'Été!") == "tissage-d-ete"
    assert generate_slug("  Hello   World  ") == "hello-world"
    assert generate_slug("***") == ""


def test_create_article_derives_slug_and_publish_date(client, auth_headers):
    response = create_article(client, auth_headers)
    article = response.get_json()

    assert response.status_code == 201
    assert article["slug"] == "spring-weaving"
    assert article["publishedAt"] is not None
    assert article["coverImage"] is None


def test_duplicate_slug_is_409(client, auth_headers):
    create_article(client, auth_headers)
    response = create_article(client, auth_headers)

    assert response.status_code == 409
    assert response.get_json()["message"] == 'Article with slug "spring-weaving" already exists'


def test_invalid_slug_is_rejected(client, auth_headers):
    response = create_article(client, auth_headers, slug="Not A Slug")
    assert response.status_code == 400
    assert "slug" in response.get_json()["errors"]


def test_article_content_is_sanitized(client, auth_headers):
    article = create_article(
        client,
        auth_headers,
        content='<p onclick="steal()">Hi<script>alert(1)</script></p>',
    ).get_json()

    assert "<script>" not in article["content"]
    assert "onclick" not in article["content"]
    assert article["content"].startswith("<p>Hi")


def test_unpublished_articles_are_hidden(client, auth_headers):
    draft = create_article(client, auth_headers, title="Draft Notes", isPublished=False).get_json()
    create_article(client, auth_headers)

    public = client.get("/api/blog-articles").get_json()
    assert [a["slug"] for a in public] == ["spring-weaving"]
    assert "sortOrder" not in public[0]

    assert client.get(f"/api/blog-articles/{draft['id']}").status_code == 404

    everything = client.get("/api/blog-articles/all", headers=auth_headers).get_json()
    assert {a["slug"] for a in everything} == {"spring-weaving", "draft-notes"}


def test_unpublishing_clears_publish_date(client, auth_headers):
    article = create_article(client, auth_headers).get_json()

    updated = client.patch(
        f"/api/blog-articles/{article['id']}",
        json={"isPublished": False},
        headers=auth_headers,
    ).get_json()

    assert updated["isPublished"] is False
    assert updated["publishedAt"] is None


def test_article_tags_round_trip_through_join_table(client, auth_headers):
    wool = create_tag(client, auth_headers, "Wool")
    dyes = create_tag(client, auth_headers, "Natural Dyes")
    assert dyes["slug"] == "natural-dyes"

    article = create_article(client, auth_headers, tagIds=[wool["id"], dyes["id"]]).get_json()
    assert [t["name"] for t in article["tags"]] == ["Natural Dyes", "Wool"]

    updated = client.patch(
        f"/api/blog-articles/{article['id']}",
        json={"tagIds": [wool["id"]]},
        headers=auth_headers,
    ).get_json()
    assert [t["name"] for t in updated["tags"]] == ["Wool"]

    client.delete(f"/api/blog-tags/{wool['id']}", headers=auth_headers)
    fetched = client.get(f"/api/blog-articles/{article['id']}").get_json()
    assert fetched["tags"] == []


def test_deleting_article_removes_tag_links(client, auth_headers):
    tag = create_tag(client, auth_headers, "Loom")
    article = create_article(client, auth_headers, tagIds=[tag["id"]]).get_json()

    response = client.delete(f"/api/blog-articles/{article['id']}", headers=auth_headers)
    assert response.status_code == 204

    links = db.session.execute(blog_articles_tags.select()).all()
    assert links == []


def test_duplicate_tag_is_409(client, auth_headers):
    create_tag(client, auth_headers, "Wool")
    response = client.post("/api/blog-tags", json={"name": "Wool"}, headers=auth_headers)

    assert response.status_code == 409
    assert response.get_json()["message"] == 'Tag with name "Wool" or slug "wool" already exists'


def test_article_images_and_single_cover(client, auth_headers, png):
    response = client.post(
        "/api/blog-articles",
        data={
            "title": "Studio Visit",
            "content": "<p>Photos</p>",
            "images": [png("one.png"), png("two.png")],
        },
        headers=auth_headers,
        content_type="multipart/form-data",
    )
    assert response.status_code == 201

    article = response.get_json()
    first, second = article["images"]
    assert article["coverImage"]["id"] == first["id"]

    client.patch(
        f"/api/blog-articles/{article['id']}/images/{second['id']}",
        json={"isCover": True},
        headers=auth_headers,
    )
    article = client.get("/api/blog-articles/all", headers=auth_headers).get_json()[0]
    assert [i["isCover"] for i in article["images"]] == [False, True]

    response = client.delete(
        f"/api/blog-articles/{article['id']}/images/{second['id']}",
        headers=auth_headers,
    )
    assert response.status_code == 204
