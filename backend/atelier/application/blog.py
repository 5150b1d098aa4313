import re
import unicodedata
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, Optional, Sequence

from flask import current_app
from sqlalchemy import or_
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.datastructures import FileStorage
from werkzeug.exceptions import BadRequest, Conflict

from atelier.extensions import db
from atelier.models import BlogArticle, BlogArticleImage, BlogTag, blog_articles_tags
from atelier.normalizers.blog import normalize_article
from atelier.utils import media
from atelier.utils.html import sanitize_article_html
from atelier.utils.transaction import transactional

SUBDIR = "blog"

ARTICLE_FIELDS = ("title", "subtitle", "content", "slug", "published_at", "is_published", "sort_order")


def generate_slug(text: str) -> str:
    """
    ``"Tissage d'Été!"`` -> ``"tissage-d-ete"``.
    """
    normalized = unicodedata.normalize("NFD", text or "")
    ascii_text = "".join(ch for ch in normalized if unicodedata.category(ch) != "Mn")
    slug = re.sub(r"[^a-z0-9]+", "-", ascii_text.lower())
    return slug.strip("-")


# ------------------------
# Tag links (explicit join table)
# ------------------------

def tags_for_articles(article_ids: Iterable[str]) -> Dict[str, list[BlogTag]]:
    ids = list(article_ids)
    grouped: Dict[str, list[BlogTag]] = {article_id: [] for article_id in ids}
    if not ids:
        return grouped

    rows = (
        db.session.query(blog_articles_tags.c.article_id, BlogTag)
        .select_from(blog_articles_tags)
        .join(BlogTag, BlogTag.id == blog_articles_tags.c.tag_id)
        .filter(blog_articles_tags.c.article_id.in_(ids))
        .order_by(BlogTag.name)
        .all()
    )
    for article_id, tag in rows:
        grouped[article_id].append(tag)
    return grouped


def _replace_article_tags(article_id: str, tag_ids: Sequence[str]) -> None:
    db.session.execute(
        blog_articles_tags.delete().where(blog_articles_tags.c.article_id == article_id)
    )

    wanted = list(dict.fromkeys(tag_ids))
    if not wanted:
        return

    # unknown ids are dropped silently
    known = [row.id for row in BlogTag.query.filter(BlogTag.id.in_(wanted)).all()]
    if known:
        db.session.execute(
            blog_articles_tags.insert(),
            [{"article_id": article_id, "tag_id": tag_id} for tag_id in known],
        )


def present_articles(articles: Sequence[BlogArticle], *, admin: bool = False) -> list[Dict[str, Any]]:
    tags = tags_for_articles(article.id for article in articles)
    return [normalize_article(article, tags=tags[article.id], admin=admin) for article in articles]


def present_article(article: BlogArticle, *, admin: bool = False) -> Dict[str, Any]:
    return present_articles([article], admin=admin)[0]


# ------------------------
# Articles
# ------------------------

def _assert_slug_available(slug: str, *, exclude_id: Optional[str] = None) -> None:
    query = BlogArticle.query.filter(BlogArticle.slug == slug)
    if exclude_id:
        query = query.filter(BlogArticle.id != exclude_id)
    if query.first():
        raise Conflict(f'Article with slug "{slug}" already exists')


def create_article(
    *,
    data: Dict[str, Any],
    files: Sequence[FileStorage] = (),
) -> BlogArticle:
    """
    Create a blog article, optionally with uploaded images.

    Responsibilities:
    - Derive the slug from the title unless one is supplied
    - Sanitize the rich-text content
    - Link tags from ``tag_ids``
    - Store images; the first one becomes the cover

    Edge cases handled:
    - Slug already taken (409, nothing stored)
    - Slug derived from a title with no usable characters (400)
    - Any failure after files were stored: files are removed again
    """
    slug = data.get("slug") or generate_slug(data["title"])
    if not slug:
        raise BadRequest("Unable to derive a slug from the title")
    _assert_slug_available(slug)

    article = BlogArticle()
    for field in ARTICLE_FIELDS:
        if field in data:
            setattr(article, field, data[field])
    article.slug = slug
    article.content = sanitize_article_html(data["content"])
    if article.is_published and article.published_at is None:
        article.published_at = datetime.now(timezone.utc)

    filenames: list[str] = []
    try:
        for file in files:
            filenames.append(media.save_file(file, SUBDIR))

        with transactional(conflict_message=f'Article with slug "{slug}" already exists'):
            db.session.add(article)
            db.session.flush()

            _replace_article_tags(article.id, data.get("tag_ids") or [])

            for index, filename in enumerate(filenames):
                db.session.add(
                    BlogArticleImage(
                        url=media.get_file_url(filename, SUBDIR),
                        is_cover=index == 0,
                        sort_order=index,
                        article_id=article.id,
                    )
                )
    except Conflict:
        media.delete_files(filenames, SUBDIR)
        raise
    except (SQLAlchemyError, OSError) as exc:
        media.delete_files(filenames, SUBDIR)
        current_app.logger.error("Failed to create blog article: %s", exc)
        raise BadRequest("Failed to create blog article") from exc

    current_app.logger.info("Blog article created: %s (%d image(s))", article.id, len(filenames))
    return find_article(article.id)


def list_published_articles() -> list[BlogArticle]:
    return (
        BlogArticle.query
        .filter(BlogArticle.is_published.is_(True))
        .order_by(BlogArticle.published_at.desc(), BlogArticle.created_at.desc())
        .all()
    )


def list_articles() -> list[BlogArticle]:
    return (
        BlogArticle.query
        .order_by(BlogArticle.sort_order.asc(), BlogArticle.created_at.desc())
        .all()
    )


def find_article(article_id: str, *, published_only: bool = False) -> BlogArticle:
    query = BlogArticle.query.filter_by(id=article_id)
    if published_only:
        query = query.filter(BlogArticle.is_published.is_(True))
    return query.first_or_404(description=f'Blog article with ID "{article_id}" not found')


def update_article(*, article_id: str, data: Dict[str, Any]) -> BlogArticle:
    article = find_article(article_id)

    if data.get("slug") and data["slug"] != article.slug:
        _assert_slug_available(data["slug"], exclude_id=article.id)

    with transactional(conflict_message=f'Article with slug "{data.get("slug")}" already exists'):
        for field in ARTICLE_FIELDS:
            if field in data:
                setattr(article, field, data[field])

        if "content" in data:
            article.content = sanitize_article_html(data["content"])

        if "is_published" in data and "published_at" not in data:
            if article.is_published and article.published_at is None:
                article.published_at = datetime.now(timezone.utc)
            elif not article.is_published:
                article.published_at = None

        if "tag_ids" in data:
            _replace_article_tags(article.id, data["tag_ids"] or [])

    return article


def remove_article(*, article_id: str) -> None:
    article = find_article(article_id)

    media.delete_file_urls([image.url for image in article.images], SUBDIR)

    with transactional():
        db.session.execute(
            blog_articles_tags.delete().where(blog_articles_tags.c.article_id == article.id)
        )
        db.session.delete(article)

    current_app.logger.info("Removed blog article %s", article_id)


# ------------------------
# Article images
# ------------------------

def add_article_images(
    *,
    article_id: str,
    files: Sequence[FileStorage],
    alt_texts: Optional[Sequence[str]] = None,
) -> list[BlogArticleImage]:
    article = find_article(article_id)
    alts = list(alt_texts or [])
    start = max((image.sort_order for image in article.images), default=-1) + 1

    filenames: list[str] = []
    try:
        for file in files:
            filenames.append(media.save_file(file, SUBDIR))

        with transactional():
            images = [
                BlogArticleImage(
                    url=media.get_file_url(filename, SUBDIR),
                    alt_text=alts[index] if index < len(alts) else None,
                    is_cover=False,
                    sort_order=start + index,
                    article_id=article.id,
                )
                for index, filename in enumerate(filenames)
            ]
            db.session.add_all(images)
    except (SQLAlchemyError, OSError):
        media.delete_files(filenames, SUBDIR)
        raise

    return images


def find_article_image(article_id: str, image_id: str) -> BlogArticleImage:
    return BlogArticleImage.query.filter_by(id=image_id, article_id=article_id).first_or_404(
        description=f'Blog article image with ID "{image_id}" not found'
    )


def update_article_image(*, article_id: str, image_id: str, data: Dict[str, Any]) -> BlogArticleImage:
    image = find_article_image(article_id, image_id)

    with transactional():
        if "alt_text" in data:
            image.alt_text = data["alt_text"]
        if data.get("sort_order") is not None:
            image.sort_order = data["sort_order"]
        if data.get("is_cover") is not None:
            if data["is_cover"]:
                # a single cover per article
                BlogArticleImage.query.filter(
                    BlogArticleImage.article_id == article_id,
                    BlogArticleImage.id != image.id,
                ).update({"is_cover": False}, synchronize_session="fetch")
            image.is_cover = data["is_cover"]

    return image


def remove_article_image(*, article_id: str, image_id: str) -> None:
    image = find_article_image(article_id, image_id)

    media.delete_file_urls([image.url], SUBDIR)

    with transactional():
        db.session.delete(image)


# ------------------------
# Tags
# ------------------------

def list_tags() -> list[BlogTag]:
    return BlogTag.query.order_by(BlogTag.name.asc()).all()


def find_tag(tag_id: str) -> BlogTag:
    return BlogTag.query.filter_by(id=tag_id).first_or_404(
        description=f'Blog tag with ID "{tag_id}" not found'
    )


def _assert_tag_available(name: str, slug: str, *, exclude_id: Optional[str] = None) -> None:
    query = BlogTag.query.filter(or_(BlogTag.name == name, BlogTag.slug == slug))
    if exclude_id:
        query = query.filter(BlogTag.id != exclude_id)
    if query.first():
        raise Conflict(f'Tag with name "{name}" or slug "{slug}" already exists')


def create_tag(*, data: Dict[str, Any]) -> BlogTag:
    name = data["name"].strip()
    slug = generate_slug(name)
    if not slug:
        raise BadRequest("Tag name must contain letters or digits")

    _assert_tag_available(name, slug)

    tag = BlogTag(name=name, slug=slug)
    with transactional(conflict_message=f'Tag with name "{name}" or slug "{slug}" already exists'):
        db.session.add(tag)

    return tag


def update_tag(*, tag_id: str, data: Dict[str, Any]) -> BlogTag:
    tag = find_tag(tag_id)

    if data.get("name") is None:
        return tag

    name = data["name"].strip()
    slug = generate_slug(name)
    if not slug:
        raise BadRequest("Tag name must contain letters or digits")

    _assert_tag_available(name, slug, exclude_id=tag.id)

    with transactional(conflict_message=f'Tag with name "{name}" or slug "{slug}" already exists'):
        tag.name = name
        tag.slug = slug

    return tag


def remove_tag(*, tag_id: str) -> None:
    tag = find_tag(tag_id)

    with transactional():
        db.session.execute(
            blog_articles_tags.delete().where(blog_articles_tags.c.tag_id == tag.id)
        )
        db.session.delete(tag)
