from .common import iso


def normalize_tag(tag):
    return {
        "id": tag.id,
        "name": tag.name,
        "slug": tag.slug,
        "createdAt": iso(tag.created_at),
        "updatedAt": iso(tag.updated_at),
    }


def normalize_article_image(image):
    return {
        "id": image.id,
        "url": image.url,
        "altText": image.alt_text,
        "isCover": image.is_cover,
        "sortOrder": image.sort_order,
        "articleId": image.article_id,
        "createdAt": iso(image.created_at),
    }


def normalize_article(article, tags=(), admin=False):
    """
    ``tags`` is passed in explicitly since tag links live in the join
    table and are loaded by the caller in bulk.
    """
    images = sorted(article.images, key=lambda i: i.sort_order)
    cover = next((image for image in images if image.is_cover), None)

    data = {
        "id": article.id,
        "title": article.title,
        "subtitle": article.subtitle,
        "content": article.content,
        "slug": article.slug,
        "publishedAt": iso(article.published_at),
        "isPublished": article.is_published,
        "sortOrder": article.sort_order,
        "images": [normalize_article_image(image) for image in images],
        "coverImage": normalize_article_image(cover) if cover else None,
        "tags": [normalize_tag(tag) for tag in tags],
        "createdAt": iso(article.created_at),
        "updatedAt": iso(article.updated_at),
    }

    if not admin:
        data.pop("sortOrder")

    return data
