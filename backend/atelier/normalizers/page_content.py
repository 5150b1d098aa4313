from .common import iso


def normalize_page_content(row):
    return {
        "id": row.id,
        "page": row.page,
        "section": row.section,
        "title": row.title,
        "content": row.content,
        "image": row.image,
        "imageAlt": row.image_alt,
        "metadata": row.meta,
        "isPublished": row.is_published,
        "sortOrder": row.sort_order,
        "createdAt": iso(row.created_at),
        "updatedAt": iso(row.updated_at),
    }
