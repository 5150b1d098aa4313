from .common import iso


def normalize_about_section(section):
    return {
        "id": section.id,
        "title": section.title,
        "paragraphs": list(section.paragraphs or []),
        "image": section.image,
        "imageAlt": section.image_alt,
        "sortOrder": section.sort_order,
        "isPublished": section.is_published,
        "createdAt": iso(section.created_at),
        "updatedAt": iso(section.updated_at),
    }
