from .common import iso


def normalize_contact_link(link):
    return {
        "id": link.id,
        "platform": link.platform,
        "url": link.url,
        "label": link.label,
        "sortOrder": link.sort_order,
        "isActive": link.is_active,
        "createdAt": iso(link.created_at),
        "updatedAt": iso(link.updated_at),
    }
