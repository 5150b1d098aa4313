from typing import Any, Dict, Optional

from werkzeug.exceptions import Conflict

from atelier.extensions import db
from atelier.models import ContactLink
from atelier.utils.transaction import transactional

UPDATABLE_FIELDS = ("platform", "url", "label", "sort_order", "is_active")


def _conflict_message(platform: str) -> str:
    return f'Contact link for platform "{platform}" with this URL already exists'


def _assert_unique(platform: str, url: str, *, exclude_id: Optional[str] = None) -> None:
    query = ContactLink.query.filter_by(platform=platform, url=url)
    if exclude_id:
        query = query.filter(ContactLink.id != exclude_id)
    if query.first():
        raise Conflict(_conflict_message(platform))


def create_contact_link(*, data: Dict[str, Any]) -> ContactLink:
    _assert_unique(data["platform"], data["url"])

    link = ContactLink(**data)
    with transactional(conflict_message=_conflict_message(data["platform"])):
        db.session.add(link)

    return link


def list_active_contact_links() -> list[ContactLink]:
    return (
        ContactLink.query
        .filter(ContactLink.is_active.is_(True))
        .order_by(ContactLink.sort_order.asc(), ContactLink.created_at.asc())
        .all()
    )


def list_contact_links() -> list[ContactLink]:
    return ContactLink.query.order_by(
        ContactLink.sort_order.asc(), ContactLink.created_at.asc()
    ).all()


def find_contact_links_by_platform(platform: str) -> list[ContactLink]:
    return (
        ContactLink.query
        .filter_by(platform=platform, is_active=True)
        .order_by(ContactLink.sort_order.asc())
        .all()
    )


def find_contact_link(link_id: str) -> ContactLink:
    return ContactLink.query.filter_by(id=link_id).first_or_404(
        description=f'Contact link with ID "{link_id}" not found'
    )


def update_contact_link(*, link_id: str, data: Dict[str, Any]) -> ContactLink:
    link = find_contact_link(link_id)

    platform = data.get("platform") or link.platform
    url = data.get("url") or link.url
    if (platform, url) != (link.platform, link.url):
        _assert_unique(platform, url, exclude_id=link.id)

    with transactional(conflict_message=_conflict_message(platform)):
        for field in UPDATABLE_FIELDS:
            if field in data:
                setattr(link, field, data[field])

    return link


def remove_contact_link(*, link_id: str) -> None:
    link = find_contact_link(link_id)

    with transactional():
        db.session.delete(link)
