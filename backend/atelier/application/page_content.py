from typing import Any, Dict, Optional

from flask import current_app
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.datastructures import FileStorage
from werkzeug.exceptions import BadRequest, Conflict

from atelier.extensions import db
from atelier.models import PageContent
from atelier.utils import media
from atelier.utils.html import sanitize_basic_html
from atelier.utils.transaction import transactional

SUBDIR = "page-content"

UPDATABLE_FIELDS = (
    "page",
    "section",
    "title",
    "content",
    "image_alt",
    "metadata",
    "is_published",
    "sort_order",
)


def _conflict_message(page: str, section: str) -> str:
    return f'Page content "{page}/{section}" already exists'


def _assert_unique(page: str, section: str, *, exclude_id: Optional[str] = None) -> None:
    query = PageContent.query.filter_by(page=page, section=section)
    if exclude_id:
        query = query.filter(PageContent.id != exclude_id)
    if query.first():
        raise Conflict(_conflict_message(page, section))


def _assign(row: PageContent, data: Dict[str, Any]) -> None:
    for field in UPDATABLE_FIELDS:
        if field not in data:
            continue
        value = data[field]
        if field == "content":
            value = sanitize_basic_html(value)
        # the JSON column is mapped as ``meta``
        setattr(row, "meta" if field == "metadata" else field, value)


def create_page_content(*, data: Dict[str, Any], file: Optional[FileStorage] = None) -> PageContent:
    """
    Create a content block for ``(page, section)``.

    When ``file`` is given it is stored and replaces any ``image`` URL
    in the payload.
    """
    _assert_unique(data["page"], data["section"])

    row = PageContent()
    _assign(row, data)
    row.image = data.get("image")

    filename = None
    if file is not None:
        filename = media.save_file(file, SUBDIR)
        row.image = media.get_file_url(filename, SUBDIR)

    try:
        with transactional(conflict_message=_conflict_message(data["page"], data["section"])):
            db.session.add(row)
    except Conflict:
        if filename:
            media.delete_file(filename, SUBDIR)
        raise
    except SQLAlchemyError as exc:
        if filename:
            media.delete_file(filename, SUBDIR)
        current_app.logger.error("Failed to create page content: %s", exc)
        raise BadRequest("Failed to create page content") from exc

    return row


def list_page_content() -> list[PageContent]:
    return PageContent.query.order_by(
        PageContent.page.asc(), PageContent.sort_order.asc()
    ).all()


def list_published_page_content(page: str) -> list[PageContent]:
    return (
        PageContent.query
        .filter_by(page=page, is_published=True)
        .order_by(PageContent.sort_order.asc())
        .all()
    )


def find_page_section(page: str, section: str) -> PageContent:
    """Published block for a ``(page, section)`` pair; there is at most one."""
    return PageContent.query.filter_by(
        page=page,
        section=section,
        is_published=True,
    ).first_or_404(description=f'Page content "{page}/{section}" not found')


def find_page_content(content_id: str) -> PageContent:
    return PageContent.query.filter_by(id=content_id).first_or_404(
        description=f'Page content with ID "{content_id}" not found'
    )


def update_page_content(*, content_id: str, data: Dict[str, Any]) -> PageContent:
    row = find_page_content(content_id)

    page = data.get("page") or row.page
    section = data.get("section") or row.section
    if (page, section) != (row.page, row.section):
        _assert_unique(page, section, exclude_id=row.id)

    with transactional(conflict_message=_conflict_message(page, section)):
        _assign(row, data)

    return row


def replace_page_content_image(
    *,
    content_id: str,
    file: FileStorage,
    image_alt: Optional[str] = None,
) -> PageContent:
    row = find_page_content(content_id)
    previous = row.image

    filename = media.save_file(file, SUBDIR)
    try:
        with transactional():
            row.image = media.get_file_url(filename, SUBDIR)
            if image_alt:
                row.image_alt = image_alt
    except SQLAlchemyError:
        media.delete_file(filename, SUBDIR)
        raise

    media.delete_file_urls([previous], SUBDIR)
    return row


def remove_page_content(*, content_id: str) -> None:
    row = find_page_content(content_id)

    media.delete_file_urls([row.image], SUBDIR)

    with transactional():
        db.session.delete(row)
