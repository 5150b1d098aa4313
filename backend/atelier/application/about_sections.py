from typing import Any, Dict, Optional

from flask import current_app
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.datastructures import FileStorage
from werkzeug.exceptions import BadRequest

from atelier.extensions import db
from atelier.models import AboutSection
from atelier.utils import media
from atelier.utils.transaction import transactional

SUBDIR = "about-sections"

UPDATABLE_FIELDS = ("title", "paragraphs", "image_alt", "sort_order", "is_published")


def create_about_section(*, data: Dict[str, Any]) -> AboutSection:
    section = AboutSection(**data)

    with transactional():
        db.session.add(section)

    return section


def create_about_section_with_image(*, data: Dict[str, Any], file: FileStorage) -> AboutSection:
    filename = media.save_file(file, SUBDIR)

    section = AboutSection(**data)
    section.image = media.get_file_url(filename, SUBDIR)

    try:
        with transactional():
            db.session.add(section)
    except SQLAlchemyError as exc:
        media.delete_file(filename, SUBDIR)
        current_app.logger.error("Failed to create about section: %s", exc)
        raise BadRequest("Failed to create about section") from exc

    current_app.logger.info("About section created: %s", section.id)
    return section


def list_published_about_sections() -> list[AboutSection]:
    return (
        AboutSection.query
        .filter(AboutSection.is_published.is_(True))
        .order_by(AboutSection.sort_order.asc(), AboutSection.created_at.asc())
        .all()
    )


def list_about_sections() -> list[AboutSection]:
    return AboutSection.query.order_by(
        AboutSection.sort_order.asc(), AboutSection.created_at.asc()
    ).all()


def find_about_section(section_id: str, *, published_only: bool = False) -> AboutSection:
    query = AboutSection.query.filter_by(id=section_id)
    if published_only:
        query = query.filter(AboutSection.is_published.is_(True))
    return query.first_or_404(description=f'About section with ID "{section_id}" not found')


def update_about_section(*, section_id: str, data: Dict[str, Any]) -> AboutSection:
    """The image is replaced through ``replace_about_section_image`` only."""
    section = find_about_section(section_id)

    with transactional():
        for field in UPDATABLE_FIELDS:
            if field in data:
                setattr(section, field, data[field])

    return section


def replace_about_section_image(
    *,
    section_id: str,
    file: FileStorage,
    image_alt: Optional[str] = None,
) -> AboutSection:
    section = find_about_section(section_id)
    previous = section.image

    filename = media.save_file(file, SUBDIR)
    try:
        with transactional():
            section.image = media.get_file_url(filename, SUBDIR)
            if image_alt:
                section.image_alt = image_alt
    except SQLAlchemyError:
        media.delete_file(filename, SUBDIR)
        raise

    media.delete_file_urls([previous], SUBDIR)
    return section


def remove_about_section(*, section_id: str) -> None:
    section = find_about_section(section_id)

    media.delete_file_urls([section.image], SUBDIR)

    with transactional():
        db.session.delete(section)
