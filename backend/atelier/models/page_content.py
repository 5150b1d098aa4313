from atelier.extensions import db
from .base import BaseModel


class PageContent(BaseModel):
    __tablename__ = "page_content"

    page = db.Column(db.String(100), nullable=False, index=True)
    section = db.Column(db.String(100), nullable=False)
    title = db.Column(db.String(255))
    content = db.Column(db.Text)
    image = db.Column(db.String(500))
    image_alt = db.Column(db.String(255))
    # "metadata" is reserved on declarative classes
    meta = db.Column("metadata", db.JSON(none_as_null=True))
    is_published = db.Column(db.Boolean, nullable=False, default=True)
    sort_order = db.Column(db.Integer, nullable=False, default=0)

    __table_args__ = (
        db.UniqueConstraint("page", "section", name="uq_page_content_page_section"),
    )
