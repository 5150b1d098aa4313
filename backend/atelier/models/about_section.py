from atelier.extensions import db
from .base import BaseModel


class AboutSection(BaseModel):
    __tablename__ = "about_sections"

    title = db.Column(db.String(255), nullable=False)
    paragraphs = db.Column(db.JSON, nullable=False, default=list)
    image = db.Column(db.String(500), nullable=False)
    image_alt = db.Column(db.String(255), nullable=False)
    sort_order = db.Column(db.Integer, nullable=False, default=0)
    is_published = db.Column(db.Boolean, nullable=False, default=False)
