from atelier.extensions import db
from .base import BaseModel

CONTACT_PLATFORMS = (
    "email",
    "facebook",
    "instagram",
    "tiktok",
    "linkedin",
    "pinterest",
    "youtube",
    "twitter",
    "website",
    "other",
)


class ContactLink(BaseModel):
    __tablename__ = "contact_links"

    platform = db.Column(
        db.Enum(*CONTACT_PLATFORMS, name="contact_platform", validate_strings=True),
        nullable=False,
    )
    url = db.Column(db.String(500), nullable=False)
    label = db.Column(db.String(255))
    sort_order = db.Column(db.Integer, nullable=False, default=0)
    is_active = db.Column(db.Boolean, nullable=False, default=True)

    __table_args__ = (
        db.UniqueConstraint("platform", "url", name="uq_contact_link_platform_url"),
    )
