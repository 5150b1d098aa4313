from atelier.extensions import db
from .base import BaseModel


class ProductImage(BaseModel):
    __tablename__ = "product_images"

    url = db.Column(db.String(500), nullable=False)
    show_on_home = db.Column(db.Boolean, nullable=False, default=False, index=True)
    sort_order = db.Column(db.Integer, nullable=False, default=0)
    product_id = db.Column(
        db.String(36),
        db.ForeignKey("products.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    product = db.relationship("Product", back_populates="product_images")
