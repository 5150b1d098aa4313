from atelier.extensions import db
from .base import BaseModel

PRODUCT_CATEGORIES = ("wall-hanging", "rug")
PRODUCT_STATUSES = ("available", "sold", "draft")
DIMENSION_UNITS = ("cm", "inch")


class Product(BaseModel):
    __tablename__ = "products"

    name = db.Column(db.String(255), nullable=False)
    description = db.Column(db.String(500))
    category = db.Column(
        db.Enum(*PRODUCT_CATEGORIES, name="product_category", validate_strings=True),
        nullable=False,
    )
    price = db.Column(db.Numeric(10, 2), nullable=False)
    status = db.Column(
        db.Enum(*PRODUCT_STATUSES, name="product_status", validate_strings=True),
        nullable=False,
        default="draft",
    )
    stock_quantity = db.Column(db.Integer, nullable=False, default=0)
    images = db.Column(db.JSON, default=list)
    dimensions = db.Column(db.JSON(none_as_null=True))
    materials = db.Column(db.Text)

    __table_args__ = (
        db.Index("ix_products_category_status", "category", "status"),
    )

    product_images = db.relationship(
        "ProductImage",
        back_populates="product",
        order_by="ProductImage.sort_order",
        cascade="all, delete-orphan",
    )
