from typing import Any, Dict, Iterable, Optional, Sequence

from flask import current_app
from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import contains_eager
from werkzeug.datastructures import FileStorage
from werkzeug.exceptions import BadRequest

from atelier.extensions import db
from atelier.models import Product, ProductImage
from atelier.models.product import PRODUCT_CATEGORIES, PRODUCT_STATUSES
from atelier.normalizers.pagination import normalize_pagination
from atelier.normalizers.product import normalize_product
from atelier.utils import media
from atelier.utils.pagination import paginate_offset
from atelier.utils.transaction import transactional

SUBDIR = "products"

PRODUCT_FIELDS = (
    "name",
    "description",
    "category",
    "price",
    "status",
    "stock_quantity",
    "images",
    "dimensions",
    "materials",
)


def _apply(product: Product, data: Dict[str, Any]) -> list[str]:
    changed: list[str] = []
    for field in PRODUCT_FIELDS:
        if field in data and getattr(product, field) != data[field]:
            setattr(product, field, data[field])
            changed.append(field)
    return changed


def create_product(*, data: Dict[str, Any]) -> Product:
    """
    Persist a new product.

    Database failures are reported to the client as a plain 400;
    the underlying error only goes to the log.
    """
    product = Product()
    _apply(product, data)
    product.images = list(data.get("images") or [])

    try:
        with transactional():
            db.session.add(product)
    except SQLAlchemyError as exc:
        current_app.logger.error("Failed to create product %r: %s", data.get("name"), exc)
        raise BadRequest("Failed to create product") from exc

    current_app.logger.info("Created product %s (%s)", product.id, product.name)
    return product


def _store_images(files: Sequence[FileStorage]) -> list[str]:
    stored: list[str] = []
    try:
        for file in files:
            stored.append(media.save_file(file, SUBDIR))
    except Exception:
        media.delete_files(stored, SUBDIR)
        raise
    return stored


def create_product_with_images(
    *,
    data: Dict[str, Any],
    files: Sequence[FileStorage],
    show_on_home: Optional[Sequence[bool]] = None,
) -> Product:
    """
    Create a product from a multipart upload.

    Responsibilities:
    - Store every file under the products upload directory
    - Point ``images`` at the public URLs of the stored files
    - Create one ProductImage per file, flagged from ``show_on_home``

    Edge cases handled:
    - Fewer flags than files: missing flags default to False
    - Any failure after storing: stored files are removed again
    """
    if not files:
        raise BadRequest("At least one image is required")

    flags = list(show_on_home or [])
    filenames = _store_images(files)
    urls = [media.get_file_url(name, SUBDIR) for name in filenames]

    product = Product()
    _apply(product, data)
    product.images = urls
    product.product_images = [
        ProductImage(
            url=url,
            show_on_home=flags[index] if index < len(flags) else False,
            sort_order=index,
        )
        for index, url in enumerate(urls)
    ]

    try:
        with transactional():
            db.session.add(product)
    except SQLAlchemyError as exc:
        media.delete_files(filenames, SUBDIR)
        current_app.logger.error("Failed to create product with images: %s", exc)
        raise BadRequest("Failed to create product") from exc

    current_app.logger.info(
        "Created product %s with %d image(s)", product.id, len(filenames)
    )
    return product


def find_product(product_id: str) -> Product:
    return Product.query.filter_by(id=product_id).first_or_404(
        description=f'Product with ID "{product_id}" not found'
    )


def list_products(
    *,
    category: Optional[str] = None,
    status: Optional[str] = None,
    search: Optional[str] = None,
    page: int = 1,
    limit: int = 10,
) -> Dict[str, Any]:
    query = Product.query

    if category:
        query = query.filter(Product.category == category)
    if status:
        query = query.filter(Product.status == status)
    if search:
        query = query.filter(Product.name.ilike(f"%{search}%"))

    items, meta = paginate_offset(
        query.order_by(Product.created_at.desc(), Product.id.desc()),
        page=page,
        limit=limit,
    )
    return normalize_pagination(items, normalize_product, meta=meta)


def find_products_by_category(category: str) -> list[Product]:
    return (
        Product.query
        .filter_by(category=category, status="available")
        .order_by(Product.created_at.desc())
        .all()
    )


def get_product_statistics() -> Dict[str, Any]:
    def count(**filters) -> int:
        return (
            db.session.query(func.count(Product.id))
            .filter_by(**filters)
            .scalar()
        )

    return {
        "total": count(),
        "byCategory": {category: count(category=category) for category in PRODUCT_CATEGORIES},
        "byStatus": {status: count(status=status) for status in PRODUCT_STATUSES},
    }


def update_product(*, product_id: str, data: Dict[str, Any]) -> Product:
    product = find_product(product_id)

    with transactional():
        changed = _apply(product, data)

    if changed:
        current_app.logger.info("Updated product %s: %s", product.id, ", ".join(changed))
    return product


def _product_file_urls(product: Product) -> Iterable[str]:
    urls = list(product.images or [])
    urls.extend(image.url for image in product.product_images)
    # the same URL usually appears in both lists
    return dict.fromkeys(urls)


def remove_product(*, product_id: str) -> None:
    """
    Delete a product together with its images.

    Files go first and best effort: a failed unlink is logged and the
    row is still deleted. ProductImage rows cascade with the product.
    """
    product = find_product(product_id)

    try:
        media.delete_file_urls(_product_file_urls(product), SUBDIR)
    except (OSError, ValueError) as exc:
        current_app.logger.error("File cleanup failed for product %s: %s", product_id, exc)

    with transactional():
        db.session.delete(product)

    current_app.logger.info("Removed product %s", product_id)


def find_home_grid_images() -> list[ProductImage]:
    return (
        ProductImage.query
        .join(Product, ProductImage.product_id == Product.id)
        .options(contains_eager(ProductImage.product))
        .filter(ProductImage.show_on_home.is_(True))
        .order_by(ProductImage.sort_order.asc(), ProductImage.created_at.desc())
        .all()
    )


def add_product_images(
    *,
    product_id: str,
    files: Sequence[FileStorage],
    show_on_home: Optional[Sequence[bool]] = None,
) -> Product:
    product = find_product(product_id)
    flags = list(show_on_home or [])

    next_order = max((image.sort_order for image in product.product_images), default=-1) + 1
    filenames = _store_images(files)
    urls = [media.get_file_url(name, SUBDIR) for name in filenames]

    try:
        with transactional():
            for index, url in enumerate(urls):
                product.product_images.append(
                    ProductImage(
                        url=url,
                        show_on_home=flags[index] if index < len(flags) else False,
                        sort_order=next_order + index,
                    )
                )
            product.images = list(product.images or []) + urls
    except SQLAlchemyError:
        media.delete_files(filenames, SUBDIR)
        raise

    return product


def find_product_image(image_id: str) -> ProductImage:
    return ProductImage.query.filter_by(id=image_id).first_or_404(
        description=f'Product image with ID "{image_id}" not found'
    )


def update_product_image(*, image_id: str, data: Dict[str, Any]) -> ProductImage:
    image = find_product_image(image_id)

    with transactional():
        for field in ("show_on_home", "sort_order"):
            if field in data and data[field] is not None:
                setattr(image, field, data[field])

    return image


def remove_product_image(*, image_id: str) -> None:
    image = find_product_image(image_id)
    product = image.product

    media.delete_file_urls([image.url], SUBDIR)

    with transactional():
        product.images = [url for url in (product.images or []) if url != image.url]
        db.session.delete(image)
