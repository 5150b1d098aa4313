from .common import iso


def normalize_product_image(image, include_product=False):
    data = {
        "id": image.id,
        "url": image.url,
        "showOnHome": image.show_on_home,
        "sortOrder": image.sort_order,
        "productId": image.product_id,
        "createdAt": iso(image.created_at),
        "updatedAt": iso(image.updated_at),
    }

    if include_product:
        data["product"] = normalize_product(image.product, include_images=False)

    return data


def normalize_product(product, include_images=True):
    data = {
        "id": product.id,
        "name": product.name,
        "description": product.description,
        "category": product.category,
        "price": float(product.price) if product.price is not None else None,
        "status": product.status,
        "stockQuantity": product.stock_quantity,
        "images": list(product.images or []),
        "dimensions": product.dimensions,
        "materials": product.materials,
        "createdAt": iso(product.created_at),
        "updatedAt": iso(product.updated_at),
    }

    if include_images:
        data["productImages"] = [
            normalize_product_image(image) for image in product.product_images
        ]

    return data
