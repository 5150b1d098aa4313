from flask import jsonify, request
from flask_jwt_extended import jwt_required
from werkzeug.exceptions import NotFound

from atelier.application import products as product_service
from atelier.models.product import PRODUCT_CATEGORIES
from atelier.normalizers.product import normalize_product, normalize_product_image
from atelier.schemas.products import (
    AddProductImagesDto,
    CreateProductDto,
    CreateProductWithUploadDto,
    ProductQueryDto,
    UpdateProductDto,
    UpdateProductImageDto,
)
from atelier.utils.decorators import validate_body, validate_query
from atelier.utils.media import accept_images
from . import api_bp

MAX_PRODUCT_IMAGES = 5


# ------------------------
# Public catalog
# ------------------------

@api_bp.route("/products", methods=["GET"])
@validate_query(ProductQueryDto)
def list_products(query: ProductQueryDto):
    return jsonify(product_service.list_products(**query.model_dump())), 200


@api_bp.route("/products/category/<category>", methods=["GET"])
def list_products_by_category(category):
    if category not in PRODUCT_CATEGORIES:
        raise NotFound(f'Unknown product category "{category}"')

    products = product_service.find_products_by_category(category)
    return jsonify([normalize_product(p) for p in products]), 200


@api_bp.route("/products/statistics", methods=["GET"])
def product_statistics():
    return jsonify(product_service.get_product_statistics()), 200


@api_bp.route("/products/home-grid", methods=["GET"])
def home_grid():
    images = product_service.find_home_grid_images()
    return jsonify([normalize_product_image(i, include_product=True) for i in images]), 200


@api_bp.route("/products/<product_id>", methods=["GET"])
def get_product(product_id):
    return jsonify(normalize_product(product_service.find_product(product_id))), 200


# ------------------------
# Backoffice
# ------------------------

@api_bp.route("/products", methods=["POST"])
@jwt_required()
@validate_body(CreateProductDto)
def create_product(body: CreateProductDto):
    product = product_service.create_product(data=body.model_dump())
    return jsonify(normalize_product(product)), 201


@api_bp.route("/products/with-upload", methods=["POST"])
@jwt_required()
@validate_body(CreateProductWithUploadDto)
def create_product_with_upload(body: CreateProductWithUploadDto):
    files = accept_images(request.files.getlist("images"), max_count=MAX_PRODUCT_IMAGES)

    data = body.model_dump(exclude={"show_on_home", "images"})
    product = product_service.create_product_with_images(
        data=data,
        files=files,
        show_on_home=body.show_on_home,
    )
    return jsonify(normalize_product(product)), 201


@api_bp.route("/products/<product_id>", methods=["PATCH"])
@jwt_required()
@validate_body(UpdateProductDto)
def update_product(product_id, body: UpdateProductDto):
    product = product_service.update_product(product_id=product_id, data=body.changes())
    return jsonify(normalize_product(product)), 200


@api_bp.route("/products/<product_id>", methods=["DELETE"])
@jwt_required()
def delete_product(product_id):
    product_service.remove_product(product_id=product_id)
    return "", 204


@api_bp.route("/products/<product_id>/images", methods=["POST"])
@jwt_required()
@validate_body(AddProductImagesDto)
def add_product_images(product_id, body: AddProductImagesDto):
    files = accept_images(request.files.getlist("images"), max_count=MAX_PRODUCT_IMAGES)

    product = product_service.add_product_images(
        product_id=product_id,
        files=files,
        show_on_home=body.show_on_home,
    )
    return jsonify(normalize_product(product)), 201


@api_bp.route("/products/images/<image_id>", methods=["PATCH"])
@jwt_required()
@validate_body(UpdateProductImageDto)
def update_product_image(image_id, body: UpdateProductImageDto):
    image = product_service.update_product_image(image_id=image_id, data=body.changes())
    return jsonify(normalize_product_image(image)), 200


@api_bp.route("/products/images/<image_id>", methods=["DELETE"])
@jwt_required()
def delete_product_image(image_id):
    product_service.remove_product_image(image_id=image_id)
    return "", 204
