from flask import jsonify, request
from flask_jwt_extended import jwt_required

from atelier.application import page_content as content_service
from atelier.normalizers.page_content import normalize_page_content
from atelier.schemas.about_sections import ReplaceImageDto
from atelier.schemas.page_content import CreatePageContentDto, UpdatePageContentDto
from atelier.utils.decorators import validate_body
from atelier.utils.media import accept_image
from . import api_bp


# ------------------------
# Backoffice (registered before the /<page> catch-alls)
# ------------------------

@api_bp.route("/page-content/all", methods=["GET"])
@jwt_required()
def list_all_content():
    rows = content_service.list_page_content()
    return jsonify([normalize_page_content(r) for r in rows]), 200


@api_bp.route("/page-content", methods=["POST"])
@jwt_required()
@validate_body(CreatePageContentDto)
def create_content(body: CreatePageContentDto):
    file = None
    if request.files.get("image"):
        file = accept_image(request.files["image"])

    row = content_service.create_page_content(data=body.model_dump(), file=file)
    return jsonify(normalize_page_content(row)), 201


@api_bp.route("/page-content/id/<content_id>", methods=["GET"])
@jwt_required()
def get_content(content_id):
    return jsonify(normalize_page_content(content_service.find_page_content(content_id))), 200


@api_bp.route("/page-content/id/<content_id>", methods=["PATCH"])
@jwt_required()
@validate_body(UpdatePageContentDto)
def update_content(content_id, body: UpdatePageContentDto):
    row = content_service.update_page_content(content_id=content_id, data=body.changes())
    return jsonify(normalize_page_content(row)), 200


@api_bp.route("/page-content/id/<content_id>/image", methods=["PATCH"])
@jwt_required()
@validate_body(ReplaceImageDto)
def replace_content_image(content_id, body: ReplaceImageDto):
    row = content_service.replace_page_content_image(
        content_id=content_id,
        file=accept_image(request.files.get("image")),
        image_alt=body.image_alt,
    )
    return jsonify(normalize_page_content(row)), 200


@api_bp.route("/page-content/id/<content_id>", methods=["DELETE"])
@jwt_required()
def delete_content(content_id):
    content_service.remove_page_content(content_id=content_id)
    return "", 204


# ------------------------
# Storefront
# ------------------------

@api_bp.route("/page-content/<page>", methods=["GET"])
def list_page(page):
    rows = content_service.list_published_page_content(page)
    return jsonify([normalize_page_content(r) for r in rows]), 200


@api_bp.route("/page-content/<page>/<section>", methods=["GET"])
def get_page_section(page, section):
    return jsonify(normalize_page_content(content_service.find_page_section(page, section))), 200
