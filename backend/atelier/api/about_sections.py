from flask import jsonify, request
from flask_jwt_extended import jwt_required

from atelier.application import about_sections as about_service
from atelier.errors import ValidationError
from atelier.normalizers.about_section import normalize_about_section
from atelier.schemas import Err, parse
from atelier.schemas.about_sections import (
    CreateAboutSectionDto,
    CreateAboutSectionWithUploadDto,
    ReplaceImageDto,
    UpdateAboutSectionDto,
)
from atelier.utils.decorators import validate_body
from atelier.utils.media import accept_image
from . import api_bp


@api_bp.route("/about-sections", methods=["GET"])
def list_published_sections():
    sections = about_service.list_published_about_sections()
    return jsonify([normalize_about_section(s) for s in sections]), 200


@api_bp.route("/about-sections/all", methods=["GET"])
@jwt_required()
def list_all_sections():
    sections = about_service.list_about_sections()
    return jsonify([normalize_about_section(s) for s in sections]), 200


@api_bp.route("/about-sections/<section_id>", methods=["GET"])
def get_section(section_id):
    section = about_service.find_about_section(section_id, published_only=True)
    return jsonify(normalize_about_section(section)), 200


@api_bp.route("/about-sections", methods=["POST"])
@jwt_required()
def create_section():
    """
    JSON bodies reference an existing image URL; multipart bodies
    upload the image as the ``image`` file field.
    """
    if request.mimetype == "multipart/form-data":
        result = parse(CreateAboutSectionWithUploadDto, request.form.to_dict())
        if isinstance(result, Err):
            raise ValidationError(result.errors)

        section = about_service.create_about_section_with_image(
            data=result.value.model_dump(),
            file=accept_image(request.files.get("image")),
        )
    else:
        result = parse(CreateAboutSectionDto, request.get_json(silent=True) or {})
        if isinstance(result, Err):
            raise ValidationError(result.errors)

        section = about_service.create_about_section(data=result.value.model_dump())

    return jsonify(normalize_about_section(section)), 201


@api_bp.route("/about-sections/<section_id>", methods=["PATCH"])
@jwt_required()
@validate_body(UpdateAboutSectionDto)
def update_section(section_id, body: UpdateAboutSectionDto):
    section = about_service.update_about_section(section_id=section_id, data=body.changes())
    return jsonify(normalize_about_section(section)), 200


@api_bp.route("/about-sections/<section_id>/image", methods=["PATCH"])
@jwt_required()
@validate_body(ReplaceImageDto)
def replace_section_image(section_id, body: ReplaceImageDto):
    section = about_service.replace_about_section_image(
        section_id=section_id,
        file=accept_image(request.files.get("image")),
        image_alt=body.image_alt,
    )
    return jsonify(normalize_about_section(section)), 200


@api_bp.route("/about-sections/<section_id>", methods=["DELETE"])
@jwt_required()
def delete_section(section_id):
    about_service.remove_about_section(section_id=section_id)
    return "", 204
